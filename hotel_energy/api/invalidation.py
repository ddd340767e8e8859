"""
api/invalidation.py
-------------------
Stale-view signalling after mutations.

The backend keeps no cache of aggregates, but clients do (rendered pages,
SWR caches). After every successful write the response carries an
X-Invalidate-Views header listing the views whose figures may have changed,
e.g.

    X-Invalidate-Views: /tenants, /tenants/<id>, /tenants/<id>/report

so the client knows what to refetch.
"""

from typing import Iterable, Optional

from fastapi import Response

from hotel_energy.core.logging import get_logger

logger = get_logger(__name__)

HEADER = "X-Invalidate-Views"


def tenant_views(tenant_id: str) -> list[str]:
    base = f"/tenants/{tenant_id}"
    return ["/tenants", base, f"{base}/rooms", f"{base}/devices", f"{base}/report"]


def room_views(tenant_id: str, room_id: Optional[str]) -> list[str]:
    views = tenant_views(tenant_id)
    if room_id is not None:
        room = f"/tenants/{tenant_id}/rooms/{room_id}"
        views += [room, f"{room}/devices"]
    return views


def mark_stale(response: Response, views: Iterable[str]) -> None:
    unique = list(dict.fromkeys(views))
    response.headers[HEADER] = ", ".join(unique)
    logger.debug("Views invalidated", views=unique)
