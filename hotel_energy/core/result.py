"""
core/result.py
--------------
Typed success / failure values returned by the service layer.

Services never raise for expected outcomes (bad input, duplicate names,
missing rows). They return one of:

  Success(value)                       → the operation went through
  Failure(kind, message, field_errors) → it did not, and why

Routes turn a Failure into the matching HTTP status (see api/errors.py).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class FailureKind(str, Enum):
    validation = "validation"
    conflict = "conflict"
    not_found = "not_found"


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T
    message: str = ""
    ok: bool = field(default=True, init=False)


@dataclass(frozen=True)
class Failure:
    kind: FailureKind
    message: str
    field_errors: dict[str, list[str]] = field(default_factory=dict)
    ok: bool = field(default=False, init=False)


Result = Union[Success[T], Failure]


def not_found(entity: str) -> Failure:
    return Failure(FailureKind.not_found, f"{entity} not found")


def conflict(message: str) -> Failure:
    return Failure(FailureKind.conflict, message)


def invalid(message: str, field_errors: dict[str, list[str]] | None = None) -> Failure:
    return Failure(FailureKind.validation, message, field_errors or {})
