"""Tagged results for client requests.

Every network operation resolves to exactly one of these variants; the HTTP
layer never raises for failed requests.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    CLIENT_INPUT = "client_input"
    NOT_FOUND = "not_found"
    SERVICE = "service"
    AUTH = "auth"


@dataclass(frozen=True, slots=True)
class Pending:
    pass


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class Failure:
    kind: ErrorKind
    message: str


Result = Union[Pending, Ok[T], Failure]
Outcome = Union[Ok[T], Failure]
