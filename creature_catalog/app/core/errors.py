"""
Error values returned by the service layer.

Service and repository operations do not raise for expected failures.
They return a :class:`Result` holding either a value or one of three
error values:

* :class:`NotFound` – no record matches the given term or identifier.
* :class:`DuplicateKey` – a write would break ``name``/``no`` uniqueness.
* :class:`Unavailable` – any other store failure.  The cause is logged
  where it happens; the message handed to callers is generic.

Each error carries an :class:`ErrorKind` tag so that the HTTP layer can
map it to a status code without ``isinstance`` chains.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    DUPLICATE_KEY = "duplicate_key"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class NotFound:
    """No creature matches ``term`` (a search term or a storage id)."""

    term: str
    label: str = "term"
    kind: ErrorKind = field(default=ErrorKind.NOT_FOUND, init=False)

    @property
    def message(self) -> str:
        return f'Creature with {self.label} "{self.term}" not found'


@dataclass(frozen=True)
class DuplicateKey:
    """A unique index rejected the write.

    ``fields`` maps each conflicting field to the value that collided.
    """

    fields: Dict[str, Any]
    kind: ErrorKind = field(default=ErrorKind.DUPLICATE_KEY, init=False)

    @property
    def message(self) -> str:
        return f"Creature already exists in db {json.dumps(self.fields, sort_keys=True)}"


@dataclass(frozen=True)
class Unavailable:
    """The store failed for a reason other than a duplicate key."""

    kind: ErrorKind = field(default=ErrorKind.UNAVAILABLE, init=False)

    @property
    def message(self) -> str:
        return "Unable to process the creature request - check the server logs"


ServiceError = Union[NotFound, DuplicateKey, Unavailable]


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a service call: either ``value`` or ``error`` is meaningful."""

    value: Optional[T] = None
    error: Optional[ServiceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ServiceError) -> "Result[T]":
        return cls(error=error)
