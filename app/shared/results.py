"""
Explicit outcome of a best-effort read.

Dashboard-style reads report where their data came from instead of silently
substituting placeholders: ``database`` for a successful read,
``unconfigured`` when no database is configured (the fallback value is
returned), and ``error`` when the read failed.
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, Literal, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError

T = TypeVar("T")

Source = Literal["database", "unconfigured", "error"]


@dataclass
class FetchError:
    message: str
    kind: str = "persistence"


@dataclass
class FetchResult(Generic[T]):
    source: Source
    data: Optional[T] = None
    error: Optional[FetchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, data: T) -> "FetchResult[T]":
        return cls(source="database", data=data)

    @classmethod
    def unconfigured(cls, fallback: T) -> "FetchResult[T]":
        return cls(source="unconfigured", data=fallback)

    @classmethod
    def failure(cls, message: str, kind: str = "persistence") -> "FetchResult[T]":
        return cls(source="error", error=FetchError(message=message, kind=kind))

    def as_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "data": self.data,
            "error": None if self.error is None else {"message": self.error.message, "kind": self.error.kind},
        }


def fetch(read: Callable[[], T]) -> FetchResult[T]:
    """Run ``read`` and capture a database failure as a FetchResult."""
    try:
        return FetchResult.success(read())
    except SQLAlchemyError as e:
        return FetchResult.failure(str(e))
