"""Outcome values returned by every fallible step of string resolution.

A step either succeeds with a value or fails with a FailureKind. The public operations collapse
an Outcome to "value or the caller's literal fallback", so no failure ever reaches the caller as
an exception.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

__all__: list[str] = ["FailureKind", "Outcome"]

T = TypeVar("T")
F = TypeVar("F")


class FailureKind(Enum):
    """Why a resolution step produced no value."""

    MISSING_HANDLE = "missing_handle"
    MISSING_FILE = "missing_file"
    PARSE_FAILURE = "parse_failure"
    MISSING_KEY = "missing_key"
    EMPTY_SELECTION = "empty_selection"
    INDEX_OUT_OF_RANGE = "index_out_of_range"
    LANGUAGE_SOURCE_UNAVAILABLE = "language_source_unavailable"
    EMPTY_RECORD = "empty_record"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of one resolution step.

    Attributes:
        value (T | None): The produced value. Only meaningful when failure is None.
        failure (FailureKind | None): The failure kind, or None on success.
        detail (str): Human readable context for the log line.
    """

    value: T | None = None
    failure: FailureKind | None = None
    detail: str = ""

    @classmethod
    def ok(cls, value: T) -> Outcome[T]:
        return cls(value=value)

    @classmethod
    def fail(cls, failure: FailureKind, detail: str = "") -> Outcome[T]:
        return cls(failure=failure, detail=detail)

    @property
    def is_ok(self) -> bool:
        return self.failure is None

    def collapse(self, fallback: F) -> T | F:
        """Return the value on success, otherwise the given fallback unchanged."""
        if self.failure is None:
            return self.value  # type: ignore[return-value]
        return fallback

    def __repr__(self) -> str:
        if self.failure is None:
            return f"Outcome.ok({self.value!r})"
        return f"Outcome.fail({self.failure.name}, {self.detail!r})"
