"""Diagnostics reported back to the user, and shared validation messages."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass

ERROR_UINT = "expected type of {} to be a positive number (uint)"
ERROR_STRING = "expected type of {} to be string"


class Severity(enum.Enum):
    """How serious a diagnostic is."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """A single message with a severity, a summary and optional detail."""

    severity: Severity
    summary: str
    detail: str = ""

    @classmethod
    def error(cls, summary: str, detail: str = "") -> Diagnostic:
        return cls(Severity.ERROR, summary, detail)

    @classmethod
    def warning(cls, summary: str, detail: str = "") -> Diagnostic:
        return cls(Severity.WARNING, summary, detail)


def has_error(diagnostics: Iterable[Diagnostic]) -> bool:
    """Return True if any of the diagnostics is an error."""
    return any(d.severity is Severity.ERROR for d in diagnostics)