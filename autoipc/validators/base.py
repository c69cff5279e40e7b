"""Core validation data structures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence


@dataclass
class ValidationIssue:
    """Represents a single rule violation for a channel or config field."""

    field: str
    value: object
    rule: str
    channel: Optional[str] = None

    def __str__(self) -> str:
        subject = f"{self.field}={self.value!r}"
        if self.channel:
            subject = f"channel {self.channel!r} {subject}"
        return f"{subject}: {self.rule}"


class ValidationError(RuntimeError):
    """Raised when validation fails for one or more records."""

    def __init__(self, message: str, issues: Sequence[ValidationIssue]) -> None:
        super().__init__(message)
        self.issues = list(issues)


def raise_for_issues(subject: str, issues: List[ValidationIssue]) -> None:
    """Raise a :class:`ValidationError` summarising ``issues`` when any were collected."""
    if not issues:
        return
    lines = [f"{subject} failed validation with {len(issues)} issue(s):"]
    lines.extend(f"  - {issue}" for issue in issues)
    raise ValidationError("\n".join(lines), issues)


__all__ = ["ValidationError", "ValidationIssue", "raise_for_issues"]
