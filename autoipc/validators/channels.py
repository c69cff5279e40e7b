"""Rules applied to extracted channel records, individually and across the corpus."""

from __future__ import annotations

import re
from dataclasses import replace
from typing import Dict, FrozenSet, Iterable, List, Sequence, Set

from ..models import (
    BROADCAST,
    CHANNEL_DIRECTIONS,
    CHANNEL_KINDS,
    MAIN_TO_RENDERER,
    PORT,
    RENDERER_TO_MAIN,
    RENDERER_TO_RENDERER,
    UNICAST,
    ChannelSpec,
)
from .base import ValidationIssue, raise_for_issues

MIN_NAME_LENGTH = 3
MIN_LISTENER_LENGTH = 5
LISTENER_PATTERN = re.compile(r"on[A-Z]\w+")

ALLOWED_DIRECTIONS: Dict[str, FrozenSet[str]] = {
    BROADCAST: frozenset({RENDERER_TO_MAIN, MAIN_TO_RENDERER}),
    UNICAST: frozenset({RENDERER_TO_MAIN}),
    PORT: frozenset({RENDERER_TO_RENDERER}),
}
# Kinds that never carry a reply back to the caller.
VOID_RETURN_KINDS = frozenset({BROADCAST, PORT})
VOID_RETURN_TYPES = frozenset({"void", "Promise<void>"})


def _name_issues(name: object) -> List[ValidationIssue]:
    if not isinstance(name, str) or not name:
        return [ValidationIssue("name", name, "Channel name must be a quoted string literal")]
    if len(name) < MIN_NAME_LENGTH:
        rule = "Channel name must be at least 3 characters in length"
    elif name.lower().startswith("on"):
        rule = "Channel name must not begin with 'on'"
    elif not name[0].isupper():
        rule = "Channel name must start with a capital letter"
    else:
        return []
    return [ValidationIssue("name", name, rule)]


def _listener_issues(spec: ChannelSpec) -> List[ValidationIssue]:
    if spec.listeners is None:
        return []
    if spec.kind != BROADCAST:
        return [
            ValidationIssue(
                "listeners",
                spec.listeners,
                f"Channel listeners are only allowed when channel kind is '{BROADCAST}'",
            )
        ]
    issues: List[ValidationIssue] = []
    for listener in spec.listeners:
        if len(listener) < MIN_LISTENER_LENGTH:
            issues.append(
                ValidationIssue(
                    "listeners",
                    listener,
                    f"'{listener}': Channel listener names must be at least 5 characters in length",
                )
            )
        elif not LISTENER_PATTERN.fullmatch(listener):
            issues.append(
                ValidationIssue(
                    "listeners",
                    listener,
                    f"'{listener}': Channel listener names must begin with lowercase 'on', "
                    "followed by a capital letter",
                )
            )
    return issues


def collect_channel_issues(spec: ChannelSpec) -> List[ValidationIssue]:
    """Return every per-record violation of ``spec``."""
    issues = _name_issues(spec.name)

    kind_known = spec.kind in CHANNEL_KINDS
    direction_known = spec.direction in CHANNEL_DIRECTIONS
    if not kind_known:
        issues.append(
            ValidationIssue(
                "kind", spec.kind, f"Channel kind must be one of '{', '.join(CHANNEL_KINDS)}'"
            )
        )
    if not direction_known:
        issues.append(
            ValidationIssue(
                "direction",
                spec.direction,
                f"Channel direction must be one of '{', '.join(CHANNEL_DIRECTIONS)}'",
            )
        )
    if kind_known and direction_known and spec.direction not in ALLOWED_DIRECTIONS[spec.kind]:
        issues.append(
            ValidationIssue(
                "direction",
                (spec.kind, spec.direction),
                f"Channel kind '{spec.kind}' is not allowed when channel direction is '{spec.direction}'.",
            )
        )

    if spec.signature is None:
        issues.append(
            ValidationIssue(
                "signature",
                None,
                "Channel signature must be declared as 'type as <function type>'",
            )
        )
    elif spec.kind in VOID_RETURN_KINDS and spec.signature.return_type not in VOID_RETURN_TYPES:
        issues.append(
            ValidationIssue(
                "signature",
                spec.signature.return_type,
                f"Channel return type '{spec.signature.return_type}' not allowed "
                f"when channel kind is '{spec.kind}'",
            )
        )

    issues.extend(_listener_issues(spec))
    return [replace(issue, channel=spec.name) for issue in issues]


def _duplicates(values: Iterable[str]) -> List[str]:
    seen: Set[str] = set()
    reported: Set[str] = set()
    duplicates: List[str] = []
    for value in values:
        if value in seen and value not in reported:
            duplicates.append(value)
            reported.add(value)
        seen.add(value)
    return duplicates


def collect_corpus_issues(specs: Sequence[ChannelSpec]) -> List[ValidationIssue]:
    """Return the violations that only show up when looking at all records together."""
    issues: List[ValidationIssue] = []
    names = [spec.name for spec in specs if spec.name]
    for name in _duplicates(names):
        issues.append(
            ValidationIssue(
                "name", name, f"Channel name '{name}' is not unique across application.", channel=name
            )
        )

    listener_names = [
        listener
        for spec in specs
        if spec.name and spec.kind != PORT
        for listener in spec.listener_names()
    ]
    for listener in _duplicates(listener_names):
        issues.append(
            ValidationIssue(
                "listeners",
                listener,
                f"Channel listener name '{listener}' is not unique across application.",
            )
        )
    return issues


def validate_channel_specs(specs: Sequence[ChannelSpec]) -> List[ChannelSpec]:
    """Validate ``specs`` as one corpus and return them as a list.

    Every issue from every record is collected before raising, so a single
    :class:`ValidationError` reports the whole pass.
    """
    issues: List[ValidationIssue] = []
    for spec in specs:
        issues.extend(collect_channel_issues(spec))
    issues.extend(collect_corpus_issues(specs))
    raise_for_issues("Channel specs", issues)
    return list(specs)


__all__ = [
    "ALLOWED_DIRECTIONS",
    "LISTENER_PATTERN",
    "collect_channel_issues",
    "collect_corpus_issues",
    "validate_channel_specs",
]
