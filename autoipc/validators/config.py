"""Validation rules for user configuration."""

from __future__ import annotations

from pathlib import PurePosixPath, PureWindowsPath
from typing import List

from ..config import IPCConfig
from .base import ValidationIssue, raise_for_issues

MIN_CODE_INDENT = 2
MAX_CODE_INDENT = 4


def collect_config_issues(config: IPCConfig) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []

    indent = config.code_indent
    if isinstance(indent, bool) or not isinstance(indent, int):
        issues.append(ValidationIssue("code_indent", indent, "code_indent must be an integer"))
    elif not MIN_CODE_INDENT <= indent <= MAX_CODE_INDENT:
        issues.append(
            ValidationIssue(
                "code_indent",
                indent,
                f"code_indent cannot be less than {MIN_CODE_INDENT} or greater than {MAX_CODE_INDENT}",
            )
        )

    data_dir = config.ipc_data_dir
    if not data_dir or not data_dir.strip():
        issues.append(ValidationIssue("ipc_data_dir", data_dir, "ipc_data_dir must not be empty"))
    elif PurePosixPath(data_dir).is_absolute() or PureWindowsPath(data_dir).is_absolute():
        issues.append(
            ValidationIssue("ipc_data_dir", data_dir, "ipc_data_dir must be relative to the project root")
        )
    elif ".." in PurePosixPath(data_dir.replace("\\", "/")).parts:
        issues.append(
            ValidationIssue("ipc_data_dir", data_dir, "ipc_data_dir must stay inside the project root")
        )

    return issues


def validate_config(config: IPCConfig) -> IPCConfig:
    """Return ``config`` unchanged, or raise :class:`ValidationError` listing every violation."""
    raise_for_issues("Configuration", collect_config_issues(config))
    return config


__all__ = ["MAX_CODE_INDENT", "MIN_CODE_INDENT", "collect_config_issues", "validate_config"]
