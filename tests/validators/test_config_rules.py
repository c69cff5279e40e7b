"""Tests for autoipc.validators.config."""

from __future__ import annotations

import pytest

from autoipc.config import IPCConfig
from autoipc.validators import ValidationError, validate_config


def test_defaults_are_valid() -> None:
    config = IPCConfig()
    assert validate_config(config) is config


@pytest.mark.parametrize("indent", [2, 3, 4])
def test_indent_within_bounds(indent: int) -> None:
    assert validate_config(IPCConfig(code_indent=indent)).code_indent == indent


@pytest.mark.parametrize("indent", [0, 1, 5, 8])
def test_indent_out_of_bounds(indent: int) -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_config(IPCConfig(code_indent=indent))
    assert excinfo.value.issues[0].field == "code_indent"


@pytest.mark.parametrize("data_dir", ["/abs/ipc", "../outside", "src/../../escape", "C:\\ipc"])
def test_data_dir_must_stay_inside_project(data_dir: str) -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_config(IPCConfig(ipc_data_dir=data_dir))
    assert excinfo.value.issues[0].field == "ipc_data_dir"


def test_multiple_config_issues_reported_together() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_config(IPCConfig(ipc_data_dir="/abs", code_indent=9))
    assert {issue.field for issue in excinfo.value.issues} == {"code_indent", "ipc_data_dir"}
