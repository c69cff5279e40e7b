"""CLI behaviour tests."""

from __future__ import annotations

import pytest

from autoipc.cli import _build_parser, main
from tests._fixtures.project_builder import USER_CHANNEL_SCHEMA, ProjectBuilder


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "generate"])
    assert args.verbose is True
    assert args.command == "generate"
    assert args.path == "."


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["check", "--verbose", "some/dir"])
    assert args.verbose is True
    assert args.command == "check"
    assert args.path == "some/dir"


def test_cli_requires_command() -> None:
    parser = _build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args([])


def test_generate_then_check(project_builder: ProjectBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    project_builder.write_schema(USER_CHANNEL_SCHEMA)

    main(["generate", str(project_builder.path())])
    assert "main.ts" in capsys.readouterr().out

    main(["check", str(project_builder.path())])
    assert "up to date" in capsys.readouterr().out


def test_check_exits_when_stale(project_builder: ProjectBuilder) -> None:
    project_builder.write_schema(USER_CHANNEL_SCHEMA)

    with pytest.raises(SystemExit) as excinfo:
        main(["check", str(project_builder.path())])
    assert excinfo.value.code == 1


def test_validation_error_exits_with_status_one(
    project_builder: ProjectBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    project_builder.write_schema(
        """
        Channel("x").Broadcast.RendererToMain({
            signature: type as () => void,
        });
        """
    )

    with pytest.raises(SystemExit) as excinfo:
        main(["generate", str(project_builder.path())])

    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert "channel 'x' name='x': Channel name must be at least 3 characters in length" in err


def test_log_file_receives_debug_output(project_builder: ProjectBuilder, tmp_path) -> None:
    project_builder.write_schema(USER_CHANNEL_SCHEMA)
    log_file = tmp_path / "logs" / "autoipc.log"

    main(["--log-file", str(log_file), "generate", str(project_builder.path())])

    contents = log_file.read_text(encoding="utf-8")
    assert "autoipc.orchestrator" in contents
    assert "Wrote" in contents
