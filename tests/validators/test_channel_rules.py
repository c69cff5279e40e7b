"""Tests for autoipc.validators.channels."""

from __future__ import annotations

import pytest

from autoipc.models import CallableSignature, ChannelSpec
from autoipc.validators import ValidationError, ValidationIssue, validate_channel_specs

VOID = CallableSignature(definition="() => void")
PROMISED = CallableSignature(
    definition="() => Promise<User>",
    return_type="Promise<User>",
    custom_types=("User",),
    is_async=True,
)


def _channel(name: str = "Example", kind: str = "Broadcast", direction: str = "RendererToMain", **kwargs):
    kwargs.setdefault("signature", VOID)
    return ChannelSpec(name=name, kind=kind, direction=direction, **kwargs)


def _rules(excinfo: pytest.ExceptionInfo[ValidationError]) -> list[str]:
    return [issue.rule for issue in excinfo.value.issues]


@pytest.mark.parametrize(
    ("kind", "direction", "allowed"),
    [
        ("Broadcast", "RendererToMain", True),
        ("Broadcast", "MainToRenderer", True),
        ("Broadcast", "RendererToRenderer", False),
        ("Unicast", "RendererToMain", True),
        ("Unicast", "MainToRenderer", False),
        ("Unicast", "RendererToRenderer", False),
        ("Port", "RendererToMain", False),
        ("Port", "MainToRenderer", False),
        ("Port", "RendererToRenderer", True),
    ],
)
def test_kind_direction_matrix(kind: str, direction: str, allowed: bool) -> None:
    spec = _channel(kind=kind, direction=direction)
    if allowed:
        assert validate_channel_specs([spec]) == [spec]
        return
    with pytest.raises(ValidationError) as excinfo:
        validate_channel_specs([spec])
    assert _rules(excinfo) == [
        f"Channel kind '{kind}' is not allowed when channel direction is '{direction}'."
    ]


@pytest.mark.parametrize(
    ("name", "rule"),
    [
        ("Ab", "Channel name must be at least 3 characters in length"),
        ("OnClick", "Channel name must not begin with 'on'"),
        ("online", "Channel name must not begin with 'on'"),
        ("user", "Channel name must start with a capital letter"),
    ],
)
def test_name_rules(name: str, rule: str) -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_channel_specs([_channel(name=name)])
    assert _rules(excinfo) == [rule]


def test_incomplete_record_reports_every_missing_field() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_channel_specs([ChannelSpec()])

    fields = [issue.field for issue in excinfo.value.issues]
    assert fields == ["name", "kind", "direction", "signature"]


def test_unknown_kind_is_rejected() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_channel_specs([_channel(kind="Multicast")])
    assert excinfo.value.issues[0].field == "kind"
    assert excinfo.value.issues[0].value == "Multicast"


def test_names_must_be_unique() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_channel_specs([_channel(), _channel(direction="MainToRenderer")])
    assert "Channel name 'Example' is not unique across application." in _rules(excinfo)


def test_listeners_only_allowed_for_broadcast() -> None:
    spec = _channel(kind="Unicast", signature=PROMISED, listeners=("onExample",))
    with pytest.raises(ValidationError) as excinfo:
        validate_channel_specs([spec])
    assert _rules(excinfo) == ["Channel listeners are only allowed when channel kind is 'Broadcast'"]


def test_listener_naming_convention() -> None:
    spec = _channel(listeners=("onA", "handleExample", "onExample"))
    with pytest.raises(ValidationError) as excinfo:
        validate_channel_specs([spec])
    assert _rules(excinfo) == [
        "'onA': Channel listener names must be at least 5 characters in length",
        "'handleExample': Channel listener names must begin with lowercase 'on', "
        "followed by a capital letter",
    ]


def test_listener_names_unique_across_corpus() -> None:
    first = _channel(name="Alpha", listeners=("onChange",))
    second = _channel(name="Beta", direction="MainToRenderer", listeners=("onChange",))
    with pytest.raises(ValidationError) as excinfo:
        validate_channel_specs([first, second])
    assert _rules(excinfo) == ["Channel listener name 'onChange' is not unique across application."]


def test_synthesized_listener_clashing_with_override() -> None:
    first = _channel(name="Change")
    second = _channel(name="Other", direction="MainToRenderer", listeners=("onChange",))
    with pytest.raises(ValidationError):
        validate_channel_specs([first, second])


def test_port_channels_are_exempt_from_listener_uniqueness() -> None:
    broadcast = _channel(name="Chat", direction="MainToRenderer", listeners=("onChats",))
    port = _channel(name="Chats", kind="Port", direction="RendererToRenderer")
    assert validate_channel_specs([broadcast, port]) == [broadcast, port]


@pytest.mark.parametrize(
    ("kind", "direction"), [("Broadcast", "RendererToMain"), ("Port", "RendererToRenderer")]
)
def test_void_return_required_for_broadcast_and_port(kind: str, direction: str) -> None:
    spec = _channel(kind=kind, direction=direction, signature=PROMISED)
    with pytest.raises(ValidationError) as excinfo:
        validate_channel_specs([spec])
    assert _rules(excinfo) == [
        f"Channel return type 'Promise<User>' not allowed when channel kind is '{kind}'"
    ]


def test_unicast_may_return_values() -> None:
    spec = _channel(kind="Unicast", signature=PROMISED)
    assert validate_channel_specs([spec]) == [spec]


def test_promise_void_is_accepted_for_broadcast() -> None:
    signature = CallableSignature(
        definition="() => Promise<void>", return_type="Promise<void>", is_async=True
    )
    assert validate_channel_specs([_channel(signature=signature)])


def test_all_issues_are_collected_before_raising() -> None:
    specs = [_channel(name="ab"), _channel(name="Good", kind="Unicast", direction="MainToRenderer")]
    with pytest.raises(ValidationError) as excinfo:
        validate_channel_specs(specs)
    assert len(excinfo.value.issues) == 2
    assert "2 issue(s)" in str(excinfo.value)


def test_error_message_names_channel_field_and_value() -> None:
    specs = [_channel(name="Good"), _channel(name="user", kind="Multicast")]
    with pytest.raises(ValidationError) as excinfo:
        validate_channel_specs(specs)

    message = str(excinfo.value)
    assert "channel 'user' name='user': Channel name must start with a capital letter" in message
    assert "channel 'user' kind='Multicast': Channel kind must be one of" in message
    assert all(issue.channel == "user" for issue in excinfo.value.issues)


def test_config_issue_message_has_no_channel() -> None:
    issue = ValidationIssue("code_indent", 8, "code_indent cannot be less than 2 or greater than 4")
    assert str(issue) == "code_indent=8: code_indent cannot be less than 2 or greater than 4"


@pytest.mark.parametrize("listener", ["onA", "onAb"])
def test_short_listeners_are_rejected(listener: str) -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_channel_specs([_channel(listeners=(listener,))])
    assert _rules(excinfo) == [
        f"'{listener}': Channel listener names must be at least 5 characters in length"
    ]


def test_five_character_listener_is_accepted() -> None:
    spec = _channel(listeners=("onAbc",))
    assert validate_channel_specs([spec]) == [spec]


@pytest.mark.parametrize("listener", ["onAbc-def x", "onAbc def", "onAbc.x"])
def test_listener_must_be_a_plain_identifier(listener: str) -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_channel_specs([_channel(listeners=(listener,))])
    assert _rules(excinfo) == [
        f"'{listener}': Channel listener names must begin with lowercase 'on', "
        "followed by a capital letter"
    ]
