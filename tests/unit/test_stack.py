# tests/unit/test_stack.py
from __future__ import annotations

import pytest

from incident import Incident, IncidentConfig, StackConfig, set_config
from incident.core.stack import CAUSE_SEPARATOR, TRACEBACK_HEADER, format_header


@pytest.fixture
def no_capture():
    set_config(IncidentConfig(stack=StackConfig(capture=False)))


def _raise_boom():
    raise Incident("Boom", "It exploded")


def test_header_format():
    assert format_header("Boom", "It exploded") == "Boom: It exploded"
    assert format_header("Boom", "") == "Boom"


def test_stack_without_capture_is_header_only(no_capture):
    assert Incident("Boom", "It exploded").stack == "Boom: It exploded\n"
    assert Incident().stack == "Incident\n"


def test_stack_records_construction_site():
    incident = Incident("Boom", "It exploded")
    stack = incident.stack
    assert stack.startswith(TRACEBACK_HEADER)
    assert "in test_stack_records_construction_site" in stack
    assert stack.endswith("Boom: It exploded\n")


def test_stack_uses_traceback_once_raised():
    with pytest.raises(Incident) as excinfo:
        _raise_boom()
    stack = excinfo.value.stack
    assert "in _raise_boom" in stack
    assert stack.endswith("Boom: It exploded\n")


def test_stack_limit():
    set_config(IncidentConfig(stack=StackConfig(capture=True, limit=1)))
    incident = Incident("Boom", "It exploded")
    assert incident.stack.count('  File "') == 1


def test_stack_renders_native_cause_first():
    cause = ValueError("bad port")
    incident = Incident(cause, "ConfigError", "Unable to load the config")
    stack = incident.stack
    assert CAUSE_SEPARATOR in stack
    assert stack.index("ValueError: bad port") < stack.index("ConfigError: Unable to load the config")


def test_stack_renders_incident_chain(no_capture):
    root = Incident("Root", "root cause")
    middle = Incident(root, "Middle", "middle")
    top = Incident(middle, "Top", "top")
    assert top.stack == (
        "Root: root cause\n"
        + CAUSE_SEPARATOR
        + "Middle: middle\n"
        + CAUSE_SEPARATOR
        + "Top: top\n"
    )


def test_stack_chain_resolves_cause_messages(no_capture):
    calls: list[str] = []
    cause = Incident("Cause", lambda: calls.append("cause") or "lazy cause")
    incident = Incident(cause, "Effect", "effect")
    assert "Cause: lazy cause" in incident.stack
    assert calls == ["cause"]


def test_stack_without_cause_rendering(no_capture):
    set_config(IncidentConfig(stack=StackConfig(capture=False, include_cause=False)))
    incident = Incident(ValueError("hidden"), "Visible", "shown")
    assert incident.stack == "Visible: shown\n"


def test_stack_stops_on_cycles(no_capture):
    a = Incident("A", "a")
    b = Incident(a, "B", "b")
    a.cause = b
    assert b.stack == "A: a\n" + CAUSE_SEPARATOR + "B: b\n"


def test_stack_follows_message_changes():
    incident = Incident("Boom", "first")
    assert incident.stack.endswith("Boom: first\n")
    incident.message = "second"
    assert incident.stack.endswith("Boom: second\n")


def test_stack_follows_cause_message_changes(no_capture):
    cause = Incident("Cause", "before")
    incident = Incident(cause, "Effect", "effect")
    assert "Cause: before" in incident.stack
    cause.message = "after"
    stack = incident.stack
    assert "Cause: after" in stack
    assert "Cause: before" not in stack


def test_stack_follows_config_changes(no_capture):
    incident = Incident(ValueError("hidden later"), "Visible", "shown")
    assert "ValueError: hidden later" in incident.stack
    set_config(IncidentConfig(stack=StackConfig(capture=False, include_cause=False)))
    assert incident.stack == "Visible: shown\n"


def test_stack_follows_rename(no_capture):
    incident = Incident("Before", "message")
    assert incident.stack == "Before: message\n"
    incident.name = "After"
    assert incident.stack == "After: message\n"


def test_stack_override(no_capture):
    incident = Incident("Boom", "It exploded")
    incident.stack = "custom stack"
    assert incident.stack == "custom stack"
    incident.stack = None
    assert incident.stack == "Boom: It exploded\n"


def test_native_traceback_module_resolves_message():
    import traceback

    calls: list[int] = []
    incident = Incident("Lazy", lambda: calls.append(1) or "printed")
    text = "".join(traceback.format_exception(incident))
    assert "printed" in text
    assert calls == [1]
