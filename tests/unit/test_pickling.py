# tests/unit/test_pickling.py
from __future__ import annotations

import copy
import pickle

from incident import Incident
from incident.core.lazy import LazyMessage, Pending, Resolved


def test_pickle_round_trip():
    restored = pickle.loads(pickle.dumps(Incident("Name", {"a": 1}, "x")))
    assert isinstance(restored, Incident)
    assert restored.name == "Name"
    assert restored.data == {"a": 1}
    assert restored.message == "x"


def test_pickle_keeps_cause_chain():
    root = ValueError("bad port")
    incident = Incident(Incident(root, "Parse", "Unable to parse"), "Config", "Unable to load config")
    restored = pickle.loads(pickle.dumps(incident))
    assert restored.cause.name == "Parse"
    assert isinstance(restored.cause.cause, ValueError)
    assert restored.cause.cause.args == ("bad port",)


def test_pickle_after_raise():
    try:
        raise Incident("Boom", "It exploded")
    except Incident as e:
        e.stack
        restored = pickle.loads(pickle.dumps(e))
    assert restored.stack.endswith("Boom: It exploded\n")


def test_pickle_subclass():
    restored = pickle.loads(pickle.dumps(TimeoutIncident({"seconds": 3}, "Timed out")))
    assert type(restored) is TimeoutIncident
    assert restored.name == "Timeout"


class TimeoutIncident(Incident):
    default_name = "Timeout"


def test_deepcopy_keeps_pending_formatter():
    calls: list[int] = []
    incident = Incident("Lazy", {"n": 1}, lambda data: calls.append(1) or f"n={data['n']}")
    clone = copy.deepcopy(incident)
    assert not clone.is_resolved
    assert clone.message == "n=1"
    assert not incident.is_resolved
    assert calls == [1]


def test_deepcopy_gets_independent_message():
    incident = Incident("Name", "original")
    clone = copy.deepcopy(incident)
    clone.message = "changed"
    assert incident.message == "original"


def test_lazy_message_state_survives_pickling():
    cell = pickle.loads(pickle.dumps(LazyMessage(Resolved("ready"))))
    assert cell.get({}) == "ready"
    cell.set("updated")
    assert cell.get({}) == "updated"


def test_lazy_message_copy_has_own_lock():
    cell = LazyMessage(Pending(lambda: "pending"))
    clone = copy.deepcopy(cell)
    assert clone._lock is not cell._lock
    assert clone.state == cell.state
