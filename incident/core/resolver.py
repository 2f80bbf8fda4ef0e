# incident/core/resolver.py
"""
Construction resolver.

Maps the loosely-typed positional arguments accepted by ``Incident(...)`` to
one canonical ``(cause, name, data, message)`` tuple.

Supported shapes, in resolution order:

    (cause)                                  copy-construct from cause
    (cause, message|formatter)
    (cause, name, message|formatter)
    (cause, name, data, message|formatter?)
    (cause, data, message|formatter?)
    (name, message|formatter)
    (name, data, message|formatter?)
    (data, message|formatter?)
    (message|formatter?)

A leading string is only a name when something follows it; a lone string is
always the message. A formatter supplied together with data receives the
payload when it accepts a positional parameter, and nothing otherwise.
Nothing here raises: arguments outside the grammar are
ignored.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
import inspect
from typing import Any, Optional, Sequence

from .lazy import MessageState, Pending, Resolved


class ArgKind(str, Enum):
    """Classification of a single constructor argument"""
    CAUSE = "cause"
    STRING = "string"
    MAPPING = "mapping"
    FUNCTION = "function"
    ABSENT = "absent"


def classify(value: Any) -> ArgKind:
    if value is None:
        return ArgKind.ABSENT
    if isinstance(value, BaseException):
        return ArgKind.CAUSE
    if isinstance(value, str):
        return ArgKind.STRING
    if isinstance(value, Mapping):
        return ArgKind.MAPPING
    if callable(value):
        return ArgKind.FUNCTION
    return ArgKind.ABSENT


@dataclass(frozen=True)
class Resolution:
    """
    Normalized constructor input.

    ``None`` fields were not supplied; the incident fills them from its
    defaults, or from ``cause`` when ``copy`` is set.
    """
    cause: Optional[BaseException] = None
    name: Optional[str] = None
    data: Optional[Mapping[str, Any]] = None
    message: Optional[MessageState] = None
    copy: bool = False


def accepts_data(formatter: Any) -> bool:
    """Whether ``formatter`` can take the payload as a positional argument"""
    try:
        params = inspect.signature(formatter).parameters.values()
    except (TypeError, ValueError):
        # No introspectable signature (some builtins): assume it takes data
        return True
    return any(
        p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD, p.VAR_POSITIONAL)
        for p in params
    )


def _message_state(source: Any, has_data: bool) -> Optional[MessageState]:
    kind = classify(source)
    if kind is ArgKind.STRING:
        return Resolved(source)
    if kind is ArgKind.FUNCTION:
        return Pending(source, with_data=has_data and accepts_data(source))
    return None


def resolve(
    args: Sequence[Any],
    *,
    cause: Optional[BaseException] = None,
    name: Optional[str] = None,
    data: Optional[Mapping[str, Any]] = None,
    message: Any = None,
) -> Resolution:
    """
    Resolve positional constructor arguments.

    Keyword arguments are the explicit spelling of the same fields and take
    precedence over whatever the positional shape supplied.

    Args:
        args: Positional arguments, as received by ``Incident.__init__``
        cause: Explicit cause
        name: Explicit name
        data: Explicit data
        message: Explicit message string or formatter

    Returns:
        Resolution (never raises)
    """
    rest = list(args)

    pos_cause: Optional[BaseException] = None
    if rest and classify(rest[0]) is ArgKind.CAUSE:
        pos_cause = rest.pop(0)

    pos_name: Optional[str] = None
    if len(rest) >= 2 and classify(rest[0]) is ArgKind.STRING:
        pos_name = rest.pop(0)

    pos_data: Optional[Mapping[str, Any]] = None
    if rest and classify(rest[0]) is ArgKind.MAPPING:
        pos_data = rest.pop(0)

    pos_message: Any = None
    if rest and classify(rest[0]) in (ArgKind.STRING, ArgKind.FUNCTION):
        pos_message = rest.pop(0)

    final_cause = cause if cause is not None else pos_cause
    final_data = data if data is not None else pos_data
    source = message if message is not None else pos_message

    copy = pos_cause is not None and not args[1:]

    return Resolution(
        cause=final_cause,
        name=name if name is not None else pos_name,
        data=final_data,
        message=_message_state(source, has_data=final_data is not None),
        copy=copy,
    )
