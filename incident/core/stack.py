# incident/core/stack.py
"""
Stack rendering.

Stacks follow the interpreter's own traceback layout, so an incident's
``stack`` reads like what Python prints for an uncaught exception:

    Traceback (most recent call last):
      File "app.py", line 12, in load_user
    UserNotFound: No user with id 42

Frames come from ``__traceback__`` once the incident has been raised, and
from the construction site recorded at creation time before that. The
cause chain is rendered oldest first, joined by the native "direct cause"
separator.
"""

from __future__ import annotations

from types import FrameType
from typing import Any, List, Optional
import sys
import traceback

from incident.config import StackConfig


TRACEBACK_HEADER = "Traceback (most recent call last):\n"
CAUSE_SEPARATOR = "\nThe above exception was the direct cause of the following exception:\n\n"


def capture_site(owner: BaseException, limit: Optional[int] = None) -> traceback.StackSummary:
    """
    Record the frames that led to the construction of ``owner``.

    ``__init__`` frames belonging to ``owner`` itself (subclasses chaining
    to ``super().__init__``) are skipped. Source lines are looked up only
    when the summary is formatted.
    """
    frame: Optional[FrameType] = sys._getframe(1)
    while frame is not None and frame.f_code.co_name == "__init__" and frame.f_locals.get("self") is owner:
        frame = frame.f_back
    if frame is None:
        return traceback.StackSummary()

    summary = traceback.StackSummary.extract(traceback.walk_stack(frame), limit=limit, lookup_lines=False)
    summary.reverse()
    return summary


def format_header(name: str, message: Any) -> str:
    """``Name: message``, or just ``Name`` for an empty message"""
    if message:
        return f"{name}: {message}"
    return name


def format_section(name: str, message: Any, frames: Optional[traceback.StackSummary]) -> List[str]:
    """Render one exception of a chain, without its cause"""
    lines: List[str] = []
    if frames:
        lines.append(TRACEBACK_HEADER)
        lines.extend(frames.format())
    lines.append(format_header(name, message) + "\n")
    return lines


def _section(exc: BaseException, limit: Optional[int]) -> List[str]:
    from .incident import Incident

    if isinstance(exc, Incident):
        return exc._stack_section(limit)
    return traceback.format_exception(exc, limit=limit, chain=False)


def render_stack(incident: BaseException, config: StackConfig) -> str:
    """
    Render the full stack of ``incident``.

    Reading the message of every incident in the chain resolves it.
    """
    chain = [incident]
    if config.include_cause:
        seen = {id(incident)}
        exc = incident.__cause__
        while exc is not None and id(exc) not in seen:
            seen.add(id(exc))
            chain.append(exc)
            exc = exc.__cause__

    parts: List[str] = []
    for exc in reversed(chain):
        if parts:
            parts.append(CAUSE_SEPARATOR)
        parts.extend(_section(exc, config.limit))
    return "".join(parts)
