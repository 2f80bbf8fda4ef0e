# incident/core/lazy.py
"""
Lazy message cell.

An incident message is held in one of two states:
- Pending: a formatter that has not run yet
- Resolved: the cached message string

Transitions:
- Pending -> Resolved on the first read (the formatter runs exactly once,
  then the reference is dropped)
- any -> Resolved on an explicit write (a pending formatter is cancelled)

The cell is guarded by a re-entrant lock so that concurrent first reads run
the formatter once.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Union
import logging
import threading


logger = logging.getLogger(__name__)

# () -> str, or (data) -> str when supplied together with data
Formatter = Callable[..., str]


@dataclass(frozen=True)
class Pending:
    """A formatter waiting for its first read."""
    formatter: Formatter
    with_data: bool = False


@dataclass(frozen=True)
class Resolved:
    """A message string, final until the next explicit write."""
    text: str


MessageState = Union[Pending, Resolved]


class LazyMessage:
    """
    Memoized-once message holder.

    The cell never inspects what the formatter returns; exceptions raised by
    the formatter propagate to the reader and leave the cell pending.
    """

    def __init__(self, state: MessageState = Resolved("")):
        self._state: MessageState = state
        self._lock = threading.RLock()

    @property
    def state(self) -> MessageState:
        """Current state, without triggering resolution"""
        return self._state

    @property
    def is_resolved(self) -> bool:
        return isinstance(self._state, Resolved)

    def get(self, data: Mapping[str, Any]) -> str:
        """
        Read the message, running a pending formatter if needed.

        Args:
            data: Live payload handed to formatters supplied together with data
        """
        state = self._state
        if isinstance(state, Resolved):
            return state.text

        with self._lock:
            state = self._state
            if isinstance(state, Resolved):
                return state.text

            if state.with_data:
                text = state.formatter(data)
            else:
                text = state.formatter()

            self._state = Resolved(text)
            logger.debug("Resolved lazy incident message via %r", state.formatter)
            return text

    def set(self, text: str) -> None:
        """Overwrite the message; a pending formatter will never run."""
        with self._lock:
            if isinstance(self._state, Pending):
                logger.debug("Cancelled pending formatter %r", self._state.formatter)
            self._state = Resolved(text)

    # Locks cannot be pickled or copied; each copy gets its own
    def __getstate__(self) -> Dict[str, Any]:
        return {"_state": self._state}

    def __setstate__(self, state: Dict[str, Any]) -> None:
        self._state = state["_state"]
        self._lock = threading.RLock()

    def __repr__(self) -> str:
        state = self._state
        if isinstance(state, Resolved):
            return f"LazyMessage({state.text!r})"
        return "LazyMessage(<pending>)"
