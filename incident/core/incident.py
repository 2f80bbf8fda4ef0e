# incident/core/incident.py
"""
The Incident exception type.

An incident carries:
- name: tag identifying its kind (used to discriminate variants)
- data: structured payload of that kind
- cause: optional exception (incident or native) that it wraps
- message: eager string, or a formatter evaluated once on first read

Incidents are ordinary exceptions: raise them, catch them with
``except Exception``, and branch on ``name``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar, Dict, Generic, List, Optional, TypeVar, cast
import copyreg
import traceback

from incident.config import get_config
from .lazy import LazyMessage, Resolved
from .resolver import resolve
from .stack import capture_site, format_section, render_stack


N = TypeVar("N", bound=str)
D = TypeVar("D", bound=Mapping[str, Any])


class Incident(Exception, Generic[N, D]):
    """
    Structured, causally-chained error.

    Construction accepts any of these positional shapes (see
    ``incident.core.resolver``)::

        Incident()
        Incident("The reactor is on fire!")
        Incident(lambda: f"Lost {count} packets")
        Incident({"port": 50313}, "Port unavailable")
        Incident("Network", {"uri": uri}, lambda data: f"Unable to reach {data['uri']}")
        Incident(cause, "LightBulb", "Unable to change light bulb")
        Incident(cause)                  # copy name, data and message of cause

    Keyword arguments ``cause``, ``name``, ``data`` and ``message`` may be
    used instead, and win over positional values.

    Discriminating variants::

        Parse = Incident[Literal["Parse"], ParseData]
        Lookup = Incident[Literal["Lookup"], LookupData]

        def explain(error: Parse | Lookup) -> str:
            match error:
                case Incident(name="Parse", data={"index": index}):
                    ...
    """

    __match_args__ = ("name", "data")

    # Tag used when none is supplied; falls back to the class name
    default_name: ClassVar[Optional[str]] = None

    name: N
    data: D

    def __init__(
        self,
        *args: Any,
        cause: Optional[BaseException] = None,
        name: Optional[str] = None,
        data: Optional[Mapping[str, Any]] = None,
        message: Any = None,
    ) -> None:
        super().__init__()
        res = resolve(args, cause=cause, name=name, data=data, message=message)

        adopted: Optional[Incident] = None
        if res.copy and isinstance(res.cause, Incident):
            adopted = res.cause

        if res.name is not None:
            self.name = cast(N, res.name)
        elif adopted is not None:
            self.name = adopted.name
        else:
            self.name = cast(N, type(self)._default_name())

        if res.data is not None:
            self.data = cast(D, res.data)
        elif adopted is not None:
            self.data = adopted.data
        else:
            self.data = cast(D, {})

        if res.message is not None:
            state = res.message
        elif adopted is not None:
            # Shares the pending formatter without running it
            state = adopted._message.state
        else:
            state = Resolved("")
        self._message = LazyMessage(state)

        self.__cause__ = res.cause

        stack_config = get_config().stack
        self._site: Optional[traceback.StackSummary] = (
            capture_site(self, stack_config.limit) if stack_config.capture else None
        )
        self._stack_override: Optional[str] = None

    @classmethod
    def _default_name(cls) -> str:
        return cls.default_name or cls.__name__

    # -------- message --------

    @property
    def message(self) -> str:
        """Message text; runs a pending formatter on first read"""
        return self._message.get(self.data)

    @message.setter
    def message(self, value: str) -> None:
        self._message.set(value)

    @property
    def is_resolved(self) -> bool:
        """Whether reading the message would still run a formatter"""
        return self._message.is_resolved

    # -------- cause --------

    @property
    def cause(self) -> Optional[BaseException]:
        return self.__cause__

    @cause.setter
    def cause(self, value: Optional[BaseException]) -> None:
        self.__cause__ = value

    # -------- stack --------

    @property
    def stack(self) -> str:
        """
        Rendered trace in Python's traceback layout.

        Rendered on every read from the current traceback, cause chain and
        configuration. Reading it resolves the message.
        """
        if self._stack_override is not None:
            return self._stack_override
        return render_stack(self, get_config().stack)

    @stack.setter
    def stack(self, value: Optional[str]) -> None:
        # None restores the rendered stack
        self._stack_override = value

    def _stack_section(self, limit: Optional[int]) -> List[str]:
        if self._stack_override is not None:
            return [self._stack_override]
        tb = self.__traceback__
        frames = traceback.extract_tb(tb, limit=limit) if tb is not None else self._site
        return format_section(self.name, self.message, frames)

    # -------- dunder --------

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        state = self._message.state
        message = repr(state.text) if isinstance(state, Resolved) else "<pending>"
        return f"{type(self).__name__}(name={self.name!r}, data={self.data!r}, message={message})"

    def __reduce__(self):
        # Construction site frames and tracebacks do not survive pickling
        state = dict(self.__dict__)
        state["_site"] = None
        state["__cause__"] = self.__cause__
        return (copyreg.__newobj__, (type(self),), state)

    def to_dict(self) -> Dict[str, Any]:
        """Shallow view of the public fields (resolves the message)"""
        return {
            "name": self.name,
            "data": self.data,
            "message": self.message,
            "cause": self.cause,
        }
