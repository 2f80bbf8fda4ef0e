# incident/core/variants.py
"""
Closed sets of incident variants.

Static narrowing needs nothing at runtime: parametrize ``Incident`` by a
literal tag and a payload type, union the variants and ``match`` on
``name``. ``IncidentUnion`` adds the runtime side for code that receives
incidents from elsewhere:

- membership by tag
- payload validation against the variant's declared shape (pydantic)
- exhaustive dispatch: every tag must have a handler

Failures are raised as incidents themselves, tagged with the names in
``incident.core.codes``.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, FrozenSet, Mapping, Optional, TypeVar

from pydantic import TypeAdapter, ValidationError

from . import codes
from .incident import Incident


R = TypeVar("R")


class IncidentUnion:
    """
    A closed mapping ``tag -> payload shape``.

    Shapes are anything pydantic can validate a mapping against:
    ``BaseModel`` subclasses, dataclasses, ``TypedDict`` (from
    ``typing_extensions`` before Python 3.12), ``dict[str, Any]``.

    Usage:
    ```python
    class SyntaxData(BaseModel):
        index: int

    class TypeData(BaseModel):
        type_name: str

    ParseErrors = IncidentUnion({"SyntaxError": SyntaxData, "TypeError": TypeData})

    err = ParseErrors.create("SyntaxError", {"index": 3}, "Unexpected token")
    ParseErrors.dispatch(err, {
        "SyntaxError": lambda e: f"at {e.data['index']}",
        "TypeError": lambda e: e.data["type_name"],
    })
    ```
    """

    def __init__(self, variants: Mapping[str, Any]):
        self._shapes: Dict[str, Any] = dict(variants)
        self._adapters: Dict[str, TypeAdapter] = {
            name: TypeAdapter(shape) for name, shape in self._shapes.items()
        }

    @property
    def names(self) -> FrozenSet[str]:
        """The closed set of tags"""
        return frozenset(self._shapes)

    def shape(self, name: str) -> Any:
        """Declared payload shape of a variant"""
        return self._shapes[name]

    def __contains__(self, incident: object) -> bool:
        return isinstance(incident, Incident) and incident.name in self._shapes

    def __len__(self) -> int:
        return len(self._shapes)

    def validate(self, incident: Incident) -> Any:
        """
        Validate the payload of ``incident`` against its variant shape.

        Returns:
            The validated payload (a model instance for model shapes)

        Raises:
            Incident: ``UnknownVariant`` for a tag outside the union,
                ``InvalidVariantData`` (caused by the pydantic error) for a
                payload that does not match
        """
        adapter = self._adapters.get(incident.name)
        if adapter is None:
            raise self._unknown(incident.name, incident)
        try:
            return adapter.validate_python(incident.data)
        except ValidationError as e:
            raise Incident(
                e,
                codes.INVALID_VARIANT_DATA,
                {"name": incident.name, "errors": e.errors()},
                lambda data: f"Invalid data for incident variant {data['name']!r}: "
                             f"{len(data['errors'])} validation error(s)",
            ) from e

    def create(
        self,
        name: str,
        data: Mapping[str, Any],
        message: Any = "",
        cause: Optional[BaseException] = None,
    ) -> Incident:
        """
        Build an incident of a known variant, validating its payload first.

        ``message`` may be a string or a formatter receiving ``data``.
        """
        candidate = Incident(name=name, data=data, message=message, cause=cause)
        self.validate(candidate)
        return candidate

    def dispatch(self, incident: Incident, handlers: Mapping[str, Callable[[Incident], R]]) -> R:
        """
        Call the handler registered for ``incident.name``.

        Handlers must cover the union exactly: a missing or extra tag is a
        programming error reported before any handler runs.
        """
        missing = self.names - set(handlers)
        extra = set(handlers) - self.names
        if missing or extra:
            raise Incident(
                codes.NON_EXHAUSTIVE_HANDLERS,
                {"missing": sorted(missing), "extra": sorted(extra)},
                lambda data: f"Handlers do not match the incident union "
                             f"(missing: {data['missing']}, extra: {data['extra']})",
            )
        handler = handlers.get(incident.name)
        if handler is None:
            raise self._unknown(incident.name, incident)
        return handler(incident)

    def _unknown(self, name: str, incident: Incident) -> Incident:
        return Incident(
            incident,
            codes.UNKNOWN_VARIANT,
            {"name": name, "known": sorted(self._shapes)},
            lambda data: f"Unknown incident variant {data['name']!r}, expected one of {data['known']}",
        )

    def __repr__(self) -> str:
        return f"IncidentUnion(names={sorted(self._shapes)})"
