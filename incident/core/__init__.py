# incident/core/__init__.py
"""
Core incident components.

- incident: the Incident exception type
- resolver: positional constructor shapes -> canonical fields
- lazy: memoized-once message cell
- stack: traceback-style stack rendering
- variants: closed variant sets (tag -> payload shape)

No side effects on import.
"""

from .incident import Incident
from .lazy import LazyMessage, Pending, Resolved
from .resolver import ArgKind, Resolution, classify, resolve
from .variants import IncidentUnion

__all__ = [
    "Incident",
    "IncidentUnion",
    "LazyMessage",
    "Pending",
    "Resolved",
    "ArgKind",
    "Resolution",
    "classify",
    "resolve",
]
