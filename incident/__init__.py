# incident/__init__.py
"""
Incident - structured, causally-chained errors with lazy messages

Basic usage:

    >>> from incident import Incident
    >>> error = Incident("NotFound", {"id": 42}, lambda data: f"No user with id {data['id']}")
    >>> error.name, error.data
    ('NotFound', {'id': 42})
    >>> error.message          # formatter runs here, once
    'No user with id 42'

Wrapping:

    >>> try:
    ...     int("x")
    ... except ValueError as e:
    ...     wrapped = Incident(e, "ParseFailed", "Unable to parse the port")
    >>> wrapped.cause
    ValueError("invalid literal for int() with base 10: 'x'")

Closed variant sets:

    >>> from incident import IncidentUnion
    >>> errors = IncidentUnion({"NotFound": dict, "Forbidden": dict})
    >>> errors.dispatch(error, {"NotFound": lambda e: 404, "Forbidden": lambda e: 403})
    404
"""

__version__ = "0.1.0"

from .core import (
    Incident,
    IncidentUnion,
    LazyMessage,
    Pending,
    Resolved,
    resolve,
)
from .core import codes
from .config import (
    IncidentConfig,
    StackConfig,
    ConfigIssue,
    load_config,
    get_config,
    set_config,
)

__all__ = [
    # Version
    "__version__",

    # Incident
    "Incident",
    "IncidentUnion",
    "codes",

    # Lazy message internals
    "LazyMessage",
    "Pending",
    "Resolved",
    "resolve",

    # Configuration
    "IncidentConfig",
    "StackConfig",
    "ConfigIssue",
    "load_config",
    "get_config",
    "set_config",
]
