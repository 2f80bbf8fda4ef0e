"""
Incident Configuration

Design principles:
1. Code has defaults, YAML is optional input (YAML can be deleted)
2. Configuration only affects rendering, never incident semantics
"""

from .stack import StackConfig
from .loader import IncidentConfig, load_config, get_config, set_config, CONFIG_ENV_VAR
from .validator import validate_config, ConfigIssue

__all__ = [
    "StackConfig",
    "IncidentConfig",
    "load_config",
    "get_config",
    "set_config",
    "CONFIG_ENV_VAR",
    "validate_config",
    "ConfigIssue",
]
