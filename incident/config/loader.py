# incident/config/loader.py
"""
Configuration Loader

Loads configuration from YAML files with code defaults as fallback.

Design principle:
- Code = truth (has all defaults)
- YAML = input parameters (optional)
- System works without YAML
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Dict, Any
import logging
import os
import threading

import yaml

from .stack import StackConfig
from .validator import validate_config, ConfigIssue


logger = logging.getLogger(__name__)

# Environment variable pointing at an explicit config file
CONFIG_ENV_VAR = "INCIDENT_CONFIG"


class IncidentConfig:
    """
    Unified incident configuration.

    All fields have code defaults - YAML is optional.
    """

    def __init__(self, stack: Optional[StackConfig] = None):
        """Initialize with code defaults"""
        self.stack = stack or StackConfig.default()

    @classmethod
    def default(cls) -> "IncidentConfig":
        """Create default configuration (no YAML needed)"""
        return cls()

    @classmethod
    def from_yaml(cls, config_path: Optional[Path] = None) -> "IncidentConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to YAML file. If None, tries:
                1. $INCIDENT_CONFIG
                2. ~/.incident/config.yml

        Returns:
            IncidentConfig instance (always has code defaults as fallback)
        """
        config = cls.default()

        yaml_data = _load_yaml(config_path)
        if not yaml_data:
            return config

        if "stack" in yaml_data:
            config.stack = _merge_config(config.stack, yaml_data["stack"], StackConfig)

        return config

    def validate(self) -> list[ConfigIssue]:
        """
        Validate configuration for illegal/misleading combinations.

        Returns:
            List of issues (warn/error level)
        """
        return validate_config(self.stack)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "stack": self.stack.to_dict(),
        }

    def __repr__(self) -> str:
        return f"IncidentConfig(stack={self.stack!r})"


def _candidate_paths(config_path: Optional[Path]) -> list[Path]:
    if config_path:
        return [Path(config_path)]

    paths = []
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        paths.append(Path(env_path))
    paths.append(Path.home() / ".incident" / "config.yml")
    return paths


def _load_yaml(config_path: Optional[Path] = None) -> Optional[Dict[str, Any]]:
    """Load YAML file, return None if not found (not an error)"""
    for path in _candidate_paths(config_path):
        if not path.exists():
            continue
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Failed to load incident config from %s, using defaults: %s", path, e)
            return None
        if data is not None and not isinstance(data, dict):
            logger.warning("Ignoring incident config %s: top level must be a mapping", path)
            return None
        return data

    return None


def _merge_config(default_instance, yaml_data: Any, config_class):
    """Merge YAML data into default config instance"""
    if not isinstance(yaml_data, dict):
        logger.warning("Ignoring %s section: expected a mapping, got %r", config_class.__name__, yaml_data)
        return default_instance

    default_dict = default_instance.to_dict()
    merged = {**default_dict, **yaml_data}

    unknown = set(yaml_data) - set(config_class.__dataclass_fields__)
    if unknown:
        logger.warning("Ignoring unknown %s keys: %s", config_class.__name__, ", ".join(sorted(unknown)))

    return config_class(**{k: v for k, v in merged.items() if k in config_class.__dataclass_fields__})


def load_config(config_path: Optional[Path] = None) -> IncidentConfig:
    """
    Load incident configuration.

    Args:
        config_path: Optional path to YAML file

    Returns:
        IncidentConfig instance (always has code defaults)

    Note:
        - If YAML is not found or invalid, returns code defaults
        - Validation issues are logged, not raised
        - A section with error-level issues falls back to its code defaults
    """
    config = IncidentConfig.from_yaml(config_path)
    invalid_sections = set()
    for issue in config.validate():
        if issue.level == "error":
            logger.error("Invalid incident config: %s", issue)
            invalid_sections.add(issue.path.split(".", 1)[0])
        else:
            logger.warning("Incident config: %s", issue)

    if "stack" in invalid_sections:
        logger.error("Falling back to default stack configuration")
        config.stack = StackConfig.default()
    return config


# Process-wide configuration, lazily loaded on first access
_global_config: Optional[IncidentConfig] = None
_global_config_lock = threading.Lock()


def get_config() -> IncidentConfig:
    """
    Get the process-wide configuration.

    Loaded from YAML (or code defaults) on first access.
    """
    global _global_config

    if _global_config is None:
        with _global_config_lock:
            if _global_config is None:
                _global_config = load_config()

    return _global_config


def set_config(config: Optional[IncidentConfig]) -> None:
    """
    Replace the process-wide configuration.

    Passing None forces a reload on next access (useful for testing).
    """
    global _global_config
    with _global_config_lock:
        _global_config = config
