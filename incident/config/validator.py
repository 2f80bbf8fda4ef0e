# incident/config/validator.py
"""
Configuration Validator

Validates configuration for illegal/misleading combinations.
Returns structured issues with level (warn/error), path, message, hint.
"""

from typing import List, Literal
from dataclasses import dataclass

from .stack import StackConfig


@dataclass(frozen=True)
class ConfigIssue:
    """
    Configuration validation issue

    Structured output for CLI/logging.
    """
    level: Literal["warn", "error"]
    path: str  # e.g., "stack.limit"
    message: str
    hint: str = ""

    def __str__(self) -> str:
        hint_str = f"\n   Hint: {self.hint}" if self.hint else ""
        return f"[{self.level}] [{self.path}] {self.message}{hint_str}"


def validate_config(stack: StackConfig) -> List[ConfigIssue]:
    """
    Validate configuration for illegal/misleading combinations.

    Returns:
        List of issues (warn/error level)
    """
    issues = []

    if stack.limit is not None and (not isinstance(stack.limit, int) or stack.limit < 0):
        issues.append(ConfigIssue(
            level="error",
            path="stack.limit",
            message=f"limit={stack.limit!r} must be a non-negative integer or null",
            hint="Remove stack.limit to render every frame",
        ))

    # limit only trims raised incidents when capture is off
    if not stack.capture and stack.limit is not None:
        issues.append(ConfigIssue(
            level="warn",
            path="stack.limit",
            message="limit has no effect on incidents that were never raised when capture=false",
            hint="Set stack.capture=true to record construction sites",
        ))

    return issues
