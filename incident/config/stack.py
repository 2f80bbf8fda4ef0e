# incident/config/stack.py
"""
Stack Configuration

Controls how ``Incident.stack`` is captured and rendered.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class StackConfig:
    """
    Stack rendering configuration.

    capture: Record the construction site of incidents (used until raised)
    limit: Maximum number of frames rendered per exception (None = all)
    include_cause: Render the cause chain above the incident's own trace
    """

    capture: bool = True
    limit: Optional[int] = None
    include_cause: bool = True

    @classmethod
    def default(cls) -> "StackConfig":
        """Default stack configuration"""
        return cls(
            capture=True,
            limit=None,
            include_cause=True,
        )

    @classmethod
    def minimal(cls) -> "StackConfig":
        """Header-only stacks for incidents that were never raised"""
        return cls(
            capture=False,
            limit=None,
            include_cause=False,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "capture": self.capture,
            "limit": self.limit,
            "include_cause": self.include_cause,
        }
