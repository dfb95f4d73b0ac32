from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(slots=True)
class ScheduledStep:
    """A pending controller step, fired once ``remaining`` reaches zero."""
    kind: str
    remaining: float
    payload: Dict[str, Any] = field(default_factory=dict)
