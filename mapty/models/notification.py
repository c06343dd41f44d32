"""User-facing status message state."""
from dataclasses import dataclass
from typing import Literal, Optional

Severity = Literal["error", "success"]


@dataclass
class Notification:
    """Snapshot of the message area: text, styling and whether it is shown."""
    message: str
    severity: Optional[Severity]
    visible: bool
