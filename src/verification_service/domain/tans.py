"""Domain models for TANs looked up during TeleTAN validation."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TanRecord:
    """Represents a stored TAN."""

    tan_hash: str
    type: str
    redeemed: bool
    valid_from: datetime
    valid_until: datetime
