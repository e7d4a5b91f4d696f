"""TeleTAN validation."""

import logging
import re
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from verification_service.domain.tans import TanRecord
from verification_service.services.hashing import Hasher

TELE_TAN_ALPHABET = "23456789ABCDEFGHJKMNPQRSTUVWXYZ"
TELE_TAN_TYPE = "TELETAN"

_logger = logging.getLogger(__name__)


class TanRepository(Protocol):
    """Persistence interface for TAN lookups."""

    def find_by_hash(self, tan_hash: str) -> TanRecord | None:
        """Return the TAN stored under a hash, if present."""


class TeleTanValidator(Protocol):
    """Interface for deciding whether a TeleTAN may be used."""

    def is_tele_tan_valid(self, tele_tan: str) -> bool:
        """Return True when the TeleTAN is well formed and not consumed."""


@dataclass
class TeleTanService(TeleTanValidator):
    """Validate TeleTANs against their format and stored state."""

    repository: TanRepository
    hashing_service: Hasher
    tele_tan_length: int = 7

    def is_tele_tan_valid(self, tele_tan: str) -> bool:
        """Return True for a well-formed, unredeemed TeleTAN within its validity."""
        if not self.is_syntax_valid(tele_tan):
            _logger.info("TeleTAN rejected: invalid syntax")
            return False
        record = self.repository.find_by_hash(self.hashing_service.hash(tele_tan))
        if record is None or record.type != TELE_TAN_TYPE:
            _logger.info("TeleTAN rejected: unknown")
            return False
        if record.redeemed:
            _logger.info("TeleTAN rejected: already redeemed")
            return False
        now = datetime.now(tz=UTC)
        return record.valid_from <= now <= record.valid_until

    def is_syntax_valid(self, tele_tan: str) -> bool:
        """Return True when the TeleTAN uses the allowed alphabet and length."""
        pattern = f"[{TELE_TAN_ALPHABET}]{{{self.tele_tan_length}}}"
        return re.fullmatch(pattern, tele_tan) is not None
