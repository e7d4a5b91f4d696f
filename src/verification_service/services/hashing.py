"""Hashing helpers for tokens, GUIDs and TANs."""

import hashlib
import re
from dataclasses import dataclass
from typing import Protocol

_SHA256_HEX_PATTERN = re.compile(r"^[0-9A-Fa-f]{64}$")


class Hasher(Protocol):
    """Interface for one-way hashing of lookup keys."""

    def hash(self, value: str) -> str:
        """Return the digest of a value."""

    def is_hash_valid(self, value: str) -> bool:
        """Return True when a value has the shape of a digest."""


@dataclass
class HashingService(Hasher):
    """SHA-256 hashing rendered as lowercase hex."""

    def hash(self, value: str) -> str:
        """Return the SHA-256 hex digest of a value."""
        return hashlib.sha256(value.encode("utf-8")).hexdigest()

    def is_hash_valid(self, value: str) -> bool:
        """Check the digest shape only; this is not a cryptographic check."""
        return bool(_SHA256_HEX_PATTERN.fullmatch(value))
