"""Domain models for app sessions and registration tokens."""

from dataclasses import dataclass, fields
from datetime import datetime
from enum import StrEnum


class SourceOfTrust(StrEnum):
    """Proof type that backed the creation of an app session."""

    HASHED_GUID = "hashed_guid"
    TELETAN = "teletan"


class RegistrationTokenKeyType(StrEnum):
    """Kind of key a client presents to obtain a registration token."""

    GUID = "GUID"
    TELETAN = "TELETAN"


class IssuanceStatus(StrEnum):
    """Outcome of a registration token request."""

    CREATED = "CREATED"
    ALREADY_REGISTERED = "ALREADY_REGISTERED"
    INVALID_PROOF = "INVALID_PROOF"


@dataclass
class AppSession:
    """Represents a persisted app session bound to one proof of trust."""

    created_at: datetime
    updated_at: datetime
    registration_token_hash: str
    source_of_trust: SourceOfTrust | None = None
    hashed_guid: str | None = None
    tele_tan_hash: str | None = None
    tan_counter: int = 0
    id: int | None = None


@dataclass(frozen=True)
class SessionMatch:
    """Exact-match filter over app session fields.

    Only fields that are set take part in the match; all of them must be equal.
    """

    registration_token_hash: str | None = None
    hashed_guid: str | None = None
    tele_tan_hash: str | None = None

    def __post_init__(self) -> None:
        if not self.filters():
            raise ValueError("SessionMatch requires at least one field")

    def filters(self) -> list[tuple[str, str]]:
        """Return the (field, value) pairs that are set."""
        return [
            (item.name, getattr(self, item.name))
            for item in fields(self)
            if getattr(self, item.name) is not None
        ]

    def matches(self, session: AppSession) -> bool:
        """Return True when every set field equals the session's value."""
        return all(getattr(session, name) == value for name, value in self.filters())


@dataclass(frozen=True)
class IssuanceResult:
    """Result of issuing a registration token."""

    status: IssuanceStatus
    registration_token: str | None = None

    @property
    def created(self) -> bool:
        """Return True when a new token was issued."""
        return self.status is IssuanceStatus.CREATED
