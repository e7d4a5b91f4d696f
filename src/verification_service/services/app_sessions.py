"""Registration token issuance bound to app sessions."""

import logging
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from verification_service.domain.app_sessions import (
    AppSession,
    IssuanceResult,
    IssuanceStatus,
    RegistrationTokenKeyType,
    SessionMatch,
    SourceOfTrust,
)
from verification_service.domain.errors import SessionConflictError
from verification_service.services.hashing import Hasher
from verification_service.services.tele_tans import TeleTanValidator

_logger = logging.getLogger(__name__)


class AppSessionRepository(Protocol):
    """Persistence interface for app sessions."""

    def exists(self, match: SessionMatch) -> bool:
        """Return True when a session matches every set field."""

    def find_one(self, match: SessionMatch) -> AppSession | None:
        """Return the session matching every set field, if present."""

    def save(self, session: AppSession) -> AppSession:
        """Persist a new session and return it as stored.

        Raises SessionConflictError on a uniqueness violation and
        SessionStoreError on any other failure.
        """


@dataclass
class AppSessionService:
    """Issue registration tokens and look up the sessions behind them."""

    repository: AppSessionRepository
    hashing_service: Hasher
    tele_tan_validator: TeleTanValidator

    def issue_token(
        self, key: str, key_type: RegistrationTokenKeyType
    ) -> IssuanceResult:
        """Create a registration token for a hashed GUID or a TeleTAN.

        At most one session exists per proof; a second request for the same
        proof returns ALREADY_REGISTERED and writes nothing.
        """
        key_type = RegistrationTokenKeyType(key_type)
        if key_type is RegistrationTokenKeyType.GUID:
            if not self.hashing_service.is_hash_valid(key):
                _logger.warning("The hashed GUID supplied is not valid.")
                return IssuanceResult(IssuanceStatus.INVALID_PROOF)
            match = SessionMatch(hashed_guid=key.lower())
            source = SourceOfTrust.HASHED_GUID
        else:
            if not self.tele_tan_validator.is_tele_tan_valid(key):
                _logger.warning("The TeleTAN supplied is not valid.")
                return IssuanceResult(IssuanceStatus.INVALID_PROOF)
            match = SessionMatch(tele_tan_hash=self.hashing_service.hash(key))
            source = SourceOfTrust.TELETAN

        if self.repository.exists(match):
            _logger.warning("A registration token already exists for the %s.", source)
            return IssuanceResult(IssuanceStatus.ALREADY_REGISTERED)

        _logger.info("Generating a new registration token for the %s.", source)
        registration_token = _generate_registration_token()
        session = self.generate_app_session(registration_token)
        session.source_of_trust = source
        session.hashed_guid = match.hashed_guid
        session.tele_tan_hash = match.tele_tan_hash
        try:
            self.save_app_session(session)
        except SessionConflictError:
            _logger.warning("A concurrent request registered the %s first.", source)
            return IssuanceResult(IssuanceStatus.ALREADY_REGISTERED)
        return IssuanceResult(IssuanceStatus.CREATED, registration_token)

    def generate_app_session(self, registration_token: str) -> AppSession:
        """Build an unsaved session for a registration token."""
        now = datetime.now(tz=UTC)
        return AppSession(
            created_at=now,
            updated_at=now,
            registration_token_hash=self.hashing_service.hash(registration_token),
            tan_counter=0,
        )

    def save_app_session(self, session: AppSession) -> AppSession:
        """Persist a session."""
        _logger.info("Saving app session.")
        return self.repository.save(session)

    def session_exists_for_token_hash(self, registration_token_hash: str) -> bool:
        """Return True when a session exists for a hashed registration token."""
        return self.repository.exists(
            SessionMatch(registration_token_hash=registration_token_hash)
        )

    def find_session_by_token(self, registration_token: str) -> AppSession | None:
        """Return the session behind a raw registration token, if any."""
        return self.repository.find_one(
            SessionMatch(
                registration_token_hash=self.hashing_service.hash(registration_token)
            )
        )

    def session_exists_for_guid_hash(self, hashed_guid: str) -> bool:
        """Return True when a session was created from a hashed GUID."""
        return self.repository.exists(SessionMatch(hashed_guid=hashed_guid.lower()))

    def session_exists_for_tele_tan_hash(self, tele_tan_hash: str) -> bool:
        """Return True when a session was created from a hashed TeleTAN."""
        return self.repository.exists(SessionMatch(tele_tan_hash=tele_tan_hash))

    def session_exists_for_tele_tan(self, tele_tan: str) -> bool:
        """Return True when a session was created from a raw TeleTAN."""
        return self.session_exists_for_tele_tan_hash(
            self.hashing_service.hash(tele_tan)
        )


def _generate_registration_token() -> str:
    return str(uuid.uuid4())
