"""Supabase-backed app session repository."""

from dataclasses import dataclass
from datetime import datetime

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from verification_service.domain.app_sessions import (
    AppSession,
    SessionMatch,
    SourceOfTrust,
)
from verification_service.domain.errors import SessionConflictError, SessionStoreError
from verification_service.services.app_sessions import AppSessionRepository

_TABLE = "app_sessions"
_COLUMNS = (
    "id, created_at, updated_at, registration_token_hash, hashed_guid, "
    "tele_tan_hash, source_of_trust, tan_counter"
)
# PostgreSQL unique_violation
_UNIQUE_VIOLATION = "23505"


@dataclass
class SupabaseAppSessionRepository(AppSessionRepository):
    """Supabase implementation for app sessions.

    Uniqueness of the token and proof hashes is enforced by indexes on the
    ``app_sessions`` table.
    """

    client: Client

    def exists(self, match: SessionMatch) -> bool:
        """Return True when a row matches every set field."""
        return bool(self._select(match, "id"))

    def find_one(self, match: SessionMatch) -> AppSession | None:
        """Return the first row matching every set field."""
        rows = self._select(match, _COLUMNS)
        if not rows:
            return None
        return _session_from_row(rows[0])

    def save(self, session: AppSession) -> AppSession:
        """Insert a session row and return it as stored."""
        payload = {
            "created_at": session.created_at.isoformat(),
            "updated_at": session.updated_at.isoformat(),
            "registration_token_hash": session.registration_token_hash,
            "hashed_guid": session.hashed_guid,
            "tele_tan_hash": session.tele_tan_hash,
            "source_of_trust": (
                str(session.source_of_trust) if session.source_of_trust else None
            ),
            "tan_counter": session.tan_counter,
        }
        try:
            response = self.client.table(_TABLE).insert(payload).execute()
        except APIError as exc:
            if exc.code == _UNIQUE_VIOLATION:
                raise SessionConflictError(exc.message) from exc
            raise SessionStoreError(
                f"Failed to save app session: {exc.message}"
            ) from exc
        except httpx.HTTPError as exc:
            raise SessionStoreError("Session store unavailable") from exc
        if not response.data:
            raise SessionStoreError("Failed to save app session")
        return _session_from_row(response.data[0])

    def _select(self, match: SessionMatch, columns: str) -> list[dict[str, object]]:
        query = self.client.table(_TABLE).select(columns)
        for column, value in match.filters():
            query = query.eq(column, value)
        try:
            response = query.limit(1).execute()
        except (APIError, httpx.HTTPError) as exc:
            raise SessionStoreError("Failed to query app sessions") from exc
        return response.data or []


def _session_from_row(row: dict[str, object]) -> AppSession:
    source = row.get("source_of_trust")
    return AppSession(
        id=row.get("id"),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        updated_at=datetime.fromisoformat(str(row["updated_at"])),
        registration_token_hash=str(row["registration_token_hash"]),
        hashed_guid=row.get("hashed_guid"),
        tele_tan_hash=row.get("tele_tan_hash"),
        source_of_trust=SourceOfTrust(source) if source else None,
        tan_counter=int(row.get("tan_counter") or 0),
    )
