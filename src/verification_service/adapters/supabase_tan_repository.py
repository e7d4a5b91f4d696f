"""Supabase-backed TAN repository."""

from dataclasses import dataclass
from datetime import datetime

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from verification_service.domain.errors import SessionStoreError
from verification_service.domain.tans import TanRecord
from verification_service.services.tele_tans import TanRepository


@dataclass
class SupabaseTanRepository(TanRepository):
    """Supabase implementation for TAN lookups."""

    client: Client

    def find_by_hash(self, tan_hash: str) -> TanRecord | None:
        """Return the TAN stored under a hash, if present."""
        try:
            response = (
                self.client.table("tans")
                .select("tan_hash, type, redeemed, valid_from, valid_until")
                .eq("tan_hash", tan_hash)
                .limit(1)
                .execute()
            )
        except (APIError, httpx.HTTPError) as exc:
            raise SessionStoreError("Failed to query TANs") from exc
        if not response.data:
            return None
        row = response.data[0]
        return TanRecord(
            tan_hash=row["tan_hash"],
            type=row["type"],
            redeemed=bool(row["redeemed"]),
            valid_from=datetime.fromisoformat(row["valid_from"]),
            valid_until=datetime.fromisoformat(row["valid_until"]),
        )
