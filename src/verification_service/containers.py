"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from verification_service.adapters.supabase_app_session_repository import (
    SupabaseAppSessionRepository,
)
from verification_service.adapters.supabase_tan_repository import (
    SupabaseTanRepository,
)
from verification_service.config import Settings
from verification_service.services.app_sessions import AppSessionService
from verification_service.services.hashing import HashingService
from verification_service.services.tele_tans import TeleTanService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    hashing_service: HashingService
    tele_tan_service: TeleTanService
    app_session_service: AppSessionService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    hashing_service = HashingService()
    tele_tan_service = TeleTanService(
        repository=SupabaseTanRepository(supabase_client),
        hashing_service=hashing_service,
        tele_tan_length=resolved_settings.tele_tan_length,
    )
    app_session_service = AppSessionService(
        repository=SupabaseAppSessionRepository(supabase_client),
        hashing_service=hashing_service,
        tele_tan_validator=tele_tan_service,
    )
    return AppContainer(
        settings=resolved_settings,
        hashing_service=hashing_service,
        tele_tan_service=tele_tan_service,
        app_session_service=app_session_service,
    )
