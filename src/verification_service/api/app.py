"""FastAPI application factory."""

import logging

from fastapi import FastAPI, HTTPException, Request, status

from verification_service.api.models import (
    RegistrationTokenRequest,
    RegistrationTokenResponse,
)
from verification_service.app_logging import configure_logging
from verification_service.containers import AppContainer
from verification_service.domain.app_sessions import IssuanceStatus
from verification_service.domain.errors import SessionStoreError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post(
        "/version/v1/registrationToken",
        status_code=status.HTTP_201_CREATED,
        response_model=RegistrationTokenResponse,
    )
    async def generate_registration_token(
        body: RegistrationTokenRequest, request: Request
    ) -> RegistrationTokenResponse:
        """Issue a registration token for a hashed GUID or a TeleTAN."""
        state_container: AppContainer = request.app.state.container
        try:
            result = state_container.app_session_service.issue_token(
                body.key, body.key_type
            )
        except SessionStoreError as exc:
            logger.exception("Failed to issue registration token")
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail=_format_store_error(state_container, exc),
            ) from exc
        if result.status is IssuanceStatus.INVALID_PROOF:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST)
        if result.status is IssuanceStatus.ALREADY_REGISTERED:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT)
        return RegistrationTokenResponse(registration_token=result.registration_token)

    return app


def _format_store_error(state_container: AppContainer, exc: Exception) -> str:
    """Return the error detail, with local debug info when running locally."""
    fallback = "Session store unavailable"
    if state_container.settings.environment == "local":
        return f"{fallback} (debug: {type(exc).__name__}: {exc})"
    return fallback
