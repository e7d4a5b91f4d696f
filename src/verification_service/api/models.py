"""Pydantic models for the registration token API."""

from pydantic import BaseModel, ConfigDict, Field

from verification_service.domain.app_sessions import RegistrationTokenKeyType


class RegistrationTokenRequest(BaseModel):
    """Request body carrying a hashed GUID or a TeleTAN."""

    model_config = ConfigDict(populate_by_name=True)

    key: str = Field(min_length=1)
    key_type: RegistrationTokenKeyType = Field(alias="keyType")


class RegistrationTokenResponse(BaseModel):
    """Response body with a newly issued registration token."""

    model_config = ConfigDict(populate_by_name=True)

    registration_token: str = Field(alias="registrationToken")
