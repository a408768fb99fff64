"""Pydantic models for stored API keys and the key management endpoints."""

from typing import Optional

from pydantic import BaseModel, Field


class ApiKey(BaseModel):
    """
    Stored API key record.

    Attributes:
        id: Key identifier (UUID v4)
        platform: Platform the key belongs to
        encrypted_key: ``iv:ciphertext`` hex string
        key_name: Optional label
        is_active: Only active keys are used for requests
        created_at: ISO timestamp of registration
        last_used_at: ISO timestamp of last use, if recorded
    """

    id: str
    platform: str
    encrypted_key: str = Field(..., alias="encryptedKey")
    key_name: Optional[str] = Field(None, alias="keyName")
    is_active: bool = Field(True, alias="isActive")
    created_at: str = Field(..., alias="createdAt")
    last_used_at: Optional[str] = Field(None, alias="lastUsedAt")

    model_config = {"populate_by_name": True}

    def preview(self, length: int = 10) -> str:
        return self.encrypted_key[:length] + "..."


class ApiKeySummary(BaseModel):
    """Key metadata returned by GET /api/keys. Never carries the secret."""

    id: str
    platform: str
    key_name: Optional[str] = Field(None, alias="keyName")
    is_active: bool = Field(..., alias="isActive")
    created_at: Optional[str] = Field(None, alias="createdAt")
    last_used_at: Optional[str] = Field(None, alias="lastUsedAt")
    key_preview: Optional[str] = Field(None, alias="keyPreview")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_key(cls, key: ApiKey, with_preview: bool = True) -> "ApiKeySummary":
        return cls(
            id=key.id,
            platform=key.platform,
            key_name=key.key_name,
            is_active=key.is_active,
            created_at=key.created_at,
            last_used_at=key.last_used_at,
            key_preview=key.preview() if with_preview else None,
        )


class CreateKeyRequest(BaseModel):
    """Request body for POST /api/keys. Presence is checked by the route."""

    platform: Optional[str] = None
    api_key: Optional[str] = Field(None, alias="apiKey")
    key_name: Optional[str] = Field(None, alias="keyName")

    model_config = {"populate_by_name": True}


class UpdateKeyRequest(BaseModel):
    """Request body for PATCH /api/keys."""

    id: Optional[str] = None
    is_active: Optional[bool] = Field(None, alias="isActive")
    key_name: Optional[str] = Field(None, alias="keyName")

    model_config = {"populate_by_name": True}
