"""
API key management endpoints.

GET/POST/PATCH/DELETE /api/keys and GET /api/keys/export. Responses
carry key metadata only, never the decrypted secret.
"""

import logging
from typing import Optional

from fastapi import APIRouter

from app.middleware import BadRequestError, KeyNotFoundError
from app.models.api_key import ApiKeySummary, CreateKeyRequest, UpdateKeyRequest
from app.services import get_api_key_service, get_credential_resolver
from app.services.auto_import import AutoImportService
from app.services.platform_catalog import list_platforms

logger = logging.getLogger(__name__)

router = APIRouter()


def _summary(summary: ApiKeySummary) -> dict:
    return summary.model_dump(by_alias=True, exclude_none=True)


@router.get("/keys", summary="List API Keys")
async def list_keys() -> dict:
    keys = get_api_key_service().get_all()
    return {"success": True, "data": [_summary(ApiKeySummary.from_key(key)) for key in keys]}


@router.post("/keys", summary="Register API Key")
async def create_key(request: CreateKeyRequest) -> dict:
    """
    Register a new key for a platform.

    Raises:
        BadRequestError: Missing platform/key or unsupported platform
    """
    if not request.platform or not request.api_key:
        raise BadRequestError("Platform and API key are required")

    if request.platform not in list_platforms():
        raise BadRequestError("Invalid platform")

    key = get_api_key_service().add(request.platform, request.api_key, request.key_name)
    return {"success": True, "data": _summary(ApiKeySummary.from_key(key, with_preview=False))}


@router.patch("/keys", summary="Update API Key")
async def update_key(request: UpdateKeyRequest) -> dict:
    if not request.id:
        raise BadRequestError("Key ID is required")

    updates = {}
    if request.is_active is not None:
        updates["is_active"] = request.is_active
    if request.key_name:
        updates["key_name"] = request.key_name

    key = get_api_key_service().update(request.id, **updates)
    if key is None:
        raise KeyNotFoundError(request.id)

    summary = ApiKeySummary.from_key(key, with_preview=False)
    summary.created_at = None
    summary.last_used_at = None
    return {"success": True, "data": _summary(summary)}


@router.delete("/keys", summary="Delete API Key")
async def delete_key(id: Optional[str] = None) -> dict:
    if not id:
        raise BadRequestError("Key ID is required")

    if not get_api_key_service().delete(id):
        raise KeyNotFoundError(id)

    return {"success": True}


@router.get("/keys/export", summary="Export API Key Metadata")
async def export_keys() -> dict:
    service = AutoImportService(get_api_key_service(), get_credential_resolver())
    return {"success": True, "data": service.export_keys()}
