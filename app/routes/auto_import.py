"""
Bulk key import and connection status endpoints.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body

from app.middleware import BadRequestError
from app.services import get_api_key_service, get_credential_resolver
from app.services.auto_import import AutoImportService

logger = logging.getLogger(__name__)

router = APIRouter()


def _service() -> AutoImportService:
    return AutoImportService(get_api_key_service(), get_credential_resolver())


@router.get("/auto-import", summary="Import Keys From Environment")
async def import_from_env() -> dict:
    """Register keys from environment variables when AUTO_IMPORT_API_KEYS is enabled."""
    results = _service().import_from_env()
    return {"success": True, "data": [result.to_dict() for result in results]}


@router.post("/auto-import", summary="Import Keys From JSON")
async def import_from_json(body: Any = Body(None)) -> dict:
    """
    Register keys from ``{"keys": {platform: {apiKey, keyName?}}}``.

    Raises:
        BadRequestError: If ``keys`` is missing or not an object
    """
    keys = body.get("keys") if isinstance(body, dict) else None
    if not isinstance(keys, dict):
        raise BadRequestError("Invalid keys format")

    results = _service().import_from_json(keys)
    logger.info(f"Imported keys from JSON: {sum(r.success for r in results)}/{len(results)} succeeded")
    return {"success": True, "data": [result.to_dict() for result in results]}


@router.get("/connection-status", summary="Platform Connection Status")
async def connection_status() -> dict:
    statuses = _service().connection_status()
    return {"success": True, "data": [status.model_dump(exclude_none=True) for status in statuses]}
