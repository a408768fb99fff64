"""
Usage log endpoint.
"""

from typing import Optional

from fastapi import APIRouter, Query

from app.middleware import PlatformNotFoundError
from app.services import get_usage_recorder
from app.services.platform_catalog import list_platforms

router = APIRouter()


@router.get("/usage", summary="Recent Usage Logs")
async def get_usage(
    platform: Optional[str] = None,
    limit: int = Query(100, ge=1, le=1000),
) -> dict:
    """
    Most recent usage entries, newest first, optionally for one platform.
    """
    recorder = get_usage_recorder()
    if platform:
        if platform not in list_platforms():
            raise PlatformNotFoundError(platform)
        logs = recorder.get_by_platform(platform, limit)
    else:
        logs = recorder.get_recent(limit)

    return {"success": True, "data": [log.model_dump(by_alias=True, exclude_none=True) for log in logs]}
