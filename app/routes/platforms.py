"""
Platform endpoints for relaying generation requests.

Provides one POST endpoint per platform accepting ``{action, ...params}``
and GET /api/platforms for the platform catalog.
"""

import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.middleware import BadRequestError
from app.models.platform_info import PlatformInfo, PlatformListResponse
from app.services import get_platform_client, get_usage_recorder
from app.services.platform_catalog import list_platforms, load_platform
from job_engine import InvalidRequestError

logger = logging.getLogger(__name__)

router = APIRouter()

ACTION_RESPONSES = {
    200: {"description": "Action finished; check `success` for the outcome"},
    400: {"description": "Missing or invalid action, or invalid parameters"},
    500: {"description": "Internal server error"},
}


def _validation_message(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "Invalid parameters - " + "; ".join(parts)


async def dispatch_action(platform: str, request: Request) -> JSONResponse:
    """
    Validate the action, run it on the platform client and log usage.

    Args:
        platform: Platform identifier
        request: Incoming request with a JSON body ``{action, ...params}``

    Returns:
        JSONResponse with the normalized action envelope

    Raises:
        BadRequestError: Missing or unknown action
        InvalidRequestError: Parameters fail validation
    """
    try:
        body = await request.json()
    except ValueError:
        raise BadRequestError("Request body must be valid JSON")

    if not isinstance(body, dict):
        raise BadRequestError("Request body must be a JSON object")

    params = dict(body)
    action = params.pop("action", None)
    if not action:
        raise BadRequestError("Action is required")

    client = get_platform_client(platform)
    spec = client.actions.get(action) if isinstance(action, str) else None
    if spec is None:
        logger.warning(f"Invalid action for {platform}: {action!r}")
        raise BadRequestError("Invalid action")

    try:
        parsed = spec.request_model.model_validate(params)
    except ValidationError as e:
        raise InvalidRequestError(_validation_message(e), status_code=400)

    logger.info(f"Dispatching {platform}/{action}")
    result = await client.execute(action, parsed)

    get_usage_recorder().record(
        platform=platform,
        endpoint=spec.endpoint_for(parsed),
        method="POST",
        model=result.model,
        status_code=200 if result.success else result.status_code,
        success=result.success,
        error_message=result.error,
        tokens_used=result.tokens_used,
        duration_ms=result.duration,
        api_key_id=result.api_key_id or "default",
    )

    logger.info(
        f"{platform}/{action} finished: success={result.success}, duration={result.duration}ms"
    )
    return JSONResponse(content=result.to_envelope())


@router.post(
    "/platforms/openai",
    summary="OpenAI Actions",
    description="Actions: `chat` (prompt, model, maxTokens, temperature), "
    "`image` (prompt, model, size, quality, n).",
    responses=ACTION_RESPONSES,
)
async def openai_action(request: Request) -> JSONResponse:
    return await dispatch_action("openai", request)


@router.post(
    "/platforms/gemini",
    summary="Gemini Actions",
    description="Actions: `text` (prompt, model, temperature, maxOutputTokens), "
    "`vision` (prompt, imageData).",
    responses=ACTION_RESPONSES,
)
async def gemini_action(request: Request) -> JSONResponse:
    return await dispatch_action("gemini", request)


@router.post(
    "/platforms/seedream",
    summary="Seedream Actions",
    description="Actions: `image` (prompt and Seedream generation options), "
    "`upscale` (imageUrl, scaleFactor).",
    responses=ACTION_RESPONSES,
)
async def seedream_action(request: Request) -> JSONResponse:
    return await dispatch_action("seedream", request)


@router.post(
    "/platforms/kling",
    summary="Kling Actions",
    description="""
Actions: `video` (prompt, duration, aspectRatio, mode), `status` (taskId).

`video` submits a task and polls it every 5 seconds for up to 5 minutes
before answering. A poll budget that runs out is reported with
`errorKind: "timeout"`.
""",
    responses=ACTION_RESPONSES,
)
async def kling_action(request: Request) -> JSONResponse:
    return await dispatch_action("kling", request)


@router.post(
    "/platforms/veo",
    summary="Veo Actions",
    description="""
Actions: `video` (prompt, duration, resolution, aspectRatio).

The operation is polled every 5 seconds for up to 10 minutes before
answering.
""",
    responses=ACTION_RESPONSES,
)
async def veo_action(request: Request) -> JSONResponse:
    return await dispatch_action("veo", request)


@router.get("/platforms", response_model=PlatformListResponse, tags=["Metadata"])
async def get_platforms() -> PlatformListResponse:
    """
    Get list of supported platforms.

    Raises:
        HTTPException: 500 if the catalog cannot be loaded
    """
    try:
        platforms = [PlatformInfo(**load_platform(name)) for name in list_platforms()]
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Platform catalog error: {e}")
        raise HTTPException(status_code=500, detail="Invalid platform catalog")

    return PlatformListResponse(platforms=platforms)
