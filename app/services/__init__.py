"""Service layer for business logic and external integrations."""

from .platform_client import PlatformClient
from .openai_client import OpenAIClient
from .gemini_client import GeminiClient
from .seedream_client import SeedreamClient
from .kling_client import KlingClient
from .veo_client import VeoClient
from .provider_factory import (
    get_api_key_service,
    get_credential_resolver,
    get_data_store,
    get_platform_client,
    get_usage_recorder,
    reset_providers,
    set_platform_client,
)

__all__ = [
    "PlatformClient",
    "OpenAIClient",
    "GeminiClient",
    "SeedreamClient",
    "KlingClient",
    "VeoClient",
    "get_api_key_service",
    "get_credential_resolver",
    "get_data_store",
    "get_platform_client",
    "get_usage_recorder",
    "reset_providers",
    "set_platform_client",
]
