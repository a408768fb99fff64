"""
Provider factory for platform clients and shared services.

Returns the client for a platform name. Clients carry configuration
only, so one instance per platform is shared across requests.
"""

import logging
from typing import Dict, Optional

from .api_keys import ApiKeyService
from .credential_resolver import CredentialResolver
from .data_store import DataStore
from .gemini_client import GeminiClient
from .kling_client import KlingClient
from .openai_client import OpenAIClient
from .platform_client import PlatformClient
from .seedream_client import SeedreamClient
from .usage_recorder import UsageRecorder
from .veo_client import VeoClient

logger = logging.getLogger(__name__)

CLIENT_CLASSES = {
    "openai": OpenAIClient,
    "gemini": GeminiClient,
    "seedream": SeedreamClient,
    "kling": KlingClient,
    "veo": VeoClient,
}

_data_store: Optional[DataStore] = None
_clients: Dict[str, PlatformClient] = {}


def get_data_store() -> DataStore:
    global _data_store
    if _data_store is None:
        _data_store = DataStore()
        logger.info(f"Using data store at {_data_store.db_path}")
    return _data_store


def get_api_key_service() -> ApiKeyService:
    return ApiKeyService(get_data_store())


def get_credential_resolver() -> CredentialResolver:
    return CredentialResolver(get_api_key_service())


def get_usage_recorder() -> UsageRecorder:
    return UsageRecorder(get_data_store())


def get_platform_client(platform: str) -> PlatformClient:
    """
    Get the client for a platform.

    Raises:
        KeyError: If the platform is not supported
    """
    if platform not in _clients:
        client_class = CLIENT_CLASSES[platform]
        _clients[platform] = client_class(get_credential_resolver())
        logger.info(f"Initialized {client_class.__name__}")
    return _clients[platform]


def set_platform_client(client: PlatformClient) -> None:
    """Install a preconfigured client, replacing the default one."""
    _clients[client.platform_name] = client


def reset_providers() -> None:
    """
    Reset cached clients and the data store (for testing purposes).
    """
    global _data_store
    _data_store = None
    _clients.clear()
    logger.info("Provider singletons reset")
