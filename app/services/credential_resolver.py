"""
Credential Resolver

Supplies the secret for a platform at call time: the active stored key
first, then the platform's environment variable.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from app.config import settings
from .api_keys import ApiKeyService
from .encryption import DecryptionError, decrypt_api_key
from .platform_catalog import env_key_for

logger = logging.getLogger(__name__)

SOURCE_DATABASE = "database"
SOURCE_ENVIRONMENT = "environment"


@dataclass(frozen=True)
class Credential:
    """A resolved secret. Held only for the duration of one operation."""

    secret: str = field(repr=False)
    source: str
    key_id: str = "env"
    key_name: Optional[str] = None


class CredentialResolver:
    """Resolves platform credentials, stored keys before environment variables."""

    def __init__(self, keys: ApiKeyService):
        self.keys = keys

    def resolve(self, platform: str) -> Optional[Credential]:
        """
        Resolve the credential for a platform.

        A stored key that fails to decrypt is logged and skipped so the
        environment fallback still applies.

        Returns:
            Credential, or None when neither source has a key
        """
        stored = self.keys.get_active(platform)
        if stored is not None:
            try:
                return Credential(
                    secret=decrypt_api_key(stored.encrypted_key),
                    source=SOURCE_DATABASE,
                    key_id=stored.id,
                    key_name=stored.key_name,
                )
            except DecryptionError as e:
                logger.error(f"Failed to decrypt {platform} API key {stored.id}: {e}")

        env_key = env_key_for(platform)
        value = (getattr(settings, env_key, "") or "").strip()
        if value:
            logger.debug(f"Using {platform} API key from environment variable {env_key}")
            return Credential(secret=value, source=SOURCE_ENVIRONMENT)

        return None
