"""
API Key Auto-Import Service

Registers provider keys from environment variables or a JSON document,
exports key metadata, and reports per-platform connection status.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List

from app.config import settings
from app.models.platform_info import ConnectionStatus
from .api_keys import ApiKeyService
from .credential_resolver import CredentialResolver
from .platform_catalog import list_platforms, load_platform

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    platform: str
    success: bool
    message: str

    def to_dict(self) -> dict:
        return asdict(self)


class AutoImportService:
    """Bulk key registration and connection reporting."""

    def __init__(self, keys: ApiKeyService, resolver: CredentialResolver):
        self.keys = keys
        self.resolver = resolver

    def import_from_env(self) -> List[ImportResult]:
        """
        Register keys found in the environment.

        Does nothing unless AUTO_IMPORT_API_KEYS is enabled. Platforms
        that already have an active key are skipped.
        """
        results: List[ImportResult] = []

        if not settings.AUTO_IMPORT_API_KEYS:
            logger.info("API key auto-import is disabled")
            return results

        for name in list_platforms():
            platform = load_platform(name)
            display_name = platform["displayName"]
            env_key = platform["envKey"]
            api_key = (getattr(settings, env_key, "") or "").strip()

            if not api_key:
                results.append(ImportResult(name, False, f"{display_name}: no API key in environment"))
                continue

            try:
                if self.keys.get_active(name):
                    results.append(
                        ImportResult(name, True, f"{display_name}: API key already registered, skipped")
                    )
                    continue

                self.keys.add(name, api_key, f"Auto-imported from ENV ({env_key})")
                results.append(ImportResult(name, True, f"{display_name}: API key registered"))
                logger.info(f"{display_name} API key imported from {env_key}")

            except (OSError, ValueError) as e:
                results.append(ImportResult(name, False, f"{display_name}: registration failed - {e}"))
                logger.error(f"{display_name} API key import failed: {e}")

        return results

    def import_from_json(self, keys: Dict[str, Any]) -> List[ImportResult]:
        """
        Register keys from ``{platform: {apiKey, keyName?}}``.

        The platform's current active key is deactivated first.
        """
        results: List[ImportResult] = []
        known = set(list_platforms())

        for platform, data in keys.items():
            api_key = data.get("apiKey") if isinstance(data, dict) else None
            if not isinstance(api_key, str) or not api_key.strip():
                results.append(ImportResult(platform, False, f"{platform}: API key is empty"))
                continue
            if platform not in known:
                results.append(ImportResult(platform, False, f"{platform}: unknown platform"))
                continue

            try:
                existing = self.keys.get_active(platform)
                if existing:
                    self.keys.update(existing.id, is_active=False)

                self.keys.add(platform, api_key.strip(), data.get("keyName") or "Imported from JSON")
                results.append(ImportResult(platform, True, f"{platform}: API key registered"))

            except (OSError, ValueError) as e:
                results.append(ImportResult(platform, False, f"{platform}: registration failed - {e}"))
                logger.error(f"{platform} API key import failed: {e}")

        return results

    def export_keys(self) -> Dict[str, dict]:
        """Key metadata per platform; the secret itself is never exported."""
        exported: Dict[str, dict] = {}
        for key in self.keys.get_all():
            exported[key.platform] = {
                "keyPreview": key.preview(20),
                "keyName": key.key_name,
                "isActive": key.is_active,
            }
        return exported

    def connection_status(self) -> List[ConnectionStatus]:
        statuses = []
        for name in list_platforms():
            credential = self.resolver.resolve(name)
            statuses.append(
                ConnectionStatus(
                    platform=name,
                    connected=credential is not None,
                    keyName=credential.key_name if credential else None,
                    source=credential.source if credential else None,
                )
            )
        return statuses

