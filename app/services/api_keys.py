"""
API Key Service

CRUD operations for registered provider API keys. Keys are encrypted
before they are written to the data store.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from app.models.api_key import ApiKey
from .data_store import DataStore
from .encryption import encrypt_api_key

logger = logging.getLogger(__name__)


class ApiKeyService:
    """Manages ApiKey records in the data store."""

    def __init__(self, store: DataStore):
        self.store = store

    def add(self, platform: str, api_key: str, key_name: Optional[str] = None) -> ApiKey:
        """
        Encrypt and register a new active key.

        Args:
            platform: Platform identifier (openai, gemini, veo, kling, seedream)
            api_key: Plaintext key
            key_name: Optional label shown in the dashboard

        Returns:
            ApiKey: The stored record
        """
        db = self.store.read()
        record = ApiKey(
            id=str(uuid.uuid4()),
            platform=platform,
            encrypted_key=encrypt_api_key(api_key),
            key_name=key_name,
            is_active=True,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        db["apiKeys"].append(record.model_dump(by_alias=True, exclude_none=True))
        self.store.write(db)
        logger.info(f"Registered API key {record.id} for platform {platform}")
        return record

    def get_active(self, platform: str) -> Optional[ApiKey]:
        """Return the first active key for a platform, if any."""
        for item in self.store.read()["apiKeys"]:
            if item.get("platform") == platform and item.get("isActive"):
                return ApiKey.model_validate(item)
        return None

    def get_all(self) -> List[ApiKey]:
        return [ApiKey.model_validate(item) for item in self.store.read()["apiKeys"]]

    def update(self, key_id: str, **updates) -> Optional[ApiKey]:
        """
        Update fields of a stored key.

        Args:
            key_id: Key identifier
            **updates: Field names (snake_case) and new values

        Returns:
            ApiKey: Updated record, or None if the id is unknown
        """
        db = self.store.read()
        for index, item in enumerate(db["apiKeys"]):
            if item.get("id") != key_id:
                continue
            merged = ApiKey.model_validate(item).model_copy(update=updates)
            db["apiKeys"][index] = merged.model_dump(by_alias=True, exclude_none=True)
            self.store.write(db)
            logger.info(f"Updated API key {key_id}: {sorted(updates)}")
            return merged
        return None

    def delete(self, key_id: str) -> bool:
        db = self.store.read()
        remaining = [item for item in db["apiKeys"] if item.get("id") != key_id]
        if len(remaining) == len(db["apiKeys"]):
            return False
        db["apiKeys"] = remaining
        self.store.write(db)
        logger.info(f"Deleted API key {key_id}")
        return True
