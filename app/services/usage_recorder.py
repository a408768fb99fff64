"""
Usage Recorder Service

Append-only usage logging for relayed provider calls. Recording is
fire-and-forget: a failure to record is logged and never reaches the
caller.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from app.models.usage_log import UsageLog
from .data_store import DataStore

logger = logging.getLogger(__name__)


def _created_at(entry: dict) -> datetime:
    try:
        value = datetime.fromisoformat(entry.get("createdAt", ""))
    except ValueError:
        return datetime.min.replace(tzinfo=timezone.utc)
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class UsageRecorder:
    """Writes and queries UsageLog entries."""

    def __init__(self, store: DataStore):
        self.store = store

    def record(
        self,
        platform: str,
        endpoint: str,
        status_code: int,
        success: bool,
        duration_ms: Optional[int] = None,
        method: str = "POST",
        model: Optional[str] = None,
        error_message: Optional[str] = None,
        tokens_used: Optional[int] = None,
        api_key_id: str = "default",
    ) -> Optional[UsageLog]:
        """
        Append one usage entry.

        Returns:
            UsageLog: The stored entry, or None if it could not be written
        """
        try:
            entry = UsageLog(
                id=str(uuid.uuid4()),
                platform=platform,
                api_key_id=api_key_id,
                endpoint=endpoint,
                method=method,
                model=model,
                status_code=status_code,
                success=success,
                error_message=None if success else error_message,
                tokens_used=tokens_used,
                duration=duration_ms,
                created_at=datetime.now(timezone.utc).isoformat(),
            )
            db = self.store.read()
            db["usageLogs"].append(entry.model_dump(by_alias=True, exclude_none=True))
            self.store.write(db)
            return entry
        except Exception as e:
            logger.error(f"Failed to record usage for {platform} {endpoint}: {e}")
            return None

    def get_recent(self, limit: int = 100) -> List[UsageLog]:
        """Newest entries first."""
        entries = sorted(self.store.read()["usageLogs"], key=_created_at, reverse=True)
        return [UsageLog.model_validate(item) for item in entries[:limit]]

    def get_by_platform(self, platform: str, limit: int = 100) -> List[UsageLog]:
        entries = [item for item in self.store.read()["usageLogs"] if item.get("platform") == platform]
        entries.sort(key=_created_at, reverse=True)
        return [UsageLog.model_validate(item) for item in entries[:limit]]

    def prune_older_than(self, days: int) -> int:
        """
        Delete entries older than the retention window.

        Returns:
            int: Number of entries removed
        """
        cutoff = datetime.now(timezone.utc) - timedelta(days=days)
        db = self.store.read()
        kept = [item for item in db["usageLogs"] if _created_at(item) >= cutoff]
        removed = len(db["usageLogs"]) - len(kept)
        if removed:
            db["usageLogs"] = kept
            self.store.write(db)
            logger.info(f"Pruned {removed} usage log entries older than {days} days")
        return removed
