"""
JSON Data Store Service

Flat-file store holding registered API keys and usage logs in a single
db.json document. Each operation reads the whole file and rewrites it;
concurrent writers race and the last write wins.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from app.config import settings

logger = logging.getLogger(__name__)


def _empty_database() -> dict:
    return {"apiKeys": [], "usageLogs": []}


class DataStore:
    """
    Reads and writes the db.json document.

    Handles:
    - Creating the data directory and an empty database on first access
    - Loading the document (missing sections are filled in)
    - Replacing the document atomically on write
    """

    def __init__(self, base_path: Optional[str] = None):
        """
        Initialize DataStore.

        Args:
            base_path: Directory for db.json (default: settings data directory)
        """
        self.base_path = Path(base_path) if base_path else settings.data_directory()
        self.db_path = self.base_path / "db.json"

    def _init_db(self) -> dict:
        self.base_path.mkdir(parents=True, exist_ok=True)
        data = _empty_database()
        self.write(data)
        logger.info(f"Initialized data store at {self.db_path}")
        return data

    def read(self) -> dict:
        """
        Load the database document, creating it if it does not exist.

        Raises:
            OSError: If the file cannot be read
            ValueError: If the file is not valid JSON
        """
        if not self.db_path.exists():
            return self._init_db()

        with open(self.db_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        for section, default in _empty_database().items():
            data.setdefault(section, default)
        return data

    def write(self, data: dict) -> None:
        """
        Replace the database document.

        Writes to a temporary file in the same directory and renames it
        over db.json so readers never observe a partial file.
        """
        self.base_path.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.base_path, prefix=".db-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_name, self.db_path)
        except OSError:
            logger.error(f"Failed to write data store {self.db_path}")
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
