"""Key/value storage persisted to a single JSON file.

Stands in for browser local storage: string values under fixed keys.
Passing ``path=None`` keeps everything in memory.
"""

import json
import os
import threading

from aieditor.logger import get_logger

logger = get_logger(__name__)


class LocalStorage:
    """Thread-safe string storage flushed to disk on every write"""

    def __init__(self, path: str | None = None):
        self.path = path
        self._storage: dict[str, str] = {}
        self._lock = threading.Lock()
        self._load()

    def _load(self):
        if not self.path or not os.path.exists(self.path):
            return
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable storage file {self.path}: {e}")
            return

        if not isinstance(data, dict):
            logger.warning(f"Ignoring storage file {self.path}: not a JSON object")
            return

        self._storage = {k: v for k, v in data.items() if isinstance(v, str)}

    def _flush(self):
        if not self.path:
            return
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(self._storage, f, ensure_ascii=False, indent=2)
        os.replace(tmp_path, self.path)

    def get(self, key: str) -> str | None:
        """Get value from storage by key"""
        with self._lock:
            return self._storage.get(key)

    def set(self, key: str, value: str):
        """Store a string value under key and persist"""
        with self._lock:
            self._storage[key] = value
            try:
                self._flush()
            except OSError as e:
                # Memory copy stays authoritative for this process
                logger.error(f"Failed to persist storage to {self.path}: {e}")
                return False
            return True
