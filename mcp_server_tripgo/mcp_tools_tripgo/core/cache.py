from __future__ import annotations

import hashlib
import json
import logging
import os
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class FileCache:
    """File-based JSON cache with TTL.

    Only the TripGo region list goes through here: it is small, global and
    changes rarely, while every routing call needs it.
    """
    cache_dir: str
    ttl_seconds: int = 24 * 3600

    def __post_init__(self) -> None:
        os.makedirs(self.cache_dir, exist_ok=True)

    def _path_for_key(self, key: str) -> str:
        h = hashlib.sha256(key.encode("utf-8")).hexdigest()
        return os.path.join(self.cache_dir, f"{h}.json")

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        """Return the cached payload, or None when missing, expired or unreadable."""
        path = self._path_for_key(key)
        if not os.path.exists(path):
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable cache entry %s", path)
            return None
        if not isinstance(payload, dict):
            return None
        ts = payload.pop("_cached_at", None)
        if ts is not None and (time.time() - ts) > self.ttl_seconds:
            return None
        return payload

    def set(self, key: str, value: Dict[str, Any]) -> None:
        path = self._path_for_key(key)
        payload = dict(value)
        payload["_cached_at"] = time.time()
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False)
