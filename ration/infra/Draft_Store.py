"""Key-value stores holding the planner's local state (identity, drafts, fingerprints).

Values are always strings; callers serialise structured values themselves.
"""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Dict, Optional, Union

from ration.infra.paths import DRAFTS_FILE

logger = logging.getLogger(__name__)


class KeyValueStore:
    """Capability used by the planner: get / set / remove string values by key."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore(KeyValueStore):
    """Persists every key into one JSON object on disk, rewritten atomically."""

    def __init__(self, path: Union[str, Path] = DRAFTS_FILE):
        self.path = Path(path)

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except ValueError as e:
            # an unreadable file is overwritten by the next write
            logger.warning("Ignoring unreadable planner state %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _atomic_write(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), prefix=".planner_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(data, tmp, indent=2, ensure_ascii=False, sort_keys=True)
            shutil.move(tmp_path, self.path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    def get(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._atomic_write(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._atomic_write(data)
