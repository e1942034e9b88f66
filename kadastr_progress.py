"""Level progress for Kadastr.

Keeps two integers between runs: the level being played and the highest
level reached. Storage problems are reported and treated as "no progress".
"""

import json
import os
from typing import Dict, Optional


class ProgressStore:
    """JSON file backed progress store (one file per base directory)."""

    SAVE_VERSION = 1
    SAVE_DIR = "saves"
    SAVE_FILE = "progress.json"

    LEVEL_KEY = "level"
    MAX_LEVEL_KEY = "max_level"

    def __init__(self, base_path: Optional[str] = None) -> None:
        if base_path is None:
            base_path = os.path.dirname(os.path.abspath(__file__))
        self.save_dir = os.path.join(base_path, self.SAVE_DIR)
        self.save_path = os.path.join(self.save_dir, self.SAVE_FILE)

    def _read(self) -> Dict[str, Optional[int]]:
        if not os.path.exists(self.save_path):
            return {}
        try:
            with open(self.save_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            print(f"Failed to load progress: {e}")
            return {}

        if not isinstance(data, dict):
            print("Failed to load progress: not a JSON object")
            return {}
        version = data.get("version", 0)
        if version != self.SAVE_VERSION:
            print(f"Progress version mismatch: {version} != {self.SAVE_VERSION}")
            return {}
        return data

    def _write(self, data: Dict[str, Optional[int]]) -> bool:
        payload = {
            "version": self.SAVE_VERSION,
            self.LEVEL_KEY: data.get(self.LEVEL_KEY),
            self.MAX_LEVEL_KEY: data.get(self.MAX_LEVEL_KEY),
        }
        try:
            os.makedirs(self.save_dir, exist_ok=True)
            with open(self.save_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
            return True
        except OSError as e:
            print(f"Failed to save progress: {e}")
            return False

    def _get_int(self, key: str) -> Optional[int]:
        value = self._read().get(key)
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        return value

    def save_level(self, level: int) -> bool:
        """Store the current level; raises the max level when this one is higher."""
        data = self._read()
        data[self.LEVEL_KEY] = level
        max_level = data.get(self.MAX_LEVEL_KEY)
        if not isinstance(max_level, int) or level > max_level:
            data[self.MAX_LEVEL_KEY] = level
        return self._write(data)

    def load_level(self) -> Optional[int]:
        return self._get_int(self.LEVEL_KEY)

    def save_max_level(self, level: int) -> bool:
        data = self._read()
        data[self.MAX_LEVEL_KEY] = level
        return self._write(data)

    def get_max_level(self) -> Optional[int]:
        return self._get_int(self.MAX_LEVEL_KEY)

    def clear_progress(self) -> bool:
        if not os.path.exists(self.save_path):
            return True
        try:
            os.remove(self.save_path)
            return True
        except OSError as e:
            print(f"Failed to clear progress: {e}")
            return False

    def has_saved_progress(self) -> bool:
        return self.load_level() is not None
