# config_manager.py - JSON config manager

import json
import logging
import os
from typing import Any, Dict, List, Optional

from hitzkale.core.controller import DEFAULT_LATENCY, DEFAULT_SUFFIXES, SUFFIX_SENTINEL

logger = logging.getLogger(__name__)

CONFIG_ENV = "HITZKALE_CONFIG"


def default_config() -> Dict[str, Any]:
    return {
        "suffixes": list(DEFAULT_SUFFIXES),  # whitelist for '*suffix' searches
        "sentinel": SUFFIX_SENTINEL,
        "latency_ms": int(DEFAULT_LATENCY * 1000),
        "data_files": [],  # empty = bundled words.json + verbs.json
        "max_display": 50,
        "theme": "default",
    }


class Config:
    """
    Defaults merged with an optional JSON file.
    Config() keeps everything in memory; Config(path) loads the file, or
    writes the defaults there when it does not exist yet.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = path
        self.data: Dict[str, Any] = default_config()
        if self.path:
            self._load()

    @classmethod
    def from_env(cls) -> "Config":
        return cls(os.environ.get(CONFIG_ENV) or None)

    def _load(self):
        if os.path.exists(self.path):
            try:
                with open(self.path, "r", encoding="utf8") as f:
                    loaded = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning("ignoring unreadable config %s: %s", self.path, e)
                return
            if not isinstance(loaded, dict):
                logger.warning("ignoring config %s: not a JSON object", self.path)
                return
            unknown = sorted(set(loaded) - set(self.data))
            if unknown:
                logger.warning("unknown config keys in %s: %s", self.path, ", ".join(unknown))
            self.data.update({k: v for k, v in loaded.items() if k in self.data})
        else:
            self.save()

    def save(self):
        if not self.path:
            return
        folder = os.path.dirname(self.path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(self.data, f, indent=2, ensure_ascii=False)

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def set(self, key: str, val: Any) -> None:
        """Set an option, coerced to its default's type. Raises KeyError/ValueError."""
        if key not in self.data:
            raise KeyError(f"No such option: {key}")
        current = self.data[key]
        if isinstance(current, list):
            if isinstance(val, str):
                val = [part.strip() for part in val.split(",") if part.strip()]
            else:
                val = list(val)
        elif isinstance(current, bool):
            val = str(val).lower() in ("1", "true", "yes", "on") if isinstance(val, str) else bool(val)
        else:
            val = type(current)(val)
        self.data[key] = val
        self.save()

    # typed accessors ----------------------------------------------------------
    @property
    def suffixes(self) -> List[str]:
        return list(self.data["suffixes"])

    @property
    def sentinel(self) -> str:
        return str(self.data["sentinel"])

    @property
    def latency(self) -> float:
        return max(0, int(self.data["latency_ms"])) / 1000.0

    @property
    def data_files(self) -> List[str]:
        return list(self.data["data_files"])

    @property
    def max_display(self) -> int:
        return int(self.data["max_display"])

    def items(self):
        return self.data.items()
