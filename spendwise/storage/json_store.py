"""JSON-file key-value store and the typed views built on it.

All keys live in one JSON object on disk. Read and write failures are
logged and degrade to the fallback value, so a corrupt or unwritable file
never breaks the caller.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any

from spendwise.gateway.router import GEMINI_MODELS
from spendwise.storage.interface import KeyValueStore

logger = logging.getLogger(__name__)

DATA_KEY = "spendwise_data"
API_KEY = "spendwise_api_key"
AI_MODEL_KEY = "spendwise_ai_model"

STORE_FILENAME = "store.json"


class JsonFileStore:
    """Key-value store persisted as a single JSON object."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Failed to read store %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring store %s: top-level value is not an object", self.path)
            return {}
        return data

    def _write(self, data: dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_suffix(".tmp")
            tmp.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
            tmp.replace(self.path)
        except OSError as e:
            logger.warning("Failed to write store %s: %s", self.path, e)

    def get_item(self, key: str) -> str | None:
        with self._lock:
            value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)

    def remove_item(self, key: str) -> None:
        with self._lock:
            data = self._read()
            if data.pop(key, None) is not None:
                self._write(data)


class ApiKeyStore:
    """The AI API key. Never logged."""

    def __init__(self, kv: KeyValueStore):
        self._kv = kv

    def get(self) -> str:
        return self._kv.get_item(API_KEY) or ""

    def set(self, value: str) -> None:
        self._kv.set_item(API_KEY, value.strip())

    def remove(self) -> None:
        self._kv.remove_item(API_KEY)


class ModelStore:
    """Preferred Gemini model, restricted to GEMINI_MODELS."""

    def __init__(self, kv: KeyValueStore):
        self._kv = kv

    def get(self) -> str:
        return self._kv.get_item(AI_MODEL_KEY) or ""

    def set(self, value: str) -> None:
        if value not in GEMINI_MODELS:
            raise ValueError(f"Unknown model: {value}")
        self._kv.set_item(AI_MODEL_KEY, value)


class DatasetStore:
    """The budgeting dataset (salary, budgets, transactions) as plain JSON."""

    def __init__(self, kv: KeyValueStore):
        self._kv = kv

    def load(self, fallback: dict[str, Any] | None = None) -> dict[str, Any]:
        raw = self._kv.get_item(DATA_KEY)
        if raw:
            try:
                data = json.loads(raw)
            except ValueError as e:
                logger.warning("Failed to load saved data: %s", e)
            else:
                if isinstance(data, dict):
                    return data
        return fallback if fallback is not None else {}

    def save(self, data: dict[str, Any]) -> None:
        self._kv.set_item(DATA_KEY, json.dumps(data, ensure_ascii=False))


def open_stores(data_dir: str | Path) -> tuple[ApiKeyStore, ModelStore, DatasetStore]:
    """Build the three store views over one file in ``data_dir``."""
    kv = JsonFileStore(Path(data_dir) / STORE_FILENAME)
    return ApiKeyStore(kv), ModelStore(kv), DatasetStore(kv)
