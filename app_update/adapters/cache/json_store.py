"""JSON file-backed key-value store shared by foreground and background checks."""

from __future__ import annotations

import json
import logging
import os
import sys
import tempfile
import threading
from pathlib import Path
from typing import Any

from app_update.domain.ports import KeyValueStorePort

logger = logging.getLogger("app_update.store.json")

DEFAULT_STORE_FILE = "app_update_prefs.json"

_path_locks: dict[str, threading.Lock] = {}
_path_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    key = os.path.abspath(path)
    with _path_locks_guard:
        return _path_locks.setdefault(key, threading.Lock())


def _store_dir() -> str:
    if getattr(sys, "frozen", False):
        return os.path.dirname(sys.executable)
    return os.getcwd()


def default_store_path() -> str:
    return os.path.join(_store_dir(), DEFAULT_STORE_FILE)


class JsonKeyValueStore(KeyValueStorePort):
    """Last write wins per key. The file is re-read on every access so a
    background check and the foreground app see each other's writes; every
    instance on the same path shares one lock for read-modify-write."""

    def __init__(self, path: str | None = None):
        self.path = Path(path or default_store_path())
        self._lock = _lock_for(self.path)

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            entries = self._load()
            entries[key] = value
            self._save(entries)

    def remove(self, key: str) -> None:
        with self._lock:
            entries = self._load()
            if key in entries:
                del entries[key]
                self._save(entries)

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except Exception:
            logger.exception("Failed to load update store from %s", self.path)
            return {}
        return payload if isinstance(payload, dict) else {}

    def _save(self, entries: dict) -> None:
        temp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=self.path.name + ".",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                temp_path = Path(tmp.name)
                json.dump(entries, tmp, ensure_ascii=True, indent=2)
            temp_path.replace(self.path)
        except Exception:
            logger.exception("Failed to save update store to %s", self.path)
            if temp_path is not None and temp_path.exists():
                temp_path.unlink()
