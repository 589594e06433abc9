"""Key/value stores for JSON state blobs.

Both stores expose ``get(key)`` and ``set(key, value)``. Values are anything
``json.dumps`` accepts. A blob that cannot be decoded reads back as ``None``
so callers fall back to their defaults.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from . import database

logger = logging.getLogger(__name__)


class MemoryStore:
    """Dict-backed store. Values are kept JSON-encoded to match SqliteStore."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._blobs: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Any:
        return _decode(key, self._blobs.get(key))

    def set(self, key: str, value: Any) -> None:
        self._blobs[key] = json.dumps(value)

    def raw(self, key: str) -> Optional[str]:
        return self._blobs.get(key)


class SqliteStore:
    """Store backed by the kv_store table. Every set() commits before returning."""

    def __init__(self, db_path: Optional[Path] = None):
        self.db_path = db_path

    def get(self, key: str) -> Any:
        with database.get_conn(self.db_path) as conn:
            return _decode(key, database.read_blob(conn, key))

    def set(self, key: str, value: Any) -> None:
        with database.get_conn(self.db_path) as conn:
            database.write_blob(conn, key, json.dumps(value))
            conn.commit()


def _decode(key: str, blob: Optional[str]) -> Any:
    if blob is None:
        return None
    try:
        return json.loads(blob)
    except ValueError:
        logger.warning("Ignoring unparsable state blob %r", key)
        return None
