"""
/**
 * @file smarttranslate/services/local_store_service.py
 * @description 客户端本地键值存储（sqlite），保存代理地址与令牌等持久化设置。
 */
"""

from __future__ import annotations

import json
import threading
from typing import Any, Dict, Iterable, Optional

from smarttranslate.db.connection import DB_PATH, get_conn, init_db


class LocalStore:
    """JSON values keyed by name, persisted in the client database."""

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path or DB_PATH
        self._lock = threading.Lock()
        init_db(self.db_path)

    def get(self, keys: Iterable[str]) -> Dict[str, Any]:
        names = list(keys)
        if not names:
            return {}
        placeholders = ",".join("?" for _ in names)
        with get_conn(self.db_path) as conn:
            rows = conn.execute(
                f"SELECT key, value FROM kv_store WHERE key IN ({placeholders})", names
            ).fetchall()
        return {key: json.loads(value) for key, value in rows}

    def set(self, values: Dict[str, Any]) -> None:
        with self._lock, get_conn(self.db_path) as conn:
            conn.executemany(
                "INSERT INTO kv_store(key, value) VALUES(?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                [(key, json.dumps(value, ensure_ascii=False)) for key, value in values.items()],
            )

    def remove(self, keys: Iterable[str]) -> None:
        with self._lock, get_conn(self.db_path) as conn:
            conn.executemany("DELETE FROM kv_store WHERE key = ?", [(k,) for k in keys])
