"""
/**
 * @file smarttranslate/services/result_cache_service.py
 * @description 翻译结果缓存（24 小时 TTL，sqlite 持久化，读时惰性清理过期项）。
 */
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional

from smarttranslate.db.connection import DB_PATH, get_conn, init_db

logger = logging.getLogger("smarttranslate.cache")

CACHE_TTL_SECONDS = 24 * 60 * 60


def make_cache_key(kind: str, target: str, text: str) -> str:
    """
    Fingerprint of a request. Translate keys keep the `t:<target>|<text>`
    layout so entries written by older clients remain readable.
    """
    prefix = "t" if kind == "TRANSLATE_TEXT" else kind
    return f"{prefix}:{target}|{text}"


class ResultCache:
    def __init__(
        self,
        db_path: Optional[str] = None,
        ttl_seconds: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.db_path = db_path or DB_PATH
        self._ttl = ttl_seconds
        self._clock = clock
        # every read-modify-write runs as one transaction under this lock
        self._lock = threading.Lock()
        init_db(self.db_path)

    def get(self, key: str) -> Optional[str]:
        now = self._clock()
        with self._lock, get_conn(self.db_path) as conn:
            row = conn.execute(
                "SELECT translation, created_at FROM translation_cache WHERE key = ?", (key,)
            ).fetchone()
            if row is None:
                return None
            translation, created_at = row
            if now - created_at >= self._ttl:
                conn.execute("DELETE FROM translation_cache WHERE key = ?", (key,))
                logger.debug("Evicted expired cache entry %s", key[:60])
                return None
            return translation

    def put(self, key: str, translation: str) -> None:
        with self._lock, get_conn(self.db_path) as conn:
            conn.execute(
                "INSERT INTO translation_cache(key, translation, created_at) VALUES(?, ?, ?) "
                "ON CONFLICT(key) DO UPDATE SET translation = excluded.translation, "
                "created_at = excluded.created_at",
                (key, translation, self._clock()),
            )

    def count(self) -> int:
        with get_conn(self.db_path) as conn:
            return int(conn.execute("SELECT COUNT(*) FROM translation_cache").fetchone()[0])
