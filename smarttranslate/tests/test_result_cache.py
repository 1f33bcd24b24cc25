"""
/**
 * @file smarttranslate/tests/test_result_cache.py
 * @description 翻译缓存（TTL、惰性清理、并发写入）单元测试。
 */
"""

import os
import tempfile
import threading
import unittest

from smarttranslate.db.connection import get_conn
from smarttranslate.services.result_cache_service import CACHE_TTL_SECONDS, ResultCache, make_cache_key


class FakeClock:
    def __init__(self, now=1_700_000_000.0):
        self.now = now

    def __call__(self):
        return self.now


class TestResultCache(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.db_path = os.path.join(self._tmp.name, "client.db")
        self.clock = FakeClock()
        self.cache = ResultCache(self.db_path, clock=self.clock)

    def tearDown(self):
        self._tmp.cleanup()

    def _stored_keys(self):
        with get_conn(self.db_path) as conn:
            return [r[0] for r in conn.execute("SELECT key FROM translation_cache").fetchall()]

    def test_round_trip_within_ttl(self):
        self.cache.put("k", "ciao")
        self.clock.now += CACHE_TTL_SECONDS - 1
        self.assertEqual(self.cache.get("k"), "ciao")

    def test_expired_entry_is_absent_and_removed(self):
        self.cache.put("k", "ciao")
        self.clock.now += CACHE_TTL_SECONDS
        self.assertIsNone(self.cache.get("k"))
        self.assertNotIn("k", self._stored_keys())

    def test_expired_entries_are_only_purged_on_read(self):
        self.cache.put("a", "1")
        self.cache.put("b", "2")
        self.clock.now += CACHE_TTL_SECONDS + 10
        self.cache.get("a")
        self.assertEqual(self._stored_keys(), ["b"])

    def test_put_overwrites_with_fresh_timestamp(self):
        self.cache.put("k", "old")
        self.clock.now += CACHE_TTL_SECONDS - 5
        self.cache.put("k", "new")
        self.clock.now += 10
        self.assertEqual(self.cache.get("k"), "new")

    def test_missing_key(self):
        self.assertIsNone(self.cache.get("nope"))

    def test_entries_survive_reopen(self):
        self.cache.put("k", "ciao")
        reopened = ResultCache(self.db_path, clock=self.clock)
        self.assertEqual(reopened.get("k"), "ciao")

    def test_concurrent_puts_to_different_keys_are_all_kept(self):
        threads = [threading.Thread(target=self.cache.put, args=(f"k{i}", str(i))) for i in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertEqual(self.cache.count(), 20)
        self.assertEqual(self.cache.get("k7"), "7")

    def test_cache_key_layout(self):
        self.assertEqual(make_cache_key("TRANSLATE_TEXT", "it", "hello"), "t:it|hello")
        self.assertNotEqual(make_cache_key("TRANSLATE_TEXT", "it", "hello"), make_cache_key("TRANSLATE_TEXT", "de", "hello"))
        self.assertNotEqual(make_cache_key("TRANSLATE_TEXT", "it", "hello"), make_cache_key("TRANSLATE_TEXT", "it", "hello "))


if __name__ == "__main__":
    unittest.main()
