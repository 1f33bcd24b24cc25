import os
import tempfile
import unittest
from unittest.mock import MagicMock

from smarttranslate.services.config_resolver_service import DEFAULT_PROXY_URL, ConfigResolver
from smarttranslate.services.local_store_service import LocalStore


class TestConfigResolver(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.store = LocalStore(os.path.join(self._tmp.name, "client.db"))

    def tearDown(self):
        self._tmp.cleanup()

    def test_default_when_nothing_stored(self):
        config = ConfigResolver(store=self.store).resolve()
        self.assertEqual(config.endpoint_url, DEFAULT_PROXY_URL)
        self.assertIsNone(config.token)

    def test_stored_values_are_used(self):
        self.store.set({"proxyUrl": "https://my.proxy.dev/api/translate", "proxyToken": "tok"})
        config = ConfigResolver(store=self.store).resolve()
        self.assertEqual(config.endpoint_url, "https://my.proxy.dev/api/translate")
        self.assertEqual(config.token, "tok")

    def test_reread_on_every_resolve(self):
        resolver = ConfigResolver(store=self.store)
        self.assertEqual(resolver.resolve().endpoint_url, DEFAULT_PROXY_URL)
        self.store.set({"proxyUrl": "https://other.example/api"})
        self.assertEqual(resolver.resolve().endpoint_url, "https://other.example/api")

    def test_blank_or_invalid_values_fall_back(self):
        self.store.set({"proxyUrl": "not a url", "proxyToken": ""})
        config = ConfigResolver(store=self.store).resolve()
        self.assertEqual(config.endpoint_url, DEFAULT_PROXY_URL)
        self.assertIsNone(config.token)

    def test_store_error_never_raises(self):
        broken = MagicMock()
        broken.get.side_effect = OSError("locked")
        config = ConfigResolver(store=broken).resolve()
        self.assertEqual(config.endpoint_url, DEFAULT_PROXY_URL)
        self.assertIsNone(config.token)

    def test_token_hidden_from_repr(self):
        self.store.set({"proxyToken": "hidden-token"})
        config = ConfigResolver(store=self.store).resolve()
        self.assertNotIn("hidden-token", repr(config))


if __name__ == "__main__":
    unittest.main()
