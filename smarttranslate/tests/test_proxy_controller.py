import os
import sys
import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient

ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from smarttranslate.config.settings import Settings
from smarttranslate.controllers import proxy_controller
from smarttranslate.main import app
from smarttranslate.services.proxy_service import ProxyHttpResponse


class TestProxyController(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(app)

    def test_options_returns_200_with_cors(self):
        resp = self.client.request("OPTIONS", "/api/translate", content=b"garbage")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.headers["access-control-allow-origin"], "*")
        self.assertIn("x-proxy-token", resp.headers["access-control-allow-headers"])

    def test_browser_preflight(self):
        resp = self.client.options(
            "/api/translate",
            headers={
                "Origin": "chrome-extension://abc",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "content-type, x-proxy-token",
            },
        )
        self.assertEqual(resp.status_code, 200)

    def test_get_not_allowed(self):
        resp = self.client.get("/api/translate")
        self.assertEqual(resp.status_code, 405)
        self.assertEqual(resp.json(), {"error": "method_not_allowed"})

    def test_invalid_json(self):
        resp = self.client.post("/api/translate", content=b"{oops", headers={"Content-Type": "application/json"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["error"], "invalid_json")

    @patch.object(proxy_controller.handler, "handle")
    def test_post_forwards_body(self, mock_handle):
        mock_handle.return_value = ProxyHttpResponse(status=200, payload={"translation": "ciao"})

        resp = self.client.post("/api/translate", json={"text": "hello", "target": "it"})

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"translation": "ciao"})
        method, body = mock_handle.call_args[0]
        self.assertEqual(method, "POST")
        self.assertIn(b'"text"', body)

    def test_post_without_server_key(self):
        with patch.dict(os.environ, {"OPENAI_API_KEY": ""}):
            with patch("smarttranslate.services.proxy_service.load_settings") as mock_settings:
                mock_settings.return_value = Settings(raw={})
                resp = self.client.post("/api/translate", json={"text": "hello"})
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"error": "server_misconfigured"})


class TestHealthController(unittest.TestCase):
    def test_health_reports_checks(self):
        resp = TestClient(app).get("/health")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertIn(body["status"], ("ok", "degraded"))
        self.assertIn("openai", body["checks"]["api_keys"])


if __name__ == "__main__":
    unittest.main()
