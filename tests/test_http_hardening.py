import os
import unittest

from fastapi.testclient import TestClient
from starlette.responses import Response

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

from wishes_admin.main import app
from wishes_admin.core.http_hardening import apply_security_headers, request_id_from_header


class HttpHardeningTests(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(app)

    def tearDown(self):
        self.client.close()

    def test_health_has_security_headers_and_request_id(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)

        self.assertEqual(response.headers.get("x-content-type-options"), "nosniff")
        self.assertEqual(response.headers.get("x-frame-options"), "DENY")
        self.assertEqual(response.headers.get("referrer-policy"), "no-referrer")
        self.assertEqual(response.headers.get("cache-control"), "no-store")

        request_id = response.headers.get("x-request-id")
        self.assertIsNotNone(request_id)
        self.assertRegex(str(request_id), r"^[A-Za-z0-9._-]{1,128}$")

    def test_valid_request_id_is_preserved(self):
        response = self.client.get("/health", headers={"X-Request-ID": "export-check-2026_03_01"})
        self.assertEqual(response.headers.get("x-request-id"), "export-check-2026_03_01")

    def test_invalid_request_id_is_replaced(self):
        response = self.client.get("/health", headers={"X-Request-ID": "bad id with spaces"})
        self.assertNotEqual(response.headers.get("x-request-id"), "bad id with spaces")

    def test_error_response_keeps_security_headers(self):
        # No bearer token => 401 from the dependency, middleware headers still present.
        response = self.client.get("/api/admin/templates")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.headers.get("x-frame-options"), "DENY")
        self.assertTrue(bool(response.headers.get("x-request-id")))

    def test_request_is_logged(self):
        with self.assertLogs("app.http", level="INFO") as logs:
            self.client.get("/health", headers={"X-Request-ID": "log-me"})
        self.assertIn("GET /health status=200", logs.output[0])
        self.assertIn("request_id=log-me", logs.output[0])

    def test_cors_exposes_download_name(self):
        response = self.client.get("/health", headers={"Origin": "http://localhost:3000"})
        exposed = response.headers.get("access-control-expose-headers", "")
        self.assertIn("Content-Disposition", exposed)

    def test_helpers(self):
        self.assertEqual(request_id_from_header(" abc.DEF-1 "), "abc.DEF-1")
        self.assertEqual(len(request_id_from_header(None)), 32)
        response = Response("x")
        apply_security_headers(response, "rid")
        self.assertEqual(response.headers["X-Request-ID"], "rid")
        self.assertEqual(response.headers["Pragma"], "no-cache")
