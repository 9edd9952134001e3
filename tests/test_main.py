import unittest

from fastapi.testclient import TestClient

from app.config import settings
from app.main import app


class TestMain(unittest.TestCase):
    def setUp(self):
        self._orig_api_key = settings.api_key
        settings.api_key = None
        self.client = TestClient(app)

    def tearDown(self):
        settings.api_key = self._orig_api_key

    def test_app_metadata(self):
        self.assertEqual(app.title, "Outfit Recommender")

    def test_healthz(self):
        resp = self.client.get("/healthz")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"status": "ok"})

    def test_api_router_mounted_under_v1(self):
        self.assertEqual(self.client.get("/v1/preferences").status_code, 200)
        self.assertEqual(self.client.get("/preferences").status_code, 404)


if __name__ == "__main__":
    unittest.main()
