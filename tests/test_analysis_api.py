import os
import sys
import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import patch

# Keep API tests deterministic: no rate limiting, no API key.
os.environ["RATE_LIMIT_ENABLED"] = "0"
os.environ.pop("API_KEY", None)

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fastapi.testclient import TestClient  # noqa: E402

from rejection_analyzer.core.cors import cors_allowed_origins  # noqa: E402
from rejection_analyzer.main import app  # noqa: E402
from rejection_analyzer.schemas.analysis import PageText  # noqa: E402
from rejection_analyzer.services.content_fetch import ContentFetchError  # noqa: E402

FETCH_TARGET = "rejection_analyzer.services.analysis_service.fetch_application_pages"
PAGES = [
    PageText(
        url="https://apply.example/eligibility",
        text="Applicants must be at least 18\nOpen to residents of Canada only\nContact the office",
    )
]


class AnalyzeApiTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)
        cls.payload = {
            "application_url": "https://apply.example",
            "user_facts": {"age": 17, "country": "Canada"},
            "documents": [],
            "extra_required_docs": [],
        }

    def test_health(self):
        response = self.client.get("/v1/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "healthy"})

    def test_analyze_contract_shape(self):
        with patch(FETCH_TARGET, return_value=PAGES) as fetch:
            response = self.client.post("/v1/analyze", json=self.payload)
        self.assertEqual(response.status_code, 200)
        fetch.assert_called_once_with("https://apply.example")
        body = response.json()
        self.assertEqual(body["likely_reason_titles"], ["Age below minimum requirement"])
        self.assertEqual(body["findings"][0]["id"], "age-below-minimum-requirement-1")
        self.assertEqual(body["findings"][0]["source"], "rule")
        self.assertEqual(body["recommendations"], ["Ensure your age meets the minimum requirement."])
        self.assertEqual(body["rule_line_count"], 2)
        self.assertEqual(body["page_count"], 1)

    def test_documents_are_trimmed_and_empty_ones_dropped(self):
        payload = dict(self.payload)
        payload["documents"] = [
            {"filename": "blank.pdf", "text": "   "},
            {"filename": "note.pdf", "text": "  short  "},
        ]
        with patch(FETCH_TARGET, return_value=[]):
            response = self.client.post("/v1/analyze", json=payload)
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["likely_reason_titles"], ["Unreadable or very short document"])
        self.assertIn("note.pdf", body["findings"][0]["explanation"])

    def test_fetch_failure_maps_to_bad_gateway(self):
        with patch(FETCH_TARGET, side_effect=ContentFetchError("Content retrieval request failed (500): boom", 500)):
            response = self.client.post("/v1/analyze", json=self.payload)
        self.assertEqual(response.status_code, 502)
        self.assertIn("boom", response.json()["detail"])

    def test_too_many_documents(self):
        payload = dict(self.payload)
        payload["documents"] = [{"filename": f"doc{i}.pdf", "text": "text"} for i in range(6)]
        with patch(FETCH_TARGET, return_value=PAGES) as fetch:
            response = self.client.post("/v1/analyze", json=payload)
        self.assertEqual(response.status_code, 400)
        fetch.assert_not_called()

    def test_aggregate_text_limit(self):
        payload = dict(self.payload)
        payload["documents"] = [{"filename": f"doc{i}.pdf", "text": "x" * 30001} for i in range(4)]
        with patch(FETCH_TARGET, return_value=PAGES):
            response = self.client.post("/v1/analyze", json=payload)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "Uploaded document text exceeds the allowed limit.")

    def test_boundary_validation(self):
        for user_facts in ({"age": -1}, {"income": "lots"}, {"country": ["ca"]}):
            payload = dict(self.payload)
            payload["user_facts"] = user_facts
            response = self.client.post("/v1/analyze", json=payload)
            self.assertEqual(response.status_code, 422, user_facts)

        payload = dict(self.payload)
        payload["application_url"] = "not a url"
        self.assertEqual(self.client.post("/v1/analyze", json=payload).status_code, 422)

    def test_api_key_is_enforced_when_configured(self):
        with patch("rejection_analyzer.core.security.settings", SimpleNamespace(api_key="secret")):
            with patch(FETCH_TARGET, return_value=PAGES):
                denied = self.client.post("/v1/analyze", json=self.payload)
                allowed = self.client.post("/v1/analyze", json=self.payload, headers={"X-API-Key": "secret"})
        self.assertEqual(denied.status_code, 401)
        self.assertEqual(denied.json()["detail"], "Please provide a valid API key to run an analysis.")
        self.assertEqual(allowed.status_code, 200)

    def test_wrong_api_key_on_upload_names_the_action(self):
        with patch("rejection_analyzer.core.security.settings", SimpleNamespace(api_key="secret")):
            response = self.client.post(
                "/v1/documents/extract",
                files={"file": ("notes.txt", b"Full name: Maria Lopez", "text/plain")},
                headers={"X-API-Key": "wrong"},
            )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["detail"], "Please provide a valid API key to extract document text.")

    def test_cors_origins_are_normalized(self):
        configured = SimpleNamespace(
            cors_allowed_origins=("https://apply.example/", " https://apply.example", "http://localhost:3000", "")
        )
        with patch("rejection_analyzer.core.cors.settings", configured):
            self.assertEqual(cors_allowed_origins(), ["https://apply.example", "http://localhost:3000"])


class DocumentsApiTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def test_extract_text_upload(self):
        response = self.client.post(
            "/v1/documents/extract",
            files={"file": ("notes.txt", b"Full name: Maria Lopez\n\nDate of birth: 1990-05-01", "text/plain")},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["filename"], "notes.txt")
        self.assertEqual(body["text"], "Full name: Maria Lopez\nDate of birth: 1990-05-01")
        self.assertEqual(body["characters"], len(body["text"]))

    def test_unsupported_extension(self):
        response = self.client.post(
            "/v1/documents/extract",
            files={"file": ("tool.exe", b"MZ", "application/octet-stream")},
        )
        self.assertEqual(response.status_code, 400)

    def test_signature_mismatch(self):
        response = self.client.post(
            "/v1/documents/extract",
            files={"file": ("scan.pdf", b"hello", "application/pdf")},
        )
        self.assertEqual(response.status_code, 400)

    def test_oversize_upload(self):
        small = SimpleNamespace(max_upload_bytes=8, document_max_text_length=20000)
        with patch("rejection_analyzer.api.v1.documents.settings", small):
            response = self.client.post(
                "/v1/documents/extract",
                files={"file": ("notes.txt", b"0123456789", "text/plain")},
            )
        self.assertEqual(response.status_code, 413)

    def test_region_documents(self):
        response = self.client.get("/v1/documents/regions")
        self.assertEqual(response.status_code, 200)
        regions = response.json()["regions"]
        self.assertIn("Canada", regions)
        self.assertIn({"key": "residence_permit", "label": "Permanent resident (PR) card"}, regions["Canada"])


if __name__ == "__main__":
    unittest.main()
