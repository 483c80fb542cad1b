"""
Tests for the generate-pdf route and health check
"""
import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, Mock

from core.exceptions import ConfigurationException, UpstreamUnavailableException
from infrastructure.external.pdf_service_proxy import UpstreamPdfResponse
from main import app
from presentation.api.v1.container import get_pdf_proxy

URL = "/api/v1/resumes/generate-pdf"
BODY = '{"data":{},"settings":{}}'


@pytest.fixture
def proxy():
    fake = Mock()
    fake.proxy_pdf_request = AsyncMock(return_value=UpstreamPdfResponse(
        status_code=200,
        content=b"%PDF-1.4",
        content_type="application/pdf",
        content_disposition='attachment; filename="resume.pdf"',
    ))
    return fake


@pytest.fixture
def client(proxy):
    app.dependency_overrides[get_pdf_proxy] = lambda: proxy
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestGeneratePdfEndpoint:
    """POST /api/v1/resumes/generate-pdf"""

    def test_rejects_non_json_content_type(self, client, proxy):
        response = client.post(URL, content=BODY, headers={"Content-Type": "text/plain"})

        assert response.status_code == 400
        assert response.json() == {
            "error": {"code": "BAD_REQUEST", "message": "Content-Type must be application/json"}
        }
        proxy.proxy_pdf_request.assert_not_awaited()

    def test_passes_pdf_through(self, client, proxy):
        response = client.post(URL, content=BODY, headers={"Content-Type": "application/json; charset=utf-8"})

        assert response.status_code == 200
        assert response.content == b"%PDF-1.4"
        assert response.headers["content-type"] == "application/pdf"
        assert response.headers["content-disposition"] == 'attachment; filename="resume.pdf"'
        proxy.proxy_pdf_request.assert_awaited_once_with(BODY.encode(), "application/json; charset=utf-8")

    def test_passes_upstream_errors_through(self, client, proxy):
        proxy.proxy_pdf_request.return_value = UpstreamPdfResponse(
            status_code=422,
            content=b'{"error":"invalid resume"}',
            content_type="application/json",
        )

        response = client.post(URL, content=BODY, headers={"Content-Type": "application/json"})

        assert response.status_code == 422
        assert response.json() == {"error": "invalid resume"}
        assert "content-disposition" not in response.headers

    def test_unreachable_service_is_bad_gateway(self, client, proxy):
        proxy.proxy_pdf_request.side_effect = UpstreamUnavailableException("pdf-service", "Failed to reach PDF service")

        response = client.post(URL, content=BODY, headers={"Content-Type": "application/json"})

        assert response.status_code == 502
        assert response.json()["error"] == {"code": "BAD_GATEWAY", "message": "Failed to reach PDF service"}

    def test_missing_secret_is_internal_error(self, client, proxy):
        proxy.proxy_pdf_request.side_effect = ConfigurationException("PDF_SERVICE_HMAC_SECRET is required")

        response = client.post(URL, content=BODY, headers={"Content-Type": "application/json"})

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "INTERNAL_ERROR"


class TestHealth:
    """GET /health"""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
