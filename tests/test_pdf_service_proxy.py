"""
Tests for the signed PDF service proxy
"""
import httpx
import pytest
from unittest.mock import AsyncMock, Mock, patch

from core.exceptions import (
    AuthenticationException,
    ConfigurationException,
    UpstreamUnavailableException,
)
from infrastructure.external.pdf_service_proxy import PdfServiceProxy
from infrastructure.security.service_request_signer import verify_service_auth_headers

SERVICE_URL = "http://pdf.internal:8080/api/v1/resumes/generate-pdf?debug=1"
BODY = b'{"data":{},"settings":{}}'


def upstream_response(status_code=200, content=b"%PDF-1.4", headers=None):
    response = Mock()
    response.status_code = status_code
    response.content = content
    response.headers = headers if headers is not None else {
        "Content-Type": "application/pdf",
        "Content-Disposition": 'attachment; filename="resume.pdf"',
    }
    return response


class TestPdfServiceProxy:
    """Outbound render requests"""

    @pytest.fixture
    def proxy(self):
        return PdfServiceProxy(service_url=SERVICE_URL, service_id="nextjs-api", secret="test-secret")

    @pytest.mark.asyncio
    async def test_signs_request_with_path_only(self, proxy):
        with patch('httpx.AsyncClient') as mock_client_class:
            mock_client_instance = AsyncMock()
            mock_client_instance.post.return_value = upstream_response()
            mock_client_class.return_value.__aenter__.return_value = mock_client_instance

            result = await proxy.proxy_pdf_request(BODY, "application/json")

        call = mock_client_instance.post.call_args
        assert call.args[0] == SERVICE_URL
        assert call.kwargs["content"] == BODY
        headers = call.kwargs["headers"]
        assert headers["Content-Type"] == "application/json"
        assert headers["X-Service-Id"] == "nextjs-api"
        service_id = verify_service_auth_headers(
            headers, "POST", "/api/v1/resumes/generate-pdf", BODY, "test-secret"
        )
        assert service_id == "nextjs-api"

        assert result.status_code == 200
        assert result.content == b"%PDF-1.4"
        assert result.content_type == "application/pdf"
        assert result.content_disposition == 'attachment; filename="resume.pdf"'

    @pytest.mark.asyncio
    async def test_error_responses_pass_through(self, proxy):
        with patch('httpx.AsyncClient') as mock_client_class:
            mock_client_instance = AsyncMock()
            mock_client_instance.post.return_value = upstream_response(
                status_code=422,
                content=b'{"error":"bad"}',
                headers={"Content-Type": "application/json"},
            )
            mock_client_class.return_value.__aenter__.return_value = mock_client_instance

            result = await proxy.proxy_pdf_request(BODY, "application/json")

        assert result.status_code == 422
        assert result.content == b'{"error":"bad"}'
        assert result.content_disposition is None

    @pytest.mark.asyncio
    async def test_missing_secret_fails_before_network(self):
        proxy = PdfServiceProxy(service_url=SERVICE_URL, secret="")

        with patch('httpx.AsyncClient') as mock_client_class:
            with pytest.raises(ConfigurationException, match="PDF_SERVICE_HMAC_SECRET is required"):
                await proxy.proxy_pdf_request(BODY, "application/json")

        mock_client_class.assert_not_called()

    @pytest.mark.asyncio
    async def test_transport_error_is_upstream_unavailable(self, proxy):
        with patch('httpx.AsyncClient') as mock_client_class:
            mock_client_instance = AsyncMock()
            mock_client_instance.post.side_effect = httpx.ConnectError("connection refused")
            mock_client_class.return_value.__aenter__.return_value = mock_client_instance

            with pytest.raises(UpstreamUnavailableException) as exc_info:
                await proxy.proxy_pdf_request(BODY, "application/json")

        assert exc_info.value.message == "Failed to reach PDF service"
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_signs_percent_encoded_path(self):
        service_url = "http://pdf.internal/api/v1/render%20pdf/generate-pdf?x=1"
        proxy = PdfServiceProxy(service_url=service_url, service_id="nextjs-api", secret="test-secret")

        with patch('httpx.AsyncClient') as mock_client_class:
            mock_client_instance = AsyncMock()
            mock_client_instance.post.return_value = upstream_response()
            mock_client_class.return_value.__aenter__.return_value = mock_client_instance

            await proxy.proxy_pdf_request(BODY, "application/json")

        headers = mock_client_instance.post.call_args.kwargs["headers"]
        service_id = verify_service_auth_headers(
            headers, "POST", "/api/v1/render%20pdf/generate-pdf", BODY, "test-secret"
        )
        assert service_id == "nextjs-api"
        with pytest.raises(AuthenticationException):
            verify_service_auth_headers(
                headers, "POST", "/api/v1/render pdf/generate-pdf", BODY, "test-secret"
            )
