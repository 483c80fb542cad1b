"""
PDF Service Proxy
Forwards render requests to the PDF service with signed service-auth headers
"""
from dataclasses import dataclass
from typing import Optional, Union

import httpx
from loguru import logger

from core.config import settings
from core.exceptions import ConfigurationException, UpstreamUnavailableException
from infrastructure.security.service_request_signer import HmacServiceRequestSigner


@dataclass(frozen=True)
class UpstreamPdfResponse:
    """PDF service response, passed through to the caller unchanged"""

    status_code: int
    content: bytes
    content_type: Optional[str] = None
    content_disposition: Optional[str] = None


class PdfServiceProxy:
    """Signed HTTP client for the PDF rendering service"""

    def __init__(
        self,
        service_url: Optional[str] = None,
        service_id: Optional[str] = None,
        secret: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.service_url = service_url or settings.PDF_SERVICE_URL
        self.service_id = service_id or settings.PDF_SERVICE_ID
        self._secret = secret
        self.timeout = timeout or settings.HTTP_TIMEOUT_SECONDS

    async def proxy_pdf_request(self, body: Union[str, bytes], content_type: str) -> UpstreamPdfResponse:
        """
        Send a render request to the PDF service

        Args:
            body: Raw request body, forwarded byte for byte
            content_type: Content type of the original request

        Returns:
            The upstream status, content headers and body, including non-2xx responses

        Raises:
            ConfigurationException: the HMAC secret is not configured
            UpstreamUnavailableException: the PDF service could not be reached
        """
        secret = self._secret if self._secret is not None else settings.PDF_SERVICE_HMAC_SECRET
        if not secret or secret.strip() == "":
            raise ConfigurationException("PDF_SERVICE_HMAC_SECRET is required")

        signer = HmacServiceRequestSigner(service_id=self.service_id, secret=secret)
        # Sign the path as sent on the wire: percent-encoded, without the query
        path = httpx.URL(self.service_url).raw_path.decode("ascii").split("?", 1)[0]
        headers = {
            "Content-Type": content_type,
            **signer.sign("POST", path, body),
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.service_url, content=body, headers=headers)
        except httpx.RequestError as e:
            logger.error(f"PDF service request failed: {e}")
            raise UpstreamUnavailableException("pdf-service", "Failed to reach PDF service") from e

        if response.status_code >= 400:
            logger.warning(f"PDF service returned {response.status_code}")
        else:
            logger.info(f"PDF service rendered {len(response.content)} bytes")

        return UpstreamPdfResponse(
            status_code=response.status_code,
            content=response.content,
            content_type=response.headers.get("Content-Type"),
            content_disposition=response.headers.get("Content-Disposition"),
        )
