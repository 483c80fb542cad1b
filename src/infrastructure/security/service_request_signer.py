"""
Service Request Signer
HMAC-SHA256 authentication for calls between internal services.

Canonical string (newline separated):

    <unix timestamp seconds>
    <UPPERCASE METHOD>
    <path without host or query string>
    <hex sha256 of the raw body>

The nonce travels in its own header for replay detection by the receiver.
It is not part of the signed material.
"""
import hashlib
import hmac
import time
from typing import Dict, Mapping, Optional, Union
from uuid import uuid4

from loguru import logger

from application.services.security.interfaces import IServiceRequestSigner
from core.config import settings
from core.exceptions import AuthenticationException, ConfigurationException

SERVICE_ID_HEADER = "X-Service-Id"
TIMESTAMP_HEADER = "X-Service-Timestamp"
NONCE_HEADER = "X-Service-Nonce"
SIGNATURE_HEADER = "X-Service-Signature"
SIGNATURE_PREFIX = "sha256="


def _to_bytes(value: Union[str, bytes]) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else value


def build_canonical_string(timestamp: int, method: str, path: str, body: Union[str, bytes]) -> str:
    body_digest = hashlib.sha256(_to_bytes(body)).hexdigest()
    return f"{timestamp}\n{method.upper()}\n{path}\n{body_digest}"


def compute_signature(secret: str, canonical: str) -> str:
    digest = hmac.new(_to_bytes(secret), canonical.encode("utf-8"), hashlib.sha256).hexdigest()
    return f"{SIGNATURE_PREFIX}{digest}"


def create_service_auth_headers(
    method: str,
    path: str,
    body: Union[str, bytes],
    service_id: str,
    secret: str,
    timestamp: Optional[int] = None,
    nonce: Optional[str] = None,
) -> Dict[str, str]:
    """
    Build service authentication headers for an outbound request

    Args:
        method: HTTP method
        path: Request path only; host and query string are not signed
        body: Exact raw request body
        service_id: Identifier of the calling service
        secret: Shared HMAC secret
        timestamp: Override for the signing time (seconds since epoch)
        nonce: Override for the random nonce

    Returns:
        Header name -> value
    """
    if timestamp is None:
        timestamp = int(time.time())
    if nonce is None:
        nonce = str(uuid4())

    canonical = build_canonical_string(timestamp, method, path, body)
    return {
        SERVICE_ID_HEADER: service_id,
        TIMESTAMP_HEADER: str(timestamp),
        NONCE_HEADER: nonce,
        SIGNATURE_HEADER: compute_signature(secret, canonical),
    }


def verify_service_auth_headers(
    headers: Mapping[str, str],
    method: str,
    path: str,
    body: Union[str, bytes],
    secret: str,
    now: Optional[int] = None,
    max_skew_seconds: Optional[int] = None,
) -> str:
    """
    Verify service authentication headers on an inbound request

    Returns:
        The caller's service id

    Raises:
        AuthenticationException: headers missing, stale or not matching the request
    """
    lowered = {name.lower(): value for name, value in headers.items()}
    service_id = lowered.get(SERVICE_ID_HEADER.lower())
    raw_timestamp = lowered.get(TIMESTAMP_HEADER.lower())
    signature = lowered.get(SIGNATURE_HEADER.lower())
    if not service_id or not raw_timestamp or not signature or not lowered.get(NONCE_HEADER.lower()):
        raise AuthenticationException("Missing service authentication headers")

    try:
        timestamp = int(raw_timestamp)
    except ValueError:
        raise AuthenticationException("Invalid service timestamp")

    now = int(time.time()) if now is None else now
    max_skew = settings.SERVICE_AUTH_MAX_SKEW_SECONDS if max_skew_seconds is None else max_skew_seconds
    if abs(now - timestamp) > max_skew:
        logger.warning(f"Rejected service request from {service_id}: timestamp outside {max_skew}s window")
        raise AuthenticationException("Stale service request")

    expected = compute_signature(secret, build_canonical_string(timestamp, method, path, body))
    if not hmac.compare_digest(expected, signature):
        logger.warning(f"Rejected service request from {service_id}: signature mismatch")
        raise AuthenticationException("Invalid service signature")

    return service_id


class HmacServiceRequestSigner(IServiceRequestSigner):
    """Signs and verifies requests with a shared HMAC-SHA256 secret"""

    def __init__(self, service_id: Optional[str] = None, secret: Optional[str] = None):
        self.service_id = service_id or settings.PDF_SERVICE_ID
        secret = settings.PDF_SERVICE_HMAC_SECRET if secret is None else secret
        if not secret or secret.strip() == "":
            raise ConfigurationException("PDF_SERVICE_HMAC_SECRET is required")
        self._secret = secret

    def sign(
        self,
        method: str,
        path: str,
        body: Union[str, bytes],
        timestamp: Optional[int] = None,
        nonce: Optional[str] = None
    ) -> Dict[str, str]:
        return create_service_auth_headers(
            method=method,
            path=path,
            body=body,
            service_id=self.service_id,
            secret=self._secret,
            timestamp=timestamp,
            nonce=nonce,
        )

    def verify(
        self,
        headers: Mapping[str, str],
        method: str,
        path: str,
        body: Union[str, bytes],
        now: Optional[int] = None
    ) -> str:
        return verify_service_auth_headers(headers, method, path, body, self._secret, now=now)
