"""
Resume API Client
httpx client for the resume record store and PDF routes
"""
from typing import Any, Dict, List, Optional

import httpx
from loguru import logger

from application.repositories.interfaces import IResumeRepository
from application.services.resume import IResumePdfRenderer
from core.config import settings
from core.exceptions import ResumeAPIError
from domain.entities import EditorState, ResumeData, ResumeMetadata, ResumeRecord

RESUMES_PATH = "/api/v1/resumes"
GENERATE_PDF_PATH = "/api/v1/resumes/generate-pdf"


def parse_api_error(response: httpx.Response, fallback_message: str) -> ResumeAPIError:
    """Build a ResumeAPIError from an ``{"error": {"code", "message"}}`` body"""
    message = fallback_message
    code = "INTERNAL_ERROR"

    try:
        body = response.json()
    except ValueError:
        body = None

    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict):
        if isinstance(error.get("message"), str) and error["message"]:
            message = error["message"]
        if isinstance(error.get("code"), str) and error["code"]:
            code = error["code"]

    return ResumeAPIError(message, response.status_code, code)


class ResumeApiClient(IResumeRepository, IResumePdfRenderer):
    """
    Record store client bound to one user's credentials.

    The API scopes every call to the identity carried by ``headers`` (session
    cookie or bearer token), so one client instance serves one user.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or settings.RESUME_API_BASE_URL).rstrip("/")
        self._client = client or httpx.AsyncClient(
            headers=headers,
            timeout=timeout or settings.HTTP_TIMEOUT_SECONDS,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        fallback_message: str,
        payload: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        response = await self._client.request(method, f"{self.base_url}{path}", json=payload)
        if not response.is_success:
            error = parse_api_error(response, fallback_message)
            logger.warning(f"{method} {path} failed: {response.status_code} {error.code}")
            raise error
        return response

    async def list_resumes(self) -> List[ResumeMetadata]:
        response = await self._request("GET", RESUMES_PATH, "Failed to list resumes")
        body = response.json()
        resumes = body.get("resumes") if isinstance(body, dict) else None
        if not isinstance(resumes, list):
            return []
        return [ResumeMetadata.from_json(item) for item in resumes if isinstance(item, dict)]

    async def get_resume(self, resume_id: str) -> ResumeRecord:
        response = await self._request("GET", f"{RESUMES_PATH}/{resume_id}", "Failed to fetch resume")
        return ResumeRecord.from_json(response.json())

    async def create_resume(
        self,
        title: str,
        template_id: str,
        data: ResumeData
    ) -> ResumeRecord:
        response = await self._request(
            "POST",
            RESUMES_PATH,
            "Failed to create resume",
            payload={"title": title, "templateId": template_id, "data": data.to_json()},
        )
        return ResumeRecord.from_json(response.json())

    async def update_resume(
        self,
        resume_id: str,
        data: Optional[ResumeData] = None,
        title: Optional[str] = None,
        template_id: Optional[str] = None
    ) -> ResumeRecord:
        payload: Dict[str, Any] = {}
        if title is not None:
            payload["title"] = title
        if template_id is not None:
            payload["templateId"] = template_id
        if data is not None:
            payload["data"] = data.to_json()

        response = await self._request(
            "PATCH",
            f"{RESUMES_PATH}/{resume_id}",
            "Failed to update resume",
            payload=payload,
        )
        return ResumeRecord.from_json(response.json())

    async def generate_pdf(self, state: EditorState) -> bytes:
        response = await self._request(
            "POST",
            GENERATE_PDF_PATH,
            "Failed to generate PDF",
            payload=state.to_pdf_request(),
        )
        return response.content
