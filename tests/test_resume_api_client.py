"""
Tests for the resume REST API client
"""
import json

import httpx
import pytest

from core.exceptions import ResumeAPIError
from domain.entities import EditorState
from infrastructure.external.resume_api_client import ResumeApiClient

from conftest import make_data

BASE_URL = "http://api.test"

RECORD = {
    "id": "r1",
    "title": "My Resume",
    "templateId": "classic",
    "createdAt": "2024-01-01T00:00:00Z",
    "updatedAt": "2024-02-01T00:00:00Z",
    "data": {"personalInfo": {"firstName": "Ada"}},
}


def make_client(handler):
    transport = httpx.MockTransport(handler)
    return ResumeApiClient(base_url=BASE_URL, client=httpx.AsyncClient(transport=transport))


class TestResumeApiClient:
    """Record store calls"""

    @pytest.mark.asyncio
    async def test_list_resumes(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"resumes": [RECORD, "junk"]})

        resumes = await make_client(handler).list_resumes()

        assert requests[0].method == "GET"
        assert requests[0].url == f"{BASE_URL}/api/v1/resumes"
        assert [resume.id for resume in resumes] == ["r1"]
        assert resumes[0].updated_at == "2024-02-01T00:00:00Z"

    @pytest.mark.asyncio
    async def test_list_resumes_non_list_body(self):
        client = make_client(lambda request: httpx.Response(200, json={"resumes": None}))
        assert await client.list_resumes() == []

    @pytest.mark.asyncio
    async def test_get_resume(self):
        def handler(request):
            assert request.url.path == "/api/v1/resumes/r1"
            return httpx.Response(200, json=RECORD)

        record = await make_client(handler).get_resume("r1")

        assert record.id == "r1"
        assert record.data.personal_info.first_name == "Ada"

    @pytest.mark.asyncio
    async def test_create_resume(self):
        sent = {}

        def handler(request):
            sent["method"] = request.method
            sent["body"] = json.loads(request.content)
            return httpx.Response(201, json=RECORD)

        record = await make_client(handler).create_resume("My Resume", "classic", make_data("Ada"))

        assert sent["method"] == "POST"
        assert sent["body"]["title"] == "My Resume"
        assert sent["body"]["templateId"] == "classic"
        assert sent["body"]["data"]["personalInfo"]["firstName"] == "Ada"
        assert record.id == "r1"

    @pytest.mark.asyncio
    async def test_update_resume_sends_only_given_fields(self):
        sent = {}

        def handler(request):
            sent["method"] = request.method
            sent["path"] = request.url.path
            sent["body"] = json.loads(request.content)
            return httpx.Response(200, json=RECORD)

        await make_client(handler).update_resume("r1", data=make_data("Ada"))

        assert sent["method"] == "PATCH"
        assert sent["path"] == "/api/v1/resumes/r1"
        assert set(sent["body"]) == {"data"}

    @pytest.mark.asyncio
    async def test_generate_pdf(self):
        sent = {}

        def handler(request):
            sent["path"] = request.url.path
            sent["body"] = json.loads(request.content)
            return httpx.Response(200, content=b"%PDF-1.4", headers={"Content-Type": "application/pdf"})

        content = await make_client(handler).generate_pdf(EditorState(data=make_data("Ada"), photo="data:x"))

        assert content == b"%PDF-1.4"
        assert sent["path"] == "/api/v1/resumes/generate-pdf"
        assert set(sent["body"]) == {"data", "settings"}


class TestResumeApiErrors:
    """Error body parsing"""

    @pytest.mark.asyncio
    async def test_structured_error(self):
        client = make_client(lambda request: httpx.Response(
            404, json={"error": {"code": "NOT_FOUND", "message": "Resume not found"}}
        ))

        with pytest.raises(ResumeAPIError) as exc_info:
            await client.get_resume("missing")

        assert exc_info.value.status == 404
        assert exc_info.value.code == "NOT_FOUND"
        assert exc_info.value.message == "Resume not found"

    @pytest.mark.asyncio
    async def test_unstructured_error_uses_fallback(self):
        client = make_client(lambda request: httpx.Response(502, text="Bad Gateway"))

        with pytest.raises(ResumeAPIError) as exc_info:
            await client.update_resume("r1", data=make_data("Ada"))

        assert exc_info.value.status == 502
        assert exc_info.value.code == "INTERNAL_ERROR"
        assert exc_info.value.message == "Failed to update resume"

    @pytest.mark.asyncio
    async def test_partial_error_body(self):
        client = make_client(lambda request: httpx.Response(500, json={"error": {"code": "DB_DOWN"}}))

        with pytest.raises(ResumeAPIError) as exc_info:
            await client.list_resumes()

        assert exc_info.value.code == "DB_DOWN"
        assert exc_info.value.message == "Failed to list resumes"
