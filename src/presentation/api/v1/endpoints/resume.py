"""Resume Endpoints

POST /resumes/generate-pdf
    Forwards the editor's render payload to the PDF service with signed
    service-auth headers and streams the upstream result back unchanged.
"""
from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse
from loguru import logger

from core.exceptions import ConfigurationException, UpstreamUnavailableException
from infrastructure.external.pdf_service_proxy import PdfServiceProxy
from presentation.api.v1.container import get_pdf_proxy


router = APIRouter()


def json_error(status_code: int, code: str, message: str) -> JSONResponse:
    """Error body shared with the resume REST API"""
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message}},
    )


@router.post("/resumes/generate-pdf")
async def generate_pdf(
    request: Request,
    proxy: PdfServiceProxy = Depends(get_pdf_proxy),
) -> Response:
    """Render a resume PDF through the PDF service"""
    content_type = request.headers.get("content-type") or ""
    if "application/json" not in content_type.lower():
        return json_error(
            status.HTTP_400_BAD_REQUEST,
            "BAD_REQUEST",
            "Content-Type must be application/json",
        )

    body = await request.body()

    try:
        upstream = await proxy.proxy_pdf_request(body, content_type)
    except ConfigurationException as e:
        logger.error(f"PDF proxy misconfigured: {e}")
        return json_error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "INTERNAL_ERROR",
            "PDF service is not configured",
        )
    except UpstreamUnavailableException:
        return json_error(
            status.HTTP_502_BAD_GATEWAY,
            "BAD_GATEWAY",
            "Failed to reach PDF service",
        )

    headers = {}
    if upstream.content_disposition:
        headers["Content-Disposition"] = upstream.content_disposition

    return Response(
        content=upstream.content,
        status_code=upstream.status_code,
        headers=headers,
        media_type=upstream.content_type,
    )
