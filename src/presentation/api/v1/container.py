"""
Dependency Injection Container
Manages service and repository instances
"""
from application.repositories.interfaces import IResumeRepository
from application.services.auth.interfaces import ICurrentUserProvider
from application.services.resume.editor_session import EditorSessionFactory
from domain.entities import CurrentUser
from infrastructure.cache.redis_local_store import local_store
from infrastructure.external.pdf_service_proxy import PdfServiceProxy
from infrastructure.external.resume_api_client import ResumeApiClient
from infrastructure.security.header_user_provider import USER_ID_HEADER, HeaderCurrentUserProvider


# Singleton instances
_pdf_proxy: PdfServiceProxy | None = None
_user_provider: ICurrentUserProvider | None = None
_session_factory: EditorSessionFactory | None = None
_renderer: ResumeApiClient | None = None


def get_pdf_proxy() -> PdfServiceProxy:
    """Get PDF service proxy instance (singleton)"""
    global _pdf_proxy
    if _pdf_proxy is None:
        _pdf_proxy = PdfServiceProxy()
    return _pdf_proxy


def get_current_user_provider() -> ICurrentUserProvider:
    """Get current user provider instance (singleton)"""
    global _user_provider
    if _user_provider is None:
        _user_provider = HeaderCurrentUserProvider()
    return _user_provider


def build_resume_repository(user: CurrentUser) -> IResumeRepository:
    """Resume API client scoped to one user (per-session)"""
    return ResumeApiClient(headers={USER_ID_HEADER: user.id})


def get_resume_renderer() -> ResumeApiClient:
    """Get PDF renderer client instance (singleton)"""
    global _renderer
    if _renderer is None:
        _renderer = ResumeApiClient()
    return _renderer


def get_editor_session_factory() -> EditorSessionFactory:
    """Get editor session factory instance (singleton)"""
    global _session_factory
    if _session_factory is None:
        _session_factory = EditorSessionFactory(
            user_provider=get_current_user_provider(),
            repository_factory=build_resume_repository,
            local_store=local_store,
            renderer=get_resume_renderer(),
        )
    return _session_factory


async def close_container() -> None:
    """Release shared HTTP clients on shutdown"""
    global _renderer, _session_factory
    if _renderer is not None:
        await _renderer.aclose()
    _renderer = None
    _session_factory = None
