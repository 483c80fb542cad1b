"""
Resume Editor Session
Per-user composition of the editor store, local persistence and cloud sync
"""
from dataclasses import dataclass
from typing import Any, Callable, Optional

from loguru import logger

from application.repositories.interfaces import ILocalStore, IResumeRepository
from application.services.auth.interfaces import ICurrentUserProvider
from application.services.scheduling import AsyncioScheduler, IScheduler
from core.exceptions import ValidationException
from domain.entities import CurrentUser, EditorState

from . import IResumePdfRenderer
from .actions import ResumeAction
from .editor_store import ResumeEditorStore
from .local_persistence import LocalResumePersistence
from .sync_controller import ResumeSyncController
from .validation import validate_for_download


@dataclass(frozen=True)
class PdfDownload:
    filename: str
    content: bytes


class ResumeEditorSession:
    """
    Everything one user needs to edit a resume.

    Constructed at session start and torn down with ``close()``; nothing here
    is shared between users or sessions.

    Usage:
        async with ResumeEditorSession(user, repository, local_store, renderer) as session:
            session.dispatch(UpdatePersonalInfo("first_name", "Ada"))
            download = await session.download_pdf()
    """

    def __init__(
        self,
        user: CurrentUser,
        repository: IResumeRepository,
        local_store: ILocalStore,
        renderer: Optional[IResumePdfRenderer] = None,
        scheduler: Optional[IScheduler] = None,
        owns_repository: bool = False,
    ):
        self.user = user
        self._repository = repository
        self._owns_repository = owns_repository
        self._renderer = renderer
        scheduler = scheduler or AsyncioScheduler()

        self.store = ResumeEditorStore()
        self.local = LocalResumePersistence(user.id, self.store, local_store, scheduler)
        self.sync = ResumeSyncController(user.id, self.store, repository, local_store, scheduler)

    @property
    def state(self) -> EditorState:
        return self.store.state

    def dispatch(self, action: ResumeAction) -> EditorState:
        return self.store.dispatch(action)

    async def open(self) -> "ResumeEditorSession":
        """Restore the local copy, then hydrate from the cloud if needed"""
        await self.local.restore()
        self.local.start()
        await self.sync.hydrate()
        logger.info(
            f"Editor session ready for user {self.user.id} "
            f"(active resume: {self.sync.active_resume_id})"
        )
        return self

    async def flush(self) -> None:
        await self.sync.flush()

    async def download_pdf(self) -> PdfDownload:
        """
        Validate, save to the cloud, then render

        The flush completes before the render request is sent, so the stored
        record always matches the downloaded PDF.

        Raises:
            ValidationException: the resume is missing required content
            CloudSyncException: saving before the download failed
        """
        if self._renderer is None:
            raise RuntimeError("No PDF renderer configured for this session")

        errors = validate_for_download(self.state.data)
        if errors:
            raise ValidationException("resume", errors[0], errors)

        await self.sync.flush()
        state = self.state
        content = await self._renderer.generate_pdf(state)
        return PdfDownload(filename=state.download_filename(), content=content)

    async def close(self) -> None:
        await self.sync.close()
        await self.local.close()
        if self._owns_repository:
            await self._repository.aclose()
        logger.info(f"Editor session closed for user {self.user.id}")

    async def __aenter__(self) -> "ResumeEditorSession":
        return await self.open()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


class EditorSessionFactory:
    """Opens editor sessions for authenticated callers"""

    def __init__(
        self,
        user_provider: ICurrentUserProvider,
        repository_factory: Callable[[CurrentUser], IResumeRepository],
        local_store: ILocalStore,
        renderer: Optional[IResumePdfRenderer] = None,
        scheduler: Optional[IScheduler] = None,
    ):
        self._user_provider = user_provider
        self._repository_factory = repository_factory
        self._local_store = local_store
        self._renderer = renderer
        self._scheduler = scheduler

    async def open(self, request: Any) -> Optional[ResumeEditorSession]:
        """Hydrated session for the request's user, or None when anonymous"""
        user = await self._user_provider.get_current_user(request)
        if user is None:
            logger.debug("No authenticated user; editor session not opened")
            return None

        session = ResumeEditorSession(
            user,
            self._repository_factory(user),
            self._local_store,
            renderer=self._renderer,
            scheduler=self._scheduler,
            owns_repository=True,
        )
        return await session.open()
