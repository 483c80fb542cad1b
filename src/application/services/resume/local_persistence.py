"""
Local Resume Persistence
Debounced per-user copy of the editor state in the local store
"""
from typing import Callable, Optional

from loguru import logger

from application.repositories.interfaces import ILocalStore
from application.services.scheduling import DebouncedTask, IScheduler
from core.config import settings
from domain.entities import EditorState, load_editor_state

from .actions import LoadState
from .editor_store import ResumeEditorStore

RESUME_STORAGE_KEY_PREFIX = "resume-maker-v1"
ACTIVE_RESUME_KEY_PREFIX = "resume-maker-active-id"


def get_resume_storage_key(user_id: str) -> str:
    return f"{RESUME_STORAGE_KEY_PREFIX}:{user_id}"


def get_active_resume_storage_key(user_id: str) -> str:
    return f"{ACTIVE_RESUME_KEY_PREFIX}:{user_id}"


async def read_persisted_state(local_store: ILocalStore, user_id: str) -> Optional[EditorState]:
    """
    Read the stored editor state for a user

    Returns:
        None when nothing is stored, an empty EditorState when the stored
        value cannot be parsed, otherwise the normalized stored state
    """
    raw = await local_store.get_item(get_resume_storage_key(user_id))
    return load_editor_state(raw)


class LocalResumePersistence:
    """Restores the local copy on session start and rewrites it after edits settle"""

    def __init__(
        self,
        user_id: str,
        store: ResumeEditorStore,
        local_store: ILocalStore,
        scheduler: IScheduler,
        debounce_seconds: Optional[float] = None,
    ):
        self.user_id = user_id
        self._store = store
        self._local_store = local_store
        self._save = DebouncedTask(
            self._write,
            settings.LOCAL_SAVE_DEBOUNCE_SECONDS if debounce_seconds is None else debounce_seconds,
            scheduler,
            name="local-save",
        )
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def save_pending(self) -> bool:
        return self._save.pending

    async def restore(self) -> Optional[EditorState]:
        """Load the stored copy into the editor, if one exists"""
        persisted = await read_persisted_state(self._local_store, self.user_id)
        if persisted is not None:
            logger.debug(f"Restored local resume for user {self.user_id}")
            self._store.dispatch(LoadState(persisted))
        return persisted

    def start(self) -> None:
        """Begin saving on every settled state change"""
        if self._unsubscribe is None:
            self._unsubscribe = self._store.subscribe(self._on_state_change)

    async def flush_pending(self) -> None:
        """Write a pending debounced save now and wait for running writes"""
        await self._save.flush()
        await self._save.wait_idle()

    async def close(self) -> None:
        """Stop listening and write any pending save immediately"""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        await self.flush_pending()

    def _on_state_change(self, state: EditorState, previous: EditorState) -> None:
        self._save.trigger()

    async def _write(self) -> None:
        # Last write wins: the latest settled state replaces the stored copy
        await self._local_store.set_item(
            get_resume_storage_key(self.user_id),
            self._store.state.serialize(),
        )
