"""
Resume Cloud Sync Controller
Keeps one remote resume record consistent with the local editor state.

One controller exists per user editing session. It owns the session's
mutable sync state (active record id, last persisted baseline, in-flight
persist) and is the only writer of those cells.

Lifecycle: UNINITIALIZED -> HYDRATING -> READY. Autosave and flush are
no-ops until READY. Only one persist runs at a time; concurrent triggers
wait on it and re-check the diff instead of starting parallel writes, which
is what prevents duplicate record creation under rapid edits.
"""
import asyncio
import re
from datetime import datetime, timezone
from functools import cmp_to_key
from typing import Optional, Sequence

from loguru import logger

from application.repositories.interfaces import ILocalStore, IResumeRepository
from application.services.scheduling import DebouncedTask, IScheduler
from core.config import settings
from core.exceptions import CloudSyncException, ResumeAPIError
from domain.entities import EditorState, ResumeData, ResumeMetadata
from domain.enums import SyncPhase

from .actions import LoadState
from .editor_store import ResumeEditorStore
from .local_persistence import get_active_resume_storage_key, read_persisted_state


_FRACTION = re.compile(r"\.(\d+)")


def _parse_timestamp(value: str) -> Optional[float]:
    if not isinstance(value, str):
        return None
    # fromisoformat on 3.10 only takes 3 or 6 fractional digits
    normalized = _FRACTION.sub(
        lambda m: "." + (m.group(1) + "000000")[:6],
        value.replace("Z", "+00:00"),
        count=1,
    )
    try:
        parsed = datetime.fromisoformat(normalized)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


def _compare_recency(left: ResumeMetadata, right: ResumeMetadata) -> int:
    left_time = _parse_timestamp(left.updated_at)
    right_time = _parse_timestamp(right.updated_at)
    if left_time is None or right_time is None:
        return 0
    return (right_time > left_time) - (right_time < left_time)


def pick_most_recent_resume(resumes: Sequence[ResumeMetadata]) -> Optional[ResumeMetadata]:
    """Most recently updated resume; unparsable timestamps keep list order"""
    if not resumes:
        return None
    return sorted(resumes, key=cmp_to_key(_compare_recency))[0]


class ResumeSyncController:
    """Hydrates the editor once, then autosaves and flushes it to the record store"""

    def __init__(
        self,
        user_id: str,
        store: ResumeEditorStore,
        repository: IResumeRepository,
        local_store: ILocalStore,
        scheduler: IScheduler,
        debounce_seconds: Optional[float] = None,
        default_title: Optional[str] = None,
        default_template_id: Optional[str] = None,
    ):
        self.user_id = user_id
        self._store = store
        self._repository = repository
        self._local_store = local_store
        self._default_title = default_title or settings.DEFAULT_RESUME_TITLE
        self._default_template_id = default_template_id or settings.DEFAULT_TEMPLATE_ID

        self.phase = SyncPhase.UNINITIALIZED
        self._active_resume_id: Optional[str] = None
        self._last_persisted = ""
        self._persist_in_flight: Optional[asyncio.Task] = None
        self._changed_while_hydrating = False
        self._adopting = False
        self._closed = False

        self._autosave = DebouncedTask(
            self._autosave_job,
            settings.AUTOSAVE_DEBOUNCE_SECONDS if debounce_seconds is None else debounce_seconds,
            scheduler,
            name="cloud-autosave",
        )
        self._unsubscribe = store.subscribe(self._on_state_change)

    @property
    def is_ready(self) -> bool:
        return self.phase is SyncPhase.READY and not self._closed

    @property
    def active_resume_id(self) -> Optional[str]:
        return self._active_resume_id

    @property
    def last_persisted(self) -> str:
        """Serialized document last written to the record store ("" forces a write)"""
        return self._last_persisted

    @property
    def autosave_pending(self) -> bool:
        return self._autosave.pending

    @property
    def has_unsaved_changes(self) -> bool:
        return self._store.state.data.serialize() != self._last_persisted

    async def hydrate(self) -> None:
        """
        Decide between local and remote state, exactly once per session

        Local content wins when an active record id is cached or the local
        document has user content. Otherwise the most recently updated remote
        resume is loaded. Remote failures degrade to local-only editing.
        """
        if self.phase is not SyncPhase.UNINITIALIZED:
            return

        self.phase = SyncPhase.HYDRATING
        self._active_resume_id = None
        self._last_persisted = ""
        # Baseline for the remote paths; edits made while hydrating still count as unsaved
        initial_data = self._store.state.data.serialize()

        active_key = get_active_resume_storage_key(self.user_id)
        active_resume_id = await self._local_store.get_item(active_key)
        local_state = await read_persisted_state(self._local_store, self.user_id)

        if local_state is not None:
            if active_resume_id is not None or not local_state.is_empty_scaffold():
                logger.info(f"Loaded resume for user {self.user_id} from local store")
                if not self._changed_while_hydrating and self._store.state != local_state:
                    self._adopt(local_state)
                self._active_resume_id = active_resume_id
                # Local edits may never have reached the cloud; force the next flush
                self._last_persisted = ""
                self._mark_ready()
                return
            logger.info(f"Empty local scaffold for user {self.user_id}; attempting cloud hydration")

        try:
            await self._hydrate_from_cloud(active_key, initial_data)
        except Exception as e:
            logger.warning(
                f"Cloud hydration failed for user {self.user_id}; continuing with local state: {e}"
            )
            self._last_persisted = initial_data

        if not self._closed:
            self._mark_ready()

    async def flush(self) -> None:
        """
        Persist the latest document now

        Waits for any in-flight persist first and skips the write when that
        persist already covered the current content.

        Raises:
            CloudSyncException: the remote write failed
        """
        if not self.is_ready or not self.has_unsaved_changes:
            return

        try:
            await self._persist_latest()
        except Exception as e:
            logger.warning(f"Manual flush failed for user {self.user_id}; keeping local state: {e}")
            raise CloudSyncException("Failed to save resume to cloud") from e

    async def close(self) -> None:
        """Stop reacting to edits and let running work settle"""
        if self._closed:
            return
        self._closed = True
        self._unsubscribe()
        self._autosave.cancel()
        await self._autosave.wait_idle()
        if self._persist_in_flight is not None and not self._persist_in_flight.done():
            await asyncio.wait([self._persist_in_flight])

    async def _hydrate_from_cloud(self, active_key: str, initial_data: str) -> None:
        resumes = await self._repository.list_resumes()
        if self._closed:
            return

        latest = pick_most_recent_resume(resumes)
        if latest is None:
            logger.info(f"No cloud resumes for user {self.user_id}; staying on local state")
            self._last_persisted = initial_data
            return

        record = await self._repository.get_resume(latest.id)
        if self._closed:
            return

        logger.info(f"Loaded cloud resume {record.id} for user {self.user_id}")
        self._active_resume_id = record.id
        await self._local_store.set_item(active_key, record.id)
        self._last_persisted = record.data.serialize()
        current = self._store.state
        self._adopt(EditorState(
            data=record.data,
            settings=current.settings,
            photo=current.photo,
        ))

    def _adopt(self, state: EditorState) -> None:
        self._adopting = True
        try:
            self._store.dispatch(LoadState(state))
        finally:
            self._adopting = False

    def _mark_ready(self) -> None:
        self.phase = SyncPhase.READY
        if self._changed_while_hydrating and self.has_unsaved_changes:
            self._autosave.trigger()

    def _on_state_change(self, state: EditorState, previous: EditorState) -> None:
        if self._closed or self.phase is SyncPhase.UNINITIALIZED:
            return
        if self.phase is SyncPhase.HYDRATING:
            if not self._adopting:
                self._changed_while_hydrating = True
            return
        if state.data == previous.data:
            return

        self._autosave.cancel()
        if self.has_unsaved_changes:
            self._autosave.trigger()

    async def _autosave_job(self) -> None:
        if not self.is_ready or not self.has_unsaved_changes:
            return
        try:
            await self._persist_latest()
        except Exception as e:
            # Baseline is unchanged, so the next settled edit retries
            logger.warning(f"Autosave failed for user {self.user_id}: {e}")

    async def _persist_latest(self) -> None:
        while self._persist_in_flight is not None and not self._persist_in_flight.done():
            await asyncio.wait([self._persist_in_flight])
            if not self.has_unsaved_changes:
                return

        task = asyncio.ensure_future(self._persist(self._store.state.data))
        self._persist_in_flight = task
        task.add_done_callback(self._clear_in_flight)
        await asyncio.shield(task)

    def _clear_in_flight(self, task: asyncio.Task) -> None:
        if self._persist_in_flight is task:
            self._persist_in_flight = None
        if not task.cancelled() and task.exception() is not None:
            logger.debug(f"Cloud persist for user {self.user_id} failed: {task.exception()}")

    async def _persist(self, data: ResumeData) -> None:
        serialized = data.serialize()
        if self._active_resume_id is None:
            logger.info(f"Creating cloud resume for user {self.user_id}")
            created = await self._repository.create_resume(
                title=self._default_title,
                template_id=self._default_template_id,
                data=data,
            )
            self._active_resume_id = created.id
            await self._local_store.set_item(
                get_active_resume_storage_key(self.user_id), created.id
            )
        else:
            logger.info(f"Updating cloud resume {self._active_resume_id}")
            try:
                await self._repository.update_resume(self._active_resume_id, data=data)
            except ResumeAPIError as e:
                if e.status == 404:
                    await self._forget_active_resume()
                raise
        self._last_persisted = serialized

    async def _forget_active_resume(self) -> None:
        # The record was deleted remotely; the next persist creates a new one
        logger.warning(f"Cloud resume {self._active_resume_id} no longer exists; clearing active id")
        self._active_resume_id = None
        await self._local_store.remove_item(get_active_resume_storage_key(self.user_id))
