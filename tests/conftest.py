"""
Shared test fixtures
"""
import asyncio
from typing import Callable, List
from unittest.mock import AsyncMock, Mock

import pytest

from application.repositories.interfaces import IResumeRepository
from application.services.scheduling import IScheduler
from domain.entities import ResumeData, ResumeMetadata, ResumeRecord
from domain.entities.resume import PersonalInfo
from infrastructure.cache import InMemoryLocalStore

# Float slack so 0.5 + 1.49 + 0.01 still reaches a 2.0 deadline
EPSILON = 1e-9


async def settle(rounds: int = 20) -> None:
    """Let tasks started by fired timers run to completion"""
    for _ in range(rounds):
        await asyncio.sleep(0)


class ManualTimer:
    def __init__(self, when: float, callback: Callable[[], None]):
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler(IScheduler):
    """Clock that only moves when a test calls advance()"""

    def __init__(self):
        self.now = 0.0
        self._timers: List[ManualTimer] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(self.now + delay, callback)
        self._timers.append(timer)
        return timer

    @property
    def pending(self) -> List[ManualTimer]:
        return [timer for timer in self._timers if not timer.cancelled]

    async def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [timer for timer in self.pending if timer.when <= target + EPSILON]
            if not due:
                break
            timer = min(due, key=lambda t: t.when)
            self._timers.remove(timer)
            self.now = max(self.now, timer.when)
            timer.callback()
            await settle()
        self.now = target
        await settle()


def make_data(first_name: str = "", last_name: str = "") -> ResumeData:
    return ResumeData(personal_info=PersonalInfo(first_name=first_name, last_name=last_name))


def make_record(resume_id: str, first_name: str = "", updated_at: str = "2024-01-01T00:00:00Z") -> ResumeRecord:
    return ResumeRecord(
        id=resume_id,
        title="My Resume",
        template_id="classic",
        created_at="2024-01-01T00:00:00Z",
        updated_at=updated_at,
        data=make_data(first_name),
    )


def make_metadata(resume_id: str, updated_at: str) -> ResumeMetadata:
    return ResumeMetadata(id=resume_id, title="My Resume", template_id="classic", updated_at=updated_at)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def local_store():
    return InMemoryLocalStore()


@pytest.fixture
def repository():
    repo = Mock(spec=IResumeRepository)
    repo.list_resumes = AsyncMock(return_value=[])
    repo.get_resume = AsyncMock(return_value=make_record("resume-1"))
    repo.create_resume = AsyncMock(return_value=make_record("resume-1"))
    repo.update_resume = AsyncMock(return_value=make_record("resume-1"))
    repo.aclose = AsyncMock()
    return repo
