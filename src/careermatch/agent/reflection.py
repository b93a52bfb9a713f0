"""Background persistence of completed turns as episodic memories."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from ..memory.extractor import FactExtractor
from ..memory.store import MemoryStore

logger = logging.getLogger(__name__)

SUMMARY_PREFIX_CHARS = 100
REFLECTION_IMPORTANCE = 1


def summarize_turn(user_message: str, assistant_content: str) -> str:
    """Short episodic summary: the user message plus a prefix of the reply."""
    prefix = assistant_content[:SUMMARY_PREFIX_CHARS]
    if len(assistant_content) > SUMMARY_PREFIX_CHARS:
        prefix += "..."
    return f"User: {user_message}\nAgent: {prefix}"


@dataclass(frozen=True)
class ReflectionJob:
    """One completed turn waiting to be recorded."""

    user_id: str
    session_id: str
    user_message: str
    assistant_content: str


class ReflectionWriter:
    """Bounded worker pool that records turns without delaying responses.

    Jobs go into a bounded queue drained by a fixed number of worker
    tasks. A full queue drops the job with a warning instead of growing.
    Failures are logged and never reach the chat caller.
    """

    def __init__(
        self,
        store: MemoryStore,
        extractor: FactExtractor | None = None,
        workers: int = 2,
        max_queue_size: int = 100,
    ) -> None:
        self.store = store
        self.extractor = extractor
        self.workers = workers
        self._queue: asyncio.Queue[ReflectionJob] = asyncio.Queue(maxsize=max_queue_size)
        self._tasks: list[asyncio.Task] = []
        self.dropped = 0

    @property
    def running(self) -> bool:
        return bool(self._tasks)

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def start(self) -> None:
        """Start the worker tasks. Must be called inside a running event loop."""
        if self._tasks:
            return
        self._tasks = [
            asyncio.create_task(self._worker(), name=f"reflection-worker-{i}")
            for i in range(self.workers)
        ]

    def schedule(
        self,
        user_id: str,
        user_message: str,
        assistant_content: str,
        session_id: str,
    ) -> bool:
        """Queue a turn for recording. Returns False if it was dropped."""
        if not self._tasks:
            logger.warning(
                "Reflection writer not started, skipping turn for session %s", session_id
            )
            return False
        job = ReflectionJob(user_id, session_id, user_message, assistant_content)
        try:
            self._queue.put_nowait(job)
        except asyncio.QueueFull:
            self.dropped += 1
            logger.warning(
                "Reflection queue full, dropping turn for session %s", session_id
            )
            return False
        return True

    async def drain(self) -> None:
        """Wait until every queued job has been processed."""
        await self._queue.join()

    async def close(self) -> None:
        """Finish queued work, then stop the workers."""
        if not self._tasks:
            return
        await self.drain()
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks = []

    async def __aenter__(self) -> ReflectionWriter:
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def _worker(self) -> None:
        while True:
            job = await self._queue.get()
            try:
                await self.reflect(job)
            except Exception:
                logger.exception("Reflection failed for session %s", job.session_id)
            finally:
                self._queue.task_done()

    async def reflect(self, job: ReflectionJob) -> None:
        """Record one turn as a memory, plus extracted facts if configured."""
        await self.store.add_memory(
            job.user_id,
            summarize_turn(job.user_message, job.assistant_content),
            REFLECTION_IMPORTANCE,
            {"sessionId": job.session_id},
        )

        if self.extractor is None:
            return
        facts = await self.extractor.extract(
            job.user_id, job.user_message, job.assistant_content
        )
        for fact in facts:
            self.store.add_fact(job.user_id, fact)
