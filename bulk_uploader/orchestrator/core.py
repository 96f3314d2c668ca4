"""Core orchestrator - wires discovery, gated upload workers and error reporting."""
from enum import Enum
from typing import Callable, Optional, Set
import asyncio
import logging

from ..config import UploadConfig
from ..models import RunResult, UploadResult, UploadTask
from ..protocols import IStorageClient
from ..utils.events import (
    EventEmitter,
    FAILURE_REPORT,
    FILE_COMPLETE,
    FILE_FAIL,
    FINISH,
    STATE_CHANGE,
)
from .error_sink import ErrorSink
from .limiter import ConcurrencyLimiter
from .path_stream import PathStream
from .worker import UploadWorker

logger = logging.getLogger(__name__)


class RunState(Enum):
    """State of an upload run. REPORTED is the only terminal state."""
    INIT = "init"
    STREAMING = "streaming"
    DRAINING = "draining"
    CLOSED = "closed"
    REPORTED = "reported"


class UploadOrchestrator:
    """
    Uploads every file under config.folder with bounded concurrency.

    A limiter slot is acquired before each worker is spawned, so discovery
    pauses while `config.workers` uploads are in flight. The final report
    is produced only after every spawned worker has finished.

    Usage:
        orchestrator = UploadOrchestrator(storage, config)
        orchestrator.on_file_complete(lambda result: print(result.key))
        result = await orchestrator.run()
    """

    def __init__(
        self,
        storage: IStorageClient,
        config: UploadConfig,
        events: Optional[EventEmitter] = None,
        limiter: Optional[ConcurrencyLimiter] = None,
    ):
        """
        Initialize orchestrator with dependencies.

        Args:
            storage: Storage client (shared by all workers)
            config: Validated upload configuration
            events: Event emitter (a private one is created if omitted)
            limiter: Admission gate (default: sized from config.workers)
        """
        self._config = config
        self._events = events or EventEmitter()
        self._limiter = limiter or ConcurrencyLimiter(config.workers)
        self._sink = ErrorSink()
        self._worker = UploadWorker(
            storage,
            config.bucket,
            events=self._events,
            is_cancelled=lambda: self._cancelled,
        )
        self._state = RunState.INIT
        self._cancelled = False
        self._pending: Set[asyncio.Task] = set()
        self._result = RunResult()

    # Event subscription methods
    def on_file_complete(self, callback: Callable[[UploadResult], None]):
        """Called as soon as a file is uploaded. Receives UploadResult."""
        self._events.on(FILE_COMPLETE, callback)

    def on_file_fail(self, callback: Callable[[UploadResult], None]):
        """Called as soon as a file fails. Receives UploadResult."""
        self._events.on(FILE_FAIL, callback)

    def on_failure_report(self, callback: Callable[[UploadResult], None]):
        """Called once per failure while the final report is drained."""
        self._events.on(FAILURE_REPORT, callback)

    def on_state_change(self, callback: Callable[[RunState], None]):
        """Called on every state transition. Receives the new RunState."""
        self._events.on(STATE_CHANGE, callback)

    def on_finish(self, callback: Callable[[RunResult], None]):
        """Called once the report is complete. Receives RunResult."""
        self._events.on(FINISH, callback)

    # State properties
    @property
    def state(self) -> RunState:
        return self._state

    @property
    def limiter(self) -> ConcurrencyLimiter:
        return self._limiter

    @property
    def in_flight(self) -> int:
        """Workers spawned and not yet finished."""
        return len(self._pending)

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Stop taking new files; uploads not yet started are skipped."""
        if self._state == RunState.REPORTED:
            return
        logger.info("Cancellation requested")
        self._cancelled = True

    async def run(self) -> RunResult:
        """Run the whole pipeline and return the final result."""
        if self._state != RunState.INIT:
            raise RuntimeError(f"Cannot run orchestrator in state: {self._state}")

        stream = PathStream(self._config.folder)
        logger.info(
            f"Uploading {stream.root} to bucket {self._config.bucket} "
            f"(prefix={self._config.key_prefix or '-'}, workers={self._limiter.capacity})"
        )

        try:
            await self._set_state(RunState.STREAMING)
            await self._stream(stream)
            await self._set_state(RunState.DRAINING)
            await self._join()
        except BaseException:
            await self._abort()
            raise

        self._sink.close()
        await self._set_state(RunState.CLOSED)

        async for failure in self._sink:
            self._result.failures.append(failure)
            await self._events.emit(FAILURE_REPORT, failure)

        self._result.cancelled = self._cancelled
        await self._set_state(RunState.REPORTED)
        logger.info(
            f"Upload finished: {self._result.uploaded_files}/{self._result.total_files} uploaded, "
            f"{self._result.failed_files} failed"
        )
        await self._events.emit(FINISH, self._result)
        return self._result

    async def _stream(self, stream: PathStream) -> None:
        base_dir = stream.root
        async for path in stream:
            if self._cancelled:
                break
            # Blocks discovery while the limiter is saturated.
            await self._limiter.acquire()
            if self._cancelled:
                self._limiter.release()
                break
            task = UploadTask(path, base_dir, self._config.key_prefix)
            self._spawn(task)

        if stream.error is not None:
            logger.warning(
                f"Traversal stopped early after {stream.files_emitted} files: {stream.error}"
            )

    def _spawn(self, task: UploadTask) -> None:
        worker_task = asyncio.create_task(self._run_worker(task))
        self._result.total_files += 1
        self._pending.add(worker_task)
        worker_task.add_done_callback(self._pending.discard)

    async def _run_worker(self, task: UploadTask) -> None:
        try:
            result = await self._worker.run(task)
            if result.success:
                self._result.uploaded.append(result.key)
            else:
                self._sink.put(result)
        finally:
            self._limiter.release()

    async def _join(self) -> None:
        """Block until every spawned worker has terminated."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    async def _abort(self) -> None:
        """Cancel and await in-flight workers so none outlives run()."""
        for task in list(self._pending):
            task.cancel()
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def _set_state(self, state: RunState) -> None:
        logger.debug(f"Run state: {self._state.value} -> {state.value}")
        self._state = state
        await self._events.emit(STATE_CHANGE, state)
