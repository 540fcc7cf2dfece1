import concurrent.futures
import logging
import multiprocessing
import queue
import threading
from functools import partial
from typing import Callable, Iterator, List, Optional, Tuple

from opentelemetry import trace

from . import config
from .analyzer import calculate_size_by_file
from .collector import discover_files
from .errors import SourceMapError
from .models import BatchSummary, FileResult, SourceMappingInfo
from .parsing.parser import parse_file_by_path

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

OnResult = Callable[[FileResult], None]

# ==============================================================================
#  WORKER FUNCTIONS (ISOLATED CONTEXT)
# ==============================================================================


def handle_file(file: str) -> SourceMappingInfo:
    """
    Runs Locator, Parser and Analyzer on a single generated file.

    Raises:
        SourceMapError: If the file or its source map cannot be analyzed.
    """
    file_contents, source_mapping = parse_file_by_path(file)
    return calculate_size_by_file(file_contents, source_mapping)


def _analyze_one(file: str) -> FileResult:
    """
    Unit of work of a batch. Owns its path and returns an owned result.

    Expected per-file failures are folded into the result so they can cross a process
    boundary and never abort sibling files.
    """
    try:
        info = handle_file(file)
    except SourceMapError as e:
        logger.warning(f"⚠️ Skipping {file}: {e}")
        return FileResult(file=file, error=e)
    return FileResult(file=file, info=info)


def _create_executor(kind: str, max_workers: int) -> concurrent.futures.Executor:
    if kind == "thread":
        return concurrent.futures.ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="svis-worker")
    return concurrent.futures.ProcessPoolExecutor(
        max_workers=max_workers,
        mp_context=multiprocessing.get_context("spawn"),
    )


# ==============================================================================
#  SEQUENTIAL BATCH
# ==============================================================================


def analyze_path(path: str, on_result: OnResult) -> BatchSummary:
    """
    Analyzes every file discovered under `path`, one after another, in discovery order.

    Args:
        path (str): A generated file, or a directory holding generated files.
        on_result (Callable[[FileResult], None]): Invoked once per file, success or failure.

    Returns:
        BatchSummary: How many files were checked and how many failed.

    Raises:
        DiscoveryError: If `path` cannot be listed. Nothing is analyzed in that case.
    """
    with tracer.start_as_current_span("runner.analyze_path") as span:
        span.set_attribute("batch.root", path)
        files = discover_files(path)
        span.set_attribute("batch.total_files", len(files))

        summary = BatchSummary()
        for file in files:
            result = _analyze_one(file)
            summary.files_checked += 1
            if not result.ok:
                summary.files_failed += 1
            on_result(result)

        logger.info(f"✅ Checked {summary.files_checked} files, {summary.files_failed} failed")
        return summary


# ==============================================================================
#  CONCURRENT BATCH
# ==============================================================================


class ProgressCounter:
    """Count of completed tasks. Incremented by producers, read by the reporting side."""

    def __init__(self):
        self._value = 0
        self._lock = threading.Lock()

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        return self._value


class AnalysisJob:
    """
    Handle on a dispatched concurrent batch.

    Finished tasks push their `FileResult` onto a queue and bump the progress counter; the
    consumer drains the queue with `results()` (blocking) or `poll()` (non-blocking).
    Results arrive in completion order. A single consumer is expected.

    Attributes:
        files (List[str]): Discovered files, in discovery order.
        total (int): Number of dispatched tasks.
        progress (ProgressCounter): Completed task count.
    """

    def __init__(self, files: List[str], progress: Optional[ProgressCounter] = None):
        self.files = files
        self.total = len(files)
        self.progress = progress or ProgressCounter()

        self._queue: "queue.Queue[Tuple[str, Optional[FileResult]]]" = queue.Queue()
        self._futures: List[concurrent.futures.Future] = []
        self._received = 0
        self._summary = BatchSummary()

    def _dispatch(self, executor: concurrent.futures.Executor):
        for file in self.files:
            future = executor.submit(_analyze_one, file)
            self._futures.append(future)
            future.add_done_callback(partial(self._on_done, file))

    def _on_done(self, file: str, future: concurrent.futures.Future):
        if future.cancelled():
            self._queue.put((file, None))
            return

        exc = future.exception()
        if exc is not None:
            logger.error(f"❌ Worker Error on {file}: {exc}")
            result = FileResult(file=file, error=exc)
        else:
            result = future.result()

        self._queue.put((file, result))
        self.progress.increment()

    def _take(self, item: Tuple[str, Optional[FileResult]]) -> Optional[FileResult]:
        self._received += 1
        _, result = item
        if result is None:
            self._summary.cancelled += 1
            return None

        self._summary.files_checked += 1
        if not result.ok:
            self._summary.files_failed += 1
        return result

    @property
    def done(self) -> bool:
        """True once every dispatched task has been delivered to the consumer."""
        return self._received >= self.total

    def results(self, timeout: Optional[float] = None) -> Iterator[FileResult]:
        """
        Yields results as tasks complete, until every task is accounted for.

        Args:
            timeout (Optional[float]): Maximum wait for each next result.

        Raises:
            queue.Empty: If `timeout` elapses before the next result arrives.
        """
        while not self.done:
            result = self._take(self._queue.get(timeout=timeout))
            if result is not None:
                yield result

    def poll(self) -> List[FileResult]:
        """Returns the results available right now without blocking."""
        available = []
        while not self.done:
            try:
                item = self._queue.get_nowait()
            except queue.Empty:
                break
            result = self._take(item)
            if result is not None:
                available.append(result)
        return available

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Blocks until all tasks finished running. Returns False on timeout."""
        _, not_done = concurrent.futures.wait(self._futures, timeout=timeout)
        return not not_done

    def cancel(self) -> int:
        """Cancels the tasks that have not started yet. Returns how many were cancelled."""
        cancelled = sum(1 for future in self._futures if future.cancel())
        if cancelled:
            logger.info(f"🛑 Cancelled {cancelled}/{self.total} pending files")
        return cancelled

    def summary(self) -> BatchSummary:
        """Counts over the results delivered so far."""
        return BatchSummary(
            files_checked=self._summary.files_checked,
            files_failed=self._summary.files_failed,
            cancelled=self._summary.cancelled,
        )


class BatchRunner:
    """
    Fans a batch out to a bounded worker pool, one task per generated file.

    Tasks share nothing: each reads its own file and builds its own result. Discovery runs
    on the submitting thread so a bad root path is reported once, before anything is
    dispatched.

    Attributes:
        max_workers (int): Pool size.
        executor (str): `"process"` or `"thread"`.
    """

    def __init__(self, max_workers: Optional[int] = None, executor: Optional[str] = None):
        self.max_workers = max_workers or config.MAX_WORKERS
        self.executor = executor or config.EXECUTOR
        if self.executor not in config.EXECUTOR_KINDS:
            raise ValueError(f"Unknown executor kind {self.executor!r}, expected one of {config.EXECUTOR_KINDS}")

    def submit(self, path: str, progress: Optional[ProgressCounter] = None) -> AnalysisJob:
        """
        Discovers the files under `path`, dispatches them and returns immediately.

        Raises:
            DiscoveryError: If `path` cannot be listed.
        """
        with tracer.start_as_current_span("runner.submit") as span:
            span.set_attribute("batch.root", path)
            files = discover_files(path)
            span.set_attribute("batch.total_files", len(files))

            job = AnalysisJob(files, progress=progress)
            if not files:
                return job

            workers = min(self.max_workers, len(files))
            logger.info(f"🔨 Analyzing {len(files)} files with {workers} {self.executor} workers...")

            executor = _create_executor(self.executor, workers)
            try:
                job._dispatch(executor)
            finally:
                # Queued tasks keep running; workers exit once the queue is drained.
                executor.shutdown(wait=False)

            return job


def analyze_path_concurrent(
    path: str,
    on_result: OnResult,
    progress: Optional[ProgressCounter] = None,
    max_workers: Optional[int] = None,
    executor: Optional[str] = None,
) -> BatchSummary:
    """
    Concurrent counterpart of `analyze_path`.

    `on_result` runs on the calling thread, in completion order. Pass a `ProgressCounter`
    to watch progress from another thread.

    Raises:
        DiscoveryError: If `path` cannot be listed.
    """
    job = BatchRunner(max_workers=max_workers, executor=executor).submit(path, progress=progress)

    for result in job.results():
        on_result(result)

    summary = job.summary()
    logger.info(f"✅ Checked {summary.files_checked} files, {summary.files_failed} failed")
    return summary
