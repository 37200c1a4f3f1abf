# content_analyst/dispatcher.py
"""
Background execution for analyses.

AnalysisDispatcher hands idea ids to a worker pool and returns immediately.
StaleAnalysisReaper periodically fails rows that have been stuck in
`analyzing` longer than STALE_ANALYSIS_MINUTES (for example when a dispatch
never started or the process died mid-analysis).
"""
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional

from content_analyst import config
from content_analyst.db import repository
from content_analyst.orchestrator import analyze_idea

logger = logging.getLogger("workflow")


class AnalysisDispatcher:
    def __init__(self, max_workers: int = None, runner: Callable[[int], dict] = analyze_idea):
        self.max_workers = max_workers or config.ANALYSIS_WORKERS
        self._runner = runner
        self._executor: Optional[ThreadPoolExecutor] = None
        self._lock = threading.Lock()

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.max_workers, thread_name_prefix="analysis"
                )
            return self._executor

    def submit(self, idea_id: int) -> bool:
        """Queue an analysis without waiting for it. Returns False if it could not be queued."""
        try:
            future = self._get_executor().submit(self._runner, idea_id)
        except RuntimeError as e:
            # executor already shut down
            logger.error(f"Error dispatching analysis for idea {idea_id}: {e}")
            return False

        future.add_done_callback(lambda f: self._log_outcome(idea_id, f))
        logger.info(f"Dispatched analysis for idea ID: {idea_id}")
        return True

    @staticmethod
    def _log_outcome(idea_id: int, future: Future) -> None:
        exc = future.exception()
        if exc is not None:
            logger.error(f"Background analysis for idea {idea_id} ended with error: {exc}")
        else:
            logger.info(f"Background analysis for idea {idea_id} finished")

    def shutdown(self, wait: bool = True) -> None:
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=wait)


class StaleAnalysisReaper:
    def __init__(self, interval_seconds: float = None, older_than_minutes: int = None):
        self.interval_seconds = interval_seconds or config.REAPER_INTERVAL_SECONDS
        self.older_than_minutes = older_than_minutes or config.STALE_ANALYSIS_MINUTES
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def sweep(self) -> int:
        try:
            return repository.reap_stale_analyses(self.older_than_minutes)
        except Exception as e:
            logger.error(f"Stale analysis sweep failed: {e}")
            return 0

    def _loop(self) -> None:
        while not self._stop.wait(self.interval_seconds):
            self.sweep()

    def start(self) -> None:
        if self._thread is not None:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name="stale-analysis-reaper", daemon=True)
        self._thread.start()
        logger.info(
            f"Stale analysis reaper started (every {self.interval_seconds}s, threshold {self.older_than_minutes}m)"
        )

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=5)
            self._thread = None
