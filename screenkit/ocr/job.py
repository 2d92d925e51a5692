"""Recognition job lifecycle for the OCR engine."""

import asyncio
import itertools
import threading
from concurrent.futures import Future
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, List, Optional

from screenkit.ocr.page import Page
from screenkit.utils.logger import get_logger


class JobState(Enum):
    """Lifecycle states of a recognition job."""
    SUBMITTED = auto()   # Created, engine has not reported anything yet
    RUNNING = auto()     # At least one progress notification received
    SUCCEEDED = auto()   # Terminal: page available
    FAILED = auto()      # Terminal: engine reported an error


TERMINAL_STATES = (JobState.SUCCEEDED, JobState.FAILED)


@dataclass(frozen=True)
class Progress:
    """Informational progress notification from the engine."""
    status: str
    progress: float = 0.0


@dataclass(frozen=True)
class JobOutcome:
    """Tagged terminal result of a job: either a page or an error."""

    page: Optional[Page] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, page: Page) -> "JobOutcome":
        return cls(page=page)

    @classmethod
    def failure(cls, error: BaseException) -> "JobOutcome":
        return cls(error=error)


class RecognitionJob:
    """
    A single submitted OCR request.

    The engine drives the job from its own thread through report_progress(),
    succeed() and fail(). Callers either register callbacks (on_complete,
    on_progress, on_error) or await outcome(), which yields a JobOutcome
    and never raises.

    Exactly one terminal state is reached. The first of succeed()/fail()
    wins; later calls, and progress reported after that point, are ignored.
    Only the most recent progress notification is retained.
    """

    _ids = itertools.count(1)

    def __init__(self):
        self.job_id = next(self._ids)
        self.log = get_logger("ocr")

        self._lock = threading.Lock()
        self._state = JobState.SUBMITTED
        self._future: Future = Future()
        self._latest_progress: Optional[Progress] = None

        self._complete_callbacks: List[Callable[[Page], None]] = []
        self._error_callbacks: List[Callable[[BaseException], None]] = []
        self._progress_callbacks: List[Callable[[Progress], None]] = []

    @property
    def state(self) -> JobState:
        return self._state

    @property
    def done(self) -> bool:
        return self._state in TERMINAL_STATES

    @property
    def latest_progress(self) -> Optional[Progress]:
        return self._latest_progress

    # ========== Callback registration ==========

    def on_complete(self, callback: Callable[[Page], None]) -> "RecognitionJob":
        """Register a callback for the recognized page."""
        with self._lock:
            state = self._state
            if state not in TERMINAL_STATES:
                self._complete_callbacks.append(callback)
                return self

        if state == JobState.SUCCEEDED:
            self._invoke(callback, self._future.result().page)
        return self

    def on_error(self, callback: Callable[[BaseException], None]) -> "RecognitionJob":
        """Register a callback for an engine error."""
        with self._lock:
            state = self._state
            if state not in TERMINAL_STATES:
                self._error_callbacks.append(callback)
                return self

        if state == JobState.FAILED:
            self._invoke(callback, self._future.result().error)
        return self

    def on_progress(self, callback: Callable[[Progress], None]) -> "RecognitionJob":
        """Register a callback for progress notifications."""
        with self._lock:
            if self._state not in TERMINAL_STATES:
                self._progress_callbacks.append(callback)
        return self

    # ========== Engine side ==========

    def report_progress(self, progress: Progress) -> bool:
        """
        Record a progress notification.

        Returns:
            False if the job already reached a terminal state
        """
        with self._lock:
            if self._state in TERMINAL_STATES:
                return False
            self._state = JobState.RUNNING
            self._latest_progress = progress
            callbacks = list(self._progress_callbacks)

        for callback in callbacks:
            self._invoke(callback, progress)
        return True

    def succeed(self, page: Page) -> bool:
        """Settle the job with a recognized page."""
        return self._settle(JobState.SUCCEEDED, JobOutcome.success(page))

    def fail(self, error: BaseException) -> bool:
        """Settle the job with an engine error."""
        return self._settle(JobState.FAILED, JobOutcome.failure(error))

    def _settle(self, state: JobState, outcome: JobOutcome) -> bool:
        with self._lock:
            if self._state in TERMINAL_STATES:
                self.log.debug(
                    f"OCR job {self.job_id} already {self._state.name}, ignoring {state.name}"
                )
                return False
            self._state = state
            complete_callbacks = self._complete_callbacks
            error_callbacks = self._error_callbacks
            self._complete_callbacks = []
            self._error_callbacks = []
            self._progress_callbacks = []
            self._future.set_result(outcome)

        if outcome.ok:
            for callback in complete_callbacks:
                self._invoke(callback, outcome.page)
        else:
            for callback in error_callbacks:
                self._invoke(callback, outcome.error)
        return True

    def _invoke(self, callback: Callable, value) -> None:
        # Listener errors must not change the job's outcome
        try:
            callback(value)
        except Exception:
            self.log.exception(f"OCR job {self.job_id}: callback {callback!r} raised")

    # ========== Caller side ==========

    async def outcome(self) -> JobOutcome:
        """
        Wait for the terminal outcome.

        Cancelling the awaiting task does not cancel the job itself.
        """
        return await asyncio.shield(asyncio.wrap_future(self._future))

    def __repr__(self) -> str:
        return f"RecognitionJob(id={self.job_id}, state={self._state.name})"
