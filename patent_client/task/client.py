import asyncio
from collections.abc import Callable
from dataclasses import replace
from pathlib import Path
from typing import Any

from patent_client.api.client_base import BaseAnalysisApi
from patent_client.api.exceptions import ApiError, ApiResponseError
from patent_client.api.factory import AnalysisApiFactory
from patent_client.config.settings import Settings
from patent_client.logging.logger import Log
from patent_client.task.exceptions import InvalidInputError, ReportError, TaskInProgressError
from patent_client.task.file_loader import check_pdf
from patent_client.task.models import ErrorKind, Phase, SelectedFile, Task, TaskError
from patent_client.task.report_saver import BaseReportSaver, FileReportSaver, report_filename
from patent_client.task.scheduler import AsyncioScheduler, BaseScheduler, ScheduledCall

Listener = Callable[[Task], None]

UPLOAD_FAILED = "Upload failed"
STATUS_FAILED = "Status query failed"
ANALYSIS_FAILED = "Analysis failed"
RESULT_FAILED = "Failed to fetch result"
REPORT_FAILED = "Report download failed"


class TaskClient:
    """Drives one analysis task: upload -> poll -> fetch result -> report.

    The client owns a single Task snapshot and replaces it on every
    transition; listeners registered with ``subscribe`` receive each new
    snapshot. Responses are matched against the generation and task id that
    were current when the request was sent, and are dropped when a reset or
    a new upload happened in between.
    """

    def __init__(
        self,
        api: BaseAnalysisApi,
        scheduler: BaseScheduler,
        report_saver: BaseReportSaver,
        *,
        poll_interval_seconds: float = 2.0,
        max_poll_attempts: int = 0,
        max_upload_size_bytes: int | None = None,
    ) -> None:
        self._api = api
        self._scheduler = scheduler
        self._report_saver = report_saver
        self._poll_interval = poll_interval_seconds
        self._max_poll_attempts = max_poll_attempts
        self._max_upload_size_bytes = max_upload_size_bytes

        self._task = Task()
        self._listeners: list[Listener] = []
        self._generation = 0
        self._poll_generation: int | None = None
        self._polls = 0
        self._pending_poll: ScheduledCall | None = None

    @property
    def task(self) -> Task:
        return self._task

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with every new snapshot. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def select_file(self, file: SelectedFile | None) -> Task:
        """Validate and remember a file for the next ``start()``.

        Raises:
            TaskInProgressError: while a task is uploading or processing.
            InvalidInputError: if the file is not an acceptable PDF.
        """
        self._ensure_not_running()
        self._validate(file)
        error = None if self._task.phase is Phase.IDLE else self._task.error
        self._publish(replace(self._task, file=file, error=error))
        return self._task

    def clear_file(self) -> Task:
        """Forget the selected file while no task has been started."""
        if self._task.phase is Phase.IDLE:
            self._publish(replace(self._task, file=None, error=None))
        return self._task

    async def start(self, file: SelectedFile | None = None) -> Task:
        """Upload ``file`` (or the selected one) and begin polling.

        Raises:
            TaskInProgressError: while a task is uploading or processing.
            InvalidInputError: if the file is missing or not an acceptable PDF.
        """
        self._ensure_not_running()
        if file is None:
            file = self._task.file
        file = self._validate(file)

        self._cancel_pending_poll()
        self._generation += 1
        generation = self._generation
        self._polls = 0
        self._publish(Task(phase=Phase.UPLOADING, file=file))
        Log.info("Uploading file", filename=file.filename, size_bytes=file.size_bytes)

        try:
            task_id = await self._api.upload(file)
        except ApiError as exc:
            if self._is_current(generation):
                self._fail(ErrorKind.UPLOAD, self._describe(exc, UPLOAD_FAILED))
            return self._task

        if not self._is_current(generation):
            Log.debug("Discarding stale upload response", task_id=task_id)
            return self._task

        self._publish(replace(self._task, phase=Phase.PROCESSING, task_id=task_id, progress=0))
        self._schedule_poll(0)
        return self._task

    async def poll(self) -> Task:
        """Query the task status once.

        A no-op outside PROCESSING and while another poll is in flight.
        """
        task = self._task
        if task.phase is not Phase.PROCESSING or task.task_id is None:
            return task
        if self._poll_generation == self._generation:
            Log.debug("Poll already in flight", task_id=task.task_id)
            return task

        self._cancel_pending_poll()
        generation = self._generation
        self._poll_generation = generation
        self._polls += 1
        try:
            await self._poll_once(generation, task.task_id)
        finally:
            if self._poll_generation == generation:
                self._poll_generation = None
        return self._task

    async def download_report(self) -> str | None:
        """Fetch the full report and save it as JSON.

        Returns the saved location, or None when the task was reset while the
        report was being fetched, whether or not the fetch succeeded.

        Raises:
            ReportError: if the task is not completed or the download fails.
                The phase stays COMPLETED.
        """
        task = self._task
        if task.phase is not Phase.COMPLETED or task.task_id is None:
            raise ReportError("A report is only available for a completed analysis")
        generation, task_id = self._generation, task.task_id

        try:
            report = await self._api.get_report(task_id)
        except ApiError as exc:
            if not self._is_current(generation, task_id):
                Log.debug("Discarding stale report failure", task_id=task_id)
                return None
            message = self._describe(exc, REPORT_FAILED)
            self._report_failed(task_id, message)
            raise ReportError(message) from exc

        if not self._is_current(generation, task_id):
            Log.debug("Discarding stale report response", task_id=task_id)
            return None

        try:
            location = self._report_saver.save(report_filename(task_id), report)
        except OSError as exc:
            message = f"{REPORT_FAILED}: {exc}"
            self._report_failed(task_id, message)
            raise ReportError(message) from exc

        Log.info("Report saved", task_id=task_id, location=location)
        if self._task.error is not None and self._task.error.kind is ErrorKind.REPORT:
            self._publish(replace(self._task, error=None))
        return location

    def reset(self) -> Task:
        """Return to IDLE from any phase, clearing every field."""
        self._cancel_pending_poll()
        self._generation += 1
        self._poll_generation = None
        self._polls = 0
        self._publish(Task())
        return self._task

    async def wait_until_settled(self) -> Task:
        """Wait until the task is COMPLETED, FAILED or back to IDLE."""
        if not self._task.phase.is_active:
            return self._task
        settled: asyncio.Future[Task] = asyncio.get_running_loop().create_future()

        def on_change(task: Task) -> None:
            if not task.phase.is_active and not settled.done():
                settled.set_result(task)

        unsubscribe = self.subscribe(on_change)
        try:
            return await settled
        finally:
            unsubscribe()

    async def aclose(self) -> None:
        self._cancel_pending_poll()
        await self._api.aclose()

    async def _poll_once(self, generation: int, task_id: str) -> None:
        try:
            status = await self._api.get_status(task_id)
        except ApiError as exc:
            if self._is_current(generation, task_id):
                self._fail(ErrorKind.POLL, self._describe(exc, STATUS_FAILED))
            else:
                Log.debug("Discarding stale status failure", task_id=task_id)
            return

        if not self._is_current(generation, task_id):
            Log.debug("Discarding stale status response", task_id=task_id)
            return

        progress = self._task.progress if status.progress is None else status.progress
        message = self._task.message if status.message is None else status.message

        if status.status == "completed":
            await self._fetch_result(generation, task_id, progress, message)
        elif status.status == "failed":
            self._fail(
                ErrorKind.REMOTE_ANALYSIS,
                status.message or ANALYSIS_FAILED,
                progress=progress,
                message=message,
            )
        else:
            self._publish(replace(self._task, progress=progress, message=message))
            if self._max_poll_attempts and self._polls >= self._max_poll_attempts:
                self._fail(
                    ErrorKind.POLL_TIMEOUT,
                    f"Analysis did not finish after {self._polls} status checks",
                )
            else:
                self._schedule_poll(self._poll_interval)

    async def _fetch_result(
        self, generation: int, task_id: str, progress: int, message: str
    ) -> None:
        try:
            result = await self._api.get_result(task_id)
        except ApiError as exc:
            if self._is_current(generation, task_id):
                self._fail(
                    ErrorKind.RESULT_FETCH,
                    self._describe(exc, RESULT_FAILED),
                    progress=progress,
                    message=message,
                )
            return

        if not self._is_current(generation, task_id):
            Log.debug("Discarding stale result response", task_id=task_id)
            return
        self._publish(
            replace(
                self._task,
                phase=Phase.COMPLETED,
                result=result,
                progress=progress,
                message=message,
            )
        )

    def _schedule_poll(self, delay: float) -> None:
        self._cancel_pending_poll()
        Log.debug("Poll scheduled", task_id=self._task.task_id, delay=delay)
        self._pending_poll = self._scheduler.call_later(delay, self._run_scheduled_poll)

    async def _run_scheduled_poll(self) -> None:
        self._pending_poll = None
        await self.poll()

    def _cancel_pending_poll(self) -> None:
        if self._pending_poll is not None:
            self._pending_poll.cancel()
            self._pending_poll = None

    def _validate(self, file: SelectedFile | None) -> SelectedFile:
        try:
            return check_pdf(file, self._max_upload_size_bytes)
        except InvalidInputError as exc:
            Log.warning("File rejected", reason=str(exc))
            if self._task.phase is Phase.IDLE:
                self._publish(replace(self._task, error=TaskError(exc.kind, str(exc))))
            raise

    def _ensure_not_running(self) -> None:
        if self._task.phase.is_active:
            raise TaskInProgressError(
                f"Task {self._task.task_id or '(uploading)'} is still {self._task.phase.value}"
            )

    def _is_current(self, generation: int, task_id: str | None = None) -> bool:
        if generation != self._generation:
            return False
        return task_id is None or self._task.task_id == task_id

    def _report_failed(self, task_id: str, message: str) -> None:
        self._publish(replace(self._task, error=TaskError(ErrorKind.REPORT, message)))
        Log.warning("Report download failed", task_id=task_id, reason=message)

    def _fail(self, kind: ErrorKind, message: str, /, **changes: Any) -> None:
        Log.warning("Task failed", task_id=self._task.task_id, kind=kind.value, reason=message)
        self._publish(
            replace(self._task, phase=Phase.FAILED, error=TaskError(kind, message), **changes)
        )

    def _publish(self, task: Task) -> None:
        previous = self._task
        self._task = task
        if previous.phase is not task.phase:
            Log.info(
                "Phase changed",
                task_id=task.task_id,
                phase=f"{previous.phase.value}->{task.phase.value}",
            )
        for listener in list(self._listeners):
            listener(task)

    @staticmethod
    def _describe(exc: ApiError, fallback: str) -> str:
        if isinstance(exc, ApiResponseError):
            return exc.server_message or fallback
        return f"{fallback}: {exc}"


def build_task_client(
    settings: Settings,
    *,
    api: BaseAnalysisApi | None = None,
    scheduler: BaseScheduler | None = None,
    report_dir: Path | None = None,
) -> TaskClient:
    """Build a TaskClient with the adapters selected by settings."""
    return TaskClient(
        api=api if api is not None else AnalysisApiFactory.create(settings),
        scheduler=scheduler if scheduler is not None else AsyncioScheduler(),
        report_saver=FileReportSaver(
            report_dir if report_dir is not None else Path(settings.report_dir)
        ),
        poll_interval_seconds=settings.poll_interval_seconds,
        max_poll_attempts=settings.max_poll_attempts,
        max_upload_size_bytes=settings.max_upload_size_mb * 1024 * 1024,
    )
