from patent_client.task.models import ErrorKind


class TaskClientError(Exception):
    """Base exception for all task-client errors."""

    kind: ErrorKind


class InvalidInputError(TaskClientError):
    """Raised when the selected file is missing or not an acceptable PDF."""

    kind = ErrorKind.INVALID_INPUT


class UploadError(TaskClientError):
    """Raised when the upload request fails."""

    kind = ErrorKind.UPLOAD


class PollError(TaskClientError):
    """Raised when a status query fails or returns an unreadable body."""

    kind = ErrorKind.POLL


class PollTimeoutError(TaskClientError):
    """Raised when a task stays unfinished past the poll limit."""

    kind = ErrorKind.POLL_TIMEOUT


class RemoteAnalysisError(TaskClientError):
    """Raised when the server reports that the analysis job failed."""

    kind = ErrorKind.REMOTE_ANALYSIS


class ResultFetchError(TaskClientError):
    """Raised when the result of a completed task cannot be fetched."""

    kind = ErrorKind.RESULT_FETCH


class ReportError(TaskClientError):
    """Raised when the report cannot be downloaded or saved."""

    kind = ErrorKind.REPORT


class TaskInProgressError(TaskClientError):
    """Raised when a new upload is started while a task is still running."""
