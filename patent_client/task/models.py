from dataclasses import dataclass, field
from enum import Enum

from patent_client.api.models import AnalysisResult


class Phase(str, Enum):
    IDLE = "idle"
    UPLOADING = "uploading"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (Phase.COMPLETED, Phase.FAILED)

    @property
    def is_active(self) -> bool:
        return self in (Phase.UPLOADING, Phase.PROCESSING)


class ErrorKind(str, Enum):
    INVALID_INPUT = "InvalidInput"
    UPLOAD = "UploadError"
    POLL = "PollError"
    POLL_TIMEOUT = "PollTimeout"
    REMOTE_ANALYSIS = "RemoteAnalysisError"
    RESULT_FETCH = "ResultFetchError"
    REPORT = "ReportError"


@dataclass(frozen=True)
class TaskError:
    """User-visible error attached to a task."""

    kind: ErrorKind
    message: str


@dataclass(frozen=True)
class SelectedFile:
    """A file picked by the user for upload."""

    filename: str
    content_type: str
    content: bytes = field(repr=False)

    @property
    def size_bytes(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class Task:
    """Snapshot of the single task tracked by a TaskClient.

    Snapshots are immutable; the client publishes a new one on every change.
    """

    phase: Phase = Phase.IDLE
    task_id: str | None = None
    progress: int = 0
    message: str = ""
    error: TaskError | None = None
    result: AnalysisResult | None = None
    file: SelectedFile | None = None
