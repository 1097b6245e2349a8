from abc import ABC, abstractmethod
from typing import Any

from patent_client.api.models import AnalysisResult, StatusResponse
from patent_client.task.models import SelectedFile


class BaseAnalysisApi(ABC):
    """Contract for adapters talking to the patent analysis service.

    Every method raises an ``ApiError`` subclass on failure.
    """

    @abstractmethod
    async def upload(self, file: SelectedFile) -> str:
        """Submit a PDF and return the server-assigned task id."""

    @abstractmethod
    async def get_status(self, task_id: str) -> StatusResponse:
        """Return the current status of a task."""

    @abstractmethod
    async def get_result(self, task_id: str) -> AnalysisResult:
        """Return the analysis result of a completed task."""

    @abstractmethod
    async def get_report(self, task_id: str) -> Any:
        """Return the full report document of a completed task, as decoded JSON."""

    async def aclose(self) -> None:
        """Release network resources held by the adapter."""
