import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any


def report_filename(task_id: str) -> str:
    """Build the report file name: patent_analysis_report_{task_id}.json"""
    safe_id = "".join(ch if ch.isalnum() or ch in "-_." else "_" for ch in task_id)
    return f"patent_analysis_report_{safe_id}.json"


def serialize_report(report: Any) -> str:
    return json.dumps(report, indent=2, ensure_ascii=False)


class BaseReportSaver(ABC):
    """Contract for persisting a downloaded report."""

    @abstractmethod
    def save(self, filename: str, report: Any) -> str:
        """Store the report and return where it was saved.

        Raises:
            OSError: if the report cannot be written.
        """


class FileReportSaver(BaseReportSaver):
    """Writes reports as pretty-printed JSON files into a directory."""

    def __init__(self, directory: Path) -> None:
        self._directory = directory

    def save(self, filename: str, report: Any) -> str:
        self._directory.mkdir(parents=True, exist_ok=True)
        path = self._directory / filename
        path.write_text(serialize_report(report), encoding="utf-8")
        return str(path)
