import mimetypes
from pathlib import Path

from patent_client.task.exceptions import InvalidInputError
from patent_client.task.models import SelectedFile

PDF_CONTENT_TYPE = "application/pdf"
PDF_MAGIC = b"%PDF-"


def check_pdf(file: SelectedFile | None, max_size_bytes: int | None = None) -> SelectedFile:
    """Reject anything that is not a non-empty PDF by type and content.

    Raises:
        InvalidInputError: with a user-facing reason.
    """
    if file is None:
        raise InvalidInputError("Please select a PDF file")
    if file.content_type.lower() != PDF_CONTENT_TYPE:
        raise InvalidInputError("Please select a PDF file")
    if not file.content:
        raise InvalidInputError(f"'{file.filename}' is empty")
    if not file.content.startswith(PDF_MAGIC):
        raise InvalidInputError(f"'{file.filename}' is not a PDF document")
    if max_size_bytes is not None and file.size_bytes > max_size_bytes:
        limit_mb = max_size_bytes // (1024 * 1024)
        raise InvalidInputError(
            f"'{file.filename}' exceeds the maximum file size of {limit_mb}MB"
        )
    return file


class FileLoader:
    """Reads a local file into a SelectedFile ready for upload."""

    def load(self, path: Path) -> SelectedFile:
        """Read file bytes from disk.

        Raises:
            FileNotFoundError: if the file does not exist.
        """
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        return SelectedFile(
            filename=path.name,
            content_type=self._guess_content_type(path),
            content=path.read_bytes(),
        )

    @staticmethod
    def _guess_content_type(path: Path) -> str:
        content_type, _ = mimetypes.guess_type(path.name)
        return content_type or "application/octet-stream"
