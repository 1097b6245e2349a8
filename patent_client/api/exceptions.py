class ApiError(Exception):
    """Base exception for all analysis-service call failures."""


class ApiNetworkError(ApiError):
    """Raised when the service cannot be reached (connection, timeout)."""


class ApiPayloadError(ApiError):
    """Raised when a response body is not JSON or has the wrong shape."""


class ApiResponseError(ApiError):
    """Raised when the service answers with a non-2xx status."""

    def __init__(self, status_code: int, server_message: str | None = None) -> None:
        self.status_code = status_code
        self.server_message = server_message
        super().__init__(server_message or f"HTTP {status_code}")
