from typing import Any
from urllib.parse import quote

import httpx

from patent_client.api.client_base import BaseAnalysisApi
from patent_client.api.exceptions import ApiNetworkError, ApiPayloadError, ApiResponseError
from patent_client.api.models import AnalysisResult, StatusResponse
from patent_client.api.validator import (
    build_analysis_result,
    build_status,
    error_message,
    extract_task_id,
)
from patent_client.task.models import SelectedFile

_NOT_JSON = object()


class HttpxAnalysisApi(BaseAnalysisApi):
    """Analysis service adapter built on httpx.AsyncClient."""

    def __init__(
        self,
        *,
        base_url: str,
        api_prefix: str = "/api/patent",
        timeout_seconds: float = 30,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._prefix = "/" + api_prefix.strip("/")
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout_seconds,
            transport=transport,
        )

    async def upload(self, file: SelectedFile) -> str:
        body = await self._request(
            "POST",
            "/upload",
            files={"file": (file.filename, file.content, file.content_type)},
        )
        return extract_task_id(body)

    async def get_status(self, task_id: str) -> StatusResponse:
        body = await self._request("GET", f"/status/{quote(task_id, safe='')}")
        return build_status(body)

    async def get_result(self, task_id: str) -> AnalysisResult:
        body = await self._request("GET", f"/analyze/{quote(task_id, safe='')}")
        return build_analysis_result(body)

    async def get_report(self, task_id: str) -> Any:
        return await self._request(
            "GET", f"/report/{quote(task_id, safe='')}", expect_object=False
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self, method: str, path: str, *, expect_object: bool = True, **kwargs: Any
    ) -> Any:
        url = f"{self._prefix}{path}"
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as exc:
            raise ApiNetworkError(f"Request to {url} timed out") from exc
        except httpx.DecodingError as exc:
            raise ApiPayloadError(f"Response from {url} could not be decoded: {exc}") from exc
        except httpx.RequestError as exc:
            raise ApiNetworkError(f"Request to {url} failed: {exc}") from exc

        body = self._decode(response)
        if not response.is_success:
            raise ApiResponseError(response.status_code, error_message(body))
        if body is _NOT_JSON:
            raise ApiPayloadError(f"Response from {url} is not valid JSON")
        if expect_object and not isinstance(body, dict):
            raise ApiPayloadError(f"Response from {url} is not a JSON object")
        return body

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return _NOT_JSON
