from collections.abc import Callable
from typing import Any

import httpx
import pytest

from patent_client.api.exceptions import ApiNetworkError, ApiPayloadError, ApiResponseError
from patent_client.api.httpx_client_adapter import HttpxAnalysisApi
from patent_client.task.models import SelectedFile

Handler = Callable[[httpx.Request], httpx.Response]


def _make_api(handler: Handler, api_prefix: str = "/api/patent") -> HttpxAnalysisApi:
    return HttpxAnalysisApi(
        base_url="http://analyzer.test",
        api_prefix=api_prefix,
        transport=httpx.MockTransport(handler),
    )


def _json(status_code: int, body: Any) -> Handler:
    return lambda request: httpx.Response(status_code, json=body)


class TestUpload:
    @pytest.mark.asyncio
    async def test_posts_multipart_file(self, pdf_file: SelectedFile) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"task_id": "abc123"})

        api = _make_api(handler)
        task_id = await api.upload(pdf_file)

        assert task_id == "abc123"
        request = seen[0]
        assert request.method == "POST"
        assert request.url.path == "/api/patent/upload"
        assert request.headers["content-type"].startswith("multipart/form-data")
        body = request.content
        assert b'name="file"; filename="patent.pdf"' in body
        assert pdf_file.content in body

    @pytest.mark.asyncio
    async def test_error_body_is_surfaced(self, pdf_file: SelectedFile) -> None:
        api = _make_api(_json(500, {"error": "server overloaded"}))

        with pytest.raises(ApiResponseError, match="server overloaded") as exc_info:
            await api.upload(pdf_file)

        assert exc_info.value.status_code == 500
        assert exc_info.value.server_message == "server overloaded"

    @pytest.mark.asyncio
    async def test_error_without_json_body(self, pdf_file: SelectedFile) -> None:
        api = _make_api(lambda request: httpx.Response(502, text="Bad Gateway"))

        with pytest.raises(ApiResponseError) as exc_info:
            await api.upload(pdf_file)

        assert exc_info.value.server_message is None
        assert str(exc_info.value) == "HTTP 502"

    @pytest.mark.asyncio
    async def test_missing_task_id(self, pdf_file: SelectedFile) -> None:
        api = _make_api(_json(200, {"ok": True}))

        with pytest.raises(ApiPayloadError, match="task_id"):
            await api.upload(pdf_file)


class TestStatusAndResult:
    @pytest.mark.asyncio
    async def test_status_path_and_body(self) -> None:
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.path)
            return httpx.Response(
                200, json={"status": "processing", "progress": 40, "message": "running OCR"}
            )

        status = await _make_api(handler).get_status("abc123")

        assert seen == ["/api/patent/status/abc123"]
        assert status.progress == 40

    @pytest.mark.asyncio
    async def test_result_path(self, result_payload: dict[str, Any]) -> None:
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.path)
            return httpx.Response(200, json={"result": result_payload})

        result = await _make_api(handler).get_result("abc123")

        assert seen == ["/api/patent/analyze/abc123"]
        assert result.analysis_summary is not None
        assert result.analysis_summary.total_compounds == 12

    @pytest.mark.asyncio
    async def test_report_is_returned_verbatim(self) -> None:
        report = {"task_id": "abc123", "sections": [{"name": "claims", "items": [1, 2]}]}
        api = _make_api(_json(200, report))

        assert await api.get_report("abc123") == report

    @pytest.mark.asyncio
    async def test_report_may_be_any_json_document(self) -> None:
        api = _make_api(_json(200, [{"page": 1}, {"page": 2}]))

        assert await api.get_report("abc123") == [{"page": 1}, {"page": 2}]

    @pytest.mark.asyncio
    async def test_report_must_be_json(self) -> None:
        api = _make_api(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(ApiPayloadError, match="not valid JSON"):
            await api.get_report("abc123")

    @pytest.mark.asyncio
    async def test_task_id_is_escaped(self) -> None:
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.raw_path.decode())
            return httpx.Response(200, json={"status": "processing"})

        await _make_api(handler).get_status("a/b c")

        assert seen == ["/api/patent/status/a%2Fb%20c"]

    @pytest.mark.asyncio
    async def test_custom_prefix(self) -> None:
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.path)
            return httpx.Response(200, json={"status": "processing"})

        await _make_api(handler, api_prefix="v2/patent/").get_status("t1")

        assert seen == ["/v2/patent/status/t1"]

    @pytest.mark.asyncio
    async def test_non_json_success_body(self) -> None:
        api = _make_api(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(ApiPayloadError, match="not valid JSON"):
            await api.get_status("abc123")

    @pytest.mark.asyncio
    async def test_json_array_body(self) -> None:
        api = _make_api(_json(200, ["processing"]))

        with pytest.raises(ApiPayloadError):
            await api.get_status("abc123")


class TestTransportErrors:
    @pytest.mark.asyncio
    async def test_connect_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ApiNetworkError, match="failed"):
            await _make_api(handler).get_status("abc123")

    @pytest.mark.asyncio
    async def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("too slow", request=request)

        with pytest.raises(ApiNetworkError, match="timed out"):
            await _make_api(handler).get_status("abc123")

    @pytest.mark.asyncio
    async def test_corrupt_compressed_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                headers={"Content-Encoding": "gzip"},
                stream=httpx.ByteStream(b"definitely not gzip"),
            )

        with pytest.raises(ApiPayloadError, match="could not be decoded"):
            await _make_api(handler).get_status("abc123")

    @pytest.mark.asyncio
    async def test_other_request_errors(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.TooManyRedirects("Exceeded maximum allowed redirects.", request=request)

        with pytest.raises(ApiNetworkError, match="Exceeded maximum allowed redirects"):
            await _make_api(handler).get_status("abc123")
