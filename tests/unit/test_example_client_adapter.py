import pytest

from patent_client.api.client_base import BaseAnalysisApi
from patent_client.api.example_client_adapter import ExampleAnalysisApi
from patent_client.api.exceptions import ApiResponseError
from patent_client.task.models import SelectedFile


class TestExampleAnalysisApi:
    def test_is_analysis_api(self) -> None:
        assert isinstance(ExampleAnalysisApi(), BaseAnalysisApi)

    @pytest.mark.asyncio
    async def test_completes_after_configured_polls(self, pdf_file: SelectedFile) -> None:
        api = ExampleAnalysisApi(polls_until_complete=3)
        task_id = await api.upload(pdf_file)

        statuses = [(await api.get_status(task_id)).status for _ in range(3)]

        assert statuses == ["processing", "processing", "completed"]

    @pytest.mark.asyncio
    async def test_progress_increases(self, pdf_file: SelectedFile) -> None:
        api = ExampleAnalysisApi(polls_until_complete=4)
        task_id = await api.upload(pdf_file)

        progress = [(await api.get_status(task_id)).progress for _ in range(4)]

        assert progress == [25, 50, 75, 100]

    @pytest.mark.asyncio
    async def test_assigns_distinct_ids(self, pdf_file: SelectedFile) -> None:
        api = ExampleAnalysisApi()
        assert await api.upload(pdf_file) != await api.upload(pdf_file)

    @pytest.mark.asyncio
    async def test_result_and_report(self, pdf_file: SelectedFile) -> None:
        api = ExampleAnalysisApi()
        task_id = await api.upload(pdf_file)

        result = await api.get_result(task_id)
        report = await api.get_report(task_id)

        assert result.chemical_formulas == ("C6H6", "C2H5OH")
        assert report["task_id"] == task_id

    @pytest.mark.asyncio
    async def test_unknown_task_is_not_found(self) -> None:
        with pytest.raises(ApiResponseError, match="Task not found"):
            await ExampleAnalysisApi().get_status("nope")
