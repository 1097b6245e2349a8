from typing import Any

from patent_client.api.validator import build_analysis_result
from patent_client.presenter.presenter import ResultPresenter
from patent_client.presenter.text_renderer import render_text
from patent_client.task.models import Phase, Task


class TestRenderText:
    def test_renders_sections(self, result_payload: dict[str, Any]) -> None:
        task = Task(
            phase=Phase.COMPLETED,
            task_id="abc123",
            result=build_analysis_result({"result": result_payload}),
        )

        text = render_text(ResultPresenter().project(task))

        assert "  Compounds: 12" in text
        assert "  C6H6, C8H10N4O2" in text
        assert "  1. CN1C=NC2=C1C(=O)N(C(=O)N2C)C (Caffeine)" in text
        assert "     Page 4 | 320×240" in text
        assert "total 10, independent 2, dependent 8, complexity 6.2" in text
        assert "  Inventors: No information found" in text
        assert "  strength: 高" in text

    def test_without_result(self) -> None:
        text = render_text(ResultPresenter().project(Task()))
        assert text == "No analysis result available."
