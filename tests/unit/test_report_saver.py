import json
from pathlib import Path

from patent_client.task.report_saver import FileReportSaver, report_filename, serialize_report


class TestReportFilename:
    def test_named_after_task_id(self) -> None:
        assert report_filename("abc123") == "patent_analysis_report_abc123.json"

    def test_unsafe_characters_are_replaced(self) -> None:
        assert report_filename("../x y") == "patent_analysis_report_.._x_y.json"


class TestFileReportSaver:
    def test_writes_pretty_json(self, tmp_path: Path) -> None:
        report = {"title": "化學專利", "counts": {"claims": 3}}
        saver = FileReportSaver(tmp_path / "reports")

        location = saver.save("r.json", report)

        path = Path(location)
        assert path == tmp_path / "reports" / "r.json"
        text = path.read_text(encoding="utf-8")
        assert text == serialize_report(report)
        assert "化學專利" in text
        assert text.startswith('{\n  "title"')
        assert json.loads(text) == report
