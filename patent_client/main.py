import argparse
import asyncio
import sys
from pathlib import Path

from patent_client.config.settings import Settings
from patent_client.logging.logger import Log
from patent_client.presenter.presenter import ResultPresenter
from patent_client.presenter.text_renderer import render_text
from patent_client.task.client import TaskClient, build_task_client
from patent_client.task.exceptions import InvalidInputError, ReportError
from patent_client.task.file_loader import FileLoader
from patent_client.task.models import Phase, Task


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="patent-client",
        description="Analyze a chemical patent PDF with the remote analysis service.",
    )
    parser.add_argument("pdf", type=Path, help="Path to the patent PDF")
    parser.add_argument(
        "--download-report",
        action="store_true",
        help="Save the full JSON report once the analysis completes",
    )
    parser.add_argument("--report-dir", type=Path, default=None)
    return parser.parse_args(argv)


def _print_progress(task: Task) -> None:
    if task.phase is Phase.PROCESSING:
        print(f"[{task.progress:>3}%] {task.message}", flush=True)


async def run(client: TaskClient, pdf: Path, download_report: bool) -> int:
    """Analyze one file; returns the process exit code."""
    unsubscribe = client.subscribe(_print_progress)
    try:
        try:
            await client.start(FileLoader().load(pdf))
        except (FileNotFoundError, InvalidInputError) as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        task = await client.wait_until_settled()
    finally:
        unsubscribe()

    if task.phase is not Phase.COMPLETED:
        message = task.error.message if task.error else "Analysis did not complete"
        print(f"Analysis failed: {message}", file=sys.stderr)
        return 1

    print(render_text(ResultPresenter().project(task)))
    if download_report:
        try:
            location = await client.download_report()
        except ReportError as exc:
            print(f"Report download failed: {exc}", file=sys.stderr)
            return 1
        print(f"Report saved to {location}")
    return 0


async def _main(args: argparse.Namespace, settings: Settings) -> int:
    client = build_task_client(settings, report_dir=args.report_dir)
    try:
        return await run(client, args.pdf, args.download_report)
    finally:
        await client.aclose()


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> build client -> analyze one PDF."""
    args = _parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)
    return asyncio.run(_main(args, settings))


if __name__ == "__main__":
    sys.exit(main())
