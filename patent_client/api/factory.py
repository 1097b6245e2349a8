from typing import ClassVar

from patent_client.api.client_base import BaseAnalysisApi
from patent_client.api.example_client_adapter import ExampleAnalysisApi
from patent_client.api.httpx_client_adapter import HttpxAnalysisApi
from patent_client.config.settings import Settings


class AnalysisApiFactory:
    """Creates the configured analysis service adapter."""

    BACKENDS: ClassVar[tuple[str, ...]] = ("http", "example")

    @classmethod
    def create(cls, settings: Settings) -> BaseAnalysisApi:
        backend = settings.api_backend.lower()
        if backend == "example":
            return ExampleAnalysisApi()
        if backend == "http":
            base_url = settings.api_base_url.strip()
            if not base_url:
                raise ValueError("api_base_url is required for api_backend=http")
            return HttpxAnalysisApi(
                base_url=base_url,
                api_prefix=settings.api_prefix,
                timeout_seconds=settings.http_timeout_seconds,
            )
        raise ValueError(
            f"Unknown api backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
