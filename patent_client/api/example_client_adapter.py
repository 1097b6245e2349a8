"""Example analysis service adapter.

Use this module as a reference when implementing new service adapters.
Implement BaseAnalysisApi and register the backend in AnalysisApiFactory.
"""

import itertools
from typing import Any, ClassVar

from patent_client.api.client_base import BaseAnalysisApi
from patent_client.api.exceptions import ApiResponseError
from patent_client.api.models import AnalysisResult, StatusResponse
from patent_client.api.validator import build_analysis_result
from patent_client.task.models import SelectedFile


class ExampleAnalysisApi(BaseAnalysisApi):
    """Adapter that simulates a job finishing after a few status checks.

    No network calls. Useful for local development and demos.
    """

    DEFAULT_RESULT: ClassVar[dict[str, Any]] = {
        "analysis_summary": {
            "total_compounds": 2,
            "total_structures": 1,
            "pages_processed": 1,
            "images_extracted": 1,
            "patent_strength": "medium",
            "novelty_assessment": "Requires prior-art search",
            "compound_types": ["aromatic"],
        },
        "chemical_formulas": ["C6H6", "C2H5OH"],
        "structure_image_pairs": [
            {
                "smiles": "c1ccccc1",
                "description": "Benzene",
                "molecular_weight": 78.11,
                "confidence": 0.9,
                "image_data": {
                    "format": "png",
                    "base64": "",
                    "page": 1,
                    "width": 64,
                    "height": 64,
                },
            }
        ],
        "claims_analysis": {
            "total_claims": 1,
            "independent_claims": ["1"],
            "dependent_claims": [],
            "claim_structure": {"complexity_score": 1.0},
            "technical_scope": "Aromatic solvents",
            "key_features": ["A benzene-based solvent"],
            "chemical_compounds_in_claims": ["benzene"],
        },
        "patent_elements": {
            "title": "Example patent",
            "abstract": None,
            "inventors": None,
            "claims": "1. A solvent comprising benzene.",
        },
    }

    def __init__(self, polls_until_complete: int = 3) -> None:
        self._polls_until_complete = max(1, polls_until_complete)
        self._ids = itertools.count(1)
        self._polls: dict[str, int] = {}

    async def upload(self, file: SelectedFile) -> str:
        task_id = f"example-{next(self._ids)}"
        self._polls[task_id] = 0
        return task_id

    async def get_status(self, task_id: str) -> StatusResponse:
        polls = self._require(task_id) + 1
        self._polls[task_id] = polls
        if polls >= self._polls_until_complete:
            return StatusResponse(status="completed", progress=100, message="Analysis complete")
        progress = polls * 100 // self._polls_until_complete
        return StatusResponse(status="processing", progress=progress, message="Analyzing")

    async def get_result(self, task_id: str) -> AnalysisResult:
        self._require(task_id)
        return build_analysis_result({"result": self.DEFAULT_RESULT})

    async def get_report(self, task_id: str) -> Any:
        self._require(task_id)
        return {"task_id": task_id, "result": self.DEFAULT_RESULT}

    def _require(self, task_id: str) -> int:
        if task_id not in self._polls:
            raise ApiResponseError(404, "Task not found")
        return self._polls[task_id]
