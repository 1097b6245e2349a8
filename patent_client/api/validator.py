"""Turns decoded response bodies into API models.

Upload and status bodies are validated strictly since the task lifecycle
depends on them. Result bodies are read leniently: a missing or mistyped
optional field becomes ``None`` so that a partial analysis is still renderable.
"""

from collections.abc import Mapping
from typing import Any

from patent_client.api.exceptions import ApiPayloadError
from patent_client.api.models import (
    AnalysisResult,
    AnalysisSummary,
    ClaimsAnalysis,
    ImageRecord,
    StatusResponse,
    StructureImagePair,
)


def error_message(body: Any) -> str | None:
    """Return the ``error`` string of a failure body, if there is one."""
    if isinstance(body, Mapping):
        message = body.get("error")
        if isinstance(message, str) and message:
            return message
    return None


def extract_task_id(body: Mapping[str, Any]) -> str:
    """Read the server-assigned task id from an upload response.

    Raises:
        ApiPayloadError: if ``task_id`` is missing or empty.
    """
    task_id = body.get("task_id")
    if isinstance(task_id, int) and not isinstance(task_id, bool):
        task_id = str(task_id)
    if not task_id or not isinstance(task_id, str):
        raise ApiPayloadError("Upload response is missing 'task_id'")
    return task_id


def build_status(body: Mapping[str, Any]) -> StatusResponse:
    """Validate a status response.

    Raises:
        ApiPayloadError: on a missing status or mistyped progress/message.
    """
    status = body.get("status")
    if not status or not isinstance(status, str):
        raise ApiPayloadError("'status' must be a non-empty string")
    progress = _build_progress(body.get("progress"))
    message = body.get("message")
    if message is not None and not isinstance(message, str):
        raise ApiPayloadError("'message' must be a string or null")
    return StatusResponse(status=status, progress=progress, message=message)


def _build_progress(raw: Any) -> int | None:
    if raw is None:
        return None
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ApiPayloadError("'progress' must be an integer")
    if isinstance(raw, float):
        if not raw.is_integer():
            raise ApiPayloadError(f"'progress' must be an integer, got {raw!r}")
        return int(raw)
    return raw


def build_analysis_result(body: Mapping[str, Any]) -> AnalysisResult:
    """Build an AnalysisResult from a ``{"result": {...}}`` envelope.

    Raises:
        ApiPayloadError: if ``result`` is missing or not an object.
    """
    raw = body.get("result")
    if not isinstance(raw, Mapping):
        raise ApiPayloadError("'result' must be an object")
    return AnalysisResult(
        analysis_summary=_build_summary(raw),
        chemical_formulas=_str_tuple(raw.get("chemical_formulas")),
        structure_image_pairs=_build_pairs(raw.get("structure_image_pairs")),
        claims_analysis=_build_claims(raw.get("claims_analysis")),
        patent_elements=_build_elements(raw.get("patent_elements")),
    )


def _build_summary(raw: Mapping[str, Any]) -> AnalysisSummary | None:
    summary = raw.get("analysis_summary")
    if not isinstance(summary, Mapping):
        summary = {}
    # Page and image counts are reported next to the summary by some servers.
    pages = _as_int(summary.get("pages_processed"))
    if pages is None:
        pages = _as_int(raw.get("pages_processed"))
    images = _as_int(summary.get("images_extracted"))
    if images is None:
        images = _as_int(raw.get("images_extracted"))
    if not summary and pages is None and images is None:
        return None
    return AnalysisSummary(
        total_compounds=_as_int(summary.get("total_compounds")),
        total_structures=_as_int(summary.get("total_structures")),
        pages_processed=pages,
        images_extracted=images,
        patent_strength=_as_str(summary.get("patent_strength")),
        novelty_assessment=_as_str(summary.get("novelty_assessment")),
        compound_types=_str_tuple(summary.get("compound_types")),
    )


def _build_pairs(raw: Any) -> tuple[StructureImagePair, ...]:
    if not isinstance(raw, list):
        return ()
    return tuple(_build_pair(item) for item in raw if isinstance(item, Mapping))


def _build_pair(raw: Mapping[str, Any]) -> StructureImagePair:
    image = raw.get("image_data")
    return StructureImagePair(
        smiles=_as_str(raw.get("smiles")),
        description=_as_str(raw.get("description")),
        molecular_weight=_as_float(raw.get("molecular_weight")),
        confidence=_as_float(raw.get("confidence")),
        image=_build_image(image) if isinstance(image, Mapping) else None,
    )


def _build_image(raw: Mapping[str, Any]) -> ImageRecord:
    return ImageRecord(
        format=_as_str(raw.get("format")),
        base64=_as_str(raw.get("base64")),
        page=_as_int(raw.get("page")),
        width=_as_int(raw.get("width")),
        height=_as_int(raw.get("height")),
    )


def _build_claims(raw: Any) -> ClaimsAnalysis | None:
    if not isinstance(raw, Mapping):
        return None
    complexity = _as_float(raw.get("complexity_score"))
    structure = raw.get("claim_structure")
    if complexity is None and isinstance(structure, Mapping):
        complexity = _as_float(structure.get("complexity_score"))
    return ClaimsAnalysis(
        total_claims=_as_int(raw.get("total_claims")),
        independent_claims=_str_tuple(raw.get("independent_claims"), keep_all=True),
        dependent_claims=_str_tuple(raw.get("dependent_claims"), keep_all=True),
        complexity_score=complexity,
        technical_scope=_as_str(raw.get("technical_scope")),
        key_features=_str_tuple(raw.get("key_features")),
        chemical_compounds=_str_tuple(raw.get("chemical_compounds_in_claims")),
    )


def _build_elements(raw: Any) -> dict[str, str | None] | None:
    if not isinstance(raw, Mapping):
        return None
    elements: dict[str, str | None] = {}
    for key, value in raw.items():
        if isinstance(value, list):
            value = ", ".join(str(v) for v in value)
        elements[str(key)] = _as_str(value)
    return elements


def _as_int(raw: Any) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    return None


def _as_float(raw: Any) -> float | None:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return None
    return float(raw)


def _as_str(raw: Any) -> str | None:
    return raw if isinstance(raw, str) else None


def _str_tuple(raw: Any, *, keep_all: bool = False) -> tuple[str, ...]:
    """Collect string items of a list; with keep_all, stringify every item."""
    if not isinstance(raw, list):
        return ()
    if keep_all:
        return tuple(item if isinstance(item, str) else str(item) for item in raw)
    return tuple(item for item in raw if isinstance(item, str))
