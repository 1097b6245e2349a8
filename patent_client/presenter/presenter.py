"""Read-only projection of a task's analysis result into a view model."""

from collections.abc import Mapping

from patent_client.api.models import (
    PATENT_ELEMENT_NAMES,
    AnalysisResult,
    AnalysisSummary,
    ClaimsAnalysis,
    ImageRecord,
    StructureImagePair,
)
from patent_client.presenter.views import (
    AssessmentView,
    ClaimsView,
    CountTile,
    ElementView,
    ResultView,
    StructureView,
)
from patent_client.task.models import Task

MISSING_ELEMENT = "No information found"
MISSING_SCOPE = "Technical scope analysis pending"
MISSING_STRENGTH = "Not assessed"
MISSING_NOVELTY = "Needs further assessment"
UNKNOWN = "Unknown"

_ELEMENT_LABELS = {
    "title": "Title",
    "abstract": "Abstract",
    "inventors": "Inventors",
    "claims": "Claims",
}
_HIGH_STRENGTH = frozenset({"high", "高"})
_MEDIUM_STRENGTH = frozenset({"medium", "moderate", "中等", "中"})
_MAX_KEY_FEATURES = 5


class ResultPresenter:
    """Projects a Task into a ResultView.

    Never mutates its input and never raises: absent data is rendered as
    zero counts, empty lists or placeholder text.
    """

    def project(self, task: Task) -> ResultView:
        result = task.result if task.result is not None else AnalysisResult()
        summary = result.analysis_summary or AnalysisSummary()
        claims = result.claims_analysis or ClaimsAnalysis()
        return ResultView(
            has_result=task.result is not None,
            tiles=self._tiles(summary),
            formulas=result.chemical_formulas,
            structures=tuple(self._structure(p) for p in result.structure_image_pairs),
            claims=self._claims(claims),
            elements=self._elements(result.patent_elements),
            assessment=self._assessment(summary),
        )

    @staticmethod
    def _tiles(summary: AnalysisSummary) -> tuple[CountTile, ...]:
        return (
            CountTile("Compounds", _count(summary.total_compounds)),
            CountTile("Structures", _count(summary.total_structures)),
            CountTile("Pages processed", _count(summary.pages_processed)),
            CountTile("Images extracted", _count(summary.images_extracted)),
        )

    def _structure(self, pair: StructureImagePair) -> StructureView:
        return StructureView(
            smiles=pair.smiles or "",
            description=pair.description or UNKNOWN,
            molecular_weight=(
                f"{pair.molecular_weight} g/mol"
                if pair.molecular_weight is not None
                else UNKNOWN
            ),
            confidence=(
                f"{pair.confidence * 100:.1f}%" if pair.confidence is not None else UNKNOWN
            ),
            image_src=self._image_src(pair.image),
            image_caption=self._image_caption(pair.image),
        )

    @staticmethod
    def _image_src(image: ImageRecord | None) -> str | None:
        if image is None or not image.base64:
            return None
        return f"data:image/{image.format or 'png'};base64,{image.base64}"

    @staticmethod
    def _image_caption(image: ImageRecord | None) -> str:
        if image is None:
            return ""
        page = image.page if image.page is not None else "?"
        width = image.width if image.width is not None else "?"
        height = image.height if image.height is not None else "?"
        return f"Page {page} | {width}×{height}"

    @staticmethod
    def _claims(claims: ClaimsAnalysis) -> ClaimsView:
        complexity = claims.complexity_score
        return ClaimsView(
            total_claims=_count(claims.total_claims),
            independent_claims=str(len(claims.independent_claims)),
            dependent_claims=str(len(claims.dependent_claims)),
            complexity_score=f"{complexity:.1f}" if complexity else "0",
            technical_scope=claims.technical_scope or MISSING_SCOPE,
            key_features=claims.key_features[:_MAX_KEY_FEATURES],
            compounds=claims.chemical_compounds,
        )

    @staticmethod
    def _elements(elements: Mapping[str, str | None] | None) -> tuple[ElementView, ...]:
        elements = elements or {}
        names = list(PATENT_ELEMENT_NAMES)
        names.extend(name for name in elements if name not in _ELEMENT_LABELS)
        return tuple(
            ElementView(
                name=name,
                label=_ELEMENT_LABELS.get(name, name.replace("_", " ").capitalize()),
                text=elements.get(name) or MISSING_ELEMENT,
            )
            for name in names
        )

    @staticmethod
    def _assessment(summary: AnalysisSummary) -> AssessmentView:
        strength = summary.patent_strength
        return AssessmentView(
            patent_strength=strength or MISSING_STRENGTH,
            strength_badge=_strength_badge(strength),
            novelty_assessment=summary.novelty_assessment or MISSING_NOVELTY,
            compound_types=summary.compound_types,
        )


def _count(value: int | None) -> str:
    return str(value) if value else "0"


def _strength_badge(strength: str | None) -> str:
    normalized = (strength or "").strip().lower()
    if normalized in _HIGH_STRENGTH:
        return "default"
    if normalized in _MEDIUM_STRENGTH:
        return "secondary"
    return "outline"
