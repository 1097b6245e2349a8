from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class StatusResponse:
    """One answer of the status endpoint."""

    status: str
    progress: int | None = None
    message: str | None = None


@dataclass(frozen=True)
class ImageRecord:
    """Embedded image a structure was recognized from."""

    format: str | None = None
    base64: str | None = None
    page: int | None = None
    width: int | None = None
    height: int | None = None


@dataclass(frozen=True)
class StructureImagePair:
    """A recognized structure and the image it came from."""

    smiles: str | None = None
    description: str | None = None
    molecular_weight: float | None = None
    confidence: float | None = None
    image: ImageRecord | None = None


@dataclass(frozen=True)
class AnalysisSummary:
    total_compounds: int | None = None
    total_structures: int | None = None
    pages_processed: int | None = None
    images_extracted: int | None = None
    patent_strength: str | None = None
    novelty_assessment: str | None = None
    compound_types: tuple[str, ...] = ()


@dataclass(frozen=True)
class ClaimsAnalysis:
    total_claims: int | None = None
    independent_claims: tuple[str, ...] = ()
    dependent_claims: tuple[str, ...] = ()
    complexity_score: float | None = None
    technical_scope: str | None = None
    key_features: tuple[str, ...] = ()
    chemical_compounds: tuple[str, ...] = ()


@dataclass(frozen=True)
class AnalysisResult:
    """Terminal payload of a completed analysis task.

    Sections the server left out stay ``None`` (or empty); defaults for
    display are applied by the presenter, not here.
    """

    analysis_summary: AnalysisSummary | None = None
    chemical_formulas: tuple[str, ...] = ()
    structure_image_pairs: tuple[StructureImagePair, ...] = ()
    claims_analysis: ClaimsAnalysis | None = None
    patent_elements: Mapping[str, str | None] | None = None

    def __post_init__(self) -> None:
        if self.patent_elements is not None and not isinstance(
            self.patent_elements, MappingProxyType
        ):
            object.__setattr__(
                self, "patent_elements", MappingProxyType(dict(self.patent_elements))
            )


PATENT_ELEMENT_NAMES: tuple[str, ...] = ("title", "abstract", "inventors", "claims")
