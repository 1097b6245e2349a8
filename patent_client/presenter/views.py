from dataclasses import dataclass


@dataclass(frozen=True)
class CountTile:
    label: str
    value: str


@dataclass(frozen=True)
class StructureView:
    smiles: str
    description: str
    molecular_weight: str
    confidence: str
    image_src: str | None
    image_caption: str


@dataclass(frozen=True)
class ClaimsView:
    total_claims: str
    independent_claims: str
    dependent_claims: str
    complexity_score: str
    technical_scope: str
    key_features: tuple[str, ...] = ()
    compounds: tuple[str, ...] = ()


@dataclass(frozen=True)
class ElementView:
    name: str
    label: str
    text: str


@dataclass(frozen=True)
class AssessmentView:
    patent_strength: str
    strength_badge: str
    novelty_assessment: str
    compound_types: tuple[str, ...] = ()


@dataclass(frozen=True)
class ResultView:
    """Everything needed to render a finished analysis."""

    has_result: bool
    tiles: tuple[CountTile, ...]
    formulas: tuple[str, ...]
    structures: tuple[StructureView, ...]
    claims: ClaimsView
    elements: tuple[ElementView, ...]
    assessment: AssessmentView
