from patent_client.presenter.views import ResultView


def render_text(view: ResultView) -> str:
    """Render a ResultView as plain text for the console."""
    if not view.has_result:
        return "No analysis result available."

    lines = ["Analysis summary"]
    lines.extend(f"  {tile.label}: {tile.value}" for tile in view.tiles)

    lines.append("Chemical formulas")
    lines.append("  " + (", ".join(view.formulas) if view.formulas else "-"))

    lines.append("Structures")
    if not view.structures:
        lines.append("  -")
    for index, structure in enumerate(view.structures, start=1):
        lines.append(f"  {index}. {structure.smiles} ({structure.description})")
        lines.append(
            f"     weight {structure.molecular_weight}, confidence {structure.confidence}"
        )
        if structure.image_caption:
            lines.append(f"     {structure.image_caption}")

    claims = view.claims
    lines.append("Claims")
    lines.append(
        f"  total {claims.total_claims}, independent {claims.independent_claims}, "
        f"dependent {claims.dependent_claims}, complexity {claims.complexity_score}"
    )
    lines.append(f"  scope: {claims.technical_scope}")
    lines.extend(f"  - {feature}" for feature in claims.key_features)
    if claims.compounds:
        lines.append("  compounds: " + ", ".join(claims.compounds))

    lines.append("Patent elements")
    lines.extend(f"  {element.label}: {element.text}" for element in view.elements)

    assessment = view.assessment
    lines.append("Assessment")
    lines.append(f"  strength: {assessment.patent_strength}")
    lines.append(f"  novelty: {assessment.novelty_assessment}")
    if assessment.compound_types:
        lines.append("  compound types: " + ", ".join(assessment.compound_types))
    return "\n".join(lines)
