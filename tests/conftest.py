import io
from typing import Any

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from patent_client.task.models import SelectedFile


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "1. A compound of formula C6H6.")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def pdf_file(sample_pdf_bytes: bytes) -> SelectedFile:
    return SelectedFile(
        filename="patent.pdf",
        content_type="application/pdf",
        content=sample_pdf_bytes,
    )


@pytest.fixture()
def large_pdf_file(sample_pdf_bytes: bytes) -> SelectedFile:
    """A 2 MB upload: a real PDF padded with trailing bytes."""
    padding = b"\n%" + b"0" * (2 * 1024 * 1024 - len(sample_pdf_bytes) - 2)
    return SelectedFile(
        filename="large.pdf",
        content_type="application/pdf",
        content=sample_pdf_bytes + padding,
    )


@pytest.fixture()
def result_payload() -> dict[str, Any]:
    """A complete result body as returned by the analyze endpoint."""
    return {
        "analysis_summary": {
            "total_compounds": 12,
            "total_structures": 3,
            "pages_processed": 8,
            "images_extracted": 5,
            "patent_strength": "高",
            "novelty_assessment": "Novel scaffold",
            "compound_types": ["heterocycle", "ester"],
        },
        "chemical_formulas": ["C6H6", "C8H10N4O2"],
        "structure_image_pairs": [
            {
                "smiles": "CN1C=NC2=C1C(=O)N(C(=O)N2C)C",
                "description": "Caffeine",
                "molecular_weight": 194.19,
                "confidence": 0.873,
                "image_data": {
                    "format": "png",
                    "base64": "iVBORw0KGgo=",
                    "page": 4,
                    "width": 320,
                    "height": 240,
                },
            }
        ],
        "claims_analysis": {
            "total_claims": 10,
            "independent_claims": ["1", "7"],
            "dependent_claims": ["2", "3", "4", "5", "6", "8", "9", "10"],
            "claim_structure": {"complexity_score": 6.25},
            "technical_scope": "Xanthine derivatives for CNS stimulation",
            "key_features": ["f1", "f2", "f3", "f4", "f5", "f6"],
            "chemical_compounds_in_claims": ["caffeine", "theophylline"],
        },
        "patent_elements": {
            "title": "Xanthine compounds",
            "abstract": "Compounds of formula (I)...",
            "inventors": None,
            "claims": "1. A compound...",
        },
    }
