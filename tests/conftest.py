"""
Test configuration and fixtures for GenoAI.
"""

import pytest
from typing import Any, Dict, List

from genoai.models.data_classes import (
    CrisprAnalysis,
    CrisprTarget,
    GuideCandidate,
    MutationAnalysis,
)


# 20 A's + CGG + 10 T's: one PAM, one guide at position 1.
SINGLE_TARGET_SEQUENCE = "A" * 20 + "CGG" + "T" * 10

# Test sequences with known PAM layouts
TEST_SEQUENCES = {
    "single_target": SINGLE_TARGET_SEQUENCE,
    "overlapping_pam": "A" * 20 + "GGG",
    "no_pam": "ATCGATCGATCGATCGATCGATCGATCGATCGATCGATCGATCGATCGATCGATCGATCGATCG",
    "pam_too_close": "AGGATCGATCGATCGATC",
}


def mutation_payload(length: int, weights_length: int = None) -> Dict[str, Any]:
    """Wire-format mutation analysis as the remote model returns it."""
    n = length if weights_length is None else weights_length
    return {
        "classification": "Mutated",
        "probability": 0.87,
        "clinicalImpact": {
            "gene": "BRCA1",
            "diseaseAssociation": "Hereditary breast and ovarian cancer",
            "proteinImpact": "p.Cys61Gly",
            "clinicalSignificance": "Pathogenic",
        },
        "aiExplanation": "The region around position 12 resembles a known pathogenic variant.",
        "attentionWeights": [0.5] * n,
    }


def crispr_payload(candidates: List[GuideCandidate]) -> List[Dict[str, Any]]:
    """Wire-format CRISPR targets echoing the given candidates."""
    levels = ["Safe", "Moderate", "Risky"]
    return [
        {
            "position": c.position,
            "sequence": c.sequence,
            "gcContent": 40.0,
            "safetyScore": round(0.9 - 0.3 * (i % 3), 2),
            "riskLevel": levels[i % 3],
            "justification": "Few predicted off-targets.",
        }
        for i, c in enumerate(candidates)
    ]


class FakeCollaborator:
    """In-memory analysis service that records what it was asked."""

    def __init__(self, weights_length: int = None, fail_with: Exception = None):
        self.weights_length = weights_length
        self.fail_with = fail_with
        self.mutation_calls: List[str] = []
        self.crispr_calls: List[List[GuideCandidate]] = []

    async def request_mutation_analysis(self, sequence: str) -> MutationAnalysis:
        self.mutation_calls.append(sequence)
        if self.fail_with is not None:
            raise self.fail_with
        return MutationAnalysis.model_validate(mutation_payload(len(sequence), self.weights_length))

    async def request_crispr_analysis(self, candidates: List[GuideCandidate]) -> CrisprAnalysis:
        self.crispr_calls.append(list(candidates))
        if self.fail_with is not None:
            raise self.fail_with
        return CrisprAnalysis(targets=crispr_payload(candidates))


@pytest.fixture
def fake_collaborator() -> FakeCollaborator:
    return FakeCollaborator()


@pytest.fixture
def sample_mutation() -> MutationAnalysis:
    return MutationAnalysis.model_validate(mutation_payload(33))


@pytest.fixture
def sample_crispr() -> CrisprAnalysis:
    """Three targets deliberately not sorted by position or safety."""
    return CrisprAnalysis(targets=[
        CrisprTarget(position=40, sequence="GCGCATATATGCGCATATAT", gc_content=40.0,
                     safety_score=0.55, risk_level="Moderate", justification="Two 3-mismatch sites."),
        CrisprTarget(position=5, sequence="ATCGATCGATCGATCGATCG", gc_content=50.0,
                     safety_score=0.91, risk_level="Safe", justification="Unique in genome."),
        CrisprTarget(position=22, sequence="AAAAGGGGAAAAGGGGAAAA", gc_content=40.0,
                     safety_score=0.20, risk_level="Risky", justification="Homopolymer runs."),
    ])
