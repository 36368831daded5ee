"""
GenoAI - DNA mutation and CRISPR target analysis

Normalizes DNA input, scans it for NGG-adjacent guide RNA candidates, and
forwards both to a remote AI service for classification and safety scoring.
"""

__version__ = "0.1.0"
__author__ = "GenoAI Team"

from genoai.models.enums import Classification, ClinicalSignificance, RiskLevel
from genoai.models.data_classes import (
    NormalizedSequence,
    GuideCandidate,
    MutationAnalysis,
    CrisprTarget,
    CrisprAnalysis,
)

__all__ = [
    # Enums
    "Classification",
    "ClinicalSignificance",
    "RiskLevel",
    # Data classes
    "NormalizedSequence",
    "GuideCandidate",
    "MutationAnalysis",
    "CrisprTarget",
    "CrisprAnalysis",
]
