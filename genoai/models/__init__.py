"""Models package."""

from genoai.models.enums import (
    InputSource,
    Classification,
    ClinicalSignificance,
    RiskLevel,
    TargetOrder,
)
from genoai.models.data_classes import (
    NormalizedSequence,
    GuideCandidate,
    ClinicalImpact,
    MutationAnalysis,
    CrisprTarget,
    CrisprAnalysis,
)

__all__ = [
    # Enums
    "InputSource",
    "Classification",
    "ClinicalSignificance",
    "RiskLevel",
    "TargetOrder",
    # Data classes
    "NormalizedSequence",
    "GuideCandidate",
    "ClinicalImpact",
    "MutationAnalysis",
    "CrisprTarget",
    "CrisprAnalysis",
]
