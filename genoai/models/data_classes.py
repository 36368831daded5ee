"""
Pydantic data classes for GenoAI.

Local results (normalized sequences, guide candidates) and the payloads
returned by the remote analysis service. Payload models accept the camelCase
keys used on the wire as well as their snake_case field names.
"""

from __future__ import annotations

from typing import Optional, Dict, List
from pydantic import BaseModel, ConfigDict, Field, computed_field

from genoai.models.enums import (
    Classification,
    ClinicalSignificance,
    RiskLevel,
)


# =============================================================================
# Local Sequence Structures
# =============================================================================

class NormalizedSequence(BaseModel):
    """Canonical A/T/G/C sequence plus what normalization had to remove."""
    sequence: str
    was_modified: bool = False
    removed_characters: List[str] = Field(default_factory=list)
    message: Optional[str] = None

    @computed_field
    @property
    def length(self) -> int:
        return len(self.sequence)


class GuideCandidate(BaseModel):
    """A guide RNA candidate immediately upstream of an NGG PAM."""
    model_config = ConfigDict(frozen=True)

    position: int = Field(ge=1, description="1-based start of the guide in the sequence")
    sequence: str = Field(min_length=1)


# =============================================================================
# Remote Analysis Payloads
# =============================================================================

class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ClinicalImpact(_WireModel):
    """Simulated database lookup for the most likely biological impact."""
    gene: str
    disease_association: str = Field(alias="diseaseAssociation")
    protein_impact: str = Field(alias="proteinImpact")
    clinical_significance: ClinicalSignificance = Field(alias="clinicalSignificance")


class MutationAnalysis(_WireModel):
    """Mutation classification for a whole sequence."""
    classification: Classification
    probability: float = Field(ge=0, le=1)
    clinical_impact: ClinicalImpact = Field(alias="clinicalImpact")
    ai_explanation: str = Field(alias="aiExplanation")
    attention_weights: List[float] = Field(default_factory=list, alias="attentionWeights")


class CrisprTarget(_WireModel):
    """A scored CRISPR target echoed back by the analysis service."""
    position: int
    sequence: str
    gc_content: float = Field(alias="gcContent")
    safety_score: float = Field(ge=0, le=1, alias="safetyScore")
    risk_level: RiskLevel = Field(alias="riskLevel")
    justification: str = ""


class CrisprAnalysis(_WireModel):
    """All scored targets for one sequence."""
    targets: List[CrisprTarget] = Field(default_factory=list)

    @computed_field
    @property
    def risk_counts(self) -> Dict[str, int]:
        counts = {level.value: 0 for level in RiskLevel}
        for target in self.targets:
            counts[target.risk_level.value] += 1
        return counts
