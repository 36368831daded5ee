"""
Core enumerations for GenoAI.
"""

from enum import Enum


class InputSource(str, Enum):
    """Where a raw sequence came from."""
    PASTE = "paste"
    FILE = "file"


class Classification(str, Enum):
    """Binary mutation label returned by the analysis service."""
    MUTATED = "Mutated"
    NORMAL = "Normal"


class ClinicalSignificance(str, Enum):
    """ClinVar-style significance categories."""
    BENIGN = "Benign"
    LIKELY_PATHOGENIC = "Likely Pathogenic"
    PATHOGENIC = "Pathogenic"
    UNCERTAIN = "Uncertain Significance"


class RiskLevel(str, Enum):
    """Off-target risk category for a CRISPR target."""
    SAFE = "Safe"
    MODERATE = "Moderate"
    RISKY = "Risky"


class TargetOrder(str, Enum):
    """Presentation orderings for CRISPR targets."""
    POSITION = "position"
    SAFETY = "safety"
