"""Remote analysis: collaborator contract, Gemini client and orchestration."""

from genoai.analysis.collaborator import (
    AnalysisCollaborator,
    AnalysisFailedError,
    AnalysisNotConfiguredError,
)
from genoai.analysis.gemini import GeminiAnalysisClient
from genoai.analysis.service import AnalysisService, reconcile_attention_weights

__all__ = [
    "AnalysisCollaborator",
    "AnalysisFailedError",
    "AnalysisNotConfiguredError",
    "GeminiAnalysisClient",
    "AnalysisService",
    "reconcile_attention_weights",
]
