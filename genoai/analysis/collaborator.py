"""
Interface to the remote analysis service.

All scientifically meaningful output (classification, probability, attention
weights, safety scores, explanations) comes from an external model. Anything
that implements AnalysisCollaborator can provide it.
"""

from __future__ import annotations

from typing import List, Protocol, runtime_checkable

from genoai.models.data_classes import CrisprAnalysis, GuideCandidate, MutationAnalysis


MUTATION_FAILURE_MESSAGE = (
    "Failed to get mutation analysis from AI. "
    "The AI's response may have been malformed. Please try again."
)
CRISPR_FAILURE_MESSAGE = (
    "Failed to get CRISPR analysis from AI. Please check the sequence or try again."
)


class AnalysisFailedError(RuntimeError):
    """Raised when the remote analysis fails for any reason (transport, status, parse, shape)."""

    def __init__(self, kind: str, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


class AnalysisNotConfiguredError(RuntimeError):
    """Raised when no API key is configured for the analysis service."""


@runtime_checkable
class AnalysisCollaborator(Protocol):
    """Request/response contract of the remote analysis service."""

    async def request_mutation_analysis(self, sequence: str) -> MutationAnalysis:
        ...

    async def request_crispr_analysis(self, candidates: List[GuideCandidate]) -> CrisprAnalysis:
        ...
