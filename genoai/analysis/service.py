"""
Analysis orchestration.

Normalizes input, scans for guide candidates, and forwards both to the
injected collaborator. Results from the collaborator are passed through
except for the attention-weight length check.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from genoai.analysis.collaborator import AnalysisCollaborator
from genoai.design.normalizer import normalize
from genoai.design.pam_scanner import GuideScanner
from genoai.models.data_classes import (
    CrisprAnalysis,
    GuideCandidate,
    MutationAnalysis,
    NormalizedSequence,
)


logger = logging.getLogger(__name__)


def reconcile_attention_weights(analysis: MutationAnalysis, sequence_length: int) -> MutationAnalysis:
    """Replace attention weights with zeros when their length does not match the sequence."""
    if len(analysis.attention_weights) == sequence_length:
        return analysis
    logger.warning(
        "Attention weights length mismatch (%d != %d). Normalizing to zeros.",
        len(analysis.attention_weights),
        sequence_length,
    )
    return analysis.model_copy(update={"attention_weights": [0.0] * sequence_length})


class AnalysisService:
    """Runs mutation and CRISPR analyses against a collaborator."""

    def __init__(
        self,
        collaborator: AnalysisCollaborator,
        scanner: Optional[GuideScanner] = None,
    ):
        self.collaborator = collaborator
        self.scanner = scanner or GuideScanner()

    def prepare(self, raw: str, from_file: bool = False) -> NormalizedSequence:
        return normalize(raw, from_file=from_file)

    def find_targets(self, sequence: str) -> List[GuideCandidate]:
        return self.scanner.scan(sequence)

    async def analyze_mutation(self, sequence: str) -> MutationAnalysis:
        """Classify a normalized sequence; attention weights always match its length."""
        _require_sequence(sequence)
        logger.info("Requesting mutation analysis for %d bp", len(sequence))
        analysis = await self.collaborator.request_mutation_analysis(sequence)
        return reconcile_attention_weights(analysis, len(sequence))

    async def analyze_crispr(self, sequence: str) -> CrisprAnalysis:
        """Score guide candidates; no remote call is made when the scan is empty."""
        _require_sequence(sequence)
        candidates = self.find_targets(sequence)
        if not candidates:
            logger.info("No PAM-adjacent guide candidates in %d bp", len(sequence))
            return CrisprAnalysis(targets=[])

        logger.info("Requesting CRISPR analysis for %d candidates", len(candidates))
        return await self.collaborator.request_crispr_analysis(candidates)


def _require_sequence(sequence: str) -> None:
    if not sequence:
        raise ValueError("Sequence is empty. Provide at least one A, T, G or C.")
