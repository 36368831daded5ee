"""
Clinical DNA report generator.

Builds the plain-text report combining a mutation analysis and a CRISPR
analysis. Targets have two independent presentation orderings: by position
(tables, sequence views) and by safety score (recommendation list).
"""

from __future__ import annotations

import textwrap
from datetime import datetime
from typing import List, Optional

from genoai.design.composition import format_percentage
from genoai.models.data_classes import CrisprAnalysis, CrisprTarget, MutationAnalysis
from genoai.models.enums import TargetOrder


RULE = "=" * 60
SECTION_RULE = "-" * 60
EXPLANATION_WIDTH = 65

DISCLAIMER = (
    "Disclaimer: This AI-generated report is for research and\n"
    "  educational purposes only and is not a substitute for\n"
    "  professional medical advice or genetic counseling."
)
NO_TARGETS_MESSAGE = "No suitable CRISPR targets were identified in this sequence."


# =============================================================================
# Orderings
# =============================================================================

def order_by_position(targets: List[CrisprTarget]) -> List[CrisprTarget]:
    """Targets in ascending sequence position."""
    return sorted(targets, key=lambda t: t.position)


def order_by_safety(targets: List[CrisprTarget]) -> List[CrisprTarget]:
    """Targets from safest to riskiest; ties keep their input order."""
    return sorted(targets, key=lambda t: t.safety_score, reverse=True)


def order_targets(targets: List[CrisprTarget], order: TargetOrder) -> List[CrisprTarget]:
    if order == TargetOrder.SAFETY:
        return order_by_safety(targets)
    return order_by_position(targets)


# =============================================================================
# Report
# =============================================================================

class ReportGenerator:
    """Renders analyses into the downloadable text report."""

    def __init__(
        self,
        mutation: MutationAnalysis,
        crispr: CrisprAnalysis,
        sequence_length: int,
    ):
        self.mutation = mutation
        self.crispr = crispr
        self.sequence_length = sequence_length

    def to_text(self, generated_at: Optional[datetime] = None) -> str:
        generated_at = generated_at or datetime.now()
        lines = [
            " G E N O - A I :   C L I N I C A L   D N A   R E P O R T",
            RULE,
            "",
            f"  Report Generated: {generated_at.strftime('%Y-%m-%d %H:%M:%S')}",
            f"  Sequence Length: {self.sequence_length} bp",
            "",
        ]
        lines.extend(self._mutation_section())
        lines.extend(self._crispr_section())
        lines.extend([
            RULE,
            "  END OF REPORT.",
            f"  {DISCLAIMER}",
        ])
        return "\n".join(lines) + "\n"

    def _mutation_section(self) -> List[str]:
        m = self.mutation
        impact = m.clinical_impact
        lines = [
            SECTION_RULE,
            "  SECTION 1: MUTATION ANALYSIS",
            SECTION_RULE,
            f"  OVERALL CLASSIFICATION: {m.classification.value.upper()}",
            f"  MUTATION PROBABILITY: {format_percentage(m.probability * 100)}",
            "",
            "  CLINICAL IMPACT (SIMULATED DATABASE LOOKUP):",
            f"  - Gene Name: {impact.gene}",
            f"  - Disease Association: {impact.disease_association}",
            f"  - Protein Impact: {impact.protein_impact}",
            f"  - Clinical Significance: {impact.clinical_significance.value.upper()}",
            "",
            "  AI EXPLANATION FOR CLINICIAN:",
        ]
        for line in textwrap.wrap(m.ai_explanation, EXPLANATION_WIDTH) or [""]:
            lines.append(f"  {line}")
        lines.append("")
        return lines

    def _crispr_section(self) -> List[str]:
        targets = self.crispr.targets
        lines = [
            SECTION_RULE,
            "  SECTION 2: CRISPR-CAS9 TARGET ANALYSIS",
            SECTION_RULE,
        ]
        if not targets:
            lines.extend([f"  {NO_TARGETS_MESSAGE}", ""])
            return lines

        counts = self.crispr.risk_counts
        lines.extend([
            f"  SUMMARY: Found {len(targets)} potential target sites.",
            "           "
            f"Safe: {counts['Safe']}, "
            f"Moderate: {counts['Moderate']}, "
            f"Risky: {counts['Risky']}",
            "",
            "  RECOMMENDED TARGETS (sorted by Safety Score):",
        ])
        for i, target in enumerate(order_by_safety(targets), 1):
            lines.extend([
                f"  [{i}] Position: {target.position}",
                f"      gRNA Sequence: {target.sequence}",
                f"      GC Content: {format_percentage(target.gc_content)}",
                f"      Safety Score: {target.safety_score:.2f}/1.00",
                f"      Risk Level: {target.risk_level.value}",
                "",
            ])
        return lines


def generate_report_text(
    mutation: MutationAnalysis,
    crispr: CrisprAnalysis,
    sequence_length: int,
    generated_at: Optional[datetime] = None,
) -> str:
    """
    Convenience function to render the text report.

    Args:
        mutation: Result of the mutation analysis
        crispr: Result of the CRISPR analysis
        sequence_length: Length of the analyzed sequence in bp
        generated_at: Timestamp to print (defaults to now)

    Returns:
        Report text
    """
    return ReportGenerator(mutation, crispr, sequence_length).to_text(generated_at)


def report_filename(now: Optional[datetime] = None, suffix: str = "txt") -> str:
    now = now or datetime.now()
    return f"GenoAI_Report_{now.strftime('%Y-%m-%d')}.{suffix}"
