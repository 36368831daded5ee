"""
Export CRISPR analyses as CSV, JSON or FASTA.
"""

from __future__ import annotations

import csv
import io
import json
from datetime import datetime
from typing import Optional

from genoai import __version__
from genoai.models.data_classes import CrisprAnalysis
from genoai.models.enums import TargetOrder
from genoai.reporting.report import order_targets


CSV_HEADER = [
    "Position", "Guide_Sequence", "GC_Content", "Safety_Score", "Risk_Level", "Justification",
]


def export_filename(extension: str, now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return f"genoai_targets_{now.strftime('%Y%m%d_%H%M%S')}.{extension}"


def to_csv(analysis: CrisprAnalysis, order: TargetOrder = TargetOrder.POSITION) -> str:
    """One row per target."""
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(CSV_HEADER)
    for target in order_targets(analysis.targets, order):
        writer.writerow([
            target.position,
            target.sequence,
            f"{target.gc_content:.1f}",
            f"{target.safety_score:.2f}",
            target.risk_level.value,
            target.justification,
        ])
    return output.getvalue()


def to_json(analysis: CrisprAnalysis, now: Optional[datetime] = None) -> str:
    """Wire-format JSON with export metadata."""
    now = now or datetime.now()
    export_data = {
        "genoai_version": __version__,
        "export_time": now.isoformat(),
        **analysis.model_dump(mode="json", by_alias=True),
    }
    return json.dumps(export_data, indent=2)


def to_fasta(analysis: CrisprAnalysis, order: TargetOrder = TargetOrder.POSITION) -> str:
    """Guide sequences with position, safety and risk in the header."""
    lines = []
    for target in order_targets(analysis.targets, order):
        lines.append(
            f">guide_pos{target.position}_safety{target.safety_score:.2f}_{target.risk_level.value}"
        )
        lines.append(target.sequence)
    return "\n".join(lines)
