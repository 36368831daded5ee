"""Reporting package."""

from genoai.reporting.report import (
    ReportGenerator,
    generate_report_text,
    order_by_position,
    order_by_safety,
    order_targets,
)
from genoai.reporting.export import to_csv, to_json, to_fasta

__all__ = [
    "ReportGenerator",
    "generate_report_text",
    "order_by_position",
    "order_by_safety",
    "order_targets",
    "to_csv",
    "to_json",
    "to_fasta",
]
