"""Sequence design package: normalization, guide scanning and composition."""

from genoai.design.normalizer import (
    DEMO_SEQUENCE,
    normalize,
    read_sequence_file,
    strip_fasta_headers,
)
from genoai.design.pam_scanner import (
    GuideScanner,
    scan_for_candidates,
    count_pam_sites,
)
from genoai.design.composition import gc_content, gc_fraction, format_percentage

__all__ = [
    "DEMO_SEQUENCE",
    "normalize",
    "read_sequence_file",
    "strip_fasta_headers",
    "GuideScanner",
    "scan_for_candidates",
    "count_pam_sites",
    "gc_content",
    "gc_fraction",
    "format_percentage",
]
