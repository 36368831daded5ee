"""
Sequence normalization.

Turns pasted text or uploaded FASTA/plain-text content into a canonical
uppercase A/T/G/C sequence. Invalid characters are stripped and reported,
never rejected.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Union

from genoai.models.data_classes import NormalizedSequence
from genoai.models.enums import InputSource


logger = logging.getLogger(__name__)

VALID_BASES = "ATGC"
ACCEPTED_FILE_SUFFIXES = (".fasta", ".fa", ".txt")
INVALID_CHARACTERS_MESSAGE = "Invalid DNA characters detected. Only A, T, G, C are allowed."

FASTA_HEADER_PATTERN = re.compile(r"^>.*$", re.MULTILINE)
WHITESPACE_PATTERN = re.compile(r"\s+")
INVALID_BASE_PATTERN = re.compile(r"[^ATGC]")

# BRCA1 exon 2 region, used by the "demo" options of the CLI.
DEMO_SEQUENCE = (
    "ATGGATTTATCTGCTCTTCGCGTTGAAGAAGTACAAAATGTCATTAATGCTATGCAGAAAATCTTAGAGTGT"
    "CCCATCTGGTAAGTCAGCACAAGAGTGTATTAATTTGGGATTCCTATGATTATCTCCTATGCAAATGAACAG"
    "AATTGACCTTACATACTAGGGAAGAAGCAT"
)


def strip_fasta_headers(text: str) -> str:
    """Remove every line that starts with '>'."""
    return FASTA_HEADER_PATTERN.sub("", text)


def normalize(raw: str, from_file: bool = False) -> NormalizedSequence:
    """
    Normalize raw input into an uppercase A/T/G/C sequence.

    Steps run in a fixed order: FASTA headers are dropped (file input only),
    whitespace and line breaks are removed, the text is upper-cased, and any
    remaining character outside A/T/G/C is stripped.

    Args:
        raw: Pasted text or file content
        from_file: Whether the text came from an uploaded file

    Returns:
        NormalizedSequence with the canonical sequence and a flag/message if
        characters had to be removed
    """
    text = strip_fasta_headers(raw) if from_file else raw
    text = WHITESPACE_PATTERN.sub("", text)
    text = text.upper()

    invalid = INVALID_BASE_PATTERN.findall(text)
    if not invalid:
        return NormalizedSequence(sequence=text)

    removed: List[str] = list(dict.fromkeys(invalid))
    logger.debug("Removed %d invalid characters: %s", len(invalid), "".join(removed))
    return NormalizedSequence(
        sequence=INVALID_BASE_PATTERN.sub("", text),
        was_modified=True,
        removed_characters=removed,
        message=INVALID_CHARACTERS_MESSAGE,
    )


def normalize_from(raw: str, source: InputSource) -> NormalizedSequence:
    """Normalize text according to where it came from."""
    return normalize(raw, from_file=source == InputSource.FILE)


def check_file_suffix(filename: str) -> None:
    """Raise ValueError unless the filename has an accepted sequence suffix."""
    suffix = Path(filename).suffix.lower()
    if suffix not in ACCEPTED_FILE_SUFFIXES:
        raise ValueError(
            f"Unsupported file type '{suffix or filename}'. "
            f"Accepted: {', '.join(ACCEPTED_FILE_SUFFIXES)}"
        )


def read_sequence_file(path: Union[str, Path]) -> NormalizedSequence:
    """Read a .fasta/.fa/.txt file and normalize its content."""
    path = Path(path)
    check_file_suffix(path.name)
    if not path.exists():
        raise FileNotFoundError(f"Sequence file not found: {path}")

    logger.info("Reading sequence file %s", path)
    return normalize(path.read_text(), from_file=True)
