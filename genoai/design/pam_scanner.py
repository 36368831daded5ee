"""
Guide RNA candidate scanner.

Finds NGG PAM sites on the given strand and extracts the 20-nt guide
immediately upstream of each one.
"""

from __future__ import annotations

from typing import Iterator, List, Optional

from genoai.config import ScanConfig
from genoai.models.data_classes import GuideCandidate


DEFAULT_GUIDE_LENGTH = 20
DEFAULT_PAM_MOTIF = "GG"


def find_motif_positions(sequence: str, motif: str) -> Iterator[int]:
    """
    Yield 0-based start positions of every occurrence of motif, left to right.

    Overlapping matches are included: after a match at i the search resumes
    at i + 1, so "GGG" yields both 0 and 1 for motif "GG".
    """
    if not motif:
        return
    start = 0
    while True:
        pos = sequence.find(motif, start)
        if pos == -1:
            return
        yield pos
        start = pos + 1


class GuideScanner:
    """
    Scans a normalized sequence for guide RNA candidates.

    For a PAM core match at index m the PAM starts one base earlier
    (pam_position = m - 1, the "N" of NGG). A candidate is emitted only when
    a full guide fits upstream, i.e. pam_position >= guide_length.
    """

    def __init__(
        self,
        guide_length: int = DEFAULT_GUIDE_LENGTH,
        pam_motif: str = DEFAULT_PAM_MOTIF,
    ):
        if guide_length < 1:
            raise ValueError(f"guide_length must be positive, got {guide_length}")
        self.guide_length = guide_length
        self.pam_motif = pam_motif

    @classmethod
    def from_config(cls, scan_config: Optional[ScanConfig] = None) -> "GuideScanner":
        scan_config = scan_config or ScanConfig()
        return cls(guide_length=scan_config.guide_length, pam_motif=scan_config.pam_motif)

    def iter_candidates(self, sequence: str) -> Iterator[GuideCandidate]:
        """Yield candidates in ascending position order."""
        for match_index in find_motif_positions(sequence, self.pam_motif):
            pam_position = match_index - 1
            if pam_position < self.guide_length:
                continue
            guide_start = pam_position - self.guide_length
            yield GuideCandidate(
                position=guide_start + 1,
                sequence=sequence[guide_start:pam_position],
            )

    def scan(self, sequence: str) -> List[GuideCandidate]:
        """Return every candidate; overlapping PAMs are not deduplicated."""
        return list(self.iter_candidates(sequence))


def scan_for_candidates(sequence: str) -> List[GuideCandidate]:
    """
    Convenience function to scan a sequence with default SpCas9 parameters.

    Args:
        sequence: Normalized A/T/G/C sequence

    Returns:
        List of GuideCandidate objects in ascending position order
    """
    return GuideScanner().scan(sequence)


def count_pam_sites(sequence: str, pam_motif: str = DEFAULT_PAM_MOTIF) -> int:
    """Count overlapping PAM core matches, including ones too close to the 5' end."""
    return sum(1 for _ in find_motif_positions(sequence, pam_motif))
