"""
Sequence composition helpers.
"""


def gc_fraction(seq: str) -> float:
    """GC content of a normalized sequence on a 0.0 to 1.0 scale; 0.0 for an empty string."""
    if not seq:
        return 0.0
    gc = sum(1 for base in seq if base in "GC")
    return gc / len(seq)


def gc_content(seq: str) -> float:
    """GC content as a percentage (0 to 100); 0.0 for an empty string."""
    return 100.0 * gc_fraction(seq)


def format_percentage(value: float, digits: int = 1) -> str:
    """Format a 0-100 value the way reports display it, e.g. '50.0%'."""
    return f"{value:.{digits}f}%"
