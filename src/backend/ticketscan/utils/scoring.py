"""
Candidate arbitration.

Selection is first-valid-candidate: strategies are ordered by their
author from most to least specific, and the first non-empty candidate
wins. There is no scoring; changing the order changes extraction results.
"""

from typing import Iterable, Optional, Sequence

from ticketscan.utils.candidates import FieldCandidate

__all__ = ['select_best', 'select_best_candidate']


def select_best(candidates: Iterable[Optional[str]]) -> Optional[str]:
    """
    Pick the first usable candidate.

    Args:
        candidates: Ordered strategy outputs (None means no match)

    Returns:
        The first entry that is neither None nor whitespace-only, unchanged,
        or None if no such entry exists

    Example:
        >>> select_best([None, '  ', 'A-12', 'Row A, Seat 12'])
        'A-12'
    """
    for candidate in candidates:
        if candidate is not None and candidate.strip():
            return candidate
    return None


def select_best_candidate(candidates: Sequence[FieldCandidate]) -> Optional[FieldCandidate]:
    """Same rule as select_best(), keeping the winning strategy name."""
    for candidate in candidates:
        if candidate.is_usable:
            return candidate
    return None
