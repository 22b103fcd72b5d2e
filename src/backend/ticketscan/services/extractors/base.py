"""
Base Extractor
==============
Shared contract for every ticket field extractor.

A concrete extractor declares the field it fills and an ordered tuple of
strategies. Each strategy is a plain function ``(folded_text) -> value``
that returns None when it finds nothing; it never raises for a missing
match and never keeps state between calls.

extract() folds the transcript once, runs every strategy in order and
hands the outputs to select_best(): the first usable value wins, so
strategies must be listed from most to least specific.

Extractor instances carry no mutable state, so one module-level instance
per field is shared by all callers.
"""

import logging
from typing import Callable, List, Optional, Tuple

from ticketscan.utils.candidates import FieldCandidate
from ticketscan.utils.scoring import select_best
from ticketscan.utils.text import fold, is_blank

logger = logging.getLogger(__name__)

Strategy = Callable[[str], Optional[str]]


class FieldExtractor:
    """
    Abstract base class. Subclasses set field_name and strategies.

    Call extract(raw_text) → the chosen value or None.
    """

    field_name: str = ''
    strategies: Tuple[Strategy, ...] = ()

    # ── Public entry point ────────────────────────────────────────────────────

    def extract(self, raw_text: Optional[str]) -> Optional[str]:
        """
        Extract this extractor's field from an OCR transcript.

        Args:
            raw_text: OCR transcript, untouched

        Returns:
            Normalized field value, or None when no strategy matched
        """
        if is_blank(raw_text):
            return None

        folded = fold(raw_text)
        value = select_best([strategy(folded) for strategy in self.strategies])

        logger.debug("[%s] %s=%r", self.__class__.__name__, self.field_name, value)
        return value

    def candidates(self, raw_text: Optional[str]) -> List[FieldCandidate]:
        """Every strategy's output, in precedence order (for debugging)."""
        if is_blank(raw_text):
            return []
        folded = fold(raw_text)
        return [FieldCandidate(value=strategy(folded), strategy=strategy.__name__)
                for strategy in self.strategies]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(field_name={self.field_name!r})"
