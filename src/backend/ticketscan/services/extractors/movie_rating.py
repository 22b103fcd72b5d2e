"""Movie rating (MPAA) extraction."""

import re
from typing import Optional

from ticketscan.services.extractors.base import FieldExtractor
from ticketscan.services.patterns import (
    RATING_ALIASES,
    RATING_DELIMITERS,
    RATING_LABELS,
    RATING_PATTERNS,
    RATING_TOKEN,
)
from ticketscan.utils.text import scan_label, split_lines

_NOT_RATING_CHARS = re.compile(r'[^A-Z0-9-]')


def standardize_rating(value: Optional[str]) -> Optional[str]:
    """
    Map a rating spelling onto the canonical vocabulary.

    Examples:
        >>> standardize_rating("pg13")
        'PG-13'
        >>> standardize_rating("(PG-13)")
        'PG-13'
        >>> standardize_rating("XYZ") is None
        True
    """
    if not value:
        return None
    cleaned = _NOT_RATING_CHARS.sub('', value.strip().upper())
    return RATING_ALIASES.get(cleaned)


def rating_from_label(text: str) -> Optional[str]:
    for value in scan_label(text, RATING_LABELS, RATING_DELIMITERS, fallback_length=6):
        tokens = value.split()
        if not tokens:
            continue
        rating = standardize_rating(tokens[0])
        if rating:
            return rating
    return None


def rating_from_vocabulary(text: str) -> Optional[str]:
    for spec in RATING_PATTERNS:
        match = spec.search(text)
        if match:
            return standardize_rating(match.group(1))
    return None


def rating_from_rating_lines(text: str) -> Optional[str]:
    """Lines that say "rating" are read before the rest."""
    lines = split_lines(text)
    ordered = [line for line in lines if 'rating' in line] + lines
    for line in ordered:
        for match in RATING_TOKEN.compiled.finditer(line):
            rating = standardize_rating(match.group(1))
            if rating:
                return rating
    return None


class MovieRatingExtractor(FieldExtractor):
    field_name = 'movie_rating'
    strategies = (rating_from_label, rating_from_vocabulary, rating_from_rating_lines)


movie_rating_extractor = MovieRatingExtractor()
