"""
Movie title extraction.

Titles have no fixed shape, so the last strategy is a heuristic: the first
line that is not obviously something else (a label, a chain header, a
date, a price, a seat or an audience type). Catalog lookups are left to
callers; this module never checks a title against a movie database.
"""

import re
from string import capwords
from typing import Optional

from ticketscan.services.extractors.base import FieldExtractor
from ticketscan.services.extractors.theater_chain import find_chain_keyword
from ticketscan.services.patterns import (
    ALL_LABELS,
    CURRENCY_SYMBOLS,
    DATE_PATTERNS,
    GENERIC_HEADER_MAX_LENGTH,
    GENERIC_HEADERS,
    NOT_A_TITLE,
    TIME_PATTERNS,
    TITLE_DELIMITERS,
    TITLE_LABELS,
    TITLE_STOP_SECTION,
    TITLE_WITH_RATING,
    TRAILING_RATING,
)
from ticketscan.utils.text import normalize, scan_label, split_lines

_LETTER = re.compile(r'[a-z]')
_MIN_LENGTH = 3
_MAX_LENGTH = 50
_NON_TITLE_WORDS = ('ticket', 'admit')
_LABEL_PREFIXES = ALL_LABELS + TITLE_LABELS


def looks_like_title(candidate: str) -> bool:
    """
    Examples:
        >>> looks_like_title("dune: part two")
        True
        >>> looks_like_title("row 12")
        False
    """
    if not _MIN_LENGTH < len(candidate) < _MAX_LENGTH:
        return False
    if not _LETTER.search(candidate) or candidate.startswith(_LABEL_PREFIXES):
        return False
    return not any(pattern.search(candidate) for pattern in NOT_A_TITLE)


def _clean_title(value: str) -> str:
    return normalize(TRAILING_RATING.sub('', value))


def title_from_label(text: str) -> Optional[str]:
    for value in scan_label(text, TITLE_LABELS, TITLE_DELIMITERS, fallback_length=50):
        title = _clean_title(value)
        if title and _LETTER.search(title):
            return capwords(title)
    return None


def title_from_rated_line(text: str) -> Optional[str]:
    """A line such as "dune: part two (pg-13)" or "oppenheimer rated r"."""
    for line in split_lines(text):
        match = TITLE_WITH_RATING.compiled.match(line)
        if not match:
            continue
        title = normalize(match.group(1))
        if looks_like_title(title):
            return capwords(title)
    return None


def _is_non_title_line(line: str) -> bool:
    if line.startswith(_LABEL_PREFIXES):
        return True
    if len(line) < GENERIC_HEADER_MAX_LENGTH and any(header in line for header in GENERIC_HEADERS):
        return True
    if find_chain_keyword(line):
        return True
    if any(spec.search(line) for spec in DATE_PATTERNS + TIME_PATTERNS):
        return True
    if any(symbol in line for symbol in CURRENCY_SYMBOLS):
        return True
    return any(word in line for word in _NON_TITLE_WORDS)


def title_from_first_plausible_line(text: str) -> Optional[str]:
    for line in split_lines(text):
        if _is_non_title_line(line):
            continue
        title = _clean_title(TITLE_STOP_SECTION.sub('', line))
        if looks_like_title(title):
            return capwords(title)
    return None


class MovieTitleExtractor(FieldExtractor):
    field_name = 'movie_title'
    strategies = (title_from_label, title_from_rated_line, title_from_first_plausible_line)


movie_title_extractor = MovieTitleExtractor()
