"""
Theater room / auditorium extraction.

Rooms are reported as "Theater <id>" whatever the ticket calls them
(screen, auditorium, room), except premium formats which keep their own
name ("IMAX", "DOLBY").
"""

import re
from typing import Optional

from ticketscan.services.extractors.base import FieldExtractor
from ticketscan.services.patterns import (
    ACRONYMS,
    PREMIUM_FORMAT,
    ROOM_CONTEXT_WORDS,
    ROOM_DELIMITERS,
    ROOM_LABELS,
    ROOM_PATTERNS,
    ROOM_STANDALONE_NUMBER,
    ROOM_TRAILING_TOKEN,
)
from ticketscan.utils.text import normalize, scan_label, split_lines, title_case

_ROOM_ID = re.compile(r'\d+[a-z]?|[a-z]', re.IGNORECASE)
_MAX_LABEL_LENGTH = 20


def room_name(room_id: str) -> str:
    return f"Theater {room_id.upper()}"


def _room_lines(text: str):
    return [line for line in split_lines(text) if any(word in line for word in ROOM_CONTEXT_WORDS)]


def room_from_label(text: str) -> Optional[str]:
    """
    Labelled room. A bare id becomes "Theater <id>"; anything else must be
    a premium format or a short "<word> <number>" pair, so
    "theater: amc empire 25" is skipped.
    """
    for value in scan_label(text, ROOM_LABELS, ROOM_DELIMITERS, fallback_length=10):
        cleaned = normalize(value)
        if not cleaned or len(cleaned) >= _MAX_LABEL_LENGTH:
            continue
        if _ROOM_ID.fullmatch(cleaned):
            return room_name(cleaned)
        if PREMIUM_FORMAT.compiled.fullmatch(cleaned):
            return cleaned.upper()
        words = cleaned.split()
        if len(words) <= 2 and any(char.isdigit() for char in words[-1]):
            return title_case(cleaned, acronyms=ACRONYMS)
    return None


def room_from_patterns(text: str) -> Optional[str]:
    lines = split_lines(text)
    for spec in ROOM_PATTERNS:
        for line in lines:
            match = spec.search(line)
            if match:
                return room_name(match.group(1))
    return None


def room_from_standalone_number(text: str) -> Optional[str]:
    for line in _room_lines(text):
        match = ROOM_STANDALONE_NUMBER.search(line)
        if match:
            return room_name(match.group(1))
    return None


def room_from_trailing_token(text: str) -> Optional[str]:
    """Room-keyword lines whose last word is the room id ('auditorium 7')."""
    for line in _room_lines(text):
        match = ROOM_TRAILING_TOKEN.search(line)
        if match:
            return room_name(match.group(1))
    return None


def room_from_premium_format(text: str) -> Optional[str]:
    match = PREMIUM_FORMAT.search(text)
    if match:
        return match.group(1).upper()
    return None


class TheaterRoomExtractor(FieldExtractor):
    field_name = 'theater_room'
    strategies = (
        room_from_label,
        room_from_patterns,
        room_from_standalone_number,
        room_from_trailing_token,
        room_from_premium_format,
    )


theater_room_extractor = TheaterRoomExtractor()
