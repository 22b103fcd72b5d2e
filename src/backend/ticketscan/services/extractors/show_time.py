"""
Show time extraction.

12-hour times come back as "7:30 PM" (an hour alone gets ":00"),
24-hour times as zero-padded "19:30".
"""

import re
from typing import Optional

from ticketscan.services.extractors.base import FieldExtractor
from ticketscan.services.patterns import TIME_CONTEXT_WORDS, TIME_DELIMITERS, TIME_LABELS, TIME_PATTERNS
from ticketscan.utils.text import scan_label, split_lines


def canonical_time(pattern_name: str, match: re.Match) -> str:
    if pattern_name == 'twelve_hour':
        hour, minute, meridiem = match.groups()
    elif pattern_name == 'hour_meridiem':
        hour, meridiem = match.groups()
        minute = '00'
    else:
        hour, minute = match.groups()
        return f"{int(hour):02d}:{minute}"

    return f"{int(hour)}:{minute} {meridiem.replace('.', '').upper()}"


def find_time(text: str) -> Optional[str]:
    """
    First time in `text`, trying 12-hour shapes before 24-hour ones.

    Examples:
        >>> find_time("showtime: 7:30pm")
        '7:30 PM'
        >>> find_time("starts 19:05")
        '19:05'
    """
    for spec in TIME_PATTERNS:
        match = spec.search(text)
        if match:
            return canonical_time(spec.name, match)
    return None


def time_from_label(text: str) -> Optional[str]:
    for value in scan_label(text, TIME_LABELS, TIME_DELIMITERS, fallback_length=10):
        time = find_time(value)
        if time:
            return time
    return None


def time_from_patterns(text: str) -> Optional[str]:
    return find_time(text)


def time_on_show_lines(text: str) -> Optional[str]:
    for line in split_lines(text):
        if any(word in line for word in TIME_CONTEXT_WORDS):
            time = find_time(line)
            if time:
                return time
    return None


class ShowTimeExtractor(FieldExtractor):
    field_name = 'show_time'
    strategies = (time_from_label, time_from_patterns, time_on_show_lines)


show_time_extractor = ShowTimeExtractor()
