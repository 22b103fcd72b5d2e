"""
Show date extraction.

Scans the transcript line by line; the first line holding a date in one
of the supported shapes wins and is rewritten as MM/DD/YY.
"""

from typing import Optional

from ticketscan.services.extractors.base import FieldExtractor
from ticketscan.services.patterns import DATE_PATTERNS, MONTHS
from ticketscan.utils.text import split_lines


def canonical_date(month: str, day: str, year: str) -> Optional[str]:
    """
    Build MM/DD/YY from date parts.

    Args:
        month: Month number ("3", "12") or name ("dec", "December")
        day: Day of month
        year: Two- or four-digit year

    Returns:
        Zero-padded MM/DD/YY, or None when a part is unusable

    Examples:
        >>> canonical_date('dec', '3', '2024')
        '12/03/24'
    """
    if not year or not day or not month:
        return None

    if month.isdigit():
        month_number = int(month)
    else:
        month_number = MONTHS.get(month[:3].lower(), 0)

    if not 1 <= month_number <= 12 or not 1 <= int(day) <= 31:
        return None

    return f"{month_number:02d}/{int(day):02d}/{year[-2:]}"


def dates_by_line(text: str) -> Optional[str]:
    """First line with a date; patterns tried in library order within a line."""
    for line in split_lines(text):
        for spec in DATE_PATTERNS:
            for match in spec.compiled.finditer(line):
                date = canonical_date(**match.groupdict())
                if date:
                    return date
    return None


class ShowDateExtractor(FieldExtractor):
    field_name = 'show_date'
    strategies = (dates_by_line,)


show_date_extractor = ShowDateExtractor()
