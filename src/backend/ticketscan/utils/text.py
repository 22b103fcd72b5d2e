"""
Text normalization helpers shared by every field extractor.

Two passes are applied around pattern matching:
- fold(): case-folded copy of the OCR transcript used for matching
  (line breaks preserved, horizontal whitespace collapsed)
- normalize(): cleanup applied to any substring selected as a candidate
"""

import re
from string import capwords
from typing import Iterator, List, Optional, Sequence

_WHITESPACE_RUN = re.compile(r'\s+')
_HORIZONTAL_RUN = re.compile(r'[ \t\f\v\u00a0]+')
_UNSAFE_CHARS = re.compile(r"[^\w\s&:'.-]")


def normalize(text: Optional[str]) -> str:
    """
    Clean a candidate value.

    Collapses whitespace runs to a single space, removes characters outside
    the allow-list (word characters, whitespace, & : ' . -) and trims.

    Examples:
        >>> normalize("  Row  A,\\n Seat 12 ")
        'Row A Seat 12'
    """
    if not text:
        return ""
    cleaned = _WHITESPACE_RUN.sub(' ', text)
    cleaned = _UNSAFE_CHARS.sub('', cleaned)
    return cleaned.strip()


def fold(text: Optional[str]) -> str:
    """Case-folded matching copy of an OCR transcript, one ticket line per line."""
    if not text:
        return ""
    folded = text.replace('\r\n', '\n').replace('\r', '\n').lower()
    return '\n'.join(_HORIZONTAL_RUN.sub(' ', line).strip() for line in folded.split('\n'))


def split_lines(text: str, keep_blank: bool = False) -> List[str]:
    """Split text into lines, dropping blank ones unless keep_blank is set."""
    lines = text.split('\n')
    if keep_blank:
        return lines
    return [line for line in lines if line.strip()]


def is_blank(text: Optional[str]) -> bool:
    return text is None or not text.strip()


def scan_label(
    text: str,
    labels: Sequence[str],
    delimiters: Sequence[str] = (),
    fallback_length: int = 10,
    skip_chars: str = '',
    min_length: int = 0,
) -> Iterator[str]:
    """
    Yield the raw text that follows each label found in `text`.

    Labels are tried in order; only the first occurrence of each label is
    read. The value runs to the end of its line. When no newline follows the
    label, it runs to the earliest delimiter instead, or `fallback_length`
    characters when none is present.

    Args:
        text: Folded transcript
        labels: Label prefixes, most specific first
        delimiters: Terminators used when the label sits on the last line
        fallback_length: Characters to read when nothing terminates the value
        skip_chars: Characters skipped right after the label (e.g. ': .')
        min_length: Delimiters closer than this to the value start are ignored

    Yields:
        Stripped, un-normalized value text (may be empty)
    """
    for label in labels:
        index = text.find(label)
        if index == -1:
            continue

        start = index + len(label)
        while start < len(text) and text[start] in skip_chars:
            start += 1

        end = text.find('\n', start)
        if end == -1:
            for delimiter in delimiters:
                position = text.find(delimiter, start + min_length)
                if position != -1 and (end == -1 or position < end):
                    end = position
            if end == -1:
                end = min(start + fallback_length, len(text))

        yield text[start:end].strip()


def cut_at(value: str, delimiters: Sequence[str]) -> str:
    """
    Cut a label value at the earliest delimiter inside it.

    Examples:
        >>> cut_at("12, row: f", (",", "row"))
        '12'
    """
    end = len(value)
    for delimiter in delimiters:
        position = value.find(delimiter)
        if position != -1 and position < end:
            end = position
    return value[:end].strip()


def title_case(text: str, acronyms: Sequence[str] = ()) -> str:
    """
    Capitalize each word, upper-casing any word listed in `acronyms`.

    Examples:
        >>> title_case("amc empire 25", acronyms=('amc',))
        'AMC Empire 25'
    """
    words = capwords(text).split(' ')
    return ' '.join(word.upper() if word.lower() in acronyms else word for word in words)
