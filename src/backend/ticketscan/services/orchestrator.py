"""
Ticket extraction orchestrator.

Merges the vision provider's structured result with the pattern-based
fallback, one field at a time:

- a vision value that is present and not blank wins as-is (stripped)
- otherwise the field's extractor runs on the OCR transcript
- an extractor that raises is logged and leaves its field empty; the other
  nine fields are unaffected

Nothing here retries, caches or keeps state between calls, so one
orchestrator can serve any number of concurrent callers.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import ValidationError

from ticketscan.config import settings
from ticketscan.models.ticket import TICKET_FIELDS, ExtractionReport, TicketRecord, VisionChannelResult
from ticketscan.services.extractors.base import FieldExtractor
from ticketscan.services.extractors.movie_rating import movie_rating_extractor
from ticketscan.services.extractors.movie_title import movie_title_extractor
from ticketscan.services.extractors.price import price_extractor
from ticketscan.services.extractors.seat import seat_number_extractor
from ticketscan.services.extractors.show_date import show_date_extractor
from ticketscan.services.extractors.show_time import show_time_extractor
from ticketscan.services.extractors.theater_chain import theater_chain_extractor
from ticketscan.services.extractors.theater_name import theater_name_extractor
from ticketscan.services.extractors.theater_room import theater_room_extractor
from ticketscan.services.extractors.ticket_number import ticket_number_extractor
from ticketscan.services.patterns import TICKET_KEYWORDS
from ticketscan.utils.text import fold

logger = logging.getLogger(__name__)

SOURCE_VISION = 'vision'
SOURCE_FALLBACK = 'fallback'

DEFAULT_EXTRACTORS: Mapping[str, FieldExtractor] = {
    'movie_title': movie_title_extractor,
    'theater_name': theater_name_extractor,
    'theater_chain': theater_chain_extractor,
    'show_date': show_date_extractor,
    'show_time': show_time_extractor,
    'price': price_extractor,
    'seat_number': seat_number_extractor,
    'movie_rating': movie_rating_extractor,
    'theater_room': theater_room_extractor,
    'ticket_number': ticket_number_extractor,
}


def coerce_vision_result(vision_result: Any) -> Optional[VisionChannelResult]:
    """
    Accept the vision channel in any of the shapes callers hand us.

    Args:
        vision_result: None, a TicketRecord / VisionChannelResult, a mapping
            with snake_case or camelCase keys, or a provider envelope
            {"success": bool, "data": {...}, "error": str}

    Returns:
        VisionChannelResult, or None when the channel is absent or failed
        or its data is not a mapping. Fields that fail validation are
        dropped one by one and logged.

    Raises:
        TypeError: vision_result is none of the shapes above
    """
    if vision_result is None:
        return None

    if isinstance(vision_result, VisionChannelResult):
        return vision_result

    if isinstance(vision_result, TicketRecord):
        return VisionChannelResult.model_validate(vision_result.model_dump())

    if not isinstance(vision_result, Mapping):
        raise TypeError(f"Unsupported vision result type: {type(vision_result).__name__}")

    payload = vision_result
    if 'success' in payload:
        if not payload['success']:
            logger.info("Vision channel reported failure: %s", payload.get('error'))
            return None
        payload = payload.get('data') or {}

    if not isinstance(payload, Mapping):
        logger.warning("Discarding malformed vision result: data is %s", type(payload).__name__)
        return None

    # A bad field is dropped on its own; the provider's other fields still count
    fields = {}
    for key, value in payload.items():
        try:
            VisionChannelResult.model_validate({key: value})
        except ValidationError:
            logger.warning("Dropping malformed vision field %r", key, exc_info=True, extra={'field': key})
            continue
        fields[key] = value

    return VisionChannelResult.model_validate(fields)


def _vision_value(vision: Optional[VisionChannelResult], field_name: str) -> Optional[str]:
    if vision is None:
        return None
    value = getattr(vision, field_name)
    if value is None or not value.strip():
        return None
    return value.strip()


class ExtractionOrchestrator:
    """
    Field-by-field merge of vision output and pattern extraction.

    Extractors are injectable so callers (and tests) can swap one field's
    implementation without touching the others.
    """

    def __init__(self, extractors: Optional[Mapping[str, FieldExtractor]] = None):
        merged = dict(DEFAULT_EXTRACTORS)
        if extractors:
            unknown = set(extractors) - set(TICKET_FIELDS)
            if unknown:
                raise ValueError(f"Unknown ticket fields: {sorted(unknown)}")
            merged.update(extractors)
        self.extractors: Mapping[str, FieldExtractor] = merged

    def build(self, raw_text: Optional[str], vision_result: Any = None) -> TicketRecord:
        """
        Merge the vision result with the fallback extractors.

        Args:
            raw_text: OCR transcript (may be empty)
            vision_result: Optional vision channel output, see coerce_vision_result()

        Returns:
            TicketRecord with every field resolved or None
        """
        return self.extract(raw_text, vision_result).record

    def extract(self, raw_text: Optional[str], vision_result: Any = None) -> ExtractionReport:
        """build() plus per-field provenance and the list of faulted extractors."""
        vision = coerce_vision_result(vision_result)

        values: Dict[str, Optional[str]] = {}
        sources: Dict[str, Optional[str]] = {}
        failed = []

        for field_name in TICKET_FIELDS:
            value, source, faulted = self._resolve_field(field_name, raw_text, vision)
            values[field_name] = value
            sources[field_name] = source
            if faulted:
                failed.append(field_name)

        record = TicketRecord(**values)
        logger.info(
            "Ticket extraction: %d/%d fields (vision=%d, fallback=%d)",
            len(record.populated_fields()),
            len(TICKET_FIELDS),
            sum(1 for source in sources.values() if source == SOURCE_VISION),
            sum(1 for source in sources.values() if source == SOURCE_FALLBACK),
            extra={'failed_fields': failed},
        )

        return ExtractionReport(
            record=record,
            sources=sources,
            failed_fields=failed,
            presence=record.presence(),
        )

    def _resolve_field(
        self,
        field_name: str,
        raw_text: Optional[str],
        vision: Optional[VisionChannelResult],
    ) -> Tuple[Optional[str], Optional[str], bool]:
        """(value, source, faulted) for one field."""
        value = _vision_value(vision, field_name)
        if value is not None:
            logger.debug("[%s] from vision: %r", field_name, value)
            return value, SOURCE_VISION, False

        extractor = self.extractors[field_name]
        try:
            value = extractor.extract(raw_text)
        except Exception:
            logger.warning(
                "Extractor failed for %s, leaving it empty",
                field_name,
                exc_info=True,
                extra={'field': field_name, 'extractor': repr(extractor)},
            )
            return None, None, True

        if value is None:
            return None, None, False
        return value, SOURCE_FALLBACK, False


def looks_like_movie_ticket(text: Optional[str], threshold: int = None) -> bool:
    """
    Cheap keyword check used to route a document to ticket extraction.

    Examples:
        >>> looks_like_movie_ticket("ADMIT ONE\\nSeat: A12\\nAuditorium 4")
        True
    """
    if threshold is None:
        threshold = settings.TICKET_KEYWORD_THRESHOLD
    folded = fold(text)
    hits = sum(1 for keyword in TICKET_KEYWORDS if keyword in folded)
    return hits >= threshold


def is_valid_ticket(record: TicketRecord, min_supporting_fields: int = None) -> bool:
    """A title plus at least `min_supporting_fields` other populated fields."""
    if min_supporting_fields is None:
        min_supporting_fields = settings.MIN_SUPPORTING_FIELDS
    if not record.movie_title:
        return False
    supporting = [name for name in record.populated_fields() if name != 'movie_title']
    return len(supporting) >= min_supporting_fields


ticket_orchestrator = ExtractionOrchestrator()


def extract_ticket(raw_text: Optional[str], vision_result: Any = None) -> TicketRecord:
    """Single entry point: merge vision output with the fallback extractors."""
    return ticket_orchestrator.build(raw_text, vision_result)
