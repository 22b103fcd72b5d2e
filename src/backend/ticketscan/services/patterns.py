"""
Pattern library for movie-ticket field extraction.

Every regex and curated word list the extractors use lives here. All
patterns run against the folded (lower-cased) transcript, so they are
written in lower case and compiled with IGNORECASE for safety.

Nothing in this module is mutated after import: pattern sets are tuples
of frozen PatternSpec objects compiled once, and word lists are tuples.
The curated lists (chains, theaters, boilerplate keywords) are hand-made
and intentionally incomplete; extend them as data, not as new branches.
"""

import re
from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class PatternSpec:
    """A named regex pattern with example and notes for documentation."""
    name: str
    pattern: str
    example: str
    notes: Optional[str] = None
    flags: int = re.IGNORECASE
    compiled: re.Pattern = field(default=None, init=False, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, 'compiled', re.compile(self.pattern, self.flags))

    def search(self, text: str) -> Optional[re.Match]:
        return self.compiled.search(text)


# ─── Shared vocabulary ────────────────────────────────────────────────────────

MONTHS = {
    'jan': 1, 'feb': 2, 'mar': 3, 'apr': 4, 'may': 5, 'jun': 6,
    'jul': 7, 'aug': 8, 'sep': 9, 'oct': 10, 'nov': 11, 'dec': 12,
}

_MONTH_NAMES = (
    r'(?P<month>jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|'
    r'aug(?:ust)?|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)'
)

_DAY = r'(?P<day>0?[1-9]|[12][0-9]|3[01])'
_MONTH = r'(?P<month>0?[1-9]|1[0-2])'

CURRENCY_SYMBOLS = ('$', '€', '£', '¥')

# Canonical rating vocabulary and the loose spellings that map onto it
RATING_VOCABULARY = ('G', 'PG', 'PG-13', 'R', 'NC-17')

RATING_ALIASES = {
    'G': 'G',
    'PG': 'PG',
    'PG13': 'PG-13',
    'PG-13': 'PG-13',
    'R': 'R',
    'NC17': 'NC-17',
    'NC-17': 'NC-17',
}

# Longer ratings first so "pg-13" never stops at "pg"
_RATING_TOKEN = r'(nc-?17|pg-?13|pg|g|r)'

# Seat/row labels put single letters next to words; "row r" is not a rating
_NOT_SEAT_LETTER = (
    r'(?<!row )(?<!seat )(?<!section )(?<!aisle )'
    r'(?<!row: )(?<!seat: )(?<!section: )(?<!aisle: )'
    r'(?<!theater )(?<!theatre )(?<!screen )(?<!room )'
)


# ─── Dates ────────────────────────────────────────────────────────────────────

DATE_PATTERNS: Tuple[PatternSpec, ...] = (
    PatternSpec(
        name='numeric_slash',
        pattern=r'\b' + _MONTH + r'/' + _DAY + r'/(?P<year>\d{4}|\d{2})\b',
        example='12/3/2024',
        notes='MM/DD/YY or MM/DD/YYYY',
    ),
    PatternSpec(
        name='numeric_dash',
        pattern=r'\b' + _MONTH + r'-' + _DAY + r'-(?P<year>\d{4}|\d{2})\b',
        example='12-03-24',
        notes='MM-DD-YY or MM-DD-YYYY',
    ),
    PatternSpec(
        name='month_name',
        pattern=r'\b' + _MONTH_NAMES + r'\.?\s+' + _DAY + r'(?:st|nd|rd|th)?(?:,?\s+(?P<year>\d{4}))?\b',
        example='Dec 3, 2024',
        notes='Month DD[, YYYY]; the year is required to build MM/DD/YY',
    ),
    PatternSpec(
        name='day_month_name',
        pattern=r'\b' + _DAY + r'(?:st|nd|rd|th)?\s+' + _MONTH_NAMES + r'\.?(?:,?\s+(?P<year>\d{4}))?\b',
        example='Tue 3 Dec 2024',
        notes='DD Month [YYYY], often after a weekday',
    ),
)


# ─── Times ────────────────────────────────────────────────────────────────────

_MERIDIEM = r'(a\.m\.|p\.m\.|am|pm)(?![a-z])'

TIME_PATTERNS: Tuple[PatternSpec, ...] = (
    PatternSpec(
        name='twelve_hour',
        pattern=r'\b(1[0-2]|0?[1-9])[:.]([0-5][0-9])\s*' + _MERIDIEM,
        example='7:30 PM',
    ),
    PatternSpec(
        name='hour_meridiem',
        pattern=r'\b(1[0-2]|0?[1-9])\s*' + _MERIDIEM,
        example='7pm',
    ),
    PatternSpec(
        name='twenty_four_hour',
        pattern=r'\b([01]?[0-9]|2[0-3]):([0-5][0-9])\b',
        example='19:30',
        notes='Colon only: "12.50" is a price, not a time',
    ),
)

TIME_LABELS = ('time:', 'showtime:', 'show time:', 'starts:', 'beginning:', 'starting:')
TIME_DELIMITERS = (',', '|', '-')
TIME_CONTEXT_WORDS = ('show', 'screening', 'performance', 'showing', 'start')


# ─── Prices ───────────────────────────────────────────────────────────────────

PRICE_LABELS = ('price:', 'total:', 'amount:', 'cost:', 'paid:', 'ticket price:')
PRICE_DELIMITERS = (',', '|', '-')

# Digits with optional thousands grouping and cents: 9, 12.50, 1,234.56, 1.012,50
_AMOUNT = r'(?:\d{1,3}(?:[.,]\d{3})+|\d+)(?:[.,]\d{2})?'

PRICE_SHAPE = PatternSpec(
    name='price_shape',
    pattern=r'^(?:[$€£¥]\s*' + _AMOUNT + r'|' + _AMOUNT + r'\s*[$€£¥]|(?:\d{1,3}(?:,\d{3})+|\d+)\.\d{2})$',
    example='$12.50',
    notes='Whole label value must look like a price',
)

CURRENCY_AMOUNT = PatternSpec(
    name='currency_amount',
    pattern=r'[$€£¥]\s*' + _AMOUNT + r'|' + _AMOUNT + r'\s*[$€£¥]',
    example='€ 9,50',
)

PRICE_CONTEXT_PATTERNS: Tuple[PatternSpec, ...] = (
    PatternSpec(name='amount_with_cents', pattern=r'\b(?:\d{1,3}(?:,\d{3})+|\d+)\.\d{2}\b', example='12.99'),
    PatternSpec(name='dollar_amount', pattern=r'\$\s*(?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d{2})?', example='$ 12'),
)

PRICE_CONTEXT_WORDS = ('ticket', 'admission', 'total', 'amount', 'payment')

# Lines mentioning money are never read for seats
PRICE_LINE_WORDS = ('price', 'total')


# ─── Seats ────────────────────────────────────────────────────────────────────

SEAT_NUMBER_PATTERNS: Tuple[PatternSpec, ...] = (
    PatternSpec(
        name='row_then_seat',
        pattern=r'\brow\s+([a-z])(?:\s+(?:seat|no\.?)\s+|\s*-\s*|\s*:\s*)(\d{1,2})\b',
        example='ROW A SEAT 12',
    ),
    PatternSpec(
        name='row_letter_number',
        pattern=r'\b(?:row\s+)?([a-z])[-\s]*(\d{1,2})\b',
        example='ROW A12',
        notes='Also matches bare A-12 / A12',
    ),
    PatternSpec(
        name='seat_only',
        pattern=r'\b(?:seat|no\.?)\s*(\d{1,2})\b',
        example='SEAT 12',
        notes='Only a seat number, no row',
    ),
)

SEAT_LABELS = ('seat:', 'seat #:', 'seat no:', 'seat number:', 'seating:')
SEAT_DELIMITERS = (',', '|', '-', 'row:', 'section:')
# A seat value ends where another field starts on the same line
SEAT_VALUE_STOPS = (',', '|', 'row', 'section')

ROW_SEAT_PATTERNS: Tuple[PatternSpec, ...] = (
    PatternSpec(
        name='row_comma_seat',
        pattern=r'\brow[:\s]+([a-z0-9]+)[,\s]+seat[:\s#]*([a-z0-9]+)\b',
        example='Row A, Seat 12',
    ),
    PatternSpec(
        name='row_pair',
        pattern=r'\brow[:\s]+([a-z0-9]+)[,\s]+(\d+)\b',
        example='Row: A 12',
    ),
)

LETTER_SEAT = PatternSpec(
    name='letter_seat',
    pattern=r'\b([a-z])[:\-\s]+(\d{1,3})\b',
    example='A: 12',
)

SEAT_FORMAT_PATTERNS: Tuple[PatternSpec, ...] = (
    PatternSpec(name='letter_number', pattern=r'\b([a-z])[- ]?(\d{1,3})\b', example='A12'),
    PatternSpec(name='number_letter', pattern=r'\b(\d{1,3})[- ]?([a-z])\b', example='12A'),
)

SEAT_CONTEXT_WORDS = ('seat', 'row', 'section')


# ─── Theater chains ───────────────────────────────────────────────────────────

KNOWN_CHAINS = (
    'amc', 'regal', 'cinemark', 'fandango', 'alamo', 'drafthouse',
    'marquee', 'harkins', 'studio', 'showtimes', 'landmark', 'angelika',
    'theatres', 'cinemas', 'multiplex', 'megaplex', 'stubs',
)

HEADER_FOOTER_CHAINS = (
    'amc', 'regal', 'cinemark', 'fandango', 'alamos', 'drafthouse',
    'marquee', 'harkins', 'studio', 'showtimes', 'landmark', 'angelika',
)

# (chain keyword, words that must accompany it, full brand name)
CHAIN_BRANDS = (
    ('amc', ('theatres',), 'AMC Theatres'),
    ('regal', ('cinemas', 'entertainment'), 'Regal Cinemas'),
    ('cinemark', ('premium', 'theatres'), 'Cinemark Theatres'),
)

CHAIN_LABELS = ('chain:', 'theater chain:', 'cinema chain:', 'network:', 'brand:')
CHAIN_DELIMITERS = (',', '|', '-', '(', 'theater name:', 'location:')

HEADER_FOOTER_KEYWORDS = (
    'ticket', 'receipt', 'admission', 'cinema', 'theater',
    'welcome', 'thank you', 'enjoy', 'presents', 'admit one',
    'www.', '.com', '.org', 'barcode', 'qr code', 'ticket number',
    'cinema chain', 'theater network', 'location', 'address',
)

HEADER_FOOTER_MAX_LENGTH = 30

# Upper-cased when title-casing extracted names
ACRONYMS = ('amc', 'imax', 'rpx', 'vip', 'xd', 'nyc', 'ny', 'atx')


# ─── Theater names ────────────────────────────────────────────────────────────

KNOWN_THEATERS = (
    'amc empire', 'amc loews', 'amc classic', 'regal union square', 'cinemark palace',
    'amc theaters', 'regal cinemas', 'cinemark theatres', 'studio movie grill',
    'harkins premium', 'landmark theaters', 'angelika film center', 'alamo draft house',
    'marquee cinemas', 'showtimes theaters', 'megaplex cinemas', 'stubs theaters',
)

CHAIN_LOCATIONS = {
    'amc': ('empire', 'loews', 'classic', 'dine', 'megaplex', 'studio', 'marquee'),
    'regal': ('union square', 'royal', 'south beach', 'greenacres', 'delray', 'palm beach'),
    'cinemark': ('palace', 'premiere', 'grand', 'plaza', 'prime', 'delray', 'boca'),
    'alamo': ('drafthouse', 'atx', 'village', 'silo', 'ritz', 'cary', 'dallas'),
    'landmark': ('nu art', 'westwood', 'courthouse', 'shelby', 'columbia', 'harvard'),
    'angelika': ('film center', 'ny', 'dallas', 'houston', 'philly', 'atlanta'),
    'showtimes': ('asbury', 'jersey', 'new york', 'los angeles', 'chicago', 'seattle'),
    'harkins': ('premium', 'superstar', 'christie', 'dine', 'deluxe', 'platinum'),
    'studio': ('movie grill', 'cinema', 'theater', 'screen', 'showcase', 'deluxe'),
}

LOCATION_LABELS = ('location:', 'theater name:', 'cinema name:', 'venue:', 'theater:')
LOCATION_DELIMITERS = (',', '|', '-', '(', 'show time:', 'date:')

VENUE_WORD = re.compile(r'\b(?:theat(?:er|re)s?|cinemas?)\b')
VENUE_LINE_MAX_LENGTH = 50
VENUE_NOISE_WORDS = ('thank', 'welcome', 'enjoy', 'visit')


# ─── Theater rooms ────────────────────────────────────────────────────────────

ROOM_LABELS = ('room:', 'theater:', 'theatre:', 'auditorium:', 'cinema:', 'screen:')
ROOM_DELIMITERS = (',', '|', '-', 'seat:', 'time:')

ROOM_PATTERNS: Tuple[PatternSpec, ...] = (
    PatternSpec(name='screen_number', pattern=r'\bscr(?:een)?\s*#?\s*(\d+[a-z]?)\b', example='Screen 7'),
    PatternSpec(name='auditorium_number', pattern=r'\baud(?:itorium)?\s*#?\s*(\d+[a-z]?)\b', example='AUD #12'),
    PatternSpec(name='theater_number', pattern=r'\btheat(?:er|re)?\s*#?\s*(\d+[a-z]?)\b', example='Theatre 4'),
    PatternSpec(name='room_number', pattern=r'\broom\s*#?\s*(\d+[a-z]?)\b', example='Room 2B'),
    PatternSpec(
        name='lettered_room',
        pattern=r'\b(?:theater|theatre|auditorium|screen|room)\s+([a-z])\b',
        example='Theater A',
    ),
)

ROOM_STANDALONE_NUMBER = re.compile(r'(?:^|\s)(?:#\s*)?(\d{1,2})(?=\s|$)')
ROOM_TRAILING_TOKEN = re.compile(r'\s([a-z]|[0-9]+[a-z]?)\s*$')
ROOM_CONTEXT_WORDS = ('auditorium', 'theater', 'theatre', 'screen', 'cinema', 'room')

PREMIUM_FORMAT = PatternSpec(
    name='premium_format',
    pattern=r'\b(imax|rpx|vip|xd|prime|dolby|d-box)\b',
    example='IMAX',
)


# ─── Ticket numbers ───────────────────────────────────────────────────────────

TICKET_NUMBER_LABELS = (
    'ticket #', 'ticket no', 'ticket number', 'confirmation #', 'confirmation no',
    'confirmation number', 'order #', 'order no', 'reference #', 'ref #',
    'ticket:', 'receipt #',
)
TICKET_NUMBER_DELIMITERS = (',', '|', '-', ' ')

# Whole-value shapes; a ticket number always carries at least one digit
TICKET_NUMBER_SHAPES: Tuple[PatternSpec, ...] = (
    PatternSpec(name='numeric', pattern=r'\d{6,15}', example='123456789'),
    PatternSpec(name='alphanumeric', pattern=r'(?=[a-z]*\d)[a-z0-9]{6,15}', example='AB12CD34'),
    PatternSpec(name='hyphenated', pattern=r'(?=.*\d)[\d-]{8,17}', example='123-456-789'),
)

TICKET_NUMBER_PATTERNS: Tuple[PatternSpec, ...] = (
    PatternSpec(name='alphanumeric_token', pattern=r'\b((?=[a-z]*\d)[a-z0-9]{6,12})\b', example='X7K29QM4'),
    PatternSpec(name='numeric_token', pattern=r'\b(\d{6,12})\b', example='40211873'),
    PatternSpec(name='hyphenated_triplet', pattern=r'\b(\d{3,4}-\d{3,4}-\d{3,4})\b', example='123-456-7890'),
)

TICKET_NUMBER_CONTEXT_WORDS = ('ticket', 'confirmation', 'order', 'reference', 'transaction')

BARCODE_WORDS = ('barcode', 'bar code', 'qr code', 'scan')
BARCODE_WINDOW = 2
BARCODE_TOKEN = PatternSpec(
    name='barcode_token',
    pattern=r'\b((?=[a-z]*\d)[a-z0-9]{6,15})\b',
    example='9XK2M7QP41',
)


# ─── Ratings ──────────────────────────────────────────────────────────────────

RATING_LABELS = ('rating:', 'rated:', 'film rating:', 'movie rating:')
RATING_DELIMITERS = (',', '|')

RATING_PATTERNS: Tuple[PatternSpec, ...] = (
    PatternSpec(name='rated_form', pattern=r'\brated\s+' + _RATING_TOKEN + r'\b', example='Rated R'),
    PatternSpec(name='parenthesized', pattern=r'\(\s*' + _RATING_TOKEN + r'\s*\)', example='(PG-13)'),
    PatternSpec(
        name='bare_token',
        pattern=_NOT_SEAT_LETTER + r'\b' + _RATING_TOKEN + r'\b(?!\s*[-:]?\s*\d)',
        example='PG13',
        notes='Not followed by a number: "G-12" is a seat',
    ),
)

RATING_TOKEN = RATING_PATTERNS[-1]


# ─── Movie titles ─────────────────────────────────────────────────────────────

TITLE_LABELS = (
    'movie:', 'title:', 'feature:', 'presenting:',
    'showing:', 'now showing:', 'feature film:',
    'film:', 'picture:',
)
TITLE_DELIMITERS = (
    ',', '|', '-', '(', 'rated', 'rating:', 'runtime:', 'time:', 'price:', 'seat:', 'row:', 'screen:',
)

TITLE_WITH_RATING = PatternSpec(
    name='title_with_rating',
    pattern=r'^([a-z0-9][^()]{2,}?)\s*(?:\(\s*(?:rated\s+)?' + _RATING_TOKEN + r'\s*\)|\s+rated\s+' + _RATING_TOKEN + r')$',
    example='Dune: Part Two (PG-13)',
)

TRAILING_RATING = re.compile(r'(?:\s+|\s*\(\s*)(?:rated\s+)?' + _RATING_TOKEN + r'\s*\)?\s*$')

TITLE_STOP_SECTION = re.compile(
    r'\b(rated|rating|runtime|duration|price|seat|row|time|date|screen|theatre|theater|cinema)\b.*$'
)

GENERIC_HEADERS = (
    'ticket', 'receipt', 'admission', 'cinema', 'theater',
    'welcome', 'thank you', 'enjoy', 'presents', 'admit one',
    'confirmation', 'purchase', 'order', 'transaction',
    'showtime', 'show time', 'date', 'time', 'price',
)
GENERIC_HEADER_MAX_LENGTH = 20

NOT_A_TITLE = (
    re.compile(r'^\d+$'),
    re.compile(r'^[a-z]$'),
    re.compile(r'^(row|seat|aisle|screen|theater|theatre|cinema)\s*\d*$'),
    re.compile(r'^[$£€¥]\s*\d+'),
    re.compile(r'^(adult|child|senior|student)'),
)


# ─── Ticket detection ─────────────────────────────────────────────────────────

TICKET_KEYWORDS = (
    'ticket', 'cinema', 'theater', 'theatre', 'admit', 'admission',
    'seat', 'row', 'showtime', 'show time', 'screening', 'auditorium',
    'movie', 'film', 'feature', 'presentation', 'showing',
)

ALL_LABELS = (
    TIME_LABELS + PRICE_LABELS + SEAT_LABELS + CHAIN_LABELS + LOCATION_LABELS
    + ROOM_LABELS + RATING_LABELS + ('date:', 'show date:', 'row:', 'section:')
)


def contains_word(text: str, word: str) -> bool:
    """True when `word` appears in `text` on word boundaries."""
    return re.search(r'\b' + re.escape(word) + r'\b', text) is not None
