"""
Tests for the text helpers, candidate arbitration and money parsing shared
by every ticket field extractor.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from decimal import Decimal

import pytest

from ticketscan.utils.candidates import FieldCandidate
from ticketscan.utils.money import MoneyFormat, format_price, normalize_price, parse_money
from ticketscan.utils.scoring import select_best, select_best_candidate
from ticketscan.utils.text import cut_at, fold, normalize, scan_label, split_lines, title_case


class TestNormalize:
    """normalize() cleans candidate values."""

    def test_collapses_whitespace_and_strips_punctuation(self):
        assert normalize("  Row  A,\n Seat 12 ") == "Row A Seat 12"

    def test_keeps_allowed_punctuation(self):
        assert normalize("AMC's #1 Theater!") == "AMC's 1 Theater"
        assert normalize("Dune: Part Two") == "Dune: Part Two"

    def test_empty_input(self):
        assert normalize(None) == ""
        assert normalize("   ") == ""


class TestFold:
    """fold() builds the lower-cased matching copy."""

    def test_lowercases_and_keeps_lines(self):
        assert fold("AMC  Empire\r\nRow\tA ") == "amc empire\nrow a"

    def test_old_mac_line_endings(self):
        assert fold("A\rB") == "a\nb"

    def test_empty_input(self):
        assert fold(None) == ""


class TestSplitLines:

    def test_drops_blank_lines(self):
        assert split_lines("a\n\n b\n") == ['a', ' b']

    def test_keep_blank(self):
        assert split_lines("a\n\n b\n", keep_blank=True) == ['a', '', ' b', '']


class TestScanLabel:
    """Label-prefix scan shared by the label strategies."""

    def test_value_runs_to_end_of_line(self):
        assert list(scan_label("seat: a12\nrow: b", ('seat:',))) == ['a12']

    def test_delimiter_used_on_last_line(self):
        assert list(scan_label("seat: a12, row b", ('seat:',), (',',))) == ['a12']

    def test_fallback_length_without_delimiter(self):
        assert list(scan_label("seat: abcdefghijklmnop", ('seat:',), fallback_length=5)) == ['abcd']

    def test_labels_tried_in_order(self):
        text = "rated: r\nrating: pg"
        assert list(scan_label(text, ('rating:', 'rated:'))) == ['pg', 'r']

    def test_skip_chars(self):
        assert list(scan_label("ticket #: 123\n", ('ticket #',), skip_chars=': ')) == ['123']

    def test_missing_label(self):
        assert list(scan_label("row a", ('seat:',))) == []

    def test_cut_at_earliest_delimiter(self):
        assert cut_at("12 | row: f, x", (",", "|")) == "12"
        assert cut_at("a12", (",",)) == "a12"


class TestMiscText:

    def test_title_case_with_acronyms(self):
        assert title_case("amc empire 25", acronyms=('amc',)) == "AMC Empire 25"
        assert title_case("regal union square") == "Regal Union Square"


class TestSelectBest:
    """First usable candidate wins, unchanged."""

    def test_first_non_blank_entry(self):
        assert select_best([None, '  ', 'A-12', 'Row A, Seat 12']) == 'A-12'

    def test_value_returned_unchanged(self):
        assert select_best(['', ' x ']) == ' x '

    @pytest.mark.parametrize("candidates", [[], [None], [None, '', '\t\n']])
    def test_nothing_usable(self, candidates):
        assert select_best(candidates) is None

    def test_idempotent(self):
        candidates = [None, 'PG-13', 'R']
        assert select_best(candidates) == select_best(candidates) == 'PG-13'

    def test_accepts_generator(self):
        assert select_best(value for value in (None, 'R')) == 'R'

    def test_select_best_candidate_keeps_strategy(self):
        candidates = [
            FieldCandidate(value=None, strategy='from_label'),
            FieldCandidate(value=' ', strategy='from_pattern'),
            FieldCandidate(value='A-12', strategy='from_line'),
        ]
        winner = select_best_candidate(candidates)
        assert winner is not None
        assert winner.strategy == 'from_line'
        assert select_best_candidate(candidates[:2]) is None


class TestMoney:
    """Price parsing (US and European formats)."""

    @pytest.mark.parametrize("raw,expected", [
        ("$12.50", Decimal('12.50')),
        ("12,50 €", Decimal('12.50')),
        ("1.012,50", Decimal('1012.50')),
        ("$ 12", Decimal('12')),
        ("15.99 USD", Decimal('15.99')),
        ("$1,234.56", Decimal('1234.56')),
    ])
    def test_parse_money(self, raw, expected):
        assert parse_money(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "free", "$0.00", "$20000.00"])
    def test_parse_money_rejects(self, raw):
        assert parse_money(raw) is None

    def test_format_hint(self):
        assert parse_money("1,250", MoneyFormat.US) == Decimal('1250')

    def test_format_price(self):
        assert format_price(Decimal('12.5')) == '12.50'

    def test_normalize_price(self):
        assert normalize_price("$ 12") == '12.00'
        assert normalize_price("n/a") is None
