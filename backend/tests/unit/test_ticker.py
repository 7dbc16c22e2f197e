"""Tests for ticker symbol utilities."""

from utils.ticker import match_tracked_symbol, split_symbol

TRACKED = ["JKH", "COMB", "HNB"]


class TestSplitSymbol:
    def test_strips_suffix_and_uppercases(self):
        assert split_symbol("jkh.n0000") == "JKH"

    def test_no_suffix(self):
        assert split_symbol("HNB") == "HNB"

    def test_only_first_dot_splits(self):
        assert split_symbol("ABC.N.X") == "ABC"

    def test_non_string(self):
        assert split_symbol(None) == ""
        assert split_symbol(123) == ""


class TestMatchTrackedSymbol:
    def test_suffixed_identifier_matches(self):
        assert match_tracked_symbol("JKH.N0000", TRACKED) == "JKH"

    def test_case_insensitive(self):
        assert match_tracked_symbol("comb.n0000", TRACKED) == "COMB"
        assert match_tracked_symbol("COMB", ["comb"]) == "COMB"

    def test_no_partial_overlap(self):
        assert match_tracked_symbol("COMBX", TRACKED) is None
        assert match_tracked_symbol("COMBX.N0000", TRACKED) is None
        assert match_tracked_symbol("CO", TRACKED) is None

    def test_untracked_and_empty(self):
        assert match_tracked_symbol("LOLC.N0000", TRACKED) is None
        assert match_tracked_symbol("", TRACKED) is None
        assert match_tracked_symbol(None, TRACKED) is None
