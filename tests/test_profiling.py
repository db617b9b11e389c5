"""Tests for glulex.profiling — scan profiling API."""

from glulex import GLU, LanguageDefinition, Lexer, Pop, Rule, tokenize
from glulex.profiling import (
    ScanAccumulator,
    get_scan_accumulator,
    profiled_scan,
)


class TestGetScanAccumulator:
    def test_returns_none_when_disabled(self) -> None:
        assert get_scan_accumulator() is None

    def test_returns_none_outside_context(self) -> None:
        with profiled_scan():
            pass
        assert get_scan_accumulator() is None


class TestProfiledScan:
    def test_yields_accumulator(self) -> None:
        with profiled_scan() as acc:
            assert isinstance(acc, ScanAccumulator)

    def test_accumulator_available_inside_context(self) -> None:
        with profiled_scan() as acc:
            assert get_scan_accumulator() is acc

    def test_records_scan(self) -> None:
        with profiled_scan() as acc:
            list(tokenize("x \x01", "glu"))
        assert acc.scans == 1
        assert acc.source_length == 3
        assert acc.token_count == 3
        assert acc.error_count == 1
        # root plus the line-start prelude
        assert acc.max_depth == 2

    def test_records_multiple_scans(self) -> None:
        with profiled_scan() as acc:
            list(tokenize("a", "glu"))
            list(tokenize("b", "gil"))
            list(tokenize("c", "glu"))
        assert acc.scans == 3

    def test_rescanning_exhausted_lexer_records_once(self) -> None:
        lexer = Lexer("let x", GLU)
        with profiled_scan() as acc:
            first = list(lexer.tokenize())
            second = list(lexer.tokenize())
        assert first
        assert second == []
        assert acc.scans == 1
        assert acc.token_count == len(first)

    def test_unfinished_scan_is_not_recorded(self) -> None:
        with profiled_scan() as acc:
            next(tokenize("a b c", "glu"))
        assert acc.scans == 0

    def test_max_depth_tracks_nesting(self) -> None:
        with profiled_scan() as acc:
            list(Lexer("/* /* /* x */ */ */", GLU).tokenize())
        assert acc.max_depth == 5

    def test_underflow_counted(self) -> None:
        popper = LanguageDefinition(name="popper", states={"root": (Rule(r"x", None, Pop()),)})
        with profiled_scan() as acc:
            list(Lexer("xyz", popper).tokenize())
        assert acc.underflows == 1

    def test_total_duration_positive(self) -> None:
        with profiled_scan() as acc:
            list(tokenize("let x = 1", "glu"))
        assert acc.total_duration_ms > 0


class TestSummary:
    def test_empty_summary(self) -> None:
        summary = ScanAccumulator().summary()
        assert summary["scans"] == 0
        assert summary["source_length"] == 0
        assert summary["token_count"] == 0
        assert summary["underflows"] == 0

    def test_summary_after_scan(self) -> None:
        with profiled_scan() as acc:
            list(tokenize("let x", "glu"))
        summary = acc.summary()
        assert summary["scans"] == 1
        assert summary["token_count"] == 3
        assert "total_ms" in summary
