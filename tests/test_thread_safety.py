"""Thread safety tests for glulex.

The docs claim definitions, pattern tables and registries are safe to
share and that each Lexer is independent. These tests verify that:
1. Concurrent scans over shared definitions give identical results
2. The pattern table cache builds one table per definition under contention
3. Per-thread scan config does not leak between workers

These tests use real threading to catch actual concurrency bugs.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed

import pytest

from glulex import (
    Emit,
    LanguageDefinition,
    Mixin,
    Rule,
    ScanConfig,
    TokenKind,
    get_table,
    scan_config_context,
    tokenize,
)

GLU_SOURCE = """\
#!/usr/bin/env glu
import std::io

@inline
func greet(name: String) -> Int {
    let n = 0x2A /* answer /* nested */ */
    print("hello \\(name.upper()) #\\(n)")
    return $0 + 1.5e3
}
"""

GIL_SOURCE = """\
gil func @main : $() -> Void {
    %0 = integer_literal 42
    %1 = struct_extract %0, #field
    return %1
}
"""


def _snapshot(source: str, language: str) -> list[tuple[TokenKind, str, int]]:
    return [(t.kind, t.value, t.offset) for t in tokenize(source, language)]


class TestConcurrentScans:
    @pytest.mark.parametrize("source,language", [(GLU_SOURCE, "glu"), (GIL_SOURCE, "gil")])
    def test_results_match_serial_scan(self, source: str, language: str) -> None:
        expected = _snapshot(source, language)

        with ThreadPoolExecutor(max_workers=8) as pool:
            futures = [pool.submit(_snapshot, source, language) for _ in range(64)]
            results = [f.result() for f in as_completed(futures)]

        assert all(result == expected for result in results)

    def test_mixed_languages(self) -> None:
        expected = {"glu": _snapshot(GLU_SOURCE, "glu"), "gil": _snapshot(GIL_SOURCE, "gil")}
        jobs = [("glu", GLU_SOURCE), ("gil", GIL_SOURCE)] * 16

        with ThreadPoolExecutor(max_workers=8) as pool:
            futures = {pool.submit(_snapshot, src, lang): lang for lang, src in jobs}
            for future in as_completed(futures):
                assert future.result() == expected[futures[future]]


class TestTableCache:
    def test_one_table_per_definition(self) -> None:
        definition = LanguageDefinition(
            name="shared",
            states={
                "root": (Mixin("words"), Rule(r"\s+")),
                "words": (Rule(r"\w+", Emit(TokenKind.NAME)),),
            },
        )

        with ThreadPoolExecutor(max_workers=8) as pool:
            tables = list(pool.map(lambda _: get_table(definition), range(32)))

        assert all(table is tables[0] for table in tables)


class TestConfigIsolation:
    def test_config_does_not_leak_between_workers(self) -> None:
        source = "/* a /* b */ c */"

        def scan(coalesced: bool) -> int:
            with scan_config_context(ScanConfig(coalesce=coalesced)):
                return len(list(tokenize(source, "glu")))

        with ThreadPoolExecutor(max_workers=4) as pool:
            flags = [i % 2 == 0 for i in range(32)]
            counts = list(pool.map(scan, flags))

        for coalesced, count in zip(flags, counts):
            assert count == (1 if coalesced else 7)
