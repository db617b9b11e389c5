"""Free-threading safe — scan 1000 GIL functions in parallel."""

from concurrent.futures import ThreadPoolExecutor

from glulex import TokenKind, tokenize

docs = [f"gil func @f{i} : $() -> Int {{\n    %0 = integer_literal {i}\n    return %0\n}}" for i in range(1000)]


def count_keywords(source: str) -> int:
    return sum(1 for t in tokenize(source, "gil") if t.kind.is_a(TokenKind.KEYWORD))


with ThreadPoolExecutor(max_workers=8) as ex:
    results = list(ex.map(count_keywords, docs))

print(f"Scanned {len(results)} functions in parallel")
print("Keywords in first function:", results[0])
