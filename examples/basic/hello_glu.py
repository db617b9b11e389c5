"""Tokenize Glu in 3 lines — zero config, zero deps."""

from glulex import tokenize

for token in tokenize('func main() { print("hi \\(name)") }', "glu"):
    print(f"{token.kind.value:<24} {token.value!r}")
