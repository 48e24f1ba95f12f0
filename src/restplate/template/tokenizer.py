from __future__ import annotations

"""
ChunkTokenizer – splits a template into literal and expression tokens.

Tokens alternate between text outside of braces and '{...}' spans. Braces
nested inside an expression only move a depth counter, so the outermost span
is emitted as a single token: "foo{bar{baz}}/{qux}" yields
["foo", "{bar{baz}}", "/", "{qux}"]. A '}' seen outside of an expression is
plain text, and empty spans are never emitted.
"""

from typing import Iterator, List


class ChunkTokenizer:
    """Iterator over the tokens of a template string."""

    def __init__(self, template: str) -> None:
        self._tokens: List[str] = self._split(template)
        self._index = 0

    @staticmethod
    def _split(template: str) -> List[str]:
        tokens: List[str] = []
        outside = True
        level = 0
        last = 0
        for idx, ch in enumerate(template):
            if ch == '{':
                if outside:
                    if last < idx:
                        tokens.append(template[last:idx])
                    last = idx
                    outside = False
                else:
                    level += 1
            elif ch == '}' and not outside:
                if level > 0:
                    level -= 1
                    continue
                if last < idx:
                    tokens.append(template[last:idx + 1])
                last = idx + 1
                outside = True
        if last < len(template):
            tokens.append(template[last:])
        return tokens

    @property
    def tokens(self) -> List[str]:
        return list(self._tokens)

    def has_next(self) -> bool:
        return self._index < len(self._tokens)

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        if not self.has_next():
            raise StopIteration
        token = self._tokens[self._index]
        self._index += 1
        return token


def tokenize(template: str) -> List[str]:
    """Return the tokens of *template* as a list."""
    return ChunkTokenizer(template).tokens
