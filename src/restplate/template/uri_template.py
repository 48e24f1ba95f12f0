from __future__ import annotations

"""
uri_template – URI templates (RFC 6570 level 1, relaxed).

Differences from the RFC:
  • unresolved expressions are preserved as pct-encoded literals
    ('{foo}' -> '%7Bfoo%7D');
  • all literals are pct-encoded once, at parse time;
  • the path and the query string use different literal rules: the first
    '?' outside of an expression splits the template, path literals keep
    pchar and '/', query literals keep '&', '=' and '?'.
"""

from typing import List, Optional

from restplate.constants import DEFAULT_CHARSET
from restplate.template import expressions, uri_utils
from restplate.template.chunks import TemplateChunk
from restplate.template.template import Template
from restplate.template.tokenizer import ChunkTokenizer


def find_query_delimiter(value: str) -> Optional[int]:
    """Return the index of the first '?' that is not part of an expression."""
    offset = 0
    for token in ChunkTokenizer(value):
        if not (token.startswith('{') and expressions.parse(token) is not None):
            idx = token.find('?')
            if idx != -1:
                return offset + idx
        offset += len(token)
    return None


class UriTemplate(Template):
    """Template for a full or relative URI."""

    def __init__(self, template: str, *, encode_slash: bool = True, charset: str = DEFAULT_CHARSET) -> None:
        super().__init__(
            template,
            allow_unresolved=True,
            encode=True,
            encode_slash=encode_slash,
            charset=charset,
        )

    @classmethod
    def create(cls, template: str, charset: str = DEFAULT_CHARSET, encode_slash: bool = True) -> 'UriTemplate':
        return cls(template, encode_slash=encode_slash, charset=charset)

    @classmethod
    def append(cls, uri_template: 'UriTemplate', fragment: str) -> 'UriTemplate':
        """Return a new template for *uri_template* followed by *fragment*."""
        return cls(
            str(uri_template) + (fragment or ''),
            encode_slash=uri_template.encode_slash,
            charset=uri_template.charset,
        )

    def _parse_template(self, value: str) -> List[TemplateChunk]:
        split_at = find_query_delimiter(value)
        if split_at is None:
            return self._parse_fragment(value, self._encode_path)
        return (
            self._parse_fragment(value[:split_at], self._encode_path)
            + self._parse_fragment(value[split_at:], self._encode_query)
        )

    def _encode_path(self, text: str) -> str:
        return uri_utils.path_encode(text, self.charset)

    def _encode_query(self, text: str) -> str:
        return uri_utils.query_encode(text, self.charset)
