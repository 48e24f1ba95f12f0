from __future__ import annotations

"""
template – Base template: parse once, expand many times.

A Template is a relaxed RFC 6570 template usable outside of URIs as well
(headers, query values, bodies). The raw string is tokenized and parsed
eagerly in the constructor into an immutable tuple of chunks; `expand`
walks that tuple against a variable mapping and keeps all intermediate
state local, so one instance can be shared by concurrent callers.

Behaviour is controlled by three flags:

    allow_unresolved  keep unresolved expressions as (encoded) literal text
                      instead of dropping them.
    encode            pct-encode literals at parse time and values at
                      expansion time.
    encode_slash      when False, '%2F' produced by value encoding is turned
                      back into '/'.
"""

from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple

from restplate.constants import DEFAULT_CHARSET
from restplate.errors import TemplateError
from restplate.template import expressions, uri_utils
from restplate.template.chunks import Expression, Literal, TemplateChunk
from restplate.template.tokenizer import ChunkTokenizer


class Template:
    """Generic template made of Literal and Expression chunks."""

    def __init__(
        self,
        value: str,
        *,
        allow_unresolved: bool = False,
        encode: bool = True,
        encode_slash: bool = True,
        charset: str = DEFAULT_CHARSET,
    ) -> None:
        if value is None:
            raise TemplateError('template is required.')
        self._configure(allow_unresolved, encode, encode_slash, charset)
        self._template = value
        self._chunks: Tuple[TemplateChunk, ...] = tuple(self._parse_template(value))

    @classmethod
    def from_chunks(
        cls,
        chunks: Sequence[TemplateChunk],
        *,
        allow_unresolved: bool = False,
        encode: bool = True,
        encode_slash: bool = True,
        charset: str = DEFAULT_CHARSET,
    ) -> 'Template':
        """Build a template from chunks that were parsed elsewhere."""
        if chunks is None:
            raise TemplateError('chunks are required.')
        tpl = cls.__new__(cls)
        Template._configure(tpl, allow_unresolved, encode, encode_slash, charset)
        tpl._chunks = tuple(chunks)
        tpl._template = ''.join(chunk.value for chunk in tpl._chunks)
        return tpl

    def _configure(self, allow_unresolved: bool, encode: bool, encode_slash: bool, charset: str) -> None:
        self._allow_unresolved = bool(allow_unresolved)
        self._encode = bool(encode)
        self._encode_slash = bool(encode_slash)
        self._charset = charset or DEFAULT_CHARSET

    # ------------------------------------------------------------------ #
    # Parsing
    # ------------------------------------------------------------------ #
    def _parse_template(self, value: str) -> List[TemplateChunk]:
        return self._parse_fragment(value, self.encode_literal)

    @staticmethod
    def _parse_fragment(fragment: str, encode_literal: Callable[[str], str]) -> List[TemplateChunk]:
        chunks: List[TemplateChunk] = []
        for token in ChunkTokenizer(fragment):
            if token.startswith('{'):
                expression = expressions.parse(token)
                if expression is not None:
                    chunks.append(expression)
                    continue
            literal = encode_literal(token)
            if literal:
                chunks.append(Literal(literal))
        return chunks

    def encode_literal(self, text: str) -> str:
        """Encode literal *text* for this template's context."""
        if not self._encode:
            return text
        return uri_utils.encode(text, self._charset, allow_reserved=True)

    # ------------------------------------------------------------------ #
    # Expansion
    # ------------------------------------------------------------------ #
    def expand(self, variables: Mapping[str, Any]) -> Optional[str]:
        """Expand the template against *variables*.

        Args:
            variables: Values by expression name. An empty mapping is valid.

        Returns:
            The expanded text, or None when the template has chunks but every
            one of them was unresolved and dropped.

        Raises:
            TemplateError: *variables* is None.
            PatternMismatchError: A value does not match its expression regex.
        """
        if variables is None:
            raise TemplateError('variable map is required.')
        if not self._chunks:
            return ''

        parts: List[str] = []
        for chunk in self._chunks:
            if isinstance(chunk, Expression):
                expanded = self._resolve_expression(chunk, variables)
            else:
                expanded = chunk.value
            if expanded is None:
                continue
            parts.append(expanded)

        if not parts:
            return None
        return ''.join(parts)

    def _resolve_expression(self, expression: Expression, variables: Mapping[str, Any]) -> Optional[str]:
        value = variables.get(expression.name)
        if value is not None:
            expanded = expression.expand(value, encode=self._encode, charset=self._charset)
            if not self._encode_slash:
                expanded = expanded.replace('%2F', '/')
            return expanded
        if self._allow_unresolved:
            return self.encode_literal(str(expression))
        return None

    # ------------------------------------------------------------------ #
    # Introspection
    # ------------------------------------------------------------------ #
    @property
    def template(self) -> str:
        return self._template

    @property
    def chunks(self) -> Tuple[TemplateChunk, ...]:
        return self._chunks

    @property
    def variables(self) -> List[str]:
        """Expression names in chunk order, duplicates included."""
        return [chunk.name for chunk in self._chunks if isinstance(chunk, Expression)]

    @property
    def literals(self) -> List[str]:
        return [chunk.value for chunk in self._chunks if isinstance(chunk, Literal)]

    def is_literal(self) -> bool:
        return not any(isinstance(chunk, Expression) for chunk in self._chunks)

    @property
    def allow_unresolved(self) -> bool:
        return self._allow_unresolved

    @property
    def encode(self) -> bool:
        return self._encode

    @property
    def encode_slash(self) -> bool:
        return self._encode_slash

    @property
    def charset(self) -> str:
        return self._charset

    def __str__(self) -> str:
        return ''.join(chunk.value for chunk in self._chunks)

    def __repr__(self) -> str:
        return f'{type(self).__name__}({str(self)!r})'
