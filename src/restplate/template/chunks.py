from __future__ import annotations

"""Template chunk variants.

A parsed template is a sequence of two kinds of chunks only:

    • Literal     – text already encoded for its context, copied verbatim.
    • Expression  – a named slot, optionally constrained by a regex, that is
                    replaced by a caller-supplied value at expansion time.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Pattern, Union

from restplate.constants import DEFAULT_CHARSET
from restplate.errors import PatternMismatchError
from restplate.template import uri_utils

SEPARATOR = ','


@dataclass(frozen=True)
class Literal:
    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError('a literal value is required.')

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Expression:
    """A '{name}' or '{name:pattern}' slot."""

    name: str
    pattern_text: Optional[str] = None
    modifier: str = ''
    pattern: Optional[Pattern[str]] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError('an expression name is required.')
        if self.pattern_text:
            object.__setattr__(self, 'pattern', re.compile(self.pattern_text))

    @property
    def value(self) -> str:
        return str(self)

    def __str__(self) -> str:
        if self.pattern_text:
            return '{%s%s:%s}' % (self.modifier, self.name, self.pattern_text)
        return '{%s%s}' % (self.modifier, self.name)

    def matches(self, value: str) -> bool:
        """Return True when there is no pattern or *value* fully matches it."""
        if self.pattern is None:
            return True
        return self.pattern.fullmatch(value) is not None

    def expand(self, variable: Any, *, encode: bool = True, charset: str = DEFAULT_CHARSET) -> str:
        """Render *variable* for this slot.

        Iterables are comma-joined, mappings become 'k=v' pairs, anything else
        is rendered with ``str()``. The regex constraint is checked against the
        final (possibly encoded) text.

        Raises:
            PatternMismatchError: The rendered value does not match the pattern.
        """
        if isinstance(variable, Mapping):
            result = self._expand_mapping(variable, encode, charset)
        elif _is_iterable(variable):
            result = self._expand_iterable(variable, encode, charset)
        else:
            result = self._encode(variable, encode, charset)

        if not self.matches(result):
            raise PatternMismatchError(result, self.pattern_text or '')
        return result

    @staticmethod
    def _encode(value: Any, encode: bool, charset: str) -> str:
        if isinstance(value, (bytes, bytearray)):
            text = bytes(value).decode(charset)
        elif isinstance(value, bool):
            text = 'true' if value else 'false'
        else:
            text = value if isinstance(value, str) else str(value)
        return uri_utils.encode(text, charset) if encode else text

    def _expand_iterable(self, values: Any, encode: bool, charset: str) -> str:
        result = ''
        for value in values:
            if value is None:
                continue
            expanded = self._encode(value, encode, charset)
            if not expanded:
                # Empty elements still leave a separator behind.
                result += SEPARATOR
                continue
            if result and result != SEPARATOR:
                result += SEPARATOR
            result += expanded
        return result

    def _expand_mapping(self, values: Mapping[Any, Any], encode: bool, charset: str) -> str:
        pairs = []
        for key, value in values.items():
            name = self._encode(key, encode, charset)
            text = '' if value is None else self._encode(value, encode, charset)
            pairs.append(f'{name}={text}')
        return SEPARATOR.join(pairs)


TemplateChunk = Union[Literal, Expression]


def _is_iterable(value: Any) -> bool:
    if isinstance(value, (str, bytes, bytearray)):
        return False
    try:
        iter(value)
    except TypeError:
        return False
    return True
