from __future__ import annotations

"""
expressions – Turns a '{...}' token into an Expression chunk.

Grammar (relaxed RFC 6570 level 1):

    expression := '{' [modifier] name [':' regex] '}'
    modifier   := one of '+#./;?&' (accepted and kept, no special expansion)

`parse` returns None for anything that is not a valid expression: an empty
body, a nested expression such as '{foo{bar}}', or a regex that does not
compile. Callers keep such tokens as literal text.
"""

import re
from typing import Callable, Match, Optional, Tuple

from restplate.template.chunks import Expression

_SIMPLE_EXPRESSION_RE = re.compile(r'^([+#./;?&]?)(.*)$', re.S)


def _simple_expression(match: Match[str]) -> Optional[Expression]:
    modifier = match.group(1)
    body = match.group(2).strip()
    name, _sep, pattern = body.partition(':')
    name = name.strip()
    if not name or '{' in name:
        return None
    try:
        return Expression(name, pattern or None, modifier)
    except re.error:
        return None


# Evaluated top to bottom; the first matching entry builds the expression.
EXPRESSION_TYPES: Tuple[Tuple[re.Pattern, Callable[[Match[str]], Optional[Expression]]], ...] = (
    (_SIMPLE_EXPRESSION_RE, _simple_expression),
)


def strip_braces(token: str) -> Optional[str]:
    if len(token) >= 2 and token.startswith('{') and token.endswith('}'):
        return token[1:-1]
    return None


def parse(token: str) -> Optional[Expression]:
    """Parse one tokenizer token into an Expression, or None if it is a literal."""
    body = strip_braces(token)
    if not body:
        return None
    for regex, build in EXPRESSION_TYPES:
        match = regex.match(body)
        if match is not None:
            return build(match)
    return None
