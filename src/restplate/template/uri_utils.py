from __future__ import annotations

"""
uri_utils – Percent-encoding helpers shared by every template type.

Rules
-----
• Unreserved characters (ALPHA / DIGIT / '-' '.' '_' '~') are never encoded.
• Every other byte is written as '%XX' with uppercase hex digits unless it
  belongs to the "safe" set of the active preset.
• Text that already looks pct-encoded is passed through: runs matching
  '%XX' are kept verbatim and only the raw segments between them are
  encoded, so encoding is idempotent.

Presets
-------
• path_encode         keeps '/', '?', ':', '@' and the sub-delims (pchar).
• query_encode        keeps the structure of a whole query string
                      ('&', '=', '?'), but escapes '+'.
• query_param_encode  for one name or value: '&', '=', ';', '?', '+' and the
                      other sub-delims are escaped; only '/', ':', '@' stay.
"""

import re
import string
from typing import FrozenSet
from urllib.parse import quote, unquote_plus

from restplate.constants import DEFAULT_CHARSET

UNRESERVED: FrozenSet[str] = frozenset(string.ascii_letters + string.digits + '-._~')
GEN_DELIMS: FrozenSet[str] = frozenset(':/?#[]@')
SUB_DELIMS: FrozenSet[str] = frozenset("!$&'()*+,;=")
RESERVED: FrozenSet[str] = GEN_DELIMS | SUB_DELIMS

PATH_SAFE: FrozenSet[str] = frozenset('/?:@') | SUB_DELIMS
QUERY_SAFE: FrozenSet[str] = frozenset('/?:@&=') | (SUB_DELIMS - {'+'})
QUERY_PARAM_SAFE: FrozenSet[str] = frozenset('/:@')

_PCT_ENCODED_RE = re.compile(r'%[0-9A-Fa-f]{2}')
_MALFORMED_PCT_RE = re.compile(r'%(?![0-9A-Fa-f]{2})')


def is_encoded(value: str, charset: str = DEFAULT_CHARSET) -> bool:
    """Return True when *value* already looks pct-encoded.

    The check is approximate: every byte must be unreserved or '%', and at
    least one valid '%XX' sequence must be present.
    """
    for byte in value.encode(charset):
        if byte != 0x25 and chr(byte) not in UNRESERVED:
            return False
    return _PCT_ENCODED_RE.search(value) is not None


def encode(value: str, charset: str = DEFAULT_CHARSET, allow_reserved: bool = False) -> str:
    """Pct-encode *value*, skipping content that is already encoded.

    Args:
        value: Text to encode.
        charset: Codec used to turn characters into bytes.
        allow_reserved: Keep the RFC 3986 gen-delims and sub-delims as-is.

    Returns:
        The encoded text.
    """
    if is_encoded(value, charset):
        return value
    return encode_reserved(value, RESERVED if allow_reserved else frozenset(), charset)


def encode_reserved(value: str, safe: FrozenSet[str], charset: str = DEFAULT_CHARSET) -> str:
    """Encode *value* keeping the characters in *safe* and existing '%XX' runs."""
    parts = []
    index = 0
    for match in _PCT_ENCODED_RE.finditer(value):
        parts.append(_encode_chunk(value[index:match.start()], safe, charset))
        parts.append(match.group())
        index = match.end()
    parts.append(_encode_chunk(value[index:], safe, charset))
    return ''.join(parts)


def _encode_chunk(value: str, safe: FrozenSet[str], charset: str) -> str:
    if not value:
        return ''
    return quote(value, safe=''.join(sorted(safe)), encoding=charset)


def path_encode(path: str, charset: str = DEFAULT_CHARSET) -> str:
    """Encode a path fragment."""
    if is_encoded(path, charset):
        return path
    return encode_reserved(path, PATH_SAFE, charset)


def query_encode(query: str, charset: str = DEFAULT_CHARSET) -> str:
    """Encode a whole query string, preserving its '&', '=' and '?' structure."""
    if is_encoded(query, charset):
        return query
    return encode_reserved(query, QUERY_SAFE, charset)


def query_param_encode(param: str, charset: str = DEFAULT_CHARSET) -> str:
    """Encode a single query parameter name or value."""
    if is_encoded(param, charset):
        return param
    return encode_reserved(param, QUERY_PARAM_SAFE, charset)


def decode(value: str, charset: str = DEFAULT_CHARSET) -> str:
    """Pct-decode *value* as form data, so '+' also becomes a space.

    Malformed input is returned unchanged.
    """
    if '%' not in value and '+' not in value:
        return value
    if _MALFORMED_PCT_RE.search(value):
        return value
    try:
        return unquote_plus(value, encoding=charset, errors='strict')
    except (UnicodeDecodeError, LookupError):
        return value


def is_absolute(uri: str | None) -> bool:
    """Return True when *uri* carries its own scheme (http or https)."""
    return bool(uri) and uri.startswith('http')
