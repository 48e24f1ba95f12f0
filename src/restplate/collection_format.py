from __future__ import annotations

"""
collection_format – Ways to render a multi-valued query parameter.

    EXPLODED  name=a&name=b      (parameter repeated per value)
    CSV       name=a%2Cb
    SSV       name=a%20b
    TSV       name=a%09b
    PIPES     name=a%7Cb

The formats follow the OpenAPI 'collectionFormat' names. Delimiters are
pct-encoded like the values around them.
"""

from enum import Enum
from typing import Iterable, List, Optional

from restplate.constants import DEFAULT_CHARSET
from restplate.template import uri_utils


class CollectionFormat(Enum):
    CSV = ','
    SSV = ' '
    TSV = '\t'
    PIPES = '|'
    EXPLODED = None

    @property
    def separator(self) -> Optional[str]:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> 'CollectionFormat':
        key = (name or '').strip().upper()
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f'unknown collection format: {name!r}') from None

    def join(self, name: str, values: Iterable[Optional[str]], charset: str = DEFAULT_CHARSET) -> str:
        """Join *name* and *values* into a query string fragment.

        With EXPLODED a None value renders the bare name; the delimited
        formats skip None values. An empty *values* yields ''.
        """
        values = list(values)
        if not values:
            return ''

        field = uri_utils.query_param_encode(name, charset)
        if self is CollectionFormat.EXPLODED:
            pairs: List[str] = []
            for value in values:
                if value is None:
                    pairs.append(field)
                else:
                    pairs.append(f'{field}={uri_utils.query_param_encode(value, charset)}')
            return '&'.join(pairs)

        encoded = [uri_utils.query_param_encode(v, charset) for v in values if v is not None]
        if not encoded:
            return field
        separator = uri_utils.encode(self.value, charset)
        return f'{field}={separator.join(encoded)}'
