from __future__ import annotations

"""
body_template – Template for a request body.

Bodies are not pct-encoded and unresolved expressions stay in place as
'{name}'. A JSON object body protects its outer braces from the tokenizer by
writing them as '%7B' ... '%7D':

    BodyTemplate.create('%7B"width":{size}%7D').expand({'size': 100})
    -> '{"width":100}'

Only the outermost pair is turned back into braces after expansion.
"""

from typing import Any, Mapping, Optional

from restplate.constants import DEFAULT_CHARSET
from restplate.template.template import Template

JSON_TOKEN_START = '{'
JSON_TOKEN_END = '}'
JSON_TOKEN_START_ENCODED = '%7B'
JSON_TOKEN_END_ENCODED = '%7D'


class BodyTemplate(Template):
    def __init__(self, template: str, *, charset: str = DEFAULT_CHARSET) -> None:
        super().__init__(
            template,
            allow_unresolved=True,
            encode=False,
            encode_slash=False,
            charset=charset,
        )
        self._json = template.startswith(JSON_TOKEN_START_ENCODED) and template.endswith(JSON_TOKEN_END_ENCODED)

    @classmethod
    def create(cls, template: str, charset: str = DEFAULT_CHARSET) -> 'BodyTemplate':
        return cls(template, charset=charset)

    @property
    def json(self) -> bool:
        return self._json

    def expand(self, variables: Mapping[str, Any]) -> Optional[str]:
        expanded = super().expand(variables)
        if not self._json or expanded is None:
            return expanded
        start = expanded.find(JSON_TOKEN_START_ENCODED) + len(JSON_TOKEN_START_ENCODED)
        end = expanded.rfind(JSON_TOKEN_END_ENCODED)
        return JSON_TOKEN_START + expanded[start:end] + JSON_TOKEN_END
