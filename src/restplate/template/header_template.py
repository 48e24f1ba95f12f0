from __future__ import annotations

"""
header_template – Template for one HTTP header and its values.

The template text is '<name> <value>,<value>,...'. Literals and values are
not pct-encoded and unresolved expressions are dropped, so

    HeaderTemplate.create('Accept', ['text/html', '{extra}']).expand({})

renders 'Accept text/html': trailing commas left by dropped values are
removed and every remaining comma becomes ', '.

The comma rule also applies to commas inside a single value, so a value
that already carries ', ' goes out with two spaces:

    HeaderTemplate.create('Date', ['Wed, 4 Jul 2001']).expand({})
    ->  'Date Wed,  4 Jul 2001'

HTTP treats the extra whitespace as optional.
"""

from typing import Any, Iterable, List, Mapping, Optional

from restplate.constants import DEFAULT_CHARSET
from restplate.errors import TemplateError
from restplate.template.template import Template


def _unique_values(values: Iterable[str]) -> List[str]:
    if isinstance(values, str):
        values = [values]
    kept = (v for v in values if v is not None and str(v).strip())
    return list(dict.fromkeys(kept))


class HeaderTemplate(Template):
    """Template for an HTTP header. Build with `create` or `append`."""

    def __init__(self, name: str, values: Iterable[str], *, charset: str = DEFAULT_CHARSET) -> None:
        self._name = name
        self._values = tuple(_unique_values(values))
        super().__init__(
            f"{name} {','.join(self._values)}",
            allow_unresolved=False,
            encode=False,
            encode_slash=False,
            charset=charset,
        )

    @classmethod
    def create(cls, name: str, values: Iterable[str], charset: str = DEFAULT_CHARSET) -> 'HeaderTemplate':
        """Create a header template.

        Raises:
            TemplateError: *name* is empty or *values* is None.
        """
        if not name:
            raise TemplateError('name is required.')
        if values is None:
            raise TemplateError('values are required')
        return cls(name, values, charset=charset)

    @classmethod
    def append(cls, header_template: 'HeaderTemplate', values: Iterable[str]) -> 'HeaderTemplate':
        """Return a new template with *values* added after the existing ones."""
        if values is None:
            raise TemplateError('values are required')
        combined = list(header_template.values) + _unique_values(values)
        return cls.create(header_template.name, combined, header_template.charset)

    @classmethod
    def from_template(cls, name: str, template: Template) -> 'HeaderTemplate':
        """Create a header whose single value is an already parsed template."""
        if template is None:
            raise TemplateError('values are required')
        return cls.create(name, [str(template)], template.charset)

    def expand(self, variables: Mapping[str, Any]) -> Optional[str]:
        result = super().expand(variables)
        if result is None:
            return None
        while result.endswith(','):
            result = result[:-1]
        return result.replace(',', ', ')

    @property
    def name(self) -> str:
        return self._name

    @property
    def values(self) -> List[str]:
        return list(self._values)
