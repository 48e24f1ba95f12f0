from __future__ import annotations

"""
query_template – One query string parameter: a name plus value templates.

    QueryTemplate.create('people', ['{people}'])  ->  people=Bob&people=Jim
    QueryTemplate.create('{flag}', [])            ->  flag      (pure parameter)

The name is a template that keeps unresolved expressions as encoded text.
Each value is its own template whose unresolved expressions are dropped; a
value template that resolves to nothing is skipped, and when no value is
left the whole parameter expands to None so callers can omit it. A pure
parameter whose name expressions are all unresolved is None as well.
"""

from typing import Any, Iterable, List, Mapping, Optional, Tuple

from restplate.collection_format import CollectionFormat
from restplate.constants import DEFAULT_CHARSET
from restplate.errors import TemplateError
from restplate.template.chunks import SEPARATOR
from restplate.template.template import Template


def _is_not_blank(value: Optional[str]) -> bool:
    return value is not None and bool(str(value).strip())


def _as_list(values: Iterable[str]) -> List[str]:
    if isinstance(values, str):
        values = [values]
    return [v for v in values if _is_not_blank(v)]


def _split_values(expanded: str) -> List[str]:
    """Split a comma-joined collection; trailing empty parts are discarded."""
    parts = expanded.split(SEPARATOR)
    while parts and not parts[-1]:
        parts.pop()
    return parts


class QueryTemplate:
    """Template for a single query parameter. Build with `create`."""

    def __init__(
        self,
        name: str,
        values: Iterable[str],
        *,
        charset: str = DEFAULT_CHARSET,
        collection_format: CollectionFormat = CollectionFormat.EXPLODED,
        decode_slash: bool = True,
    ) -> None:
        self._charset = charset or DEFAULT_CHARSET
        self._collection_format = collection_format or CollectionFormat.EXPLODED
        self._decode_slash = bool(decode_slash)
        self._name = Template(
            name,
            allow_unresolved=True,
            encode=True,
            encode_slash=False,
            charset=self._charset,
        )
        self._values: Tuple[str, ...] = tuple(_as_list(values))
        self._templates: Tuple[Template, ...] = tuple(
            Template(
                value,
                allow_unresolved=False,
                encode=True,
                encode_slash=not self._decode_slash,
                charset=self._charset,
            )
            for value in self._values
        )
        self._pure = not self._values

    @classmethod
    def create(
        cls,
        name: str,
        values: Iterable[str],
        charset: str = DEFAULT_CHARSET,
        collection_format: CollectionFormat = CollectionFormat.EXPLODED,
        decode_slash: bool = True,
    ) -> 'QueryTemplate':
        """Create a query template.

        Raises:
            TemplateError: *name* is empty or *values* is None.
        """
        if not name:
            raise TemplateError('name is required.')
        if values is None:
            raise TemplateError('values are required')
        return cls(
            name,
            values,
            charset=charset,
            collection_format=collection_format,
            decode_slash=decode_slash,
        )

    @classmethod
    def append(
        cls,
        query_template: 'QueryTemplate',
        values: Iterable[str],
        collection_format: Optional[CollectionFormat] = None,
        decode_slash: bool = True,
    ) -> 'QueryTemplate':
        """Return a new template carrying the existing values plus *values*."""
        combined = list(query_template.values) + _as_list(values or [])
        return cls.create(
            query_template.name,
            combined,
            query_template.charset,
            collection_format or query_template.collection_format,
            decode_slash,
        )

    def expand(self, variables: Mapping[str, Any]) -> Optional[str]:
        """Expand into 'name=value[&name=value...]', the bare name, or None."""
        name = self._name.expand(variables) or ''
        if self._pure:
            if self._name_unresolved(variables):
                return None
            return name

        resolved: List[str] = []
        for template in self._templates:
            expanded = template.expand(variables)
            if expanded is None:
                continue
            if SEPARATOR in expanded:
                resolved.extend(_split_values(expanded))
            else:
                resolved.append(expanded)

        if not resolved:
            return None
        return self._collection_format.join(name, resolved, self._charset)

    def _name_unresolved(self, variables: Mapping[str, Any]) -> bool:
        """True when the name has expressions and none of them has a value."""
        names = self._name.variables
        return bool(names) and all(variables.get(n) is None for n in names)

    @property
    def name(self) -> str:
        return self._name.template

    @property
    def values(self) -> List[str]:
        return list(self._values)

    @property
    def variables(self) -> List[str]:
        names = list(self._name.variables)
        for template in self._templates:
            names.extend(template.variables)
        return names

    @property
    def collection_format(self) -> CollectionFormat:
        return self._collection_format

    @property
    def charset(self) -> str:
        return self._charset

    @property
    def decode_slash(self) -> bool:
        return self._decode_slash

    @property
    def pure(self) -> bool:
        return self._pure

    def is_literal(self) -> bool:
        return self._name.is_literal() and all(t.is_literal() for t in self._templates)

    def __str__(self) -> str:
        name = str(self._name)
        if self._pure:
            return name
        return '&'.join(f'{name}={template}' for template in self._templates)

    def __repr__(self) -> str:
        return f'QueryTemplate({str(self)!r})'
