from __future__ import annotations

"""
request_template – Assembles URI, query, header and body templates into a Request.

A RequestTemplate is an immutable value: every `with_*` call returns a new
instance, so one template can be declared per endpoint and resolved
concurrently with different argument maps.

    tpl = (RequestTemplate()
           .with_method('GET')
           .with_target('https://api.example.com')
           .with_uri('/repos/{owner}/{repo}/issues?state={state}')
           .with_header('Accept', 'application/json'))
    req = tpl.resolve({'owner': 'a', 'repo': 'b', 'state': 'open'}).request()

Queries written inline in `with_uri` are pulled out into QueryTemplates.
Queries whose values are all unresolved are omitted, as are headers whose
values all expand to nothing.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from restplate.collection_format import CollectionFormat
from restplate.constants import DEFAULT_CHARSET
from restplate.core.models import Request
from restplate.errors import RequestTemplateError
from restplate.template import uri_utils
from restplate.template.body_template import BodyTemplate
from restplate.template.header_template import HeaderTemplate
from restplate.template.query_template import QueryTemplate
from restplate.template.uri_template import UriTemplate, find_query_delimiter

_URI_PREFIXES = ('/', '{', '?', ';')


def _split_query_line(query_line: str) -> List[Tuple[str, Optional[str]]]:
    """Split 'a=1&b&c={c}' into (name, value) pairs; a missing value is None."""
    pairs: List[Tuple[str, Optional[str]]] = []
    for part in query_line.split('&'):
        if not part:
            continue
        name, sep, value = part.partition('=')
        if not name:
            continue
        pairs.append((name, value if sep and value else None))
    return pairs


@dataclass(frozen=True)
class RequestTemplate:
    method: str = 'GET'
    target: str = ''
    uri: UriTemplate = field(default_factory=lambda: UriTemplate.create('', encode_slash=False))
    queries: Tuple[QueryTemplate, ...] = ()
    headers: Tuple[HeaderTemplate, ...] = ()
    body: Optional[bytes] = None
    body_template: Optional[BodyTemplate] = None
    charset: str = DEFAULT_CHARSET
    decode_slash: bool = True
    collection_format: CollectionFormat = CollectionFormat.EXPLODED
    resolved_url: Optional[str] = None
    resolved_headers: Optional[Tuple[Tuple[str, Tuple[str, ...]], ...]] = None

    # ------------------------------------------------------------------ #
    # Builders
    # ------------------------------------------------------------------ #
    def with_method(self, method: str) -> 'RequestTemplate':
        if not method or not method.strip():
            raise RequestTemplateError('method is required.')
        return replace(self, method=method.strip().upper())

    def with_target(self, target: str) -> 'RequestTemplate':
        """Set the absolute base URL; an inline query string becomes query templates."""
        if not target:
            return replace(self, target='')
        if not uri_utils.is_absolute(target):
            raise RequestTemplateError(f'target must be an absolute url: {target!r}')
        base, sep, query_line = target.partition('?')
        updated = replace(self, target=base.rstrip('/'))
        if sep:
            updated = updated._with_query_line(query_line)
        return updated

    def with_uri(self, uri: str, append: bool = False) -> 'RequestTemplate':
        """Set (or append to) the path template.

        Raises:
            RequestTemplateError: *uri* is absolute; use `with_target` for that.
        """
        uri = uri or ''
        if uri_utils.is_absolute(uri):
            raise RequestTemplateError('url values must not be absolute.')

        query_line = None
        split_at = find_query_delimiter(uri)
        if split_at is not None:
            uri, query_line = uri[:split_at], uri[split_at + 1:]

        if append:
            uri = str(self.uri) + uri
        elif uri and not uri.startswith(_URI_PREFIXES):
            uri = '/' + uri
        template = UriTemplate.create(uri, self.charset, encode_slash=not self.decode_slash)

        updated = replace(self, uri=template)
        if query_line:
            updated = updated._with_query_line(query_line)
        return updated

    def _with_query_line(self, query_line: str) -> 'RequestTemplate':
        updated = self
        for name, value in _split_query_line(query_line):
            updated = updated.with_query(name, value)
        return updated

    def with_query(self, name: str, *values: Optional[str]) -> 'RequestTemplate':
        """Add values to query parameter *name*.

        Without values the parameter is removed. A single None value declares
        a pure parameter rendered without '='.
        """
        if not name:
            raise RequestTemplateError('query name is required.')
        if not values:
            return replace(self, queries=tuple(q for q in self.queries if q.name != name))

        queries: List[QueryTemplate] = []
        found = False
        for query in self.queries:
            if query.name == name:
                query = QueryTemplate.append(query, values, self.collection_format, self.decode_slash)
                found = True
            queries.append(query)
        if not found:
            queries.append(
                QueryTemplate.create(name, values, self.charset, self.collection_format, self.decode_slash)
            )
        return replace(self, queries=tuple(queries))

    def with_header(self, name: str, *values: str) -> 'RequestTemplate':
        """Append values to header *name* (case-insensitive); no values removes it."""
        if not name:
            raise RequestTemplateError('header name is required.')
        key = name.lower()
        if not values:
            return replace(self, headers=tuple(h for h in self.headers if h.name.lower() != key))

        headers: List[HeaderTemplate] = []
        found = False
        for header in self.headers:
            if header.name.lower() == key:
                header = HeaderTemplate.append(header, values)
                found = True
            headers.append(header)
        if not found:
            headers.append(HeaderTemplate.create(name, values, self.charset))
        return replace(self, headers=tuple(headers))

    def with_body(self, data: Union[bytes, str, None]) -> 'RequestTemplate':
        if isinstance(data, str):
            data = data.encode(self.charset)
        return replace(self, body=data, body_template=None)

    def with_body_template(self, template: str) -> 'RequestTemplate':
        return replace(self, body=None, body_template=BodyTemplate.create(template, self.charset))

    def with_collection_format(self, collection_format: CollectionFormat) -> 'RequestTemplate':
        return replace(self, collection_format=collection_format)

    def with_decode_slash(self, decode_slash: bool) -> 'RequestTemplate':
        uri = UriTemplate.create(str(self.uri), self.charset, encode_slash=not decode_slash)
        queries = tuple(
            QueryTemplate.create(q.name, q.values, q.charset, q.collection_format, decode_slash)
            for q in self.queries
        )
        return replace(self, decode_slash=decode_slash, uri=uri, queries=queries)

    # ------------------------------------------------------------------ #
    # Introspection
    # ------------------------------------------------------------------ #
    @property
    def resolved(self) -> bool:
        return self.resolved_url is not None

    def variables(self) -> List[str]:
        """Unique variable names across uri, queries, headers and body, in order."""
        names: List[str] = list(self.uri.variables)
        for query in self.queries:
            names.extend(query.variables)
        for header in self.headers:
            names.extend(header.variables)
        if self.body_template is not None:
            names.extend(self.body_template.variables)
        return list(dict.fromkeys(names))

    def header_values(self, name: str) -> List[str]:
        key = name.lower()
        for header in self.headers:
            if header.name.lower() == key:
                return header.values
        return []

    def query_line(self) -> str:
        """Unexpanded query string, without the leading '?'."""
        return '&'.join(str(q) for q in self.queries)

    def url(self) -> str:
        if self.resolved_url is not None:
            return self.resolved_url
        return _join_url(self.target + str(self.uri), self.query_line())

    # ------------------------------------------------------------------ #
    # Resolution
    # ------------------------------------------------------------------ #
    def resolve(self, variables: Mapping[str, Any]) -> 'RequestTemplate':
        """Expand every template against *variables* into a resolved copy."""
        if variables is None:
            raise RequestTemplateError('variable map is required.')

        path = self.uri.expand(variables) or ''
        expanded_queries = (q.expand(variables) for q in self.queries)
        query_line = '&'.join(q for q in expanded_queries if q)
        resolved_url = _join_url(self.target + path, query_line)

        headers: List[Tuple[str, Tuple[str, ...]]] = []
        for header in self.headers:
            expanded = header.expand(variables) or ''
            value = expanded[len(header.name) + 1:].strip()
            if value:
                headers.append((header.name, (value,)))

        body = self.body
        if self.body_template is not None:
            text = self.body_template.expand(variables) or ''
            body = text.encode(self.charset)

        return replace(self, resolved_url=resolved_url, resolved_headers=tuple(headers), body=body)

    def request(self, timeout: Optional[float] = None) -> Request:
        """Build the Request for a resolved template."""
        if self.resolved_url is None:
            raise RequestTemplateError('template has not been resolved.')
        headers: Dict[str, Tuple[str, ...]] = dict(self.resolved_headers or ())
        return Request(
            method=self.method,
            url=self.resolved_url,
            headers=headers,
            body=self.body,
            charset=self.charset,
            timeout=timeout,
        )


def _join_url(base: str, query_line: str) -> str:
    if not query_line:
        return base
    return f"{base}{'&' if '?' in base else '?'}{query_line}"


def request_template(
    method: str,
    uri: str,
    *,
    target: str = '',
    headers: Optional[Mapping[str, Iterable[str]]] = None,
    body_template: Optional[str] = None,
    charset: str = DEFAULT_CHARSET,
    collection_format: CollectionFormat = CollectionFormat.EXPLODED,
    decode_slash: bool = True,
) -> RequestTemplate:
    """Convenience constructor for the common method + uri + headers case."""
    tpl = RequestTemplate(charset=charset, collection_format=collection_format, decode_slash=decode_slash)
    tpl = tpl.with_method(method).with_target(target).with_uri(uri)
    for name, values in (headers or {}).items():
        if isinstance(values, str):
            values = [values]
        tpl = tpl.with_header(name, *values)
    if body_template is not None:
        tpl = tpl.with_body_template(body_template)
    return tpl
