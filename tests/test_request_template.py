from __future__ import annotations

import unittest

from restplate.collection_format import CollectionFormat
from restplate.errors import RequestTemplateError
from restplate.request_template import RequestTemplate, request_template


class RequestTemplateBuildTests(unittest.TestCase):
    def test_resolve_into_request(self):
        tpl = (RequestTemplate()
               .with_method('get')
               .with_target('https://api.example.com/')
               .with_uri('/repos/{owner}/{repo}'))
        req = tpl.resolve({'owner': 'octo', 'repo': 'hello'}).request()
        self.assertEqual(req.method, 'GET')
        self.assertEqual(req.url, 'https://api.example.com/repos/octo/hello')
        self.assertIsNone(req.body)

    def test_builders_return_copies(self):
        base = RequestTemplate().with_uri('/a')
        derived = base.with_query('x', '1')
        self.assertEqual(base.queries, ())
        self.assertEqual(len(derived.queries), 1)

    def test_leading_slash_is_added(self):
        self.assertEqual(RequestTemplate().with_uri('users').url(), '/users')

    def test_append_uri(self):
        tpl = RequestTemplate().with_uri('/a').with_uri('/{b}', append=True)
        self.assertEqual(tpl.resolve({'b': 'c'}).url(), '/a/c')

    def test_absolute_uri_rejected(self):
        with self.assertRaises(RequestTemplateError):
            RequestTemplate().with_uri('https://example.com/a')

    def test_relative_target_rejected(self):
        with self.assertRaises(RequestTemplateError):
            RequestTemplate().with_target('/api')

    def test_method_required(self):
        with self.assertRaises(RequestTemplateError):
            RequestTemplate().with_method(' ')

    def test_unexpanded_url(self):
        tpl = RequestTemplate().with_uri('/u/{id}?q={q}')
        self.assertEqual(tpl.url(), '/u/{id}?q={q}')
        self.assertEqual(tpl.query_line(), 'q={q}')
        self.assertFalse(tpl.resolved)

    def test_variables(self):
        tpl = (RequestTemplate()
               .with_uri('/u/{id}?f={fields}')
               .with_header('X-Id', '{id}')
               .with_body_template('%7B"n":{n}%7D'))
        self.assertEqual(tpl.variables(), ['id', 'fields', 'n'])


class RequestTemplateQueryTests(unittest.TestCase):
    def test_inline_query_becomes_templates(self):
        tpl = RequestTemplate().with_uri('/search?q={q}&page=1')
        self.assertEqual([q.name for q in tpl.queries], ['q', 'page'])
        self.assertEqual(tpl.resolve({'q': 'a b'}).url(), '/search?q=a%20b&page=1')

    def test_unresolved_query_is_omitted(self):
        tpl = RequestTemplate().with_uri('/search?q={q}&page=1')
        self.assertEqual(tpl.resolve({}).url(), '/search?page=1')

    def test_pure_parameter(self):
        tpl = RequestTemplate().with_uri('/x?flag')
        self.assertEqual(tpl.resolve({}).url(), '/x?flag')
        self.assertEqual(RequestTemplate().with_uri('/x').with_query('flag', None).resolve({}).url(), '/x?flag')

    def test_collection_format_applies_to_new_queries(self):
        tpl = (RequestTemplate()
               .with_collection_format(CollectionFormat.CSV)
               .with_uri('/x')
               .with_query('tags', '{tags}'))
        self.assertEqual(tpl.resolve({'tags': ['a', 'b']}).url(), '/x?tags=a%2Cb')

    def test_query_values_accumulate(self):
        tpl = RequestTemplate().with_uri('/x?a=1').with_query('a', '2')
        self.assertEqual(tpl.resolve({}).url(), '/x?a=1&a=2')

    def test_query_without_values_is_removed(self):
        tpl = RequestTemplate().with_uri('/x?a=1&b=2').with_query('a')
        self.assertEqual(tpl.resolve({}).url(), '/x?b=2')

    def test_target_query_is_kept(self):
        tpl = RequestTemplate().with_target('https://h/api?key=1').with_uri('/x')
        self.assertEqual(tpl.resolve({}).url(), 'https://h/api/x?key=1')

    def test_decode_slash(self):
        tpl = RequestTemplate().with_uri('/{p}?q={p}')
        self.assertEqual(tpl.resolve({'p': 'a/b'}).url(), '/a/b?q=a/b')
        encoded = tpl.with_decode_slash(False)
        self.assertEqual(encoded.resolve({'p': 'a/b'}).url(), '/a%2Fb?q=a%2Fb')


class RequestTemplateHeaderBodyTests(unittest.TestCase):
    def test_headers_are_case_insensitive(self):
        tpl = RequestTemplate().with_header('Accept', 'application/json').with_header('accept', 'text/plain')
        self.assertEqual(tpl.header_values('ACCEPT'), ['application/json', 'text/plain'])
        req = tpl.resolve({}).request()
        self.assertEqual(dict(req.headers), {'Accept': ('application/json, text/plain',)})

    def test_header_expansion(self):
        tpl = RequestTemplate().with_header('X-Token', '{token}')
        self.assertEqual(tpl.resolve({'token': 'abc'}).request().header('x-token'), ('abc',))

    def test_unresolved_header_is_dropped(self):
        tpl = RequestTemplate().with_header('X-Token', '{token}')
        self.assertEqual(dict(tpl.resolve({}).request().headers), {})

    def test_comma_in_header_value_gains_a_space(self):
        tpl = RequestTemplate().with_header('Date', 'Wed, 4 Jul 2001')
        self.assertEqual(tpl.resolve({}).request().header('date'), ('Wed,  4 Jul 2001',))

    def test_header_without_values_is_removed(self):
        tpl = RequestTemplate().with_header('A', '1').with_header('a')
        self.assertEqual(tpl.headers, ())

    def test_body_template(self):
        tpl = RequestTemplate().with_body_template('%7B"n":"{n}"%7D')
        self.assertEqual(tpl.resolve({'n': 'x'}).request().body, b'{"n":"x"}')

    def test_raw_body(self):
        tpl = RequestTemplate().with_body('raw')
        self.assertEqual(tpl.resolve({}).request().body, b'raw')
        self.assertIsNone(tpl.body_template)

    def test_request_requires_resolution(self):
        with self.assertRaises(RequestTemplateError):
            RequestTemplate().with_uri('/a').request()

    def test_resolve_requires_variables(self):
        with self.assertRaises(RequestTemplateError):
            RequestTemplate().resolve(None)

    def test_timeout_is_forwarded(self):
        req = RequestTemplate().with_uri('/a').resolve({}).request(timeout=5)
        self.assertEqual(req.timeout, 5)


class RequestTemplateHelperTests(unittest.TestCase):
    def test_request_template_helper(self):
        tpl = request_template(
            'post',
            '/items',
            target='https://h',
            headers={'Content-Type': 'application/json'},
            body_template='%7B"a":{a}%7D',
        )
        req = tpl.resolve({'a': 1}).request()
        self.assertEqual(req.method, 'POST')
        self.assertEqual(req.url, 'https://h/items')
        self.assertEqual(req.header('content-type'), ('application/json',))
        self.assertEqual(req.body, b'{"a":1}')


if __name__ == '__main__':
    unittest.main()
