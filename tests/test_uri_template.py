from __future__ import annotations

import unittest
from concurrent.futures import ThreadPoolExecutor

from restplate.errors import PatternMismatchError
from restplate.template import UriTemplate
from restplate.template.uri_template import find_query_delimiter


class UriTemplateTests(unittest.TestCase):
    def test_simple_expansion(self):
        self.assertEqual(UriTemplate.create('/users/{id}').expand({'id': 7}), '/users/7')

    def test_unresolved_expression_stays_encoded(self):
        self.assertEqual(UriTemplate.create('/{foo}').expand({}), '/%7Bfoo%7D')

    def test_path_literals_are_encoded(self):
        self.assertEqual(UriTemplate.create('/a b/{c}').expand({'c': 'd'}), '/a%20b/d')

    def test_query_part_uses_query_rules(self):
        tpl = UriTemplate.create('/search?q={q}&page=1')
        self.assertEqual(tpl.expand({'q': 'a b'}), '/search?q=a%20b&page=1')
        self.assertEqual(UriTemplate.create('/s?a=1+2').expand({}), '/s?a=1%2B2')

    def test_absolute_uri_literal(self):
        tpl = UriTemplate.create('https://{host}/x')
        self.assertEqual(tpl.expand({'host': 'example.com'}), 'https://example.com/x')

    def test_encode_slash(self):
        self.assertEqual(UriTemplate.create('/{p}').expand({'p': 'a/b'}), '/a%2Fb')
        self.assertEqual(UriTemplate.create('/{p}', encode_slash=False).expand({'p': 'a/b'}), '/a/b')

    def test_list_values(self):
        self.assertEqual(UriTemplate.create('/{ids}').expand({'ids': [1, 2]}), '/1,2')

    def test_patterns(self):
        self.assertEqual(UriTemplate.create('/{year:[0-9]{4}}').expand({'year': 2024}), '/2024')
        with self.assertRaises(PatternMismatchError):
            UriTemplate.create('/{id:[0-9]+}').expand({'id': 'x'})

    def test_nested_braces_are_literal_text(self):
        tpl = UriTemplate.create('/{foo{bar}}')
        self.assertEqual(tpl.variables, [])
        self.assertEqual(tpl.expand({}), '/%7Bfoo%7Bbar%7D%7D')

    def test_nested_span_never_registers_as_variable(self):
        tpl = UriTemplate.create('/{foo{bar}}/{baz}')
        self.assertEqual(tpl.variables, ['baz'])
        self.assertEqual(tpl.expand({'baz': 'stuff'}), '/%7Bfoo%7Bbar%7D%7D/stuff')

    def test_regex_constraint_with_second_expression(self):
        tpl = UriTemplate.create('/{foo:[0-9]{4}}/{bar}')
        self.assertEqual(tpl.expand({'foo': 1234, 'bar': 'x'}), '/1234/x')
        with self.assertRaises(PatternMismatchError):
            tpl.expand({'foo': 'abcd', 'bar': 'x'})

    def test_literal_only_template_ignores_variables(self):
        tpl = UriTemplate.create('/a b/c?d=e')
        self.assertEqual(tpl.expand({'d': 'ignored'}), str(tpl))

    def test_shared_instance_expands_concurrently(self):
        template = UriTemplate.create('/users/{id}/repos/{repo}')

        def expand(n):
            return [template.expand({'id': n, 'repo': f'r {i}'}) for i in range(200)]

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(expand, range(8)))
        for n, expanded in enumerate(results):
            self.assertEqual(expanded, [f'/users/{n}/repos/r%20{i}' for i in range(200)])

    def test_append(self):
        base = UriTemplate.create('/a', encode_slash=False, charset='latin-1')
        appended = UriTemplate.append(base, '/{b}')
        self.assertEqual(appended.expand({'b': 'c'}), '/a/c')
        self.assertFalse(appended.encode_slash)
        self.assertEqual(appended.charset, 'latin-1')


class FindQueryDelimiterTests(unittest.TestCase):
    def test_plain(self):
        self.assertEqual(find_query_delimiter('/a?b'), 2)
        self.assertIsNone(find_query_delimiter('/a/b'))

    def test_question_mark_inside_expression_is_ignored(self):
        self.assertIsNone(find_query_delimiter('/{?q}'))
        self.assertEqual(find_query_delimiter('/{x}/y?z'), 6)


if __name__ == '__main__':
    unittest.main()
