from __future__ import annotations

import unittest

from restplate.core.interfaces import ExpandableProtocol
from restplate.errors import PatternMismatchError, TemplateError
from restplate.template import Template
from restplate.template.chunks import Expression, Literal


class TemplateExpandTests(unittest.TestCase):
    def test_resolved_expressions(self):
        tpl = Template('{a}/{b}')
        self.assertEqual(tpl.expand({'a': 'x', 'b': 'y'}), 'x/y')

    def test_unresolved_expressions_are_dropped(self):
        self.assertEqual(Template('{a}/{b}').expand({'a': 'x'}), 'x/')

    def test_nothing_resolved_returns_none(self):
        self.assertIsNone(Template('{a}').expand({}))

    def test_empty_template_expands_to_empty_string(self):
        self.assertEqual(Template('').expand({}), '')

    def test_allow_unresolved_keeps_encoded_expression(self):
        tpl = Template('/{foo}', allow_unresolved=True)
        self.assertEqual(tpl.expand({}), '/%7Bfoo%7D')

    def test_encode_slash(self):
        self.assertEqual(Template('{p}').expand({'p': 'a/b'}), 'a%2Fb')
        self.assertEqual(Template('{p}', encode_slash=False).expand({'p': 'a/b'}), 'a/b')

    def test_encode_disabled(self):
        self.assertEqual(Template('x {p}', encode=False).expand({'p': 'a b'}), 'x a b')

    def test_nested_expression_is_literal(self):
        self.assertEqual(Template('{foo{bar}}', encode=False).expand({'foo': 1}), '{foo{bar}}')
        self.assertEqual(Template('{foo{bar}}').expand({}), '%7Bfoo%7Bbar%7D%7D')

    def test_invalid_regex_is_literal(self):
        tpl = Template('{foo:[}', encode=False)
        self.assertEqual(tpl.variables, [])
        self.assertEqual(tpl.expand({'foo': 'x'}), '{foo:[}')

    def test_pattern_mismatch_propagates(self):
        with self.assertRaises(PatternMismatchError):
            Template('{id:[0-9]+}').expand({'id': 'abc'})

    def test_pattern_is_checked_against_encoded_value(self):
        self.assertEqual(Template('{v:a%20b}').expand({'v': 'a b'}), 'a%20b')
        with self.assertRaises(PatternMismatchError):
            Template('{v:a b}').expand({'v': 'a b'})

    def test_none_arguments_rejected(self):
        with self.assertRaises(TemplateError):
            Template(None)
        with self.assertRaises(TemplateError):
            Template('{a}').expand(None)

    def test_template_can_be_reused(self):
        tpl = Template('{a}')
        self.assertEqual(tpl.expand({'a': 1}), '1')
        self.assertEqual(tpl.expand({'a': 2}), '2')


class TemplateIntrospectionTests(unittest.TestCase):
    def test_variables_keep_order_and_duplicates(self):
        self.assertEqual(Template('{a}{b}{a}').variables, ['a', 'b', 'a'])

    def test_literals(self):
        tpl = Template('x{a}y')
        self.assertEqual(tpl.literals, ['x', 'y'])
        self.assertFalse(tpl.is_literal())
        self.assertTrue(Template('xy').is_literal())

    def test_literals_are_encoded_at_parse_time(self):
        self.assertEqual(str(Template('x {a}')), 'x%20{a}')
        self.assertEqual(Template('x {a}').template, 'x {a}')

    def test_from_chunks(self):
        tpl = Template.from_chunks([Literal('a'), Expression('b')])
        self.assertEqual(tpl.template, 'a{b}')
        self.assertEqual(tpl.expand({'b': 'c'}), 'ac')

    def test_flags_are_exposed(self):
        tpl = Template('x', allow_unresolved=True, encode=False, encode_slash=False, charset='latin-1')
        self.assertTrue(tpl.allow_unresolved)
        self.assertFalse(tpl.encode)
        self.assertFalse(tpl.encode_slash)
        self.assertEqual(tpl.charset, 'latin-1')

    def test_satisfies_expandable_protocol(self):
        self.assertIsInstance(Template('{a}'), ExpandableProtocol)


if __name__ == '__main__':
    unittest.main()
