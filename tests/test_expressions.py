from __future__ import annotations

import unittest

from restplate.errors import PatternMismatchError
from restplate.template.chunks import Expression, Literal
from restplate.template.expressions import parse


class ParseTests(unittest.TestCase):
    def test_simple_name(self):
        expr = parse('{foo}')
        self.assertEqual(expr.name, 'foo')
        self.assertIsNone(expr.pattern)
        self.assertEqual(str(expr), '{foo}')

    def test_name_with_pattern(self):
        expr = parse('{id:[0-9]+}')
        self.assertEqual(expr.name, 'id')
        self.assertEqual(expr.pattern_text, '[0-9]+')

    def test_pattern_may_contain_braces(self):
        expr = parse('{year:[0-9]{4}}')
        self.assertEqual(expr.name, 'year')
        self.assertTrue(expr.matches('2024'))
        self.assertFalse(expr.matches('24'))

    def test_modifier_is_kept_in_text_form(self):
        expr = parse('{+path}')
        self.assertEqual(expr.name, 'path')
        self.assertEqual(str(expr), '{+path}')

    def test_invalid_expressions_are_none(self):
        self.assertIsNone(parse('{}'))
        self.assertIsNone(parse('{ }'))
        self.assertIsNone(parse('{foo{bar}}'))
        self.assertIsNone(parse('{foo:[}'))
        self.assertIsNone(parse('foo'))


class ExpressionExpandTests(unittest.TestCase):
    def test_scalar(self):
        self.assertEqual(Expression('x').expand(1), '1')
        self.assertEqual(Expression('x').expand('a b'), 'a%20b')
        self.assertEqual(Expression('x').expand('a b', encode=False), 'a b')

    def test_booleans_render_lowercase(self):
        self.assertEqual(Expression('x').expand(True), 'true')
        self.assertEqual(Expression('x').expand([True, False]), 'true,false')
        self.assertEqual(Expression('x').expand({'on': False}), 'on=false')

    def test_bytes_are_decoded_with_charset(self):
        self.assertEqual(Expression('x').expand('café'.encode('utf-8')), 'caf%C3%A9')

    def test_iterables_are_comma_joined(self):
        self.assertEqual(Expression('x').expand(['a', 'b']), 'a,b')
        self.assertEqual(Expression('x').expand(('a', None, 'b')), 'a,b')

    def test_empty_elements_leave_a_separator(self):
        self.assertEqual(Expression('x').expand(['', 'b']), ',b')
        self.assertEqual(Expression('x').expand(['a', '', 'b']), 'a,,b')

    def test_mappings_render_pairs(self):
        self.assertEqual(Expression('x').expand({'a': 1, 'b': None}), 'a=1,b=')

    def test_pattern_uses_full_match(self):
        expr = Expression('id', '[0-9]+')
        self.assertEqual(expr.expand('123'), '123')
        with self.assertRaises(PatternMismatchError) as ctx:
            expr.expand('12a')
        self.assertEqual(str(ctx.exception), 'Value 12a does not match the expression pattern: [0-9]+')

    def test_pattern_mismatch_is_a_value_error(self):
        with self.assertRaises(ValueError):
            Expression('id', '[0-9]+').expand('abc')


class LiteralTests(unittest.TestCase):
    def test_empty_literal_rejected(self):
        with self.assertRaises(ValueError):
            Literal('')

    def test_str(self):
        self.assertEqual(str(Literal('abc')), 'abc')


if __name__ == '__main__':
    unittest.main()
