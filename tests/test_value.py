import unittest

from inibind.errors import ConfigSyntaxError, UnknownIdentifierError
from inibind.lexer import Lexer
from inibind.parser import Parser
from inibind.token import TokenKind
from inibind.value import Bool, Float, Int, List, Map, Null, String, Value


def parse_value(data: str) -> Value:
    p = Parser(Lexer(data))
    value = Value.parse(p)
    assert p.current.kind == TokenKind.EOF, p.current
    return value


class TestValue(unittest.TestCase):
    def test_literals(self) -> None:
        self.assertEqual(parse_value("true"), Bool(True))
        self.assertEqual(parse_value("yes"), Bool(True))
        self.assertEqual(parse_value("false"), Bool(False))
        self.assertEqual(parse_value("no"), Bool(False))
        self.assertEqual(parse_value("null"), Null())

    def test_literals_are_case_sensitive(self) -> None:
        for data in ("True", "YES", "Null"):
            with self.subTest(data=data):
                with self.assertRaises(UnknownIdentifierError):
                    parse_value(data)

    def test_unknown_identifier(self) -> None:
        with self.assertRaises(ConfigSyntaxError) as cm:
            parse_value("maybe")

        self.assertIsInstance(cm.exception, UnknownIdentifierError)
        self.assertEqual(cm.exception.identifier, "maybe")
        self.assertIn("unknown identifier", str(cm.exception))

    def test_string(self) -> None:
        self.assertEqual(parse_value(r'"a\\b\"c"'), String('a\\b"c'))

    def test_numbers(self) -> None:
        self.assertEqual(parse_value("42"), Int(42))
        self.assertEqual(parse_value("-7"), Int(-7))
        self.assertEqual(parse_value("3.5"), Float(3.5))
        self.assertEqual(parse_value("1e3"), Float(1000.0))
        self.assertEqual(parse_value("1."), Float(1.0))
        self.assertEqual(parse_value(".5"), Float(0.5))
        self.assertEqual(parse_value("-.25"), Float(-0.25))
        self.assertEqual(parse_value("9223372036854775807"), Int(2**63 - 1))

    def test_malformed_numbers(self) -> None:
        for data, expected in (
            ("0xbeef", "integer"),
            ("9223372036854775808", "64-bit integer"),
            ("1.5x", "float"),
        ):
            with self.subTest(data=data):
                with self.assertRaises(ConfigSyntaxError) as cm:
                    parse_value(data)

                self.assertEqual(cm.exception.expected, expected)
                self.assertEqual(cm.exception.got, data)

    def test_list(self) -> None:
        self.assertEqual(
            parse_value("[1, 2, 3,]"),
            List([Int(1), Int(2), Int(3)]),
        )
        self.assertEqual(parse_value("[]"), List([]))

    def test_list_requires_trailing_comma(self) -> None:
        with self.assertRaises(ConfigSyntaxError) as cm:
            parse_value("[1, 2, 3]")

        self.assertEqual(cm.exception.expected, ",")
        self.assertEqual(cm.exception.got, "]")

    def test_list_without_element(self) -> None:
        with self.assertRaises(ConfigSyntaxError) as cm:
            parse_value("[,]")

        self.assertEqual(cm.exception.expected, "option's value")

    def test_map(self) -> None:
        self.assertEqual(parse_value('{ "k": 1, }'), Map({"k": Int(1)}))
        self.assertEqual(parse_value("{}"), Map({}))

    def test_map_key_must_be_string(self) -> None:
        with self.assertRaises(ConfigSyntaxError) as cm:
            parse_value('{ 1: "x", }')

        self.assertEqual(cm.exception.expected, "string key")
        self.assertEqual(cm.exception.got, "1")

    def test_map_syntax_errors(self) -> None:
        for data, expected in (
            ('{ "k": 1 }', ","),
            ('{ "k" 1, }', ":"),
            ('{ "k": 1,', "option's value"),
        ):
            with self.subTest(data=data):
                with self.assertRaises(ConfigSyntaxError) as cm:
                    parse_value(data)

                self.assertEqual(cm.exception.expected, expected)

    def test_map_repeated_key_keeps_last(self) -> None:
        self.assertEqual(
            parse_value('{ "k": 1, "k": 2, }'),
            Map({"k": Int(2)}),
        )

    def test_nested(self) -> None:
        value = parse_value('[[1,], { "a": [true, null,], },]')

        self.assertEqual(
            value,
            List(
                [
                    List([Int(1)]),
                    Map({"a": List([Bool(True), Null()])}),
                ]
            ),
        )
        self.assertEqual(value.unwrap(), [[1], {"a": [True, None]}])

    def test_not_a_value(self) -> None:
        with self.assertRaises(ConfigSyntaxError) as cm:
            parse_value("=")

        self.assertEqual(cm.exception.expected, "option's value")
        self.assertEqual(cm.exception.got, "=")
