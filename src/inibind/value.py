import dataclasses
import logging
from typing import Any, ClassVar

from .errors import ConfigSyntaxError, UnknownIdentifierError
from .parser import Parser
from .token import Token, TokenKind

logger = logging.getLogger(__name__)

INT_MIN = -(2**63)
INT_MAX = 2**63 - 1


class Value:
    """Typed right-hand side of an option.

    The variants are `String`, `Int`, `Float`, `Bool`, `Null`, `List` and
    `Map`; nothing else is ever produced by `Value.parse`.
    """

    kind: ClassVar[str] = "value"

    def unwrap(self) -> Any:
        """Return the plain Python object held by this value."""
        raise NotImplementedError

    @classmethod
    def parse(cls, p: Parser, /) -> "Value":
        token = p.current

        match token.kind:
            case TokenKind.IDENTIFIER:
                try:
                    value = LITERALS[token.literal]
                except KeyError:
                    raise UnknownIdentifierError(
                        token.literal, token.position
                    ) from None

                p.advance()
                return value
            case TokenKind.STRING:
                p.advance()
                return String(token.literal)
            case TokenKind.INTEGER:
                p.advance()
                return Int.from_token(token)
            case TokenKind.FLOAT:
                p.advance()
                return Float.from_token(token)
            case TokenKind.LBRACKET:
                return List.parse(p)
            case TokenKind.LBRACE:
                return Map.parse(p)
            case _:
                raise p.error("option's value")


@dataclasses.dataclass(frozen=True)
class String(Value):
    text: str

    kind: ClassVar[str] = "string"

    def unwrap(self) -> str:
        return self.text


@dataclasses.dataclass(frozen=True)
class Int(Value):
    number: int

    kind: ClassVar[str] = "integer"

    def unwrap(self) -> int:
        return self.number

    @classmethod
    def from_token(cls, token: Token) -> "Int":
        try:
            number = int(token.literal, 10)
        except ValueError:
            raise ConfigSyntaxError(
                "integer", token.literal, token.position
            ) from None

        if not INT_MIN <= number <= INT_MAX:
            raise ConfigSyntaxError(
                "64-bit integer", token.literal, token.position
            )

        return cls(number)


@dataclasses.dataclass(frozen=True)
class Float(Value):
    number: float

    kind: ClassVar[str] = "float"

    def unwrap(self) -> float:
        return self.number

    @classmethod
    def from_token(cls, token: Token) -> "Float":
        try:
            return cls(float(token.literal))
        except ValueError:
            raise ConfigSyntaxError(
                "float", token.literal, token.position
            ) from None


@dataclasses.dataclass(frozen=True)
class Bool(Value):
    flag: bool

    kind: ClassVar[str] = "bool"

    def unwrap(self) -> bool:
        return self.flag


@dataclasses.dataclass(frozen=True)
class Null(Value):
    kind: ClassVar[str] = "null"

    def unwrap(self) -> None:
        return None


@dataclasses.dataclass(frozen=True)
class List(Value):
    items: list[Value]

    kind: ClassVar[str] = "list"

    def unwrap(self) -> list[Any]:
        return [item.unwrap() for item in self.items]

    @classmethod
    def parse(cls, p: Parser, /) -> "List":
        p.expect(TokenKind.LBRACKET, "[")
        items: list[Value] = []

        # Every element is followed by a comma, the last one included.
        while p.current.kind != TokenKind.RBRACKET:
            items.append(Value.parse(p))
            p.expect(TokenKind.COMMA, ",")

        p.advance()  # Advance passed the RBRACKET.
        return cls(items)


@dataclasses.dataclass(frozen=True)
class Map(Value):
    items: dict[str, Value]

    kind: ClassVar[str] = "map"

    def unwrap(self) -> dict[str, Any]:
        return {key: value.unwrap() for key, value in self.items.items()}

    @classmethod
    def parse(cls, p: Parser, /) -> "Map":
        p.expect(TokenKind.LBRACE, "{")
        items: dict[str, Value] = {}

        while p.current.kind != TokenKind.RBRACE:
            start = p.current
            key = Value.parse(p)

            if not isinstance(key, String):
                raise ConfigSyntaxError(
                    "string key", str(key.unwrap()), start.position
                )

            p.expect(TokenKind.COLON, ":")
            value = Value.parse(p)
            p.expect(TokenKind.COMMA, ",")

            if key.text in items:
                logger.debug(
                    "key %r redefined (%s), keeping the last value",
                    key.text,
                    start.position,
                )

            items[key.text] = value

        p.advance()  # Advance passed the RBRACE.
        return cls(items)


LITERALS: dict[str, Value] = {
    "true": Bool(True),
    "yes": Bool(True),
    "false": Bool(False),
    "no": Bool(False),
    "null": Null(),
}
