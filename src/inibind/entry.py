from .parser import Parser
from .token import Position, TokenKind
from .value import Value


class Entry:
    """Represents a `key = value` option of a section."""

    def __init__(self, key: str, value: Value, position: Position) -> None:
        self.key = key
        self.value = value
        self.position = position

    def __repr__(self) -> str:
        return f"Entry(key={self.key!r}, value={self.value!r})"

    @classmethod
    def parse(cls, p: Parser, /) -> "Entry":
        assert p.current.kind != TokenKind.EOF, "called parse after end of input"

        token = p.expect(TokenKind.IDENTIFIER, "option's key")
        p.expect(TokenKind.ASSIGN, "=")
        value = Value.parse(p)

        return cls(key=token.literal, value=value, position=token.position)
