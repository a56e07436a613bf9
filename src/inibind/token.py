import dataclasses
import enum


class TokenKind(enum.IntEnum):
    ILLEGAL = enum.auto()
    EOF = enum.auto()

    IDENTIFIER = enum.auto()
    STRING = enum.auto()
    INTEGER = enum.auto()
    FLOAT = enum.auto()

    DOT = enum.auto()
    SEMICOLON = enum.auto()
    ASSIGN = enum.auto()
    COMMA = enum.auto()
    COLON = enum.auto()
    LBRACKET = enum.auto()
    RBRACKET = enum.auto()
    LBRACE = enum.auto()
    RBRACE = enum.auto()


PUNCTUATION = {
    ".": TokenKind.DOT,
    ";": TokenKind.SEMICOLON,
    "=": TokenKind.ASSIGN,
    ",": TokenKind.COMMA,
    ":": TokenKind.COLON,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
}


@dataclasses.dataclass(frozen=True)
class Position:
    line: int
    column: int

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"


@dataclasses.dataclass
class Token:
    literal: str
    kind: TokenKind
    position: Position

    def describe(self) -> str:
        """Text used for this token in error messages."""
        if self.kind == TokenKind.EOF:
            return "end of input"
        elif self.kind == TokenKind.STRING:
            return f'"{self.literal}"'
        return self.literal
