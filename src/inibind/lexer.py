import string
from typing import Callable, Iterator

from .errors import ConfigSyntaxError
from .token import PUNCTUATION, Position, Token, TokenKind


def is_digit(c: str) -> bool:
    return c != "" and c in string.digits


def is_identifier_start(c: str) -> bool:
    return c.isalpha() or c == "_"


def is_identifier_char(c: str) -> bool:
    return c.isalnum() or c == "_"


class Lexer:
    """Pull-based tokenizer; call `next` until it returns an EOF token.

    Whitespace, newlines included, only separates tokens. Comments are not
    stripped here: `;` comes out as a SEMICOLON token and the parser decides
    how much of the line to throw away with `skip_line`.
    """

    def __init__(self, input: str) -> None:
        self.input = input
        self.index = 0
        self.line = 1
        self.column = 1

    def __iter__(self) -> Iterator[Token]:
        while (token := self.next()).kind != TokenKind.EOF:
            yield token

    @property
    def position(self) -> Position:
        return Position(line=self.line, column=self.column)

    def peek(self, offset: int = 0) -> str:
        """Return a raw character ahead of the cursor, or "" past the end."""
        try:
            return self.input[self.index + offset]
        except IndexError:
            return ""

    def read(self) -> str:
        char = self.input[self.index]
        self.index += 1

        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        return char

    def read_while(self, predicate: Callable[[str], bool]) -> str:
        literal = ""

        while self.peek() != "" and predicate(self.peek()):
            literal += self.read()

        return literal

    def skip_line(self) -> None:
        """Discard everything up to the end of the current line."""
        while self.peek() not in ("", "\n"):
            self.read()

    def next(self) -> Token:
        while self.peek().isspace():
            self.read()

        position = self.position
        char = self.peek()

        match char:
            case "":
                return Token(literal="", kind=TokenKind.EOF, position=position)
            case '"':
                return self.handle_string(position)
            case "." if is_digit(self.peek(1)):
                return self.handle_number(position)
            case c if c in PUNCTUATION:
                self.read()
                return Token(literal=c, kind=PUNCTUATION[c], position=position)
            case c if is_identifier_start(c):
                return self.handle_identifier(position)
            case c if is_digit(c):
                return self.handle_number(position)
            case "+" | "-" if is_digit(self.peek(1)) or (
                self.peek(1) == "." and is_digit(self.peek(2))
            ):
                return self.handle_number(position)
            case _:
                self.read()
                return Token(
                    literal=char, kind=TokenKind.ILLEGAL, position=position
                )

    def handle_string(self, position: Position) -> Token:
        self.read()  # Opening quote.
        literal = ""

        while True:
            c = self.peek()

            if c in ("", "\n"):
                raise ConfigSyntaxError(
                    expected='"',
                    got="end of input" if c == "" else "newline",
                    position=self.position,
                )

            self.read()

            if c == '"':
                break
            elif c == "\\" and self.peek() in ('"', "\\"):
                c = self.read()

            literal += c

        return Token(literal=literal, kind=TokenKind.STRING, position=position)

    def handle_identifier(self, position: Position) -> Token:
        literal = self.read_while(is_identifier_char)
        return Token(
            literal=literal, kind=TokenKind.IDENTIFIER, position=position
        )

    def handle_number(self, position: Position) -> Token:
        kind = TokenKind.INTEGER
        literal = ""

        if self.peek() in ("+", "-"):
            literal += self.read()

        literal += self.read_while(is_digit)

        if self.peek() == ".":
            kind = TokenKind.FLOAT
            literal += self.read()
            literal += self.read_while(is_digit)

        if self.peek() in ("e", "E") and (
            is_digit(self.peek(1))
            or (self.peek(1) in ("+", "-") and is_digit(self.peek(2)))
        ):
            kind = TokenKind.FLOAT
            literal += self.read()

            if self.peek() in ("+", "-"):
                literal += self.read()

            literal += self.read_while(is_digit)

        # Keep whatever is glued to the number (e.g. `0xbeef`) so that the
        # conversion to int/float rejects it as a whole.
        literal += self.read_while(is_identifier_char)

        return Token(literal=literal, kind=kind, position=position)
