from .errors import ConfigSyntaxError
from .lexer import Lexer
from .token import Token, TokenKind


class Parser:
    """Cursor over a `Lexer` shared by the grammar rules.

    Only one token is ever read ahead, so the lexer always sits right after
    `current`; `skip_comments` relies on that to drop the raw rest of a line.
    """

    def __init__(self, lexer: Lexer) -> None:
        self._lexer = lexer
        self._current = lexer.next()

    @property
    def current(self) -> Token:
        return self._current

    def advance(self) -> Token:
        """Move to the next token and return the one just left behind."""
        previous = self._current
        self._current = self._lexer.next()
        return previous

    def expect(self, kind: TokenKind, expected: str) -> Token:
        if self._current.kind != kind:
            raise self.error(expected)

        return self.advance()

    def error(self, expected: str) -> ConfigSyntaxError:
        return ConfigSyntaxError(
            expected=expected,
            got=self._current.describe(),
            position=self._current.position,
        )

    def skip_comments(self) -> None:
        while self._current.kind == TokenKind.SEMICOLON:
            self._lexer.skip_line()
            self.advance()
