from typing import Optional

from .token import Position

__all__ = (
    "ConfigError",
    "ParseError",
    "ConfigSyntaxError",
    "UnknownIdentifierError",
    "DuplicateSectionError",
    "DuplicateOptionError",
    "BindError",
    "TypeMismatchError",
    "MissingFieldError",
    "CapabilityError",
    "SectionNotFoundError",
)


class ConfigError(Exception):
    """Base exception for everything raised by this package."""


class ParseError(ConfigError):
    """The configuration text could not be turned into a section tree."""


class ConfigSyntaxError(ParseError):
    """An unexpected token was met while parsing.

    This can be a missing `]` to close a section header, an identifier
    where an option's value was expected, and so on.
    """

    def __init__(self, expected: str, got: str, position: Position) -> None:
        super().__init__(expected, got, position)
        self.expected = expected
        self.got = got
        self.position = position

    def __str__(self) -> str:
        return (
            f"syntax error: expected {self.expected!r}, "
            f"got {self.got!r} ({self.position})"
        )


class UnknownIdentifierError(ConfigSyntaxError):
    """A bare identifier was used as a value but is not a known literal."""

    def __init__(self, identifier: str, position: Position) -> None:
        super().__init__("true, yes, false, no or null", identifier, position)
        self.identifier = identifier

    def __str__(self) -> str:
        return f"{self.identifier!r} unknown identifier ({self.position})"


class DuplicateSectionError(ParseError):
    def __init__(self, section: str) -> None:
        super().__init__(section)
        self.section = section

    def __str__(self) -> str:
        return f"duplicate section: {self.section!r} already defined"


class DuplicateOptionError(ParseError):
    def __init__(
        self,
        option: str,
        section: str,
        position: Optional[Position] = None,
    ) -> None:
        super().__init__(option, section, position)
        self.option = option
        self.section = section
        self.position = position

    def __str__(self) -> str:
        message = (
            f"duplicate option: {self.option!r} already defined "
            f"in section {self.section!r}"
        )

        if self.position is not None:
            message += f" ({self.position})"

        return message


class BindError(ConfigError):
    """A section tree could not be bound onto a target record."""


class TypeMismatchError(BindError):
    def __init__(self, expected: str, actual: str, field: str) -> None:
        super().__init__(expected, actual, field)
        self.expected = expected
        self.actual = actual
        self.field = field

    def __str__(self) -> str:
        return (
            f"mismatched type for {self.field!r}: "
            f"expected {self.expected}, got {self.actual}"
        )


class MissingFieldError(BindError):
    def __init__(self, field: str, section: str) -> None:
        super().__init__(field, section)
        self.field = field
        self.section = section

    def __str__(self) -> str:
        return f"missing option/section {self.field!r} in {self.section!r}"


class CapabilityError(BindError):
    """A custom string conversion failed; `str()` is its own message."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(field, message)
        self.field = field
        self.message = message

    def __str__(self) -> str:
        return self.message


class SectionNotFoundError(BindError):
    def __init__(self, section: str) -> None:
        super().__init__(section)
        self.section = section

    def __str__(self) -> str:
        return f"section {self.section!r} not found"
