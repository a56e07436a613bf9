from typing import Any, TextIO

from .binder import DEFAULT_CONVERTERS, DEFAULT_STRICT, Binder, Parsable
from .document import Document
from .errors import (
    BindError,
    CapabilityError,
    ConfigError,
    ConfigSyntaxError,
    DuplicateOptionError,
    DuplicateSectionError,
    MissingFieldError,
    ParseError,
    SectionNotFoundError,
    TypeMismatchError,
    UnknownIdentifierError,
)
from .lexer import Lexer
from .parser import Parser
from .section import Section
from .value import Bool, Float, Int, List, Map, Null, String, Value

__all__ = (
    "parse",
    "bind",
    "bind_section",
    "Binder",
    "Parsable",
    "Section",
    "Lexer",
    "Value",
    "String",
    "Int",
    "Float",
    "Bool",
    "Null",
    "List",
    "Map",
    "DEFAULT_STRICT",
    "DEFAULT_CONVERTERS",
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


def parse(source: str | TextIO, default: str) -> Section:
    """Deserialize configuration text into a tree of sections.

    Parameters
    ----------
    source
        Text to deserialize, or an open text stream to read it from.
    default
        Name of the top-level section. A header with this name (e.g.
        `[urls]` when `default` is `"urls"`) fills the returned section
        itself; every other header becomes one of its descendants.

    Returns
    -------
    Section
        The top-level section.

    Raises
    ------
    ParseError
        On the first syntax error, duplicated section or duplicated option.
    """
    data = source if isinstance(source, str) else source.read()
    parser = Parser(Lexer(input=data))
    return Document.parse(parser, default)


def bind(tree: Section, target: Any, strict: bool = DEFAULT_STRICT) -> None:
    """Copy the options and sub-sections of `tree` onto `target`.

    See `inibind.binder` for the matching rules.
    """
    Binder(strict=strict).bind(tree, target)


def bind_section(
    tree: Section,
    name: str,
    target: Any,
    strict: bool = DEFAULT_STRICT,
) -> None:
    """Bind the section called `name`, wherever it is in `tree`."""
    Binder(strict=strict).bind_section(tree, name, target)


del Any, TextIO
