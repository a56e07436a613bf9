import dataclasses
from typing import Iterator, Optional

from .parser import Parser
from .token import Position, TokenKind
from .utils import CaseInsensitiveDict
from .value import Value


@dataclasses.dataclass
class Section:
    """Named node of the configuration tree.

    Option keys are kept exactly as written; children are keyed by their bare
    name (`group0`, not `groups.group0`).
    """

    name: str
    options: dict[str, Value] = dataclasses.field(default_factory=dict)
    children: dict[str, "Section"] = dataclasses.field(default_factory=dict)

    def __iter__(self) -> Iterator["Section"]:
        return iter(self.children.values())

    def child(self, name: str) -> "Section":
        """Return the child called `name`, creating it if needed."""
        try:
            return self.children[name]
        except KeyError:
            section = self.children[name] = Section(name)
            return section

    def find(self, name: str) -> Optional["Section"]:
        """Depth-first search for the first section called `name`."""
        if self.name == name:
            return self

        for child in self.children.values():
            if (section := child.find(name)) is not None:
                return section

        return None

    def as_dict(self) -> CaseInsensitiveDict:
        """Plain-data view: unwrapped option values and nested children."""
        d = CaseInsensitiveDict()

        for key, value in self.options.items():
            d[key] = value.unwrap()

        for name, child in self.children.items():
            d[name] = child.as_dict()

        return d


@dataclasses.dataclass(frozen=True)
class Header:
    """A `[name.sub.sub2]` section header."""

    parts: tuple[str, ...]
    position: Position

    @property
    def name(self) -> str:
        return ".".join(self.parts)

    @classmethod
    def parse(cls, p: Parser, /) -> "Header":
        start = p.expect(TokenKind.LBRACKET, "[")
        parts = [p.expect(TokenKind.IDENTIFIER, "identifier").literal]

        while p.current.kind == TokenKind.DOT:
            p.advance()
            parts.append(p.expect(TokenKind.IDENTIFIER, "identifier").literal)

        p.expect(TokenKind.RBRACKET, "]")

        return cls(parts=tuple(parts), position=start.position)
