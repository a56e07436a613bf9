import logging

from .entry import Entry
from .errors import DuplicateOptionError, DuplicateSectionError
from .parser import Parser
from .section import Header, Section
from .token import TokenKind

logger = logging.getLogger(__name__)


class Document:
    """Builds the section tree rooted at the default section name.

    A header whose first part is the root's name reopens the root itself, so
    `[urls]` and `[urls.extra]` both add options to it. Any other header
    resolves all of its parts below the root, creating missing intermediate
    sections on the way. The same header may appear only once, but a
    section first created as an intermediate may still get its own header
    later.
    """

    def __init__(self, root: Section) -> None:
        self.root = root
        self._declared: set[tuple[str, ...]] = set()

    @classmethod
    def parse(cls, p: Parser, default: str) -> Section:
        assert default, "a default section name is required"

        document = cls(Section(default))
        p.skip_comments()

        if p.current.kind != TokenKind.LBRACKET:
            raise p.error("[")

        while p.current.kind != TokenKind.EOF:
            header = Header.parse(p)
            section = document.open(header)
            p.skip_comments()

            while p.current.kind == TokenKind.IDENTIFIER:
                entry = Entry.parse(p)

                if entry.key in section.options:
                    raise DuplicateOptionError(
                        entry.key, header.name, entry.position
                    )

                section.options[entry.key] = entry.value
                p.skip_comments()

            if p.current.kind not in (TokenKind.LBRACKET, TokenKind.EOF):
                raise p.error("option's key")

        return document.root

    def open(self, header: Header) -> Section:
        if header.parts in self._declared:
            raise DuplicateSectionError(header.name)
        else:
            self._declared.add(header.parts)

        section = self.root

        if header.parts[0] == self.root.name:
            # Reopened in place; any further parts are ignored.
            logger.debug("reopened %r (%s)", header.name, header.position)
            return section

        for name in header.parts:
            section = section.child(name)

        logger.debug("opened section %r (%s)", header.name, header.position)
        return section
