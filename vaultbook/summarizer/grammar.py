"""Summary file grammar.

A summary file is a sequence of top-level nodes, optionally separated by blank
lines. Each node is either a heading or a list item:

    # Getting Started

    - [Intro](intro.md)
    - [Setup](setup.md)
    	- [Linux](setup/linux.md)

A list item may be followed by a nested block of list items. Nesting is decided
by a stack of required indentation strings: a line indented deeper than the
top of the stack opens a block whose indentation string is pushed, and the
block keeps only the lines that repeat that exact string. Each level chooses
its own unit (tabs or pairs of spaces), but siblings must agree.
"""

import logging
import re
from dataclasses import dataclass

from vaultbook.errors import SummarySyntaxError

logger = logging.getLogger(__name__)

HEADING_MARKER = "# "
LIST_MARKER = "- "

# Characters that delimit links and are never part of free text
RESERVED_CHARS = "[]()"

# Extra indentation of a nested level: tabs only, or pairs of spaces only
INDENT_EXTENSION = re.compile(r"\t+|(?:  )+")
LEADING_WHITESPACE = re.compile(r"[ \t]*")


@dataclass(frozen=True)
class Heading:
    """`# title` line."""

    title: str
    line: int


@dataclass(frozen=True)
class Link:
    """`[name](path)`; column points at the opening bracket."""

    name: str
    path: str
    line: int
    column: int


@dataclass(frozen=True)
class ListItem:
    """`- [name](path)` line with its nested list block, if any."""

    link: Link
    children: tuple["ListItem", ...] = ()


Node = Heading | ListItem


class _SummaryParser:
    """Single-use parser. Holds the cursor and the indentation stack of one parse."""

    def __init__(self, text: str, source: str | None = None) -> None:
        self.lines = [line.removesuffix("\r") for line in text.split("\n")]
        self.source = source
        self.cursor = 0
        self.indents: list[str] = [""]

    def parse(self) -> list[Node]:
        nodes: list[Node] = []

        while not self._at_end():
            line = self._current()

            if not line.strip():
                self.cursor += 1
            elif line.startswith(HEADING_MARKER):
                nodes.append(self._heading())
            elif line.startswith(LIST_MARKER):
                nodes.append(self._list_item(""))
            elif line[0] in " \t":
                raise self._error(1, "unexpected indentation")
            else:
                raise self._error(1, "expected a heading or a list item")

        return nodes

    # Indentation stack

    def _push(self, indent: str) -> None:
        self.indents.append(indent)

    def _peek(self) -> str:
        return self.indents[-1]

    def _drop(self) -> None:
        self.indents.pop()

    # Rules

    def _heading(self) -> Heading:
        line = self._current()
        text = line[len(HEADING_MARKER) :]
        title = text.rstrip()

        if not title:
            raise self._error(len(HEADING_MARKER) + 1, "expected heading text")

        for offset, char in enumerate(title):
            if char in RESERVED_CHARS:
                raise self._error(len(HEADING_MARKER) + offset + 1, f"unexpected '{char}' in heading")

        heading = Heading(title=title, line=self.cursor + 1)
        self.cursor += 1
        return heading

    def _list_item(self, indent: str) -> ListItem:
        line = self._current()
        link, end = self._link(line, len(indent) + len(LIST_MARKER))

        rest = line[end:]
        if rest.strip():
            padding = len(rest) - len(rest.lstrip())
            raise self._error(end + padding + 1, "unexpected text after link")

        self.cursor += 1
        return ListItem(link=link, children=self._nested_block())

    def _link(self, line: str, start: int) -> tuple[Link, int]:
        """Match `[name](path)` at `start`. Returns the link and the index after it."""
        pos = self._expect(line, start, "[")
        name, pos = self._text(line, pos)
        pos = self._expect(line, pos, "]")
        pos = self._expect(line, pos, "(")
        path, pos = self._text(line, pos)
        pos = self._expect(line, pos, ")")

        return Link(name=name, path=path, line=self.cursor + 1, column=start + 1), pos

    def _nested_block(self) -> tuple[ListItem, ...]:
        indent = self._nested_indent()
        if indent is None:
            return ()

        self._push(indent)
        children: list[ListItem] = []
        while self._at_sibling(indent):
            children.append(self._list_item(indent))
        self._drop()

        return tuple(children)

    # Helpers

    def _nested_indent(self) -> str | None:
        """Indentation of the current line if it opens a nested block, else None."""
        if self._at_end():
            return None

        line = self._current()
        if not line.strip():
            return None

        indent = LEADING_WHITESPACE.match(line).group()
        parent = self._peek()

        if len(indent) <= len(parent) or not indent.startswith(parent):
            return None
        if not INDENT_EXTENSION.fullmatch(indent[len(parent) :]):
            return None
        if not line[len(indent) :].startswith(LIST_MARKER):
            return None

        return indent

    def _at_sibling(self, indent: str) -> bool:
        if self._at_end():
            return False

        line = self._current()
        current_indent = LEADING_WHITESPACE.match(line).group()
        return current_indent == indent and line[len(indent) :].startswith(LIST_MARKER)

    def _text(self, line: str, pos: int) -> tuple[str, int]:
        end = pos
        while end < len(line) and line[end] not in RESERVED_CHARS:
            end += 1
        return line[pos:end], end

    def _expect(self, line: str, pos: int, char: str) -> int:
        if pos >= len(line):
            raise self._error(pos + 1, f"expected '{char}', found end of line")
        if line[pos] != char:
            raise self._error(pos + 1, f"expected '{char}', found '{line[pos]}'")
        return pos + 1

    def _current(self) -> str:
        return self.lines[self.cursor]

    def _at_end(self) -> bool:
        return self.cursor >= len(self.lines)

    def _error(self, column: int, message: str) -> SummarySyntaxError:
        return SummarySyntaxError(self.cursor + 1, column, message, self.source)


def parse_summary(text: str, source: str | None = None) -> list[Node]:
    """Parse summary file text into top-level headings and list items.

    Args:
        text: Full contents of the summary file
        source: Optional file name used in error messages

    Raises:
        SummarySyntaxError: At the first line/column that does not match
    """
    nodes = _SummaryParser(text, source).parse()
    logger.debug(f"Parsed {len(nodes)} top-level summary nodes")
    return nodes
