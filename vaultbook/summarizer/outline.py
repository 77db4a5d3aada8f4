"""Generate text renditions of a Summary."""

from vaultbook.errors import SummaryValidationError

from .grammar import RESERVED_CHARS
from .models import Chapter, Section, Summary


def generate_outline(summary: Summary, numbered: bool = False) -> str:
    """Generate an indented, human-readable table of contents.

    Example (numbered):

        # Getting Started
        1. Intro (intro.md)
        2. Setup (setup.md)
          2.1. Linux (setup/linux.md)
    """
    lines: list[str] = []

    for item in summary:
        if isinstance(item, Section):
            if lines:
                lines.append("")
            lines.append(f"# {item.title}")
            continue

        for chapter in item.walk():
            indent = "  " * (chapter.depth - 1)
            label = f"{chapter.number}. {chapter.name}" if numbered else chapter.name
            lines.append(f"{indent}{label} ({chapter.path})")

    return "\n".join(lines)


def render_summary_file(summary: Summary) -> str:
    """Write a Summary in summary file syntax, one tab per nesting level.

    Parsing the result yields the same chapters, sections and positions.
    """
    lines: list[str] = []

    for item in summary:
        if isinstance(item, Section):
            if lines and lines[-1]:
                lines.append("")
            lines.append(f"# {_check_text(item.title, item.title)}")
            lines.append("")
            continue

        for chapter in item.walk():
            lines.append(_list_line(chapter))

    while lines and not lines[-1]:
        lines.pop()

    return "\n".join(lines) + "\n" if lines else ""


def _list_line(chapter: Chapter) -> str:
    name = _check_text(chapter.name, chapter.name)
    path = _check_text(chapter.name, chapter.path)
    return "\t" * (chapter.depth - 1) + f"- [{name}]({path})"


def _check_text(subject: str, text: str) -> str:
    if any(char in RESERVED_CHARS for char in text):
        raise SummaryValidationError(
            subject, f"Cannot write {text!r} to a summary file: contains one of {RESERVED_CHARS}"
        )
    return text
