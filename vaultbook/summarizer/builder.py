"""Tree builder - numbers and validates a raw item tree."""

import logging
import posixpath
from pathlib import Path, PureWindowsPath

from vaultbook.errors import SummaryValidationError

from .models import Chapter, Position, RawChapter, RawItem, RawSection, Section, Summary, SummaryItem

logger = logging.getLogger(__name__)


class TreeBuilder:
    """Turns a strategy's raw items into an immutable, numbered Summary."""

    def __init__(self, vault_path: Path, check_paths: bool = False) -> None:
        self.vault_path = vault_path
        self.check_paths = check_paths

    def build(self, raw_items: list[RawItem]) -> Summary:
        """Number chapters in pre-order and validate the tree.

        Sections are not numbered: `# A`, `- [B]`, `# C`, `- [D]` gives B
        position (1,) and D position (2,).

        Raises:
            SummaryValidationError: On the first invalid item
        """
        items: list[SummaryItem] = []
        chapter_count = 0

        for raw in raw_items:
            if isinstance(raw, RawSection):
                items.append(self._section(raw))
            elif isinstance(raw, RawChapter):
                chapter_count += 1
                items.append(self._chapter(raw, (chapter_count,)))
            else:
                raise SummaryValidationError(repr(raw), "Unknown summary item")

        summary = Summary(items=tuple(items))
        logger.info(
            f"Built summary: {sum(1 for _ in summary.walk())} chapters, "
            f"{len(summary.sections())} sections"
        )
        return summary

    def _section(self, raw: RawSection) -> Section:
        title = raw.title.strip()
        if not title:
            raise SummaryValidationError("<section>", "Section has no title")
        return Section(title=title)

    def _chapter(self, raw: RawChapter, position: Position) -> Chapter:
        name = raw.name.strip()
        if not name:
            raise SummaryValidationError(raw.path or "<chapter>", "Chapter has no name")

        path = self._normalize_path(name, raw.path)
        if self.check_paths:
            self._check_exists(name, path)

        subchapters: list[Chapter] = []
        for index, child in enumerate(raw.children, start=1):
            if not isinstance(child, RawChapter):
                raise SummaryValidationError(
                    name, f"Only chapters can be nested, found {type(child).__name__}"
                )
            subchapters.append(self._chapter(child, (*position, index)))

        return Chapter(name=name, path=path, position=position, subchapters=tuple(subchapters))

    def _normalize_path(self, name: str, path: str) -> str:
        """Return the chapter path as a normalized, vault-relative POSIX path."""
        path = path.strip()
        if not path:
            raise SummaryValidationError(name, "Chapter path is empty")

        if path.startswith(("/", "\\")) or PureWindowsPath(path).drive:
            raise SummaryValidationError(name, f"Chapter path must be relative: {path}")

        normalized = posixpath.normpath(path.replace("\\", "/"))
        if normalized in (".", "..") or normalized.startswith("../"):
            raise SummaryValidationError(name, f"Chapter path escapes vault: {path}")

        return normalized

    def _check_exists(self, name: str, path: str) -> None:
        if not (self.vault_path / path).is_file():
            raise SummaryValidationError(name, f"Chapter file not found: {path}")
