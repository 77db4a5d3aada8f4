"""File tree strategy - builds the item tree from the vault's directories.

A vault such as this:

    chapter1/
        index.md
        subchapter1.md
        subchapter2.md
    chapter2.md
    chapter3.md

is summarized as:

    Chapter1 (chapter1/index.md)
        Subchapter1 (chapter1/subchapter1.md)
        Subchapter2 (chapter1/subchapter2.md)
    Chapter2 (chapter2.md)
    Chapter3 (chapter3.md)

Every directory needs an index file that holds the directory chapter's own
content. Sections cannot be expressed with a file tree.
"""

import fnmatch
import logging
import stat
from collections.abc import Iterable
from pathlib import Path

from vaultbook.errors import FilesystemError, SummaryValidationError

from .base import SummaryStrategy
from .models import RawChapter, RawItem

logger = logging.getLogger(__name__)

# Extensionless files count as text too
TEXT_EXTENSIONS = ("", ".md", ".markdown", ".txt")

# Stems accepted as a directory's index file, besides the directory's own name
INDEX_FILE_STEMS = ("index", "readme", "INDEX", "README")


def format_chapter_title(stem: str) -> str:
    """Chapter title for a file stem or directory name: `chapter2` -> `Chapter2`."""
    return stem[:1].upper() + stem[1:]


class FileTreeStrategy(SummaryStrategy):
    """Turns text files into chapters and directories into chapters with subchapters."""

    name = "file_tree"

    def __init__(self, vault_path: Path, ignore: Iterable[str] = ()) -> None:
        super().__init__(vault_path)
        self.ignore = list(ignore)
        self._active_dirs: set[Path] = set()

    def collect(self) -> list[RawItem]:
        logger.info(f"Scanning vault: {self.vault_path}")
        self._active_dirs = {self._resolve(self.vault_path)}

        items = self._scan_entries(self._list_entries(self.vault_path))

        logger.info(f"Found {len(items)} top-level chapters")
        return items

    def _scan_entries(self, entries: list[tuple[Path, bool]]) -> list[RawChapter]:
        chapters: list[RawChapter] = []

        for entry, is_dir in entries:
            if is_dir:
                chapter = self._scan_directory(entry)
                if chapter is not None:
                    chapters.append(chapter)
            else:
                chapters.append(
                    RawChapter(name=format_chapter_title(entry.stem), path=self._relative(entry))
                )

        return chapters

    def _scan_directory(self, directory: Path) -> RawChapter | None:
        """Build the chapter for a subdirectory, or None if it holds no text files."""
        resolved = self._resolve(directory)
        if resolved in self._active_dirs:
            raise FilesystemError(directory, "Symbolic link loop detected")

        self._active_dirs.add(resolved)
        try:
            entries = self._list_entries(directory)
            index_file = self._find_index_file(directory, entries)
            children = self._scan_entries([e for e in entries if e[0] != index_file])
        finally:
            self._active_dirs.discard(resolved)

        if index_file is None:
            if not children:
                logger.debug(f"Skipping {directory}: no text files")
                return None
            raise SummaryValidationError(
                self._relative(directory),
                "Could not find content for chapter. Create an index file or a summary.",
            )

        return RawChapter(
            name=format_chapter_title(directory.name),
            path=self._relative(index_file),
            children=children,
        )

    def _list_entries(self, directory: Path) -> list[tuple[Path, bool]]:
        """List subdirectories and text files, sorted by name, as (path, is_dir)."""
        try:
            paths = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise FilesystemError(directory, f"Failed to read directory: {e.strerror or e}") from e

        entries: list[tuple[Path, bool]] = []
        for path in paths:
            # Skip hidden files and folders
            if path.name.startswith("."):
                continue
            if self._is_ignored(path):
                logger.debug(f"Ignoring {path}")
                continue

            try:
                mode = path.stat().st_mode
            except OSError as e:
                if path.is_symlink():
                    raise FilesystemError(path, "Broken symbolic link") from e
                raise FilesystemError(path, f"Failed to stat: {e.strerror or e}") from e

            if stat.S_ISDIR(mode):
                entries.append((path, True))
            elif stat.S_ISREG(mode) and path.suffix.lower() in TEXT_EXTENSIONS:
                entries.append((path, False))

        return entries

    def _find_index_file(self, directory: Path, entries: list[tuple[Path, bool]]) -> Path | None:
        files = [path for path, is_dir in entries if not is_dir]

        for stem in (*INDEX_FILE_STEMS, directory.name):
            for path in files:
                if path.stem == stem:
                    return path

        return None

    def _is_ignored(self, path: Path) -> bool:
        rel_path = self._relative(path)
        return any(
            fnmatch.fnmatch(rel_path, pattern) or fnmatch.fnmatch(path.name, pattern)
            for pattern in self.ignore
        )

    def _relative(self, path: Path) -> str:
        return path.relative_to(self.vault_path).as_posix()

    def _resolve(self, path: Path) -> Path:
        try:
            return path.resolve()
        except (OSError, RuntimeError) as e:
            raise FilesystemError(path, f"Failed to resolve path: {e}") from e
