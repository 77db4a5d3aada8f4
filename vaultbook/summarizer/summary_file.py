"""Summary file strategy - builds the item tree from a hand-written summary.md."""

import logging
import posixpath
from pathlib import Path

from vaultbook.errors import FilesystemError

from .base import SummaryStrategy
from .grammar import Heading, ListItem, Node, parse_summary
from .models import RawChapter, RawItem, RawSection

logger = logging.getLogger(__name__)

# Looked up at the vault root, first match wins
SUMMARY_FILE_NAMES = ("summary.md", "SUMMARY.md", "Summary.md")


def find_summary_file(vault_path: Path) -> Path | None:
    """Return the vault's summary file, or None if it has none."""
    for name in SUMMARY_FILE_NAMES:
        candidate = vault_path / name
        if candidate.is_file():
            return candidate
    return None


class SummaryFileStrategy(SummaryStrategy):
    """Folds a parsed summary file into raw chapters and sections."""

    name = "summary_file"

    def __init__(self, vault_path: Path, summary_path: Path) -> None:
        super().__init__(vault_path)
        if not summary_path.is_absolute():
            summary_path = vault_path / summary_path
        self.summary_path = summary_path

    def collect(self) -> list[RawItem]:
        logger.info(f"Reading summary file: {self.summary_path}")

        nodes = parse_summary(self._read(), source=str(self.summary_path))
        prefix = self._link_prefix()

        items = [self._convert(node, prefix) for node in nodes]

        logger.info(f"Summary file lists {len(items)} top-level items")
        return items

    def _read(self) -> str:
        try:
            return self.summary_path.read_text(encoding="utf-8-sig")
        except UnicodeDecodeError as e:
            raise FilesystemError(self.summary_path, "Summary file is not valid UTF-8") from e
        except OSError as e:
            raise FilesystemError(
                self.summary_path, f"Failed to read summary file: {e.strerror or e}"
            ) from e

    def _link_prefix(self) -> str:
        """Directory of the summary file relative to the vault root ("" for the root)."""
        summary_dir = self.summary_path.parent.resolve()
        try:
            rel_dir = summary_dir.relative_to(self.vault_path.resolve())
        except ValueError:
            logger.debug(f"{self.summary_path} is outside the vault, links are vault-relative")
            return ""

        prefix = rel_dir.as_posix()
        return "" if prefix == "." else prefix

    def _convert(self, node: Node, prefix: str) -> RawItem:
        if isinstance(node, Heading):
            return RawSection(title=node.title)
        return self._chapter(node, prefix)

    def _chapter(self, item: ListItem, prefix: str) -> RawChapter:
        path = item.link.path.strip()
        # Empty paths stay empty so the builder can reject them
        if path and prefix:
            path = posixpath.join(prefix, path)

        return RawChapter(
            name=item.link.name.strip(),
            path=path,
            children=[self._chapter(child, prefix) for child in item.children],
        )
