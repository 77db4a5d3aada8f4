"""Summarize a vault into its table of contents."""

import logging
from pathlib import Path

from .base import SummaryStrategy
from .builder import TreeBuilder
from .file_tree import FileTreeStrategy
from .models import Summary
from .summary_file import SummaryFileStrategy, find_summary_file

logger = logging.getLogger(__name__)


def select_strategy(vault_path: Path) -> SummaryStrategy:
    """Use the vault's summary file if it has one, otherwise its file tree."""
    summary_path = find_summary_file(vault_path)
    if summary_path is not None:
        return SummaryFileStrategy(vault_path, summary_path)
    return FileTreeStrategy(vault_path)


def summarize(
    vault_path: Path, strategy: SummaryStrategy | None = None, check_paths: bool = False
) -> Summary:
    """Build the Summary of a vault.

    Args:
        vault_path: Directory holding the vault's text files
        strategy: How to find chapters. Defaults to select_strategy(vault_path)
        check_paths: Require every chapter path to exist under vault_path

    Raises:
        SummarySyntaxError: The summary file is malformed
        SummaryValidationError: The resulting tree is invalid
        FilesystemError: The vault could not be read
    """
    strategy = strategy or select_strategy(vault_path)
    logger.info(f"Summarizing {vault_path} using {strategy.name} strategy")

    raw_items = strategy.collect()
    return TreeBuilder(vault_path, check_paths=check_paths).build(raw_items)
