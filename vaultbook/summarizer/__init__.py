"""Vault summarization - derives the table of contents of a vault."""

from .base import SummaryStrategy
from .builder import TreeBuilder
from .core import select_strategy, summarize
from .file_tree import FileTreeStrategy
from .grammar import Heading, Link, ListItem, parse_summary
from .models import Chapter, RawChapter, RawSection, Section, Summary
from .outline import generate_outline, render_summary_file
from .summary_file import SummaryFileStrategy, find_summary_file

__all__ = [
    "Chapter",
    "FileTreeStrategy",
    "Heading",
    "Link",
    "ListItem",
    "RawChapter",
    "RawSection",
    "Section",
    "Summary",
    "SummaryFileStrategy",
    "SummaryStrategy",
    "TreeBuilder",
    "find_summary_file",
    "generate_outline",
    "parse_summary",
    "render_summary_file",
    "select_strategy",
    "summarize",
]
