"""Shared test fixtures."""

from pathlib import Path

import pytest

SAMPLE_SUMMARY = """\
# Getting Started

- [Intro](intro.md)
- [Setup](setup.md)
\t- [Linux](setup/linux.md)
\t- [Mac](setup/mac.md)
- [Usage](usage.md)
"""


@pytest.fixture
def sample_summary() -> str:
    """Summary file with a section, three chapters and two subchapters."""
    return SAMPLE_SUMMARY


@pytest.fixture
def tmp_vault(tmp_path: Path) -> Path:
    """Create a temporary vault directory laid out as a file tree."""
    vault = tmp_path / "vault"
    vault.mkdir()

    (vault / "intro.md").write_text("# Intro\n\nWelcome.")
    (vault / "usage.md").write_text("# Usage")

    # Directory chapter with an index file
    setup = vault / "setup"
    setup.mkdir()
    (setup / "index.md").write_text("# Setup")
    (setup / "linux.md").write_text("# Linux")
    (setup / "mac.md").write_text("# Mac")

    return vault


@pytest.fixture
def summary_vault(tmp_path: Path, sample_summary: str) -> Path:
    """Create a vault whose chapters are listed in summary.md."""
    vault = tmp_path / "book"
    (vault / "setup").mkdir(parents=True)

    (vault / "summary.md").write_text(sample_summary)
    for name in ("intro.md", "setup.md", "usage.md", "setup/linux.md", "setup/mac.md"):
        (vault / name).write_text(f"# {name}")

    return vault
