"""CLI interface for vaultbook - inspect a vault's table of contents from the terminal."""

import argparse
import json
import logging
import sys
from pathlib import Path

from vaultbook.config import get_settings
from vaultbook.errors import VaultbookError
from vaultbook.summarizer import (
    Summary,
    SummaryFileStrategy,
    generate_outline,
    render_summary_file,
    summarize,
)
from vaultbook.vault import Vault

logger = logging.getLogger(__name__)


class Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    GREEN = "\033[32m"
    RED = "\033[31m"
    YELLOW = "\033[33m"


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for CLI."""
    logging.basicConfig(
        format="%(message)s",
        level=logging.DEBUG if verbose else logging.INFO,
        stream=sys.stderr,
    )


def run_init(vault_path: Path) -> None:
    """Initialize a new vault."""
    logger.info(f"{Colors.DIM}Initializing the vault at {vault_path}...{Colors.RESET}")
    Vault(vault_path).init()
    logger.info(f"{Colors.GREEN}Done ✓{Colors.RESET}")


def run_summary(
    vault_path: Path,
    summary_file: str | None = None,
    check_paths: bool = False,
    output_format: str = "outline",
    numbered: bool = False,
) -> str:
    """Summarize a vault and return the formatted result.

    An initialized vault (with vaultbook.yml) is summarized from its source
    directory using its config; any other directory is summarized as is.
    """
    if Vault.was_initialized(vault_path):
        vault = Vault.from_disk(vault_path)
        numbered = numbered or vault.config.general.enumerate
        if summary_file:
            strategy = SummaryFileStrategy(vault.src_dir, Path(summary_file).resolve())
            summary = summarize(
                vault.src_dir,
                strategy,
                check_paths=check_paths or vault.config.general.check_paths,
            )
        else:
            summary = vault.summarize(check_paths=True if check_paths else None)
    else:
        strategy = None
        if summary_file:
            strategy = SummaryFileStrategy(vault_path, Path(summary_file).resolve())
        summary = summarize(vault_path, strategy, check_paths=check_paths)

    return format_summary(summary, output_format, numbered)


def format_summary(summary: Summary, output_format: str, numbered: bool = False) -> str:
    if output_format == "json":
        return json.dumps(summary.to_dict(), indent=2, ensure_ascii=False)
    if output_format == "summary":
        return render_summary_file(summary)
    return generate_outline(summary, numbered=numbered)


def cli(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="vaultbook",
        description="Build the table of contents of a vault of text files.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser("init", help="Create a new vault")
    init_parser.add_argument("vault_path", nargs="?", help="The vault's path")

    summary_parser = subparsers.add_parser("summary", help="Print the vault's table of contents")
    summary_parser.add_argument("vault_path", nargs="?", help="The vault's path")
    summary_parser.add_argument(
        "--summary-file",
        type=str,
        help="Use this summary file instead of looking one up in the vault",
    )
    summary_parser.add_argument(
        "--check-paths",
        action="store_true",
        help="Fail if a chapter points to a missing file",
    )
    summary_parser.add_argument(
        "--format",
        dest="output_format",
        choices=["outline", "json", "summary"],
        default="outline",
        help="Output format (default: outline)",
    )
    summary_parser.add_argument(
        "--numbered",
        action="store_true",
        help="Show chapter numbers in the outline",
    )

    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    # Load settings; an explicit vault path makes them optional
    settings = None
    try:
        settings = get_settings()
    except Exception as e:
        if not args.vault_path:
            logger.error(f"{Colors.RED}Failed to load settings: {e}{Colors.RESET}")
            sys.exit(1)
        logger.warning(f"{Colors.YELLOW}Ignoring invalid settings: {e}{Colors.RESET}")

    vault_path = Path(args.vault_path).resolve() if args.vault_path else settings.vault_path
    check_paths = args.check_paths or (settings is not None and settings.check_paths)

    try:
        if args.command == "init":
            run_init(vault_path)
            return

        output = run_summary(
            vault_path,
            summary_file=args.summary_file,
            check_paths=check_paths,
            output_format=args.output_format,
            numbered=args.numbered,
        )
    except VaultbookError as e:
        logger.error(f"{Colors.RED}{Colors.BOLD}error:{Colors.RESET} {e}")
        sys.exit(1)

    print(output)


if __name__ == "__main__":
    cli()
