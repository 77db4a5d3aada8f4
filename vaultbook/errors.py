"""Custom exceptions for vaultbook."""

from pathlib import Path


class VaultbookError(Exception):
    """Base exception for vaultbook operations."""


class SummarySyntaxError(VaultbookError):
    """Summary file does not match the summary grammar."""

    def __init__(self, line: int, column: int, message: str, source: str | None = None) -> None:
        self.line = line
        self.column = column
        self.message = message
        self.source = source
        location = f"{source}:{line}:{column}" if source else f"line {line}, column {column}"
        super().__init__(f"{location}: {message}")


class SummaryValidationError(VaultbookError):
    """Summary is structurally invalid."""

    def __init__(self, subject: str, message: str) -> None:
        self.subject = subject  # Chapter name or offending path
        self.message = message
        super().__init__(f"{subject}: {message}")


class FilesystemError(VaultbookError):
    """I/O failure while reading the vault."""

    def __init__(self, path: Path | str, message: str) -> None:
        self.path = Path(path)
        self.message = message
        super().__init__(f"{path}: {message}")


class ConfigError(VaultbookError):
    """Vault configuration file is malformed."""

    def __init__(self, path: Path | str, message: str) -> None:
        self.path = Path(path)
        self.message = message
        super().__init__(f"{path}: {message}")
