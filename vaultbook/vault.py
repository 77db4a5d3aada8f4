"""Vault layout and its vaultbook.yml configuration."""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from vaultbook.errors import ConfigError, FilesystemError, VaultbookError
from vaultbook.summarizer import (
    FileTreeStrategy,
    Summary,
    SummaryFileStrategy,
    SummaryStrategy,
    find_summary_file,
    summarize,
)

logger = logging.getLogger(__name__)

CONFIG_FILE = "vaultbook.yml"


class GeneralConfig(BaseModel):
    """General options for a vault."""

    title: str = ""
    authors: list[str] = Field(default_factory=list)
    description: str = ""
    # Show chapter numbers in the table of contents
    enumerate: bool = False
    # Glob patterns skipped by the file tree scan (e.g. "drafts/*", "not_ready.md")
    ignore: list[str] = Field(default_factory=list)
    src_dir: Path = Path("src")
    build_dir: Path = Path("build")
    # Summary file relative to src_dir; looked up automatically when unset
    summary_file: Path | None = None
    check_paths: bool = False


class VaultConfig(BaseModel):
    """All configuration options of a vault, as stored in vaultbook.yml."""

    # Keys used only by renderers are kept out of the model
    model_config = ConfigDict(extra="ignore")

    general: GeneralConfig = Field(default_factory=GeneralConfig)

    @classmethod
    def from_disk(cls, path: Path) -> "VaultConfig":
        """Read and validate a config file."""
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise FilesystemError(path, f"Failed to read config file: {e.strerror or e}") from e

        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as e:
            raise ConfigError(path, f"Failed to parse config file: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(path, "Config file must contain a mapping")

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(path, f"Invalid config: {e}") from e

    def save(self, path: Path) -> None:
        """Write the config as YAML."""
        try:
            path.write_text(
                yaml.safe_dump(self.model_dump(mode="json"), sort_keys=False, allow_unicode=True),
                encoding="utf-8",
            )
        except OSError as e:
            raise FilesystemError(path, f"Failed to write config file: {e.strerror or e}") from e


class Vault:
    """A vault: its config file, source directory and build directory."""

    def __init__(self, path: Path, config: VaultConfig | None = None) -> None:
        self.path = path
        self.config = config or VaultConfig()

    @classmethod
    def from_disk(cls, path: Path) -> "Vault":
        config_path = path / CONFIG_FILE
        if not config_path.is_file():
            raise FilesystemError(config_path, "Not a vault. Run `vaultbook init` first.")
        return cls(path, VaultConfig.from_disk(config_path))

    @staticmethod
    def was_initialized(path: Path) -> bool:
        return (path / CONFIG_FILE).exists()

    @property
    def config_path(self) -> Path:
        return self.path / CONFIG_FILE

    @property
    def src_dir(self) -> Path:
        return self.path / self.config.general.src_dir

    @property
    def build_dir(self) -> Path:
        return self.path / self.config.general.build_dir

    def init(self) -> None:
        """Create the vault directories and its config file.

        The vault title defaults to the directory name.
        """
        if self.was_initialized(self.path):
            raise VaultbookError(f"{CONFIG_FILE} already exists at {self.path}")

        for directory in (self.path, self.src_dir, self.build_dir):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise FilesystemError(directory, f"Could not create directory: {e.strerror or e}") from e

        if not self.config.general.title:
            self.config.general.title = self.path.resolve().name

        self.config.save(self.config_path)
        logger.info(f"Initialized vault at {self.path}")

    def strategy(self) -> SummaryStrategy:
        """Pick the summary strategy configured for this vault."""
        general = self.config.general

        summary_path = general.summary_file or find_summary_file(self.src_dir)
        if summary_path is not None:
            return SummaryFileStrategy(self.src_dir, summary_path)
        return FileTreeStrategy(self.src_dir, ignore=general.ignore)

    def summarize(self, check_paths: bool | None = None) -> Summary:
        """Summarize the vault's source directory.

        Args:
            check_paths: Overrides the config's check_paths when given
        """
        if not self.src_dir.is_dir():
            raise FilesystemError(self.src_dir, "Source directory does not exist")

        if check_paths is None:
            check_paths = self.config.general.check_paths

        return summarize(self.src_dir, self.strategy(), check_paths=check_paths)
