"""Base summary strategy class."""

from abc import ABC, abstractmethod
from pathlib import Path

from .models import RawItem


class SummaryStrategy(ABC):
    """Produces the unnumbered item tree of a vault."""

    name: str = "unknown"

    def __init__(self, vault_path: Path) -> None:
        self.vault_path = vault_path

    @abstractmethod
    def collect(self) -> list[RawItem]:
        """Build the raw item tree in document order.

        Returns:
            Top-level raw chapters and sections, positions unassigned
        """
        pass
