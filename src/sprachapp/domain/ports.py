"""
Ports (interfaces) for the collaborators around the core.

These define the contract that infrastructure adapters must implement.
Application code depends on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable

from .models import AppData, Lang, PackContent

ProgressCallback = Callable[[int], None]


class PackSource(ABC):
    """
    Port for acquiring language packs.

    Implementations:
        - BundledPackSource: Reads packs from a YAML document and simulates a download.
    """

    @abstractmethod
    async def fetch(self, lang: Lang, progress: ProgressCallback | None = None) -> PackContent:
        """
        Fetch the complete pack for a language.

        Args:
            lang: Target language of the pack.
            progress: Optional callback receiving the download percentage (0-100).

        Returns:
            The complete PackContent. Nothing is delivered if the fetch is cancelled.
        """
        pass


class StateStore(ABC):
    """
    Port for the local durable store holding the persisted document.

    Implementations:
        - JsonFileStateStore: One JSON file in the data directory.
    """

    @abstractmethod
    def load(self) -> AppData | None:
        """Return the stored state, or None if nothing has been saved yet."""
        pass

    @abstractmethod
    def save(self, data: AppData) -> None:
        """Replace the stored state with `data`."""
        pass
