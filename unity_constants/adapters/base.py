"""
Project source base — the contract between the generator and its host.

The generator never reads host state directly. It asks a
``ProjectSource`` for each category's raw entries, one query method per
category, and tells it to refresh once the output file is written.

To create a new source:
    1. Subclass ProjectSource
    2. Implement the seven category queries and refresh
    3. Raise SourceError when a category cannot be read
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from unity_constants.core.models.source import LayerSlot, SceneEntry, SortingLayerEntry


class SourceError(Exception):
    """Raised when a category's backing data is missing or unreadable."""

    def __init__(self, message: str, path: Path | str | None = None):
        super().__init__(message)
        self.path = path


class ProjectSource(ABC):
    """Read-only view of a project's metadata.

    Category queries return entries in host order. Merged categories
    (input axes, mixer and animator parameters) return every name from
    every matching asset, duplicates included; the generator dedups.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short source identifier (e.g., 'unity', 'static')."""

    @abstractmethod
    def tags(self) -> list[str]:
        """All tag names."""

    @abstractmethod
    def sorting_layers(self) -> list[SortingLayerEntry]:
        """Sorting layers with their unique ids."""

    @abstractmethod
    def layers(self) -> list[LayerSlot]:
        """Layer slots 0..31. Unused slots have an empty name."""

    @abstractmethod
    def scenes(self) -> list[SceneEntry]:
        """The build scene list, in configured order."""

    @abstractmethod
    def input_axes(self) -> list[str]:
        """Axis names from the input configuration asset."""

    @abstractmethod
    def audio_mixer_parameters(self) -> list[str]:
        """Exposed parameter names across every audio mixer asset."""

    @abstractmethod
    def animator_parameters(self) -> list[str]:
        """Parameter names across every animator controller asset."""

    def refresh(self, path: Path) -> None:
        """Tell the host that ``path`` was (re)written.

        Default: no-op. Hosts with an asset index override this.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
