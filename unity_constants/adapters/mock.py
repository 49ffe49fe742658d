"""
Static project source — fixed category data for tests and manifests.

Holds every category in memory. Can be built from Python values or
from a YAML manifest, and configured to fail a given category so the
generator's abort path can be exercised.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from unity_constants.adapters.base import ProjectSource, SourceError
from unity_constants.core.models.source import (
    LAYER_SLOT_COUNT,
    LayerSlot,
    SceneEntry,
    SortingLayerEntry,
)

logger = logging.getLogger(__name__)


class StaticProjectSource(ProjectSource):
    """In-memory ProjectSource.

    ``layers`` accepts either a mapping of slot index → name or a list of
    names by slot. ``audio_mixers`` and ``animators`` are lists of
    per-asset parameter lists, flattened in order.
    """

    def __init__(
        self,
        tags: list[str] | None = None,
        sorting_layers: list[tuple[str, int]] | None = None,
        layers: dict[int, str] | list[str] | None = None,
        scenes: list[str] | None = None,
        input_axes: list[str] | None = None,
        audio_mixers: list[list[str]] | None = None,
        animators: list[list[str]] | None = None,
    ):
        self._tags = list(tags or [])
        self._sorting_layers = [SortingLayerEntry(name=n, id=i) for n, i in sorting_layers or []]
        self._layers = _layer_slots(layers or {})
        self._scenes = [SceneEntry(path=p) for p in scenes or []]
        self._input_axes = list(input_axes or [])
        self._audio_mixers = [list(m) for m in audio_mixers or []]
        self._animators = [list(a) for a in animators or []]
        self._failures: dict[str, str] = {}
        self.refreshed: list[Path] = []

    @classmethod
    def from_yaml(cls, path: Path) -> StaticProjectSource:
        """Build a source from a YAML manifest.

        Expected keys (all optional): ``tags``, ``sorting_layers``
        (``name``/``id`` mappings), ``layers``, ``scenes``, ``input_axes``,
        ``audio_mixers``, ``animators``.
        """
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except OSError as e:
            raise SourceError(f"Cannot read {path}: {e}", path=path) from e
        except yaml.YAMLError as e:
            raise SourceError(f"Invalid YAML in {path}: {e}", path=path) from e

        if not isinstance(data, dict):
            raise SourceError(f"Expected a YAML mapping in {path}", path=path)

        try:
            return cls(
                tags=[str(t) for t in data.get("tags") or []],
                sorting_layers=[
                    (str(item["name"]), int(item["id"]))
                    for item in data.get("sorting_layers") or []
                ],
                layers=data.get("layers") or {},
                scenes=[str(s) for s in data.get("scenes") or []],
                input_axes=[str(a) for a in data.get("input_axes") or []],
                audio_mixers=[[str(p) for p in m] for m in data.get("audio_mixers") or []],
                animators=[[str(p) for p in a] for a in data.get("animators") or []],
            )
        except (KeyError, TypeError, ValueError) as e:
            raise SourceError(f"Malformed manifest {path}: {e!r}", path=path) from e

    @property
    def name(self) -> str:
        return "static"

    def set_failure(self, category: str, error: str = "Static failure") -> None:
        """Make the query for ``category`` raise SourceError."""
        self._failures[category] = error

    def _check(self, category: str) -> None:
        if category in self._failures:
            raise SourceError(self._failures[category])

    def tags(self) -> list[str]:
        self._check("tags")
        return list(self._tags)

    def sorting_layers(self) -> list[SortingLayerEntry]:
        self._check("sorting_layers")
        return list(self._sorting_layers)

    def layers(self) -> list[LayerSlot]:
        self._check("layers")
        return list(self._layers)

    def scenes(self) -> list[SceneEntry]:
        self._check("scenes")
        return list(self._scenes)

    def input_axes(self) -> list[str]:
        self._check("input_axes")
        return list(self._input_axes)

    def audio_mixer_parameters(self) -> list[str]:
        self._check("audio_mixer_parameters")
        return [p for mixer in self._audio_mixers for p in mixer]

    def animator_parameters(self) -> list[str]:
        self._check("animator_parameters")
        return [p for anim in self._animators for p in anim]

    def refresh(self, path: Path) -> None:
        self.refreshed.append(path)


def _layer_slots(layers: dict[Any, str] | list[str]) -> list[LayerSlot]:
    if isinstance(layers, dict):
        by_index = {int(k): str(v or "") for k, v in layers.items()}
    else:
        by_index = {i: str(v or "") for i, v in enumerate(layers)}
    return [LayerSlot(index=i, name=by_index.get(i, "")) for i in range(LAYER_SLOT_COUNT)]
