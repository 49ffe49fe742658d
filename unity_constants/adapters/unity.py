"""
Unity project source — read category metadata from a project on disk.

Reads the text-serialized settings assets under ``ProjectSettings/`` and
scans the asset folder for ``.mixer`` and ``.controller`` files. Asset
scans are sorted by project-relative path so merged categories come out
in the same order on every run.
"""

from __future__ import annotations

import logging
from functools import cached_property
from pathlib import Path
from typing import Any

from unity_constants.adapters.base import ProjectSource, SourceError
from unity_constants.adapters.meta import ensure_meta
from unity_constants.adapters.unity_yaml import (
    as_int,
    as_list,
    as_str,
    find_object,
    load_documents,
    load_object,
)
from unity_constants.core.models.source import (
    LAYER_SLOT_COUNT,
    LayerSlot,
    SceneEntry,
    SortingLayerEntry,
    to_int32,
)

logger = logging.getLogger(__name__)

# Tags every Unity project has; TagManager.asset only stores custom ones.
BUILTIN_TAGS = (
    "Untagged",
    "Respawn",
    "Finish",
    "EditorOnly",
    "MainCamera",
    "Player",
    "GameController",
)

TAG_MANAGER = "ProjectSettings/TagManager.asset"
BUILD_SETTINGS = "ProjectSettings/EditorBuildSettings.asset"
INPUT_MANAGER = "ProjectSettings/InputManager.asset"

MIXER_PATTERN = "*.mixer"
CONTROLLER_PATTERN = "*.controller"


class UnityProjectSource(ProjectSource):
    """ProjectSource backed by a Unity project directory.

    Args:
        project_root: Directory holding ``Assets/`` and ``ProjectSettings/``.
        assets_dir: Asset folder name, relative to ``project_root``.
    """

    def __init__(self, project_root: Path, assets_dir: str = "Assets"):
        self.project_root = project_root.resolve()
        self.assets_root = self.project_root / assets_dir

    @property
    def name(self) -> str:
        return "unity"

    # ── Settings assets ─────────────────────────────────────────

    @cached_property
    def _tag_manager(self) -> dict[str, Any]:
        return load_object(self.project_root / TAG_MANAGER, "TagManager")

    def tags(self) -> list[str]:
        custom = [as_str(t) for t in as_list(self._tag_manager.get("tags"))]
        return list(BUILTIN_TAGS) + custom

    def sorting_layers(self) -> list[SortingLayerEntry]:
        entries: list[SortingLayerEntry] = []
        for raw in as_list(self._tag_manager.get("m_SortingLayers")):
            if not isinstance(raw, dict):
                continue
            name = as_str(raw.get("name"))
            # uniqueID is stored unsigned; SortingLayer.id is a signed int
            try:
                uid = to_int32(as_int(raw.get("uniqueID")))
            except ValueError as e:
                raise SourceError(
                    f"{TAG_MANAGER}: sorting layer {name!r} has a bad uniqueID: {e}",
                    path=self.project_root / TAG_MANAGER,
                ) from e
            entries.append(SortingLayerEntry(name=name, id=uid))
        return entries

    def layers(self) -> list[LayerSlot]:
        names = [as_str(n) for n in as_list(self._tag_manager.get("layers"))]
        if len(names) > LAYER_SLOT_COUNT:
            logger.warning(
                "%s lists %d layers, ignoring slots past %d",
                TAG_MANAGER, len(names), LAYER_SLOT_COUNT - 1,
            )
        names = names[:LAYER_SLOT_COUNT]
        names += [""] * (LAYER_SLOT_COUNT - len(names))
        return [LayerSlot(index=i, name=n) for i, n in enumerate(names)]

    def scenes(self) -> list[SceneEntry]:
        settings = load_object(self.project_root / BUILD_SETTINGS, "EditorBuildSettings")
        entries: list[SceneEntry] = []
        for raw in as_list(settings.get("m_Scenes")):
            if not isinstance(raw, dict):
                continue
            entries.append(SceneEntry(
                path=as_str(raw.get("path")),
                enabled=as_int(raw.get("enabled"), default=1) != 0,
            ))
        return entries

    def input_axes(self) -> list[str]:
        manager = load_object(self.project_root / INPUT_MANAGER, "InputManager")
        return [
            as_str(axis.get("m_Name"))
            for axis in as_list(manager.get("m_Axes"))
            if isinstance(axis, dict)
        ]

    # ── Project assets ──────────────────────────────────────────

    def find_assets(self, pattern: str) -> list[Path]:
        """All files matching ``pattern`` under the asset folder, sorted."""
        if not self.assets_root.is_dir():
            raise SourceError(f"Asset folder not found: {self.assets_root}", path=self.assets_root)
        return sorted(
            (p for p in self.assets_root.rglob(pattern) if p.is_file()),
            key=lambda p: p.relative_to(self.assets_root).as_posix(),
        )

    def _collect(self, pattern: str, root_key: str, field: str, name_key: str) -> list[str]:
        names: list[str] = []
        for path in self.find_assets(pattern):
            doc = find_object(load_documents(path), root_key)
            if doc is None:
                logger.warning("%s has no %s object, skipped", path, root_key)
                continue
            found = [
                as_str(item.get(name_key))
                for item in as_list(doc.data.get(field))
                if isinstance(item, dict)
            ]
            logger.debug("%s: %d %s entries", path.name, len(found), field)
            names.extend(found)
        return names

    def audio_mixer_parameters(self) -> list[str]:
        return self._collect(MIXER_PATTERN, "AudioMixerController", "m_ExposedParameters", "name")

    def animator_parameters(self) -> list[str]:
        return self._collect(CONTROLLER_PATTERN, "AnimatorController", "m_AnimatorParameters", "m_Name")

    # ── Refresh ─────────────────────────────────────────────────

    def refresh(self, path: Path) -> None:
        """Register ``path`` with the asset folder by creating missing .meta files."""
        created = ensure_meta(path, self.assets_root)
        if created:
            logger.info("Registered %s with %d new .meta file(s)", path.name, len(created))
        else:
            logger.debug("No .meta changes needed for %s", path)
