"""
Category builders — raw source entries to CategoryBlock.

One builder per metadata category. Each sanitizes display names,
drops later duplicates by identifier (first wins) and attaches a doc
summary carrying the original name. ``CATEGORIES`` fixes the order
blocks appear in the generated file.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from unity_constants.adapters.base import ProjectSource
from unity_constants.core.models.document import CategoryBlock, Constant
from unity_constants.core.models.source import LayerSlot, SceneEntry, SortingLayerEntry
from unity_constants.core.services.identifiers import UniqueNames

logger = logging.getLogger(__name__)

MASK_SUFFIX = "Mask"


def _string_block(category: str, class_name: str, names: list[str], summary: str) -> CategoryBlock:
    """Block of string constants whose value is the display name itself."""
    unique = UniqueNames(category)
    constants: list[Constant] = []
    for name in names:
        ident = unique.claim(name)
        if ident is None:
            continue
        constants.append(Constant(
            identifier=ident,
            value=name,
            kind="string",
            summary=summary.format(name=name),
        ))
    return CategoryBlock(category=category, name=class_name, groups=[constants])


def build_tags(tags: list[str]) -> CategoryBlock:
    return _string_block("tags", "Tags", tags, "Name of tag '{name}'.")


def build_sorting_layers(layers: list[SortingLayerEntry]) -> CategoryBlock:
    unique = UniqueNames("sorting_layers")
    constants: list[Constant] = []
    for layer in layers:
        ident = unique.claim(layer.name)
        if ident is None:
            continue
        constants.append(Constant(
            identifier=ident,
            value=layer.id,
            kind="int",
            summary=f"ID of sorting layer '{layer.name}'.",
        ))
    return CategoryBlock(category="sorting_layers", name="SortingLayers", groups=[constants])


def build_layers(slots: list[LayerSlot]) -> CategoryBlock:
    """Index constants for every named slot, then a bitmask constant for each.

    Index and mask identifiers share one namespace: a mask whose name is
    already taken (e.g. by a layer literally called ``GroundMask``) is
    dropped like any other duplicate.
    """
    unique = UniqueNames("layers")
    indices: list[Constant] = []
    named: list[LayerSlot] = []

    for slot in sorted(slots, key=lambda s: s.index):
        if not slot.name:
            continue
        ident = unique.claim(slot.name)
        if ident is None:
            continue
        named.append(slot)
        indices.append(Constant(
            identifier=ident,
            value=slot.index,
            kind="int",
            summary=f"Index of layer '{slot.name}'.",
        ))

    masks: list[Constant] = []
    for slot in named:
        ident = unique.claim(slot.name, suffix=MASK_SUFFIX)
        if ident is None:
            continue
        masks.append(Constant(
            identifier=ident,
            value=1 << slot.index,
            kind="int",
            summary=f"Bitmask of layer '{slot.name}'.",
            expression=f"1 << {slot.index}",
        ))

    return CategoryBlock(category="layers", name="Layers", groups=[indices, masks])


def build_scenes(scenes: list[SceneEntry]) -> CategoryBlock:
    """Scene constants valued by position in the build list.

    Disabled scenes keep their slot, and a dropped duplicate does not
    shift the positions of the scenes after it.
    """
    unique = UniqueNames("scenes")
    constants: list[Constant] = []
    for position, scene in enumerate(scenes):
        ident = unique.claim(scene.name)
        if ident is None:
            continue
        constants.append(Constant(
            identifier=ident,
            value=position,
            kind="int",
            summary=f"ID of scene '{scene.name}'.",
        ))
    return CategoryBlock(category="scenes", name="Scenes", groups=[constants])


def build_input_axes(names: list[str]) -> CategoryBlock:
    return _string_block("input_axes", "Axes", names, "Input axis '{name}'.")


def build_audio_mixer_parameters(names: list[str]) -> CategoryBlock:
    return _string_block(
        "audio_mixer_parameters", "AudioMixerParams", names,
        "Audio mixer exposed parameter '{name}'.",
    )


def build_animator_parameters(names: list[str]) -> CategoryBlock:
    return _string_block(
        "animator_parameters", "AnimatorParams", names,
        "Animator controller exposed parameter '{name}'.",
    )


@dataclass(frozen=True)
class Category:
    """A category key, its human label, and how to build its block."""

    key: str
    label: str
    build: Callable[[ProjectSource], CategoryBlock]


CATEGORIES: tuple[Category, ...] = (
    Category("tags", "tags", lambda s: build_tags(s.tags())),
    Category("sorting_layers", "sorting layers", lambda s: build_sorting_layers(s.sorting_layers())),
    Category("layers", "layers", lambda s: build_layers(s.layers())),
    Category("scenes", "scenes", lambda s: build_scenes(s.scenes())),
    Category("input_axes", "input axes", lambda s: build_input_axes(s.input_axes())),
    Category(
        "audio_mixer_parameters", "audio mixer parameters",
        lambda s: build_audio_mixer_parameters(s.audio_mixer_parameters()),
    ),
    Category(
        "animator_parameters", "animator parameters",
        lambda s: build_animator_parameters(s.animator_parameters()),
    ),
)
