"""
Shared test fixtures — a minimal text-serialized Unity project on disk.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.unity_assets import (
    LAYER_NAMES,
    build_settings_asset,
    controller_asset,
    input_manager_asset,
    mixer_asset,
    tag_manager_asset,
)
from unity_constants.adapters.mock import StaticProjectSource


@pytest.fixture
def unity_project(tmp_path: Path) -> Path:
    """A Unity project with a little of everything."""
    root = tmp_path / "Game"
    settings = root / "ProjectSettings"
    assets = root / "Assets"
    settings.mkdir(parents=True)
    (assets / "Audio").mkdir(parents=True)
    (assets / "Animation").mkdir(parents=True)

    (settings / "TagManager.asset").write_text(tag_manager_asset(
        tags=["Enemy", "Pickup!"],
        layers=LAYER_NAMES,
        sorting_layers=[("Default", 0), ("Foreground", 3141592), ("Background", 3926117009)],
    ))
    (settings / "EditorBuildSettings.asset").write_text(build_settings_asset([
        ("Assets/Scenes/Menu.unity", True),
        ("Assets/Scenes/Level 1.unity", False),
        ("Assets/Scenes/Boss.unity", True),
    ]))
    (settings / "InputManager.asset").write_text(
        input_manager_asset(["Horizontal", "Vertical", "Fire1", "Horizontal"])
    )
    (assets / "Audio" / "Master.mixer").write_text(mixer_asset("Master", ["Volume", "Music Volume"]))
    (assets / "Audio" / "Sfx.mixer").write_text(mixer_asset("Sfx", ["Volume", "Pitch"]))
    (assets / "Animation" / "Player.controller").write_text(
        controller_asset("Player", ["Speed", "Jump"])
    )
    return root


@pytest.fixture
def static_source() -> StaticProjectSource:
    """Fixed metadata covering every category."""
    return StaticProjectSource(
        tags=["Untagged", "Player", "Enemy!", "3Lives"],
        sorting_layers=[("Default", 0), ("Background", 42)],
        layers={0: "Default", 5: "Ground", 31: "Last"},
        scenes=["Assets/Scenes/Zeta.unity", "Assets/Scenes/Alpha.unity"],
        input_axes=["Horizontal", "Vertical"],
        audio_mixers=[["Volume"], ["Volume", "Reverb"]],
        animators=[["Speed"]],
    )
