"""
Tests for the generate use case — path resolution, build, write, refresh.
"""

import os
from pathlib import Path

import pytest

from unity_constants.adapters.mock import StaticProjectSource
from unity_constants.adapters.unity import UnityProjectSource
from unity_constants.core.models.config import GeneratorConfig
from unity_constants.core.use_cases.generate import (
    HostQueryFailure,
    IoFailure,
    build_document,
    find_existing_output,
    generate,
    resolve_output_path,
)


# ═══════════════════════════════════════════════════════════════════
#  build_document
# ═══════════════════════════════════════════════════════════════════


class TestBuildDocument:
    def test_all_categories_present(self, static_source):
        doc = build_document(static_source)
        assert [b.name for b in doc.blocks] == [
            "Tags", "SortingLayers", "Layers", "Scenes", "Axes", "AudioMixerParams", "AnimatorParams",
        ]

    def test_empty_source_still_has_every_block(self):
        doc = build_document(StaticProjectSource())
        assert len(doc.blocks) == 7
        assert all(len(b) == 0 for b in doc.blocks)

    def test_spec_examples(self, static_source):
        doc = build_document(static_source)
        assert doc.block("tags").identifiers == ["Untagged", "Player", "Enemy_", "_3Lives"]
        assert doc.block("audio_mixer_parameters").identifiers == ["Volume", "Reverb"]
        assert doc.block("layers").get("GroundMask").value == 32
        assert doc.block("scenes").get("Zeta").value == 0

    def test_cross_category_collision_allowed(self):
        source = StaticProjectSource(tags=["Main"], scenes=["Assets/Main.unity"])
        doc = build_document(source)
        assert doc.block("tags").identifiers == ["Main"]
        assert doc.block("scenes").identifiers == ["Main"]

    def test_host_failure_names_category(self):
        source = StaticProjectSource()
        source.set_failure("input_axes", "InputManager.asset unreadable")
        with pytest.raises(HostQueryFailure) as exc:
            build_document(source)
        assert exc.value.category == "input_axes"
        assert "input axes" in str(exc.value)
        assert "InputManager.asset unreadable" in str(exc.value)


# ═══════════════════════════════════════════════════════════════════
#  Output path resolution
# ═══════════════════════════════════════════════════════════════════


class TestResolveOutputPath:
    def test_explicit_wins(self, tmp_path: Path):
        explicit = tmp_path / "Out.cs"
        config = GeneratorConfig(output="Assets/Configured.cs")
        assert resolve_output_path(tmp_path, config, explicit) == explicit

    def test_configured(self, tmp_path: Path):
        config = GeneratorConfig(output="Assets/Gen/UnityConstants.cs")
        assert resolve_output_path(tmp_path, config) == tmp_path / "Assets/Gen/UnityConstants.cs"

    def test_existing_file_found(self, tmp_path: Path):
        existing = tmp_path / "Assets" / "Scripts" / "UnityConstants.cs"
        existing.parent.mkdir(parents=True)
        existing.write_text("// old")
        assert resolve_output_path(tmp_path, GeneratorConfig()) == existing

    def test_first_in_sorted_order(self, tmp_path: Path, caplog):
        for sub in ("b", "a"):
            (tmp_path / "Assets" / sub).mkdir(parents=True)
            (tmp_path / "Assets" / sub / "UnityConstants.cs").write_text("//")
        with caplog.at_level("WARNING"):
            found = find_existing_output(tmp_path / "Assets", "UnityConstants.cs")
        assert found == tmp_path / "Assets" / "a" / "UnityConstants.cs"
        assert "2 copies" in caplog.text

    def test_prompt_used_when_nothing_found(self, tmp_path: Path):
        (tmp_path / "Assets").mkdir()
        asked: list[Path] = []

        def prompt(suggested: Path) -> Path:
            asked.append(suggested)
            return tmp_path / "Assets" / "Gen"

        path = resolve_output_path(tmp_path, GeneratorConfig(), prompt_directory=prompt)
        assert path == tmp_path / "Assets" / "Gen" / "UnityConstants.cs"
        assert asked == [tmp_path / "Assets"]

    def test_prompt_cancel(self, tmp_path: Path):
        assert resolve_output_path(tmp_path, GeneratorConfig(), prompt_directory=lambda _: None) is None

    def test_custom_file_name(self, tmp_path: Path):
        existing = tmp_path / "Assets" / "GameConstants.cs"
        existing.parent.mkdir(parents=True)
        existing.write_text("//")
        config = GeneratorConfig(file_name="GameConstants.cs")
        assert resolve_output_path(tmp_path, config) == existing

    def test_scan_matches_full_file_name(self, tmp_path: Path):
        """Same base name with another extension is not the generated file."""
        assets = tmp_path / "Assets"
        assets.mkdir()
        (assets / "UnityConstants.txt").write_text("notes")
        assert find_existing_output(assets, "UnityConstants.cs") is None


# ═══════════════════════════════════════════════════════════════════
#  generate
# ═══════════════════════════════════════════════════════════════════


class TestGenerate:
    def test_writes_file(self, tmp_path: Path, static_source):
        out = tmp_path / "UnityConstants.cs"
        result = generate(static_source, tmp_path, output_path=out)
        assert result.written is True
        assert result.changed is True
        assert out.read_text() == result.content
        assert "public const string Enemy_ = \"Enemy!\";" in result.content
        assert "public const int GroundMask = 1 << 5;" in result.content

    def test_refresh_called_after_write(self, tmp_path: Path, static_source):
        out = tmp_path / "UnityConstants.cs"
        generate(static_source, tmp_path, output_path=out)
        assert static_source.refreshed == [out]

    def test_idempotent(self, tmp_path: Path, static_source):
        out = tmp_path / "UnityConstants.cs"
        first = generate(static_source, tmp_path, output_path=out)
        before = out.read_bytes()
        second = generate(static_source, tmp_path, output_path=out)
        assert second.content == first.content
        assert second.written is False
        assert second.changed is False
        assert out.read_bytes() == before

    def test_overwrites_existing_content(self, tmp_path: Path, static_source):
        out = tmp_path / "UnityConstants.cs"
        out.write_text("// hand edits that will be lost\n" * 50)
        generate(static_source, tmp_path, output_path=out)
        assert "hand edits" not in out.read_text()

    def test_cancelled(self, tmp_path: Path, static_source):
        result = generate(static_source, tmp_path, prompt_directory=lambda _: None)
        assert result.cancelled is True
        assert result.written is False
        assert list(tmp_path.iterdir()) == []
        assert static_source.refreshed == []

    def test_no_prompt_no_path_cancels(self, tmp_path: Path, static_source):
        assert generate(static_source, tmp_path).cancelled is True

    def test_host_failure_leaves_file_untouched(self, tmp_path: Path, static_source):
        out = tmp_path / "UnityConstants.cs"
        out.write_text("// previous\n")
        static_source.set_failure("animator_parameters")
        with pytest.raises(HostQueryFailure):
            generate(static_source, tmp_path, output_path=out)
        assert out.read_text() == "// previous\n"
        assert static_source.refreshed == []

    def test_write_failure(self, tmp_path: Path, static_source, monkeypatch):
        def boom(path, content):
            raise PermissionError("read-only")

        monkeypatch.setattr("unity_constants.core.use_cases.generate.write_atomic", boom)
        with pytest.raises(IoFailure, match="read-only"):
            generate(static_source, tmp_path, output_path=tmp_path / "UnityConstants.cs")
        assert static_source.refreshed == []

    def test_unwritable_directory(self, tmp_path: Path, static_source):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        with pytest.raises(IoFailure):
            generate(static_source, tmp_path, output_path=blocker / "UnityConstants.cs")

    def test_dry_run_writes_nothing(self, tmp_path: Path, static_source):
        out = tmp_path / "UnityConstants.cs"
        result = generate(static_source, tmp_path, output_path=out, dry_run=True)
        assert result.content.startswith("// This file is auto-generated.")
        assert not out.exists()
        assert static_source.refreshed == []

    def test_dry_run_does_not_prompt(self, tmp_path: Path, static_source):
        def prompt(_):
            raise AssertionError("prompted during dry run")

        result = generate(static_source, tmp_path, prompt_directory=prompt, dry_run=True)
        assert result.path is None
        assert result.content

    def test_check_reports_stale(self, tmp_path: Path, static_source):
        out = tmp_path / "UnityConstants.cs"
        out.write_text("// stale\n")
        result = generate(static_source, tmp_path, output_path=out, check=True)
        assert result.changed is True
        assert out.read_text() == "// stale\n"

    def test_check_up_to_date(self, tmp_path: Path, static_source):
        out = tmp_path / "UnityConstants.cs"
        generate(static_source, tmp_path, output_path=out)
        assert generate(static_source, tmp_path, output_path=out, check=True).changed is False

    def test_namespace_from_config(self, tmp_path: Path, static_source):
        config = GeneratorConfig(namespace="Game.Constants")
        result = generate(static_source, tmp_path, config=config, output_path=tmp_path / "X.cs")
        assert "namespace Game.Constants\n" in result.content

    def test_counts(self, tmp_path: Path, static_source):
        result = generate(static_source, tmp_path, output_path=tmp_path / "X.cs")
        assert result.counts["layers"] == 6
        assert result.counts["audio_mixer_parameters"] == 2
        assert result.to_dict()["counts"]["tags"] == 4

    def test_no_temp_files_left(self, tmp_path: Path, static_source):
        generate(static_source, tmp_path, output_path=tmp_path / "UnityConstants.cs")
        assert [p.name for p in tmp_path.iterdir()] == ["UnityConstants.cs"]


class TestGenerateUnityProject:
    """End to end against a project on disk."""

    def test_full_run(self, unity_project: Path):
        out = unity_project / "Assets" / "Scripts" / "UnityConstants.cs"
        source = UnityProjectSource(unity_project)
        result = generate(source, unity_project, output_path=out)

        text = out.read_text()
        assert result.written
        assert 'public const string Pickup_ = "Pickup!";' in text
        assert "public const int Foreground = 3141592;" in text
        assert "public const int Background = -368850287;" in text
        assert "public const int Ignore_Raycast = 2;" in text
        assert "public const int _3D_PropsMask = 1 << 9;" in text
        assert "public const int Level_1 = 1;" in text
        assert "public const int Boss = 2;" in text
        assert text.count("public const string Horizontal =") == 1
        assert text.count("public const string Volume =") == 1
        assert 'public const string Music_Volume = "Music Volume";' in text
        assert 'public const string Jump = "Jump";' in text

        # refresh registered the new script and folder with Unity
        assert (out.parent / "UnityConstants.cs.meta").is_file()
        assert (unity_project / "Assets" / "Scripts.meta").is_file()

    def test_second_run_reuses_existing_file(self, unity_project: Path):
        out = unity_project / "Assets" / "Gen" / "UnityConstants.cs"
        source = UnityProjectSource(unity_project)
        generate(source, unity_project, output_path=out)

        result = generate(UnityProjectSource(unity_project), unity_project)
        assert result.path == out
        assert result.changed is False

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_existing_mode_preserved(self, unity_project: Path):
        out = unity_project / "Assets" / "UnityConstants.cs"
        out.write_text("// old\n")
        out.chmod(0o640)
        generate(UnityProjectSource(unity_project), unity_project, output_path=out)
        assert out.stat().st_mode & 0o777 == 0o640
