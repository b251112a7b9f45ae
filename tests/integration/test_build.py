"""
Token build integration tests.

Runs the shell end to end against files on disk: JSON source in, generated
theme module and stylesheet out.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from design_tokens.adapters.fs.filestore import FileSystemStore
from design_tokens.app_shell import cli
from design_tokens.components.tokens import (
    TokenValidationError,
    build,
    load_source,
    render_theme_module,
)
from design_tokens.rules.models import Rules


def write_source(tmp_path: Path, data: Any) -> Path:
    path = tmp_path / "tokens.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def write_rules(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "rules.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadSource:
    def test_reads_json(self, tmp_path: Path, w3c_document: dict[str, Any]) -> None:
        assert load_source(write_source(tmp_path, w3c_document)) == w3c_document

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_source(tmp_path / "nope.json")

    def test_malformed_json(self, tmp_path: Path) -> None:
        path = tmp_path / "tokens.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON"):
            load_source(path)


class TestRenderThemeModule:
    def test_module_layout(self) -> None:
        module = render_theme_module({"colors": {"primary": "#000000"}})
        assert module == (
            "// This file is auto-generated. Do not edit manually.\n"
            "import type { TailwindThemeExtension } from './types';\n"
            "\n"
            "export const designTokens: TailwindThemeExtension = {\n"
            '  "colors": {\n'
            '    "primary": "#000000"\n'
            "  }\n"
            "};\n"
        )

    def test_non_ascii_kept(self) -> None:
        module = render_theme_module({"fontFamily": {"body": "Noto Sans Ä"}})
        assert '"Noto Sans Ä"' in module


class TestBuild:
    def test_writes_both_artifacts(self, tmp_path: Path, w3c_document: dict[str, Any]) -> None:
        source = write_source(tmp_path, w3c_document)
        out_dir = tmp_path / "out"

        result = build(Rules(), source=source, out_dir=out_dir)

        assert result.token_count == 10
        assert result.theme_path == (out_dir / "tokens.ts").resolve()
        assert result.css_path == (out_dir / "variables.css").resolve()

        module = result.theme_path.read_text(encoding="utf-8")
        assert "export const designTokens: TailwindThemeExtension = {" in module
        assert '"heading-xl": [' in module

        css = result.css_path.read_text(encoding="utf-8")
        assert css.startswith(":root {\n")
        assert css.endswith("}\n")
        assert "  --colour-status-error: #e90932;\n" in css
        assert "  --font-heading-xl-line-height: 1.333;\n" in css

    def test_rules_paths_used(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, legacy_document: dict[str, Any]
    ) -> None:
        monkeypatch.chdir(tmp_path)
        write_source(tmp_path, legacy_document)
        rules = Rules.model_validate(
            {"pipeline": {"out_dir": "dist", "theme_filename": "theme.ts", "css_filename": "t.css"}}
        )

        build(rules)

        assert (tmp_path / "dist" / "theme.ts").is_file()
        assert (tmp_path / "dist" / "t.css").is_file()

    def test_semantic_aliases_appended(
        self, tmp_path: Path, w3c_document: dict[str, Any]
    ) -> None:
        rules = Rules.model_validate(
            {
                "css": {
                    "semantic_aliases": {"destructive": "colour-status-error"},
                    "radius_token": "border-radius-$default",
                }
            }
        )
        result = build(rules, source=write_source(tmp_path, w3c_document), out_dir=tmp_path)
        assert result.css_path is not None
        css = result.css_path.read_text(encoding="utf-8")
        assert "  --destructive: 349 93% 47%;\n" in css
        assert "  --radius: 0.25rem;\n" in css
        assert '  --font-sans: "Albert Sans", sans-serif;\n' in css

    def test_semantic_collision_rejected(self, tmp_path: Path) -> None:
        """A token named like a semantic alias cannot be shadowed."""
        data = {
            "tokens": {
                "colors": {"primary": {"value": "#ff0000", "type": "color"}},
                "radii": {"radius": {"value": "4px", "type": "borderRadius"}},
            }
        }
        rules = Rules.model_validate({"css": {"semantic_aliases": {"destructive": "primary"}}})
        out_dir = tmp_path / "out"
        with pytest.raises(TokenValidationError, match="--radius"):
            build(rules, source=write_source(tmp_path, data), out_dir=out_dir)
        assert not out_dir.exists()

    def test_failed_write_keeps_previous_artifacts(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, w3c_document: dict[str, Any]
    ) -> None:
        out_dir = tmp_path / "out"
        out_dir.mkdir()
        (out_dir / "tokens.ts").write_text("old theme", encoding="utf-8")
        (out_dir / "variables.css").write_text("old css", encoding="utf-8")

        original_stage = FileSystemStore._stage

        def failing_stage(self: FileSystemStore, target: Path, text: str) -> str:
            if target.name == "variables.css":
                raise OSError("disk full")
            return original_stage(self, target, text)

        monkeypatch.setattr(FileSystemStore, "_stage", failing_stage)

        with pytest.raises(OSError, match="disk full"):
            build(Rules(), source=write_source(tmp_path, w3c_document), out_dir=out_dir)

        assert (out_dir / "tokens.ts").read_text(encoding="utf-8") == "old theme"
        assert (out_dir / "variables.css").read_text(encoding="utf-8") == "old css"
        assert sorted(p.name for p in out_dir.iterdir()) == ["tokens.ts", "variables.css"]

    def test_check_only_writes_nothing(
        self, tmp_path: Path, w3c_document: dict[str, Any]
    ) -> None:
        out_dir = tmp_path / "out"
        result = build(
            Rules(), source=write_source(tmp_path, w3c_document), out_dir=out_dir, check_only=True
        )
        assert result.token_count == 10
        assert result.theme_path is None
        assert not out_dir.exists()

    def test_invalid_tokens_write_nothing(self, tmp_path: Path) -> None:
        data = {"tokens": {"colors": {"bad": {"value": "nope", "type": "color"}}}}
        out_dir = tmp_path / "out"
        with pytest.raises(TokenValidationError, match="bad"):
            build(Rules(), source=write_source(tmp_path, data), out_dir=out_dir)
        assert not out_dir.exists()

    def test_project_sample_builds(self, project_root: Path, tmp_path: Path) -> None:
        """The shipped tokens.json and rules.yaml build cleanly together."""
        from design_tokens.rules.loader import load_rules

        rules = load_rules(project_root / "rules.yaml")
        result = build(rules, source=project_root / "tokens.json", out_dir=tmp_path)
        assert result.css_path is not None
        css = result.css_path.read_text(encoding="utf-8")
        assert "  --primary: 224 100% 22%;\n" in css
        assert '  --font-sans: "Albert Sans", sans-serif;\n' in css
        assert "  --radius: 0.25rem;\n" in css
        assert "  --spacing-xs: 0.25rem;\n" in css
        assert "  --spacing-2xl: 4rem;\n" in css
        for semantic in rules.css.semantic_aliases:
            assert f"  --{semantic}: " in css

    def test_project_sample_references_resolved(self, project_root: Path, tmp_path: Path) -> None:
        """No ``{ref}`` string survives into the generated theme module."""
        from design_tokens.rules.loader import load_rules

        rules = load_rules(project_root / "rules.yaml")
        result = build(rules, source=project_root / "tokens.json", out_dir=tmp_path)
        assert result.theme_path is not None
        module = result.theme_path.read_text(encoding="utf-8")
        assert '"{' not in module
        assert '"border-error": "#e90932"' in module
        assert '"space-none": "0"' in module


class TestCli:
    def test_build_success(self, tmp_path: Path, w3c_document: dict[str, Any]) -> None:
        source = write_source(tmp_path, w3c_document)
        out_dir = tmp_path / "out"
        code = cli.main(["build", "--source", str(source), "--out-dir", str(out_dir)])
        assert code == 0
        assert (out_dir / "tokens.ts").is_file()
        assert (out_dir / "variables.css").is_file()

    def test_check_flag(self, tmp_path: Path, w3c_document: dict[str, Any], capsys) -> None:
        source = write_source(tmp_path, w3c_document)
        out_dir = tmp_path / "o"
        code = cli.main(["build", "--source", str(source), "--check", "--out-dir", str(out_dir)])
        assert code == 0
        assert "10 valid tokens." in capsys.readouterr().out
        assert not out_dir.exists()

    def test_validation_error_exit_code(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        source = write_source(tmp_path, {"notTokens": {}})
        code = cli.main(["build", "--source", str(source), "--out-dir", str(tmp_path / "o")])
        assert code == 1
        assert 'must have a "tokens" property' in caplog.text

    def test_missing_config_exit_code(self, tmp_path: Path) -> None:
        code = cli.main(["build", "--config", str(tmp_path / "missing.yaml")])
        assert code == 1

    def test_config_file(self, tmp_path: Path, w3c_document: dict[str, Any]) -> None:
        source = write_source(tmp_path, w3c_document)
        out_dir = tmp_path / "generated"
        config = write_rules(
            tmp_path,
            f"pipeline:\n  source: {source}\n  out_dir: {out_dir}\n  css_filename: theme.css\n",
        )
        assert cli.main(["build", "--config", str(config)]) == 0
        assert (out_dir / "theme.css").is_file()

    def test_requires_command(self) -> None:
        with pytest.raises(SystemExit):
            cli.main([])
