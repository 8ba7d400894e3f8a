"""Tests for the typer CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from grrr.cli.app import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    config_file = tmp_path / "settings" / "config.json"
    monkeypatch.setenv("GRRR_CONFIG_FILE", str(config_file))
    monkeypatch.delenv("GRRR_COMPILER", raising=False)
    return config_file


@pytest.mark.parametrize(
    "args",
    [
        [],
        ["bundle"],
        ["drop"],
        ["watch"],
        ["config"],
        ["config", "set"],
    ],
    ids=["root", "bundle", "drop", "watch", "config", "config-set"],
)
def test_short_help_flag(args: list[str]) -> None:
    result = runner.invoke(app, [*args, "-h"])
    assert result.exit_code == 0
    assert "Usage" in result.output


class TestBundleCommand:
    def test_bundle_and_compile(self, drop_tree: Path, fake_compiler: Path) -> None:
        result = runner.invoke(
            app, ["bundle", str(drop_tree), "--compiler", str(fake_compiler), "--no-notify"]
        )

        assert result.exit_code == 0, result.output
        assert "Generated" in result.output
        assert (drop_tree.parent / "custom.gresource.xml").exists()
        assert (fake_compiler.parent / "args.txt").read_text().strip() == "custom.gresource.xml"

    def test_name_and_prefix_options(self, drop_tree: Path) -> None:
        result = runner.invoke(
            app, ["bundle", str(drop_tree), "--name", "app.gresource", "--prefix", "/com/example", "--no-compile"]
        )

        assert result.exit_code == 0, result.output
        text = (drop_tree.parent / "app.gresource.xml").read_text(encoding="utf-8")
        assert '<gresource prefix="/com/example">' in text

    def test_uses_stored_settings(self, drop_tree: Path, _isolated_settings: Path) -> None:
        _isolated_settings.parent.mkdir(parents=True)
        _isolated_settings.write_text(json.dumps({"res_name": "stored.gresource"}))

        result = runner.invoke(app, ["bundle", str(drop_tree), "--no-compile"])

        assert result.exit_code == 0, result.output
        assert (drop_tree.parent / "stored.gresource.xml").exists()

    def test_missing_path_fails(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["bundle", str(tmp_path / "missing"), "--no-compile"])
        assert result.exit_code == 1

    def test_missing_compiler_fails(self, drop_tree: Path) -> None:
        result = runner.invoke(
            app, ["bundle", str(drop_tree), "--compiler", "grrr-no-such-compiler", "--no-notify"]
        )
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_failing_compiler_fails(self, drop_tree: Path, failing_compiler: Path) -> None:
        result = runner.invoke(
            app, ["bundle", str(drop_tree), "--compiler", str(failing_compiler), "--no-notify"]
        )
        assert result.exit_code == 1
        assert "status 3" in result.output


class TestDropCommand:
    def test_drop_uri_list(self, tmp_path: Path, fake_compiler: Path) -> None:
        x = tmp_path / "x"
        (x / "sub").mkdir(parents=True)
        (x / "a.png").write_bytes(b"\x89PNG\r\n\x1a\n")
        (x / "sub" / "b.txt").write_text("b", encoding="utf-8")
        payload = f"{(x / 'a.png').as_uri()}\n{(x / 'sub' / 'b.txt').as_uri()}\n"

        result = runner.invoke(
            app, ["drop", "--compiler", str(fake_compiler), "--no-notify"], input=payload
        )

        assert result.exit_code == 0, result.output
        text = (x / "custom.gresource.xml").read_text(encoding="utf-8")
        assert '\t\t<file preprocess="to-pixdata">a.png</file>\n\t\t<file>sub/b.txt</file>\n' in text

    def test_empty_drop_fails(self) -> None:
        result = runner.invoke(app, ["drop", "--no-compile"], input="\n")
        assert result.exit_code == 1

    def test_unsupported_uri_fails(self) -> None:
        result = runner.invoke(app, ["drop", "--no-compile"], input="https://example.com/a.png\n")
        assert result.exit_code == 1


class TestConfigCommand:
    def test_set_then_show(self, _isolated_settings: Path) -> None:
        result = runner.invoke(app, ["config", "set", "--name", "app.gresource"])
        assert result.exit_code == 0, result.output
        assert "Saved" in result.output
        assert json.loads(_isolated_settings.read_text())["res_name"] == "app.gresource"

        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "app.gresource" in result.output

    def test_set_unchanged(self) -> None:
        runner.invoke(app, ["config", "set", "--prefix", "/com/example"])
        result = runner.invoke(app, ["config", "set", "--prefix", "/com/example"])
        assert result.exit_code == 0
        assert "unchanged" in result.output

    def test_set_unwritable_location_fails(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        monkeypatch.setenv("GRRR_CONFIG_FILE", str(blocker / "settings" / "config.json"))

        result = runner.invoke(app, ["config", "set", "--name", "app.gresource"])

        assert result.exit_code == 1
        assert "Cannot save settings" in result.output
        assert not isinstance(result.exception, OSError)

    def test_path(self, _isolated_settings: Path) -> None:
        result = runner.invoke(app, ["config", "path"])
        assert result.exit_code == 0
        assert "config.json" in result.output


def test_watch_requires_directory(tmp_path: Path) -> None:
    f = tmp_path / "a.txt"
    f.write_text("x", encoding="utf-8")
    result = runner.invoke(app, ["watch", str(f)])
    assert result.exit_code == 1
