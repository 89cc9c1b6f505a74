"""
Tests for CLI commands — generate, validate, and global options.
"""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from releasegen import __version__
from releasegen.main import cli

from tests.factories import make_metadata


@pytest.fixture
def project(release_root: Path, write_metadata, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A release repository with two valid apps; cwd set to its root."""
    write_metadata("o1/r1/a", make_metadata(name="Foo", owner="o1", repo="r1", path="/a/"))
    write_metadata("o2/r2/b", make_metadata(name="Bar", owner="o2", repo="r2", path="/b/"))
    monkeypatch.chdir(release_root)
    return release_root


class TestCLIGlobal:
    """Tests for global CLI behavior."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "release files" in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_bad_config_exits_1(self, tmp_path: Path):
        config = tmp_path / "release.yml"
        config.write_text("- not\n- a mapping\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "generate"])
        assert result.exit_code == 1
        assert "Expected a YAML mapping" in result.output


class TestGenerateCommand:
    """Tests for the generate command."""

    def test_generate(self, project: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["generate"])

        assert result.exit_code == 0
        assert "Processed: 2, Skipped: 0" in result.output
        assert "category-tools.json" in result.output
        assert (project / "releases" / "releases.json").is_file()
        assert "Created releases directory" in result.output
        assert "generation complete" in result.output

    def test_generate_json(self, project: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["generate", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["processed"] == 2
        assert data["synthesis"]["category_files"] == ["category-tools.json"]
        assert data["synthesis"]["created_output_dir"] is True
        assert data["synthesis"]["ok"] is True

    def test_generate_with_paths(self, project: Path, tmp_path: Path):
        out = tmp_path / "custom-out"
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["generate", "--root", str(project / "repositories"), "--output", str(out)],
        )

        assert result.exit_code == 0
        assert (out / "category-tools.json").is_file()
        assert not (project / "releases").exists()

    def test_generate_uses_release_yml(self, project: Path):
        (project / "release.yml").write_text("releases_dir: site/data\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["generate"])

        assert result.exit_code == 0
        assert (project / "site" / "data" / "releases.json").is_file()

    def test_dry_run(self, project: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["generate", "--dry-run"])

        assert result.exit_code == 0
        assert "[dry-run]" in result.output
        assert "Would create releases directory" in result.output
        assert not (project / "releases").exists()

    def test_nothing_found_exits_0(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.chdir(tmp_path)
        runner = CliRunner()
        result = runner.invoke(cli, ["generate"])

        assert result.exit_code == 0
        assert "No metadata files found" in result.output
        assert not (tmp_path / "releases").exists()

    def test_skipped_descriptor_still_exits_0(self, project: Path, write_metadata):
        write_metadata("broken", "{ nope")
        runner = CliRunner()
        result = runner.invoke(cli, ["generate"])

        assert result.exit_code == 0
        assert "Processed: 2, Skipped: 1" in result.output

    def test_failed_write_reports_problems(self, project: Path, monkeypatch: pytest.MonkeyPatch):
        from releasegen.core.services import synthesis

        real_write = synthesis.write_json

        def flaky_write(data, path):
            if path.name == "releases.json":
                raise OSError("disk full")
            real_write(data, path)

        monkeypatch.setattr(synthesis, "write_json", flaky_write)
        runner = CliRunner()
        result = runner.invoke(cli, ["generate"])

        assert result.exit_code == 0
        assert "finished with problems" in result.output
        assert "write releases.json: disk full" in result.output
        assert "generation complete" not in result.output

    def test_unexpected_error_exits_1(self, project: Path, monkeypatch: pytest.MonkeyPatch):
        from releasegen.core.use_cases import generate as generate_mod

        def boom(*args, **kwargs):
            raise RuntimeError("kaboom")

        monkeypatch.setattr(generate_mod, "find_descriptor_files", boom)
        runner = CliRunner()
        result = runner.invoke(cli, ["generate"])

        assert result.exit_code == 1
        assert "kaboom" in result.output


class TestValidateCommand:
    """Tests for the validate command."""

    def test_valid(self, project: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["validate"])

        assert result.exit_code == 0
        assert "2/2 metadata files are valid" in result.output
        assert not (project / "releases").exists()

    def test_invalid_exits_1(self, project: Path, write_metadata):
        write_metadata("bad", make_metadata(owner=None))
        runner = CliRunner()
        result = runner.invoke(cli, ["validate"])

        assert result.exit_code == 1
        assert "missing or empty field 'owner'" in result.output

    def test_invalid_json_output(self, project: Path, write_metadata):
        write_metadata("bad", make_metadata(owner=None))
        runner = CliRunner()
        result = runner.invoke(cli, ["-q", "validate", "--json"])

        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["valid"] is False
        assert data["invalid"][0]["missing_field"] == "owner"

    def test_unlisted_category_warning(self, project: Path, write_metadata):
        write_metadata("secret", make_metadata(name="S", category="Secret"))
        runner = CliRunner()
        result = runner.invoke(cli, ["validate"])

        assert result.exit_code == 0
        assert "Secret" in result.output
