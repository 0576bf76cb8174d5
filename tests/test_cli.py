"""Tests for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import orjson
from typer.testing import CliRunner

from imgcheck.cli.app import app

runner = CliRunner()


class TestCLI:
    def test_help(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "check" in result.output
        assert "audit" in result.output

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "imgcheck" in result.output


class TestCheckCommand:
    def test_pass(self, rgb_image: str) -> None:
        result = runner.invoke(app, ["check", rgb_image])
        assert result.exit_code == 0
        assert "PASS" in result.output

    def test_reject_cmyk(self, cmyk_image: str) -> None:
        result = runner.invoke(app, ["check", cmyk_image])
        assert result.exit_code == 2
        assert "not in RGB color model" in result.output

    def test_dpi_threshold_option(self, high_dpi_image: str) -> None:
        assert runner.invoke(app, ["check", high_dpi_image]).exit_code == 2
        result = runner.invoke(app, ["check", high_dpi_image, "--dpi-threshold", "150"])
        assert result.exit_code == 0

    def test_policy_file(self, high_dpi_image: str, tmp_path: Path) -> None:
        policy = tmp_path / "policy.yml"
        policy.write_text("dpi_threshold: 200\n")
        result = runner.invoke(app, ["check", high_dpi_image, "-p", str(policy)])
        assert result.exit_code == 0

    def test_invalid_policy(self, rgb_image: str, tmp_path: Path) -> None:
        policy = tmp_path / "policy.yml"
        policy.write_text("dpi_threshold: -3\n")
        result = runner.invoke(app, ["check", rgb_image, "-p", str(policy)])
        assert result.exit_code == 1

    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["check", str(tmp_path / "nope.jpg")])
        assert result.exit_code == 1
        assert "MISSING" in result.output

    def test_json_output(self, rgb_image: str, high_dpi_image: str, tmp_path: Path) -> None:
        out = tmp_path / "result.json"
        result = runner.invoke(app, ["check", rgb_image, high_dpi_image, "-o", str(out)])
        assert result.exit_code == 2
        data = orjson.loads(out.read_bytes())
        assert [d["passed"] for d in data] == [True, False]
        assert data[1]["failure_kind"] == "dpi_too_high"


class TestAuditCommand:
    def _library(self, make_image: Any, tmp_path: Path) -> Path:
        library = tmp_path / "library"
        make_image("ok.jpg", dpi=(72, 72), directory=library)
        make_image("print.jpg", mode="CMYK", dpi=(300, 300), directory=library)
        return library

    def test_directory_audit(self, make_image: Any, tmp_path: Path) -> None:
        library = self._library(make_image, tmp_path)
        out = tmp_path / "report.json"
        result = runner.invoke(
            app, ["audit", str(library), "--bulk-size", "1", "--no-progress", "-o", str(out)]
        )
        assert result.exit_code == 2
        assert "Checking 2 parent attachments in batches of 1..." in result.output
        assert "Checked 2 attachments. Found 2 errors." in result.output
        report = orjson.loads(out.read_bytes())
        assert report["checked"] == 2
        assert report["errors"] == 2
        assert report["pages"] == 2

    def test_clean_audit(self, make_image: Any, tmp_path: Path) -> None:
        library = tmp_path / "library"
        make_image("ok.jpg", dpi=(72, 72), directory=library)
        result = runner.invoke(app, ["audit", str(library), "--no-progress"])
        assert result.exit_code == 0
        assert "passed checks" in result.output

    def test_page_size_clamped(self, make_image: Any, tmp_path: Path) -> None:
        library = tmp_path / "library"
        make_image("ok.jpg", dpi=(72, 72), directory=library)
        result = runner.invoke(app, ["audit", str(library), "--page-size", "0", "--no-progress"])
        assert result.exit_code == 0
        assert "in batches of 1..." in result.output

    def test_manifest_audit(self, make_image: Any, tmp_path: Path) -> None:
        uploads = tmp_path / "uploads"
        make_image("ok.jpg", dpi=(72, 72), directory=uploads / "2024")
        export = tmp_path / "attachments.jsonl"
        export.write_bytes(
            orjson.dumps({"id": 1, "title": "Ok", "file": "2024/ok.jpg"})
            + b"\n"
            + orjson.dumps({"id": 2, "title": "Gone", "file": "2024/gone.jpg"})
            + b"\n"
        )
        result = runner.invoke(
            app, ["audit", str(export), "--base-dir", str(uploads), "--no-progress"]
        )
        assert result.exit_code == 0
        assert "Attachment 2 (Gone) file missing" in result.output
        assert "Missing files: 1" in result.output

    def test_invalid_source(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["audit", str(tmp_path / "nonexistent")])
        assert result.exit_code == 1
