"""Tests for wren.cli — ``wren compile`` and ``wren render``."""

from pathlib import Path

import pytest

from wren.cli import main


class TestMain:
    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "compile" in capsys.readouterr().out


class TestCompileCommand:
    def test_all_views_compile(self, view_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["compile", str(view_dir)])
        out = capsys.readouterr().out
        assert "ok    home/index.html" in out
        assert "layouts/_base.html" not in out
        assert "4 compiled, 0 failed" in out

    def test_failure_exits_one(
        self, view_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        (view_dir / "broken.html").write_text('{% extends "missing.html" %}')
        with pytest.raises(SystemExit) as exc_info:
            main(["compile", str(view_dir)])
        assert exc_info.value.code == 1
        out = capsys.readouterr().out
        assert "FAIL  broken.html" in out
        assert "4 compiled, 1 failed" in out

    def test_missing_directory(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["compile", str(tmp_path / "absent")])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_custom_extension(self, view_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (view_dir / "extra.kida").write_text("kida view")
        main(["compile", str(view_dir), "--ext", ".kida"])
        assert "1 compiled, 0 failed" in capsys.readouterr().out


class TestRenderCommand:
    def test_full_render(self, view_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["render", str(view_dir), "home/index.html", "--data", '{"title": "CLI"}'])
        out = capsys.readouterr().out
        assert "<title>Site</title>" in out
        assert "<h1>CLI</h1>" in out

    def test_partial_render(self, view_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["render", str(view_dir), "home/index.html", "--partial", "--data", '{"title": "P"}'])
        assert capsys.readouterr().out == "<h1>P</h1>"

    def test_unknown_view_exits_one(
        self, view_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["render", str(view_dir), "missing.html"])
        assert exc_info.value.code == 1
        assert "did not render" in capsys.readouterr().err

    def test_execution_failure_exits_one(
        self, view_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["render", str(view_dir), "plain.html"])
        assert exc_info.value.code == 1
        assert "status 404" in capsys.readouterr().err

    @pytest.mark.parametrize("data", ["not json", "[1, 2]"])
    def test_bad_data(
        self, view_dir: Path, data: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["render", str(view_dir), "plain.html", "--data", data])
        assert exc_info.value.code == 1
        assert "--data" in capsys.readouterr().err
