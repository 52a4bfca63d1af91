"""Tests for CLI argument parsing and the generate command."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from stcgen import __version__
from stcgen.cli import _build_parser, main
from stcgen.generation.schemas import GenerationResult

ORCHESTRATOR = "stcgen.generation.orchestrator.generate_structure_yaml_recursively"


def _result(root: Path) -> GenerationResult:
    return GenerationResult(
        success=True,
        message="stc.yaml generation complete (2 manifests)",
        path=str(root / "stc.yaml"),
        total_input_tokens=200,
        total_output_tokens=80,
        total_cost=0.0125,
        manifests=(str(root / "stc.yaml"), str(root / "src" / "stc.yaml")),
    )


def _run(argv: list[str]) -> None:
    with patch("sys.argv", ["stcgen", *argv]):
        main()


class TestArgParser:
    def test_version_flag(self) -> None:
        args = _build_parser().parse_args(["--version"])
        assert args.version is True

    def test_generate_defaults(self) -> None:
        args = _build_parser().parse_args(["generate", "/tmp/project"])
        assert args.command == "generate"
        assert args.root_path == "/tmp/project"
        assert args.model is None
        assert args.manifest_name is None
        assert args.verbose is False

    def test_generate_with_options(self) -> None:
        args = _build_parser().parse_args(
            [
                "generate",
                ".",
                "-m",
                "openai/gpt-4o",
                "--manifest-name",
                "layout.yaml",
                "-v",
            ]
        )
        assert args.model == "openai/gpt-4o"
        assert args.manifest_name == "layout.yaml"
        assert args.verbose is True

    def test_generate_requires_root(self) -> None:
        with pytest.raises(SystemExit):
            _build_parser().parse_args(["generate"])

    def test_no_command(self) -> None:
        assert _build_parser().parse_args([]).command is None


class TestMain:
    def test_prints_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        _run(["--version"])
        assert capsys.readouterr().out.strip() == f"stcgen {__version__}"

    def test_no_command_prints_help(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        _run([])
        assert "usage: stcgen" in capsys.readouterr().out

    def test_missing_directory_exits(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            _run(["generate", str(tmp_path / "absent")])
        assert exc_info.value.code == 1
        assert "is not a directory" in capsys.readouterr().err

    def test_invalid_manifest_name_exits(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            _run(["generate", str(tmp_path), "--manifest-name", "a/b.yaml"])
        assert exc_info.value.code == 1
        assert "invalid configuration" in capsys.readouterr().err

    def test_generate_prints_summary(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        root = tmp_path.resolve()
        mock = AsyncMock(return_value=_result(root))
        with patch(ORCHESTRATOR, new=mock):
            _run(["generate", str(tmp_path), "--model", "openai/gpt-4o"])

        called_root, settings = mock.call_args.args
        assert called_root == root
        assert settings.litellm_model == "openai/gpt-4o"

        out = capsys.readouterr().out
        assert f"wrote {root / 'src' / 'stc.yaml'}" in out
        assert "stc.yaml generation complete (2 manifests)" in out
        assert "Tokens: 200 in / 80 out, cost $0.0125" in out

    def test_generation_failure_exits(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        mock = AsyncMock(side_effect=RuntimeError("provider down"))
        with patch(ORCHESTRATOR, new=mock):
            with pytest.raises(SystemExit) as exc_info:
                _run(["generate", str(tmp_path)])
        assert exc_info.value.code == 1
        assert "generation failed: provider down" in capsys.readouterr().err
