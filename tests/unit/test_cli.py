"""Unit tests for CLI module."""

from pathlib import Path
from unittest.mock import patch

import pytest

from completion_grader.cli import main, parse_args, validate_targets
from completion_grader.scoring import DEFAULT_COMPLETION_CRITERION
from tests.helpers.temp_files import temp_source_file


def test_parse_args_basic() -> None:
    """Test basic argument parsing."""
    with patch("sys.argv", ["completion-grader", "app.js"]):
        args = parse_args()
        assert args.targets == [Path("app.js")]
        assert args.rubric is None
        assert args.reviews is None
        assert args.completion_criterion == DEFAULT_COMPLETION_CRITERION
        assert args.workers is None
        assert args.json is False
        assert args.stubs_only is False


def test_parse_args_multiple_targets() -> None:
    """Several files and directories can be analyzed together."""
    args = parse_args(["src", "lib/util.js"])
    assert args.targets == [Path("src"), Path("lib/util.js")]


def test_parse_args_with_rubric_options() -> None:
    """Test argument parsing with rubric and review files."""
    args = parse_args(
        ["app.js", "--rubric", "rubric.json", "--reviews", "reviews.json", "--completion-criterion", "Impl"]
    )
    assert args.rubric == Path("rubric.json")
    assert args.reviews == Path("reviews.json")
    assert args.completion_criterion == "Impl"


def test_parse_args_with_debug_and_workers() -> None:
    """Test argument parsing with debug and worker options."""
    args = parse_args(["app.js", "--debug", "--workers", "4", "--json"])
    assert args.debug is True
    assert args.workers == 4
    assert args.json is True


def test_parse_args_requires_target() -> None:
    """At least one target is required."""
    with pytest.raises(SystemExit):
        parse_args([])


def test_validate_targets_missing_file() -> None:
    """Missing targets are rejected."""
    assert validate_targets([Path("/nonexistent/app.js")]) == "Error: /nonexistent/app.js does not exist"


def test_validate_targets_wrong_extension() -> None:
    """Files that are not JavaScript are rejected."""
    with temp_source_file("print('hi')\n", suffix=".py") as path:
        assert validate_targets([path]) == f"Error: {path} is not a JavaScript file"


def test_validate_targets_accepts_files_and_directories(tmp_path: Path) -> None:
    """JavaScript files and directories are valid targets."""
    source = tmp_path / "component.jsx"
    source.write_text("const C = () => <div />;\n")
    assert validate_targets([tmp_path, source]) is None


def test_main_rejects_missing_target(capsys: pytest.CaptureFixture[str]) -> None:
    """A missing target exits with status 1."""
    with pytest.raises(SystemExit) as exc_info:
        main(["/nonexistent/app.js"])
    assert exc_info.value.code == 1
    assert "does not exist" in capsys.readouterr().out


def test_main_rejects_reviews_without_rubric(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Review scores are meaningless without a rubric."""
    (tmp_path / "a.js").write_text("function a() {}\n")
    with pytest.raises(SystemExit) as exc_info:
        main([str(tmp_path), "--reviews", str(tmp_path / "reviews.json")])
    assert exc_info.value.code == 1
    assert "--reviews requires --rubric" in capsys.readouterr().out


def test_main_rejects_invalid_worker_count(tmp_path: Path) -> None:
    """The worker count must be positive."""
    with pytest.raises(SystemExit) as exc_info:
        main([str(tmp_path), "--workers", "0"])
    assert exc_info.value.code == 1


def test_main_reports_invalid_rubric(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """A malformed rubric file exits with status 1."""
    (tmp_path / "a.js").write_text("function a() {}\n")
    rubric = tmp_path / "rubric.json"
    rubric.write_text('{"criterion": "not a list"}')

    with pytest.raises(SystemExit) as exc_info:
        main([str(tmp_path), "--rubric", str(rubric)])
    assert exc_info.value.code == 1
    assert "invalid rubric" in capsys.readouterr().out


def test_parse_args_with_stubs_only() -> None:
    """The stubs-only flag narrows the results table."""
    assert parse_args(["app.js", "--stubs-only"]).stubs_only is True
