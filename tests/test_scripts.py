import os
import subprocess
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parent.parent


def _env_with_repo() -> dict[str, str]:
    env = os.environ.copy()
    env["PYTHONPATH"] = str(REPO_ROOT)
    env["MPLBACKEND"] = "Agg"
    env["LOG_LEVEL"] = "INFO"
    return env


def _run(*args: str, check: bool = True) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, "scripts/run_demo.py", *args],
        cwd=REPO_ROOT,
        env=_env_with_repo(),
        check=check,
        capture_output=True,
        text=True,
    )


def test_xor_workflow() -> None:
    result = _run("--dataset", "xor", "--hidden-size", "3", "--iterations", "150", "--seed", "1")
    lines = result.stdout.strip().splitlines()
    assert lines[0].startswith("Final epoch error:")
    assert len(lines) == 5
    assert "Error at epoch 100" in result.stderr


def test_board_workflow_with_toggles_and_plots(tmp_path) -> None:
    pytest.importorskip("matplotlib")
    error_plot = tmp_path / "errors.png"
    board_plot = tmp_path / "board.png"
    result = _run(
        "--iterations",
        "20",
        "--seed",
        "3",
        "--toggle-input",
        "0",
        "1",
        "--toggle-expected",
        "2",
        "0",
        "--plot-path",
        str(error_plot),
        "--board-plot-path",
        str(board_plot),
    )
    assert error_plot.exists()
    assert board_plot.exists()
    assert "  0 | 0 1 1 1 | 0 0 |" in result.stdout
    assert "  2 | 1 0 1 0 | 0 1 |" in result.stdout


def test_invalid_topology_exits_with_usage_error() -> None:
    result = _run("--hidden-size", "0", check=False)
    assert result.returncode == 2
    assert "hidden_size must be a positive integer" in result.stderr


def test_board_forwards_log_cadence_and_progress() -> None:
    result = _run("--iterations", "20", "--seed", "1", "--log-every", "1", "--progress")
    epoch_lines = [line for line in result.stderr.splitlines() if "Error at epoch" in line]
    assert len(epoch_lines) == 20


@pytest.mark.parametrize(
    "toggle",
    [
        ("--toggle-input", "9", "0"),
        ("--toggle-input", "0", "-1"),
        ("--toggle-expected", "0", "2"),
    ],
)
def test_out_of_range_toggle_exits_with_usage_error(toggle) -> None:
    result = _run("--iterations", "5", "--seed", "1", *toggle, check=False)
    assert result.returncode == 2
    assert "outside the 4x" in result.stderr
