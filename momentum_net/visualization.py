"""Plotting utilities for training error and the pattern board."""

from __future__ import annotations

from pathlib import Path

from matplotlib import colors
from matplotlib.figure import Figure

from .board import CellColor, PatternBoard
from .network import TrainingHistory

_BOARD_COLORS = {
    CellColor.WHITE.value: 0,
    CellColor.BLACK.value: 1,
    CellColor.RED.value: 2,
}


def plot_error_history(history: TrainingHistory, path: str | Path | None = None) -> Figure:
    """Plot the total error of every training epoch."""

    fig = Figure()
    ax = fig.add_subplot()
    ax.plot(history.epoch_errors)
    ax.set_xlabel("Epoch")
    ax.set_ylabel("Total error")
    ax.set_yscale("log")
    ax.set_title("Training Error")
    fig.tight_layout()
    if path is not None:
        fig.savefig(path)
    return fig


def plot_board(board: PatternBoard, path: str | Path | None = None) -> Figure:
    """Draw the board's cells as white (0), black (1) or red (undecided)."""

    grid = board.color_grid()
    codes = [[_BOARD_COLORS[name] for name in row] for row in grid]
    fig = Figure()
    ax = fig.add_subplot()
    cmap = colors.ListedColormap(["white", "black", "red"])
    ax.imshow(codes, cmap=cmap, vmin=0, vmax=2)
    split_inputs = board.config.input_size - 0.5
    split_expected = split_inputs + board.config.output_size
    for x in (split_inputs, split_expected):
        ax.axvline(x, color="gray", linewidth=2)
    ax.set_xticks([])
    ax.set_yticks(range(board.num_rows))
    ax.set_title("inputs | expected | calculated")
    fig.tight_layout()
    if path is not None:
        fig.savefig(path)
    return fig
