import pytest

pytest.importorskip("matplotlib")

from momentum_net import BoardConfig, PatternBoard, TrainingHistory
from momentum_net.visualization import plot_board, plot_error_history


def test_plot_error_history_saves_figure(tmp_path) -> None:
    history = TrainingHistory(epoch_errors=[1.0, 0.5, 0.25, 0.125])
    path = tmp_path / "errors.png"
    fig = plot_error_history(history, path)
    assert path.exists()
    assert fig.axes[0].get_xlabel() == "Epoch"


def test_plot_board_draws_every_cell(tmp_path) -> None:
    board = PatternBoard(BoardConfig(hidden_size=3, iterations=5, seed=0))
    board.evaluate()
    path = tmp_path / "board.png"
    fig = plot_board(board, path)
    assert path.exists()
    image = fig.axes[0].images[0]
    assert image.get_array().shape == (4, 8)
