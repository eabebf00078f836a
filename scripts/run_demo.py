#!/usr/bin/env python3
"""Train the momentum network on the demo board or XOR and print its predictions."""
from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path

from momentum_net import BoardConfig, NetworkConfig, NetworkError, NeuralNetwork, PatternBoard, xor_patterns
from momentum_net.visualization import plot_board, plot_error_history


def configure_logging() -> None:
    log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_str, logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--dataset", choices=("board", "xor"), default="board")
    parser.add_argument("--input-size", type=int, default=4, help="board only; XOR always uses 2")
    parser.add_argument("--hidden-size", type=int, default=10)
    parser.add_argument("--output-size", type=int, default=2, help="board only; XOR always uses 1")
    parser.add_argument("--iterations", type=int, default=5000)
    parser.add_argument("--lr", type=float, default=0.5)
    parser.add_argument("--momentum", type=float, default=0.1)
    parser.add_argument("--log-every", type=int, default=100)
    parser.add_argument("--epsilon", type=float, default=0.1)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument(
        "--toggle-input",
        type=int,
        nargs=2,
        action="append",
        default=[],
        metavar=("ROW", "COL"),
    )
    parser.add_argument(
        "--toggle-expected",
        type=int,
        nargs=2,
        action="append",
        default=[],
        metavar=("ROW", "COL"),
    )
    parser.add_argument("--progress", action="store_true")
    parser.add_argument("--plot-path", type=Path, default=None)
    parser.add_argument("--board-plot-path", type=Path, default=None)
    args = parser.parse_args()
    args.parser = parser
    return args


def run_xor(args: argparse.Namespace) -> None:
    config = NetworkConfig(
        input_size=2,
        hidden_size=args.hidden_size,
        output_size=1,
        iterations=args.iterations,
        learning_rate=args.lr,
        momentum=args.momentum,
        log_every=args.log_every,
        seed=args.seed,
    )
    network = NeuralNetwork(config)
    patterns = xor_patterns()
    history = network.train(patterns, progress=args.progress)
    print(f"Final epoch error: {history.final_error:.6f}")
    for pattern, outputs in zip(patterns, network.infer(patterns)):
        print(f"{pattern.inputs} -> {outputs[0]:+.4f} (expected {pattern.targets[0]:g})")
    if args.plot_path:
        plot_error_history(history, args.plot_path)
        print(f"Saved error plot to {args.plot_path}")


def run_board(args: argparse.Namespace) -> None:
    config = BoardConfig(
        input_size=args.input_size,
        hidden_size=args.hidden_size,
        output_size=args.output_size,
        iterations=args.iterations,
        learning_rate=args.lr,
        momentum=args.momentum,
        log_every=args.log_every,
        epsilon=args.epsilon,
        seed=args.seed,
    )
    board = PatternBoard(config)
    board.evaluate(progress=args.progress)
    for row, col in args.toggle_input:
        board.toggle_input(row, col, progress=args.progress)
    for row, col in args.toggle_expected:
        board.toggle_expected(row, col, progress=args.progress)
    print(board.render())
    if args.plot_path and board.history is not None:
        plot_error_history(board.history, args.plot_path)
        print(f"Saved error plot to {args.plot_path}")
    if args.board_plot_path:
        plot_board(board, args.board_plot_path)
        print(f"Saved board plot to {args.board_plot_path}")


def main() -> None:
    args = parse_args()
    configure_logging()
    try:
        if args.dataset == "xor":
            run_xor(args)
        else:
            run_board(args)
    except NetworkError as exc:
        args.parser.error(str(exc))


if __name__ == "__main__":
    main()
