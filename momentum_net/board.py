"""Headless pattern board driving the network the way the demo scene does.

The board keeps a grid of binary input cells, expected-output cells and
calculated-output cells. Toggling any input or expected value rebuilds a fresh
network, retrains it on the current rows and refreshes the calculated cells.
Values are read as 0 or 1 through an ``epsilon`` tolerance because the ``tanh``
outputs never reach those values exactly.
"""
from __future__ import annotations

from dataclasses import dataclass
import enum
import logging
from typing import Iterator, Sequence

import numpy as np

from .config import BoardConfig
from .errors import DimensionMismatch
from .network import NeuralNetwork, TrainingHistory
from .patterns import Pattern

logger = logging.getLogger(__name__)

_DEFAULT_INPUT_ROWS = (
    (0.0, 0.0, 1.0, 1.0),
    (0.0, 1.0, 0.0, 0.0),
    (1.0, 0.0, 1.0, 0.0),
    (1.0, 1.0, 0.0, 1.0),
)
_DEFAULT_OUTPUT_ROWS = (
    (0.0, 0.0),
    (1.0, 0.0),
    (1.0, 1.0),
    (0.0, 1.0),
)


class CellKind(enum.Enum):
    INPUT = "input"
    EXPECTED_OUTPUT = "expected"
    CALCULATED_OUTPUT = "calculated"


class CellColor(enum.Enum):
    WHITE = "white"
    BLACK = "black"
    RED = "red"


@dataclass(frozen=True, slots=True)
class Cell:
    kind: CellKind
    row: int
    col: int
    value: float
    color: CellColor


def default_input_rows() -> list[list[float]]:
    return [list(row) for row in _DEFAULT_INPUT_ROWS]


def default_output_rows() -> list[list[float]]:
    return [list(row) for row in _DEFAULT_OUTPUT_ROWS]


def resize_rows(rows: Sequence[Sequence[float]], width: int) -> list[list[float]]:
    """Truncate each row to ``width`` values or pad it with zeros."""

    return [[float(row[i]) if i < len(row) else 0.0 for i in range(width)] for row in rows]


def toggle_value(value: float) -> float:
    return abs(1.0 - value)


def cell_color(value: float, epsilon: float) -> CellColor:
    """White when ``value`` reads as 0, black when it reads as 1, red otherwise."""

    if abs(value) <= epsilon:
        return CellColor.WHITE
    if abs(value - 1.0) <= epsilon:
        return CellColor.BLACK
    return CellColor.RED


class PatternBoard:
    """Grid of patterns with a network retrained from scratch on every change."""

    def __init__(
        self,
        config: BoardConfig | None = None,
        *,
        input_rows: Sequence[Sequence[float]] | None = None,
        output_rows: Sequence[Sequence[float]] | None = None,
    ) -> None:
        self.config = config or BoardConfig()
        inputs = default_input_rows() if input_rows is None else input_rows
        outputs = default_output_rows() if output_rows is None else output_rows
        if len(inputs) != len(outputs):
            raise DimensionMismatch(f"got {len(inputs)} input rows but {len(outputs)} output rows")
        self.input_rows = resize_rows(inputs, self.config.input_size)
        self.expected_rows = resize_rows(outputs, self.config.output_size)
        self.calculated_rows = [[0.0] * self.config.output_size for _ in self.input_rows]
        self.history: TrainingHistory | None = None

    @property
    def num_rows(self) -> int:
        return len(self.input_rows)

    def patterns(self) -> list[Pattern]:
        return [Pattern(list(inputs), list(targets)) for inputs, targets in zip(self.input_rows, self.expected_rows)]

    def evaluate(self, *, progress: bool = False) -> list[list[float]]:
        """Train a brand-new network on the current rows and store its outputs."""

        network = NeuralNetwork(self.config.network_config())
        patterns = self.patterns()
        self.history = network.train(patterns, progress=progress)
        outputs = network.infer(patterns)
        self.calculated_rows = [[float(value) for value in row] for row in outputs]
        logger.debug("Board retrained, final epoch error %.6f", self.history.final_error)
        return [row.copy() for row in self.calculated_rows]

    def _check_cell(self, what: str, row: int, col: int, width: int) -> None:
        if not 0 <= row < self.num_rows or not 0 <= col < width:
            raise DimensionMismatch(
                f"{what} cell ({row}, {col}) is outside the {self.num_rows}x{width} grid"
            )

    def toggle_input(self, row: int, col: int, *, progress: bool = False) -> list[list[float]]:
        self._check_cell("input", row, col, self.config.input_size)
        self.input_rows[row][col] = toggle_value(self.input_rows[row][col])
        logger.info("Toggled input (%d, %d) to %g", row, col, self.input_rows[row][col])
        return self.evaluate(progress=progress)

    def toggle_expected(self, row: int, col: int, *, progress: bool = False) -> list[list[float]]:
        self._check_cell("expected output", row, col, self.config.output_size)
        self.expected_rows[row][col] = toggle_value(self.expected_rows[row][col])
        logger.info("Toggled expected output (%d, %d) to %g", row, col, self.expected_rows[row][col])
        return self.evaluate(progress=progress)

    def cells(self) -> Iterator[Cell]:
        epsilon = self.config.epsilon
        grids = (
            (CellKind.INPUT, self.input_rows),
            (CellKind.EXPECTED_OUTPUT, self.expected_rows),
            (CellKind.CALCULATED_OUTPUT, self.calculated_rows),
        )
        for kind, rows in grids:
            for r, row in enumerate(rows):
                for c, value in enumerate(row):
                    yield Cell(kind, r, c, value, cell_color(value, epsilon))

    def matches(self) -> list[bool]:
        """Per row, whether every calculated output reads as its expected value."""

        epsilon = self.config.epsilon
        return [
            all(cell_color(got, epsilon) == cell_color(want, epsilon) for got, want in zip(calculated, expected))
            for calculated, expected in zip(self.calculated_rows, self.expected_rows)
        ]

    def color_grid(self) -> np.ndarray:
        """Colour names laid out as ``inputs | expected | calculated`` per row."""

        epsilon = self.config.epsilon
        rows = []
        for inputs, expected, calculated in zip(self.input_rows, self.expected_rows, self.calculated_rows):
            rows.append([cell_color(value, epsilon).value for value in (*inputs, *expected, *calculated)])
        return np.array(rows, dtype=object)

    def render(self) -> str:
        header = "row | inputs | expected | calculated | ok"
        lines = [header, "-" * len(header)]
        for index, ok in enumerate(self.matches()):
            inputs = " ".join(f"{value:g}" for value in self.input_rows[index])
            expected = " ".join(f"{value:g}" for value in self.expected_rows[index])
            calculated = " ".join(f"{value:+.3f}" for value in self.calculated_rows[index])
            lines.append(f"{index:>3} | {inputs} | {expected} | {calculated} | {'yes' if ok else 'no'}")
        return "\n".join(lines)


__all__ = [
    "Cell",
    "CellColor",
    "CellKind",
    "PatternBoard",
    "cell_color",
    "default_input_rows",
    "default_output_rows",
    "resize_rows",
    "toggle_value",
]
