"""One-hidden-layer tanh network trained by online backpropagation with momentum."""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Callable, Iterable, Sequence

import numpy as np
from tqdm.auto import tqdm

from .config import NetworkConfig, check_hyperparameters, require_positive_int
from .errors import DimensionMismatch, MissingForwardPass
from .patterns import Pattern, Vector, as_vector, prepare_patterns

logger = logging.getLogger(__name__)

WEIGHT_INIT_RANGE = 2.0

EpochCallback = Callable[[int, float], None]


def tanh(x: np.ndarray) -> np.ndarray:
    return np.tanh(x)


def tanh_derivative(y: np.ndarray) -> np.ndarray:
    """Derivative of ``tanh`` expressed through its output ``y = tanh(x)``."""

    return 1.0 - y * y


def _frozen(array: np.ndarray) -> np.ndarray:
    copy = array.copy()
    copy.setflags(write=False)
    return copy


@dataclass(frozen=True, eq=False)
class ForwardPass:
    """Read-only snapshot of the activations produced by one forward pass.

    ``inputs`` includes the trailing bias activation, so its length is
    ``input_size + 1``.
    """

    inputs: np.ndarray
    hidden: np.ndarray
    outputs: np.ndarray


@dataclass
class TrainingHistory:
    """Total error of every epoch run by :meth:`NeuralNetwork.train`."""

    epoch_errors: list[float] = field(default_factory=list)

    @property
    def final_error(self) -> float | None:
        return self.epoch_errors[-1] if self.epoch_errors else None


class NeuralNetwork:
    """A fully-connected ``input -> hidden -> output`` network.

    * Both layers use ``tanh``, so outputs lie in ``(-1, 1)``. Targets of ``0``
      and ``1`` are fine but are only ever approached, never reached.
    * A constant ``1.0`` bias unit is appended to the input layer.
    * Weights start uniform in ``[-2, 2]`` from the engine's own generator and
      are only changed by :meth:`backpropagate`.
    * Each update adds ``momentum`` times the previous step's raw gradient
      term. The buffers start at zero.

    An instance keeps mutable scratch activations and is not safe to share
    between threads without external locking.
    """

    def __init__(self, config: NetworkConfig, *, rng: np.random.Generator | None = None):
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng(config.seed)

        self._input_activations = np.zeros(config.input_size + 1)
        self._hidden_activations = np.zeros(config.hidden_size)
        self._output_activations = np.zeros(config.output_size)
        self._pending_pass = False

        self._weights_input_hidden = self._initialise_weights(config.input_size + 1, config.hidden_size)
        self._weights_hidden_output = self._initialise_weights(config.hidden_size, config.output_size)
        self._change_input_hidden = np.zeros_like(self._weights_input_hidden)
        self._change_hidden_output = np.zeros_like(self._weights_hidden_output)

        logger.debug(
            "Created network %d-%d-%d (seed=%s)",
            config.input_size,
            config.hidden_size,
            config.output_size,
            config.seed,
        )

    @classmethod
    def from_sizes(
        cls,
        input_size: int,
        hidden_size: int,
        output_size: int,
        iterations: int = 1000,
        *,
        seed: int | None = None,
        **overrides,
    ) -> NeuralNetwork:
        config = NetworkConfig(
            input_size=input_size,
            hidden_size=hidden_size,
            output_size=output_size,
            iterations=iterations,
            seed=seed,
            **overrides,
        )
        return cls(config)

    def _initialise_weights(self, rows: int, cols: int) -> np.ndarray:
        return self.rng.uniform(-WEIGHT_INIT_RANGE, WEIGHT_INIT_RANGE, size=(rows, cols))

    @property
    def input_size(self) -> int:
        return self.config.input_size

    @property
    def hidden_size(self) -> int:
        return self.config.hidden_size

    @property
    def output_size(self) -> int:
        return self.config.output_size

    def _forward_array(self, inputs: np.ndarray) -> None:
        self._input_activations[:-1] = inputs
        self._input_activations[-1] = 1.0
        self._hidden_activations[:] = tanh(self._input_activations @ self._weights_input_hidden)
        self._output_activations[:] = tanh(self._hidden_activations @ self._weights_hidden_output)
        self._pending_pass = True

    def forward(self, inputs: Vector) -> ForwardPass:
        """Run the network on ``inputs`` and return a snapshot of every layer."""

        self._forward_array(as_vector(inputs, self.input_size, "inputs"))
        return self._snapshot()

    def activate(self, inputs: Vector) -> np.ndarray:
        """Run the network on ``inputs`` and return a copy of the output vector."""

        self._forward_array(as_vector(inputs, self.input_size, "inputs"))
        return self._output_activations.copy()

    def _snapshot(self) -> ForwardPass:
        return ForwardPass(
            inputs=_frozen(self._input_activations),
            hidden=_frozen(self._hidden_activations),
            outputs=_frozen(self._output_activations),
        )

    def _check_forward_pass(self, forward_pass: ForwardPass) -> None:
        expected = {
            "inputs": self.input_size + 1,
            "hidden": self.hidden_size,
            "outputs": self.output_size,
        }
        for name, size in expected.items():
            shape = np.shape(getattr(forward_pass, name))
            if shape != (size,):
                raise DimensionMismatch(f"forward pass {name} must have shape ({size},), got {shape}")

    def backpropagate(
        self,
        targets: Vector,
        learning_rate: float = 0.5,
        momentum: float = 0.1,
        forward_pass: ForwardPass | None = None,
    ) -> float:
        """Update every weight towards ``targets`` and return the pattern error.

        The activations come from ``forward_pass`` when given, otherwise from
        the most recent :meth:`forward` or :meth:`activate` call. Those
        pending activations are consumed, so a second call without another
        forward pass raises :class:`MissingForwardPass`. An explicit
        ``forward_pass`` leaves any pending activations in place.

        The returned error is ``sum(0.5 * (target - output) ** 2)`` over the
        output units, measured before the update.
        """

        target = as_vector(targets, self.output_size, "targets")
        check_hyperparameters(learning_rate, momentum)
        if forward_pass is not None:
            self._check_forward_pass(forward_pass)
            input_act = np.asarray(forward_pass.inputs, dtype=np.float64)
            hidden = np.asarray(forward_pass.hidden, dtype=np.float64)
            output = np.asarray(forward_pass.outputs, dtype=np.float64)
        elif self._pending_pass:
            input_act = self._input_activations
            hidden = self._hidden_activations
            output = self._output_activations
            self._pending_pass = False
        else:
            raise MissingForwardPass("backpropagate requires a forward pass on the same pattern first")

        error = target - output
        output_deltas = tanh_derivative(output) * error
        # Hidden deltas must see the output weights from before this update.
        hidden_deltas = tanh_derivative(hidden) * (self._weights_hidden_output @ output_deltas)

        change = np.outer(hidden, output_deltas)
        self._weights_hidden_output += learning_rate * change + momentum * self._change_hidden_output
        self._change_hidden_output = change

        change = np.outer(input_act, hidden_deltas)
        self._weights_input_hidden += learning_rate * change + momentum * self._change_input_hidden
        self._change_input_hidden = change

        return float(np.sum(0.5 * error * error))

    def train(
        self,
        patterns: Iterable[Pattern | tuple],
        learning_rate: float | None = None,
        momentum: float | None = None,
        iterations: int | None = None,
        *,
        on_epoch: EpochCallback | None = None,
        progress: bool = False,
    ) -> TrainingHistory:
        """Run ``iterations`` full epochs of online training over ``patterns``.

        Every pattern is checked before the first update. Training always runs
        the full number of epochs. Every ``config.log_every``-th epoch the
        epoch index and total error are logged and passed to ``on_epoch``.
        """

        learning_rate = self.config.learning_rate if learning_rate is None else learning_rate
        momentum = self.config.momentum if momentum is None else momentum
        iterations = self.config.iterations if iterations is None else iterations
        check_hyperparameters(learning_rate, momentum)
        require_positive_int("iterations", iterations)

        prepared = prepare_patterns(patterns, self.input_size, self.output_size, require_targets=True)
        history = TrainingHistory()
        log_every = self.config.log_every

        epochs = tqdm(range(iterations), desc="epochs", disable=not progress, leave=False)
        for epoch in epochs:
            total_error = 0.0
            for inputs, targets in prepared:
                self._forward_array(inputs)
                total_error += self.backpropagate(targets, learning_rate, momentum)
            history.epoch_errors.append(total_error)

            if log_every and epoch % log_every == 0:
                logger.info("Error at epoch %d: %.6f", epoch, total_error)
                epochs.set_postfix(error=f"{total_error:.6f}")
                if on_epoch is not None:
                    on_epoch(epoch, total_error)

        return history

    def infer(self, patterns: Iterable[Pattern | tuple | Vector]) -> list[np.ndarray]:
        """Return the output vector for each pattern's inputs, in order.

        Targets are ignored apart from being reported next to the output.
        Weights are never modified.
        """

        prepared = prepare_patterns(patterns, self.input_size, self.output_size, require_targets=False)
        results: list[np.ndarray] = []
        for inputs, targets in prepared:
            self._forward_array(inputs)
            outputs = self._output_activations.copy()
            logger.info(
                "Input: %s, expected: %s -> output: %s",
                _format(inputs),
                "-" if targets is None else _format(targets),
                _format(outputs),
            )
            results.append(outputs)
        return results

    def weights(self) -> dict[str, np.ndarray]:
        return {
            "input_hidden": self._weights_input_hidden.copy(),
            "hidden_output": self._weights_hidden_output.copy(),
        }

    def momentum_buffers(self) -> dict[str, np.ndarray]:
        return {
            "input_hidden": self._change_input_hidden.copy(),
            "hidden_output": self._change_hidden_output.copy(),
        }


def _format(values: Sequence[float]) -> str:
    return ", ".join(f"{value:.4f}" for value in values)


__all__ = [
    "ForwardPass",
    "NeuralNetwork",
    "TrainingHistory",
    "tanh",
    "tanh_derivative",
]
