"""Configuration dataclasses for the network engine and the pattern board."""
from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral

from .errors import InvalidConfiguration


def require_positive_int(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, Integral) or value <= 0:
        raise InvalidConfiguration(f"{name} must be a positive integer, got {value!r}")


def require_non_negative_int(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, Integral) or value < 0:
        raise InvalidConfiguration(f"{name} must be a non-negative integer, got {value!r}")


def check_hyperparameters(learning_rate: float, momentum: float) -> None:
    """Reject learning rates and momentum terms the update rule cannot use."""

    if not learning_rate > 0.0:
        raise InvalidConfiguration(f"learning_rate must be positive, got {learning_rate!r}")
    if not momentum >= 0.0:
        raise InvalidConfiguration(f"momentum must be non-negative, got {momentum!r}")


@dataclass(slots=True)
class NetworkConfig:
    """Topology and training defaults for :class:`~momentum_net.NeuralNetwork`.

    Parameters
    ----------
    input_size:
        Number of input features, excluding the bias unit that the engine
        appends on its own.
    hidden_size:
        Number of units in the single hidden layer.
    output_size:
        Number of output units. Outputs lie in ``(-1, 1)`` because both layers
        use ``tanh``.
    iterations:
        Number of epochs run by :meth:`~momentum_net.NeuralNetwork.train`
        unless the call overrides it. Training never stops early.
    learning_rate:
        Scale applied to the raw gradient term of each weight update.
    momentum:
        Scale applied to the previous update's raw gradient term. ``0.0``
        disables momentum.
    log_every:
        Epoch sampling cadence for the training-error telemetry. Epoch ``0``
        is always sampled; ``0`` turns the telemetry off.
    seed:
        Seed for the engine's own random generator. Two engines built from the
        same config and seed start from identical weights.
    """

    input_size: int
    hidden_size: int
    output_size: int
    iterations: int = 1000
    learning_rate: float = 0.5
    momentum: float = 0.1
    log_every: int = 100
    seed: int | None = None

    def __post_init__(self) -> None:
        require_positive_int("input_size", self.input_size)
        require_positive_int("hidden_size", self.hidden_size)
        require_positive_int("output_size", self.output_size)
        require_positive_int("iterations", self.iterations)
        check_hyperparameters(self.learning_rate, self.momentum)
        require_non_negative_int("log_every", self.log_every)


@dataclass(slots=True)
class BoardConfig:
    """Settings for the interactive pattern board.

    The defaults reproduce the demo scene: four patterns of four binary inputs
    and two binary outputs, a ten-unit hidden layer trained for 5000 epochs,
    and a tolerance of ``0.1`` when deciding whether a value reads as 0 or 1.
    """

    input_size: int = 4
    hidden_size: int = 10
    output_size: int = 2
    iterations: int = 5000
    learning_rate: float = 0.5
    momentum: float = 0.1
    log_every: int = 100
    epsilon: float = 0.1
    seed: int | None = None

    def __post_init__(self) -> None:
        require_positive_int("input_size", self.input_size)
        require_positive_int("hidden_size", self.hidden_size)
        require_positive_int("output_size", self.output_size)
        require_positive_int("iterations", self.iterations)
        check_hyperparameters(self.learning_rate, self.momentum)
        require_non_negative_int("log_every", self.log_every)
        if not 0.0 <= self.epsilon < 0.5:
            raise InvalidConfiguration(f"epsilon must be within [0, 0.5), got {self.epsilon!r}")

    def network_config(self) -> NetworkConfig:
        return NetworkConfig(
            input_size=self.input_size,
            hidden_size=self.hidden_size,
            output_size=self.output_size,
            iterations=self.iterations,
            learning_rate=self.learning_rate,
            momentum=self.momentum,
            log_every=self.log_every,
            seed=self.seed,
        )
