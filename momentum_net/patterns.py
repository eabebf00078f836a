"""Training/evaluation patterns and the dimension checks applied to them."""
from __future__ import annotations

from typing import Iterable, NamedTuple, Sequence

import numpy as np

from .errors import DimensionMismatch

Vector = Sequence[float] | np.ndarray


class Pattern(NamedTuple):
    """One example: an input vector and the target it should map to.

    ``targets`` may be ``None`` for patterns that are only ever inferred.
    """

    inputs: Vector
    targets: Vector | None = None


def as_vector(values: Vector, expected: int, what: str) -> np.ndarray:
    """Return ``values`` as a fresh 1-D ``float64`` array of length ``expected``."""

    try:
        vector = np.array(values, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise DimensionMismatch(f"{what} is not a numeric vector: {exc}") from exc
    if vector.ndim != 1 or vector.shape[0] != expected:
        raise DimensionMismatch(f"{what} must be a vector of length {expected}, got shape {vector.shape}")
    return vector


def as_pattern(item: Pattern | tuple | Vector) -> Pattern:
    """Normalise ``(inputs, targets)`` pairs and bare input vectors to :class:`Pattern`."""

    if isinstance(item, Pattern):
        return item
    if isinstance(item, tuple) and len(item) == 2 and not np.isscalar(item[0]):
        return Pattern(item[0], item[1])
    return Pattern(item)


def prepare_patterns(
    patterns: Iterable[Pattern | tuple | Vector],
    input_size: int,
    output_size: int,
    *,
    require_targets: bool,
) -> list[tuple[np.ndarray, np.ndarray | None]]:
    """Check every pattern against the topology and convert it to arrays.

    The whole sequence is validated before anything is returned so callers can
    reject a bad set without having touched the network.
    """

    prepared: list[tuple[np.ndarray, np.ndarray | None]] = []
    for index, item in enumerate(patterns):
        pattern = as_pattern(item)
        inputs = as_vector(pattern.inputs, input_size, f"pattern {index} inputs")
        if pattern.targets is None:
            if require_targets:
                raise DimensionMismatch(f"pattern {index} has no targets")
            targets = None
        else:
            targets = as_vector(pattern.targets, output_size, f"pattern {index} targets")
        prepared.append((inputs, targets))
    return prepared


def xor_patterns() -> list[Pattern]:
    return [
        Pattern([0.0, 0.0], [0.0]),
        Pattern([0.0, 1.0], [1.0]),
        Pattern([1.0, 0.0], [1.0]),
        Pattern([1.0, 1.0], [0.0]),
    ]


__all__ = ["Pattern", "as_pattern", "as_vector", "prepare_patterns", "xor_patterns"]
