"""Exceptions raised by the network engine."""
from __future__ import annotations


class NetworkError(Exception):
    """Base class for every error raised by :mod:`momentum_net`."""


class InvalidConfiguration(NetworkError, ValueError):
    """A topology dimension or training hyperparameter is out of range."""


class DimensionMismatch(NetworkError, ValueError):
    """A vector does not match the configured topology."""


class MissingForwardPass(NetworkError, RuntimeError):
    """``backpropagate`` was called without activations to consume."""


__all__ = [
    "NetworkError",
    "InvalidConfiguration",
    "DimensionMismatch",
    "MissingForwardPass",
]
