"""Small tanh network trained by online backpropagation with momentum."""

from .board import CellColor, CellKind, PatternBoard, cell_color
from .config import BoardConfig, NetworkConfig
from .errors import DimensionMismatch, InvalidConfiguration, MissingForwardPass, NetworkError
from .network import ForwardPass, NeuralNetwork, TrainingHistory
from .patterns import Pattern, xor_patterns

__all__ = [
    "BoardConfig",
    "CellColor",
    "CellKind",
    "DimensionMismatch",
    "ForwardPass",
    "InvalidConfiguration",
    "MissingForwardPass",
    "NetworkConfig",
    "NetworkError",
    "NeuralNetwork",
    "Pattern",
    "PatternBoard",
    "TrainingHistory",
    "cell_color",
    "xor_patterns",
]
