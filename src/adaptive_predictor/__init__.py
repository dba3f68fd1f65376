"""
Adaptive behavior predictor: a one-hidden-layer sigmoid network trained
online from a rolling window of recent observations.
"""

from adaptive_predictor.config import EngineConfig
from adaptive_predictor.engine import AdaptiveEngine, new_engine
from adaptive_predictor.errors import (
    DimensionMismatchError,
    InvalidConfigError,
    PredictorError,
    ShapeMismatchError,
)
from adaptive_predictor.neural_network import NeuralNetwork
from adaptive_predictor.sample_buffer import Sample, SampleBuffer
from adaptive_predictor.scheduler import TrainingScheduler
from adaptive_predictor.trainer import Trainer

__all__ = [
    "AdaptiveEngine",
    "DimensionMismatchError",
    "EngineConfig",
    "InvalidConfigError",
    "NeuralNetwork",
    "PredictorError",
    "Sample",
    "SampleBuffer",
    "ShapeMismatchError",
    "Trainer",
    "TrainingScheduler",
    "new_engine",
]
