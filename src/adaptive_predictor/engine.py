"""
Adaptive Engine
===============
Per-tick facade over network, trainer, sample buffer and scheduler.

Host contract, once per tick:
    action = engine.predict(observation)
    accuracy = engine.observe(observation, target)
"""

from typing import Deque, List, Optional, Sequence

import numpy as np

from adaptive_predictor.config import EngineConfig
from adaptive_predictor.neural_network import NeuralNetwork
from adaptive_predictor.sample_buffer import SampleBuffer, make_sample
from adaptive_predictor.scheduler import TrainingScheduler
from adaptive_predictor.trainer import Trainer


class AdaptiveEngine:
    """
    Online-learning behavior predictor

    Learning and inference interleave: predict() never mutates state,
    observe() may train. reset() clears training data and the momentum
    carry-over but keeps the learned weights.
    """

    def __init__(self, input_size: int, hidden_size: int, output_size: int,
                 config: Optional[EngineConfig] = None):
        if config is None:
            config = EngineConfig()
        config.validate()
        self.config = config

        self.rng = np.random.default_rng(config.seed)

        self.network = NeuralNetwork(
            input_size, hidden_size, output_size,
            learning_rate=config.learning_rate,
            momentum=config.momentum,
            rng=self.rng,
        )
        self.trainer = Trainer(self.network, history_size=config.history_size)
        self.buffer = SampleBuffer(capacity=config.buffer_capacity)
        self.scheduler = TrainingScheduler(
            self.buffer, self.trainer,
            min_samples_to_train=config.min_samples_to_train,
            train_fire_probability=config.train_fire_probability,
            batch_size=config.batch_size,
            accuracy_scale=config.accuracy_scale,
            rng=self.rng,
            history_size=config.history_size,
            verbose=config.verbose,
        )

        if config.verbose:
            print(f"Engine created: {self.network}")
            print(f"   Parameters: {self.network.num_parameters()}")
            print(f"   Buffer capacity: {config.buffer_capacity}, "
                  f"batch: {config.batch_size}, p(train): {config.train_fire_probability}")

    # ------------------------------------------------------------------
    # Per-tick contract
    # ------------------------------------------------------------------

    def predict(self, inputs: Sequence[float]) -> List[float]:
        return self.network.predict(inputs)

    def predict_action(self, inputs: Sequence[float]) -> int:
        """Index of the strongest output, for discrete action spaces"""
        return int(np.argmax(self.network.predict(inputs)))

    def observe(self, inputs: Sequence[float], targets: Sequence[float]) -> float:
        """
        Record one observation and run a scheduler tick

        Args:
            inputs: Observation vector (input_size floats)
            targets: Outcome vector derived by the host (output_size floats)

        Returns:
            Current accuracy in [0, 100]
        """
        # Reject malformed samples before they reach the buffer
        self.network.check_input(inputs)
        self.network.check_target(targets)

        self.buffer.push(make_sample(inputs, targets))
        return self.scheduler.tick()

    def reset(self):
        """Clear samples, momentum carry-over, accuracy and error stats; keep weights"""
        self.buffer.clear()
        self.trainer.losses.clear()
        self.network.reset_momentum()
        self.scheduler.reset()

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    @property
    def accuracy(self) -> float:
        return self.scheduler.accuracy

    @property
    def training_events(self) -> int:
        return self.scheduler.training_events

    @property
    def error_history(self) -> Deque[float]:
        return self.scheduler.error_history

    @property
    def input_size(self) -> int:
        return self.network.input_size

    @property
    def output_size(self) -> int:
        return self.network.output_size


def new_engine(input_size: int, hidden_size: int, output_size: int,
               config=None) -> AdaptiveEngine:
    """
    Build an engine from an EngineConfig, a plain dict or None

    Dict keys may use snake_case or the camelCase names of config files.
    """
    if config is None or isinstance(config, dict):
        config = EngineConfig.from_dict(config)
    return AdaptiveEngine(input_size, hidden_size, output_size, config)
