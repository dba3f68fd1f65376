"""
Training Scheduler
==================
Turns the per-tick sample stream into occasional mini-batch updates.
Training fires on a Bernoulli trial so its cadence is decoupled from
the host frame rate.
"""

from collections import deque
from typing import Optional

import numpy as np

from adaptive_predictor.sample_buffer import SampleBuffer
from adaptive_predictor.trainer import Trainer


class TrainingScheduler:
    """Stochastic mini-batch driver with a rolling accuracy estimate"""

    def __init__(self, buffer: SampleBuffer, trainer: Trainer,
                 min_samples_to_train: int = 10,
                 train_fire_probability: float = 0.1,
                 batch_size: int = 10,
                 accuracy_scale: float = 200.0,
                 rng: Optional[np.random.Generator] = None,
                 history_size: int = 1000,
                 verbose: bool = False):
        self.buffer = buffer
        self.trainer = trainer
        self.min_samples_to_train = min_samples_to_train
        self.train_fire_probability = train_fire_probability
        self.batch_size = batch_size
        self.accuracy_scale = accuracy_scale
        self.rng = rng if rng is not None else np.random.default_rng()
        self.verbose = verbose

        self.accuracy = 0.0
        self.training_events = 0
        self.error_history = deque(maxlen=history_size)

    def should_fire(self) -> bool:
        """Enough samples held and this tick's trial succeeded"""
        if not self.buffer.is_ready(self.min_samples_to_train):
            return False
        return self.rng.random() < self.train_fire_probability

    def train_batch(self) -> float:
        """
        Train on the most recent samples, newest first

        Returns:
            Mean error over the batch
        """
        batch = self.buffer.recent(self.batch_size)
        total_error = 0.0
        for sample in batch:
            total_error += self.trainer.update(sample.inputs, sample.targets)
        return total_error / len(batch)

    def accuracy_from_error(self, mean_error: float) -> float:
        """100 - mean_error * scale, clamped to [0, 100]"""
        return max(0.0, min(100.0, 100.0 - mean_error * self.accuracy_scale))

    def tick(self) -> float:
        """
        Run one scheduler tick

        Returns:
            Current accuracy (unchanged when no training fired)
        """
        if not self.should_fire():
            return self.accuracy

        mean_error = self.train_batch()
        self.accuracy = self.accuracy_from_error(mean_error)
        self.error_history.append(mean_error)
        self.training_events += 1

        if self.verbose:
            print(f"   Train #{self.training_events}: "
                  f"error={mean_error:.4f} accuracy={self.accuracy:.1f}%")

        return self.accuracy

    def reset(self):
        self.accuracy = 0.0
        self.training_events = 0
        self.error_history.clear()
