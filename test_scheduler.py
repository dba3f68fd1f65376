"""
Training Scheduler Tests
========================
Firing policy, batch selection and the accuracy metric
"""

import numpy as np
import pytest

from adaptive_predictor.neural_network import NeuralNetwork
from adaptive_predictor.sample_buffer import SampleBuffer, make_sample
from adaptive_predictor.scheduler import TrainingScheduler
from adaptive_predictor.trainer import Trainer


class RecordingTrainer:
    """Stands in for Trainer; records calls and returns a fixed error"""

    def __init__(self, error=0.1):
        self.error = error
        self.calls = []

    def update(self, inputs, targets):
        self.calls.append(inputs)
        return self.error


def filled_buffer(n, capacity=100):
    buffer = SampleBuffer(capacity=capacity)
    for i in range(1, n + 1):
        buffer.push(make_sample([float(i)], [0.0]))
    return buffer


def make_scheduler(buffer, trainer, **kwargs):
    kwargs.setdefault('rng', np.random.default_rng(0))
    return TrainingScheduler(buffer, trainer, **kwargs)


def test_no_training_until_threshold_exceeded():
    trainer = RecordingTrainer()
    buffer = filled_buffer(10)
    scheduler = make_scheduler(buffer, trainer, train_fire_probability=1.0)

    assert scheduler.tick() == 0.0
    assert trainer.calls == []

    buffer.push(make_sample([11.0], [0.0]))
    scheduler.tick()
    assert len(trainer.calls) == 10


def test_zero_probability_never_fires():
    trainer = RecordingTrainer()
    scheduler = make_scheduler(filled_buffer(50), trainer, train_fire_probability=0.0)
    for _ in range(500):
        assert scheduler.tick() == 0.0
    assert trainer.calls == []
    assert scheduler.training_events == 0


def test_batch_is_most_recent_first():
    trainer = RecordingTrainer()
    scheduler = make_scheduler(filled_buffer(20), trainer,
                               train_fire_probability=1.0, batch_size=4)
    scheduler.tick()
    assert trainer.calls == [(20.0,), (19.0,), (18.0,), (17.0,)]


def test_batch_capped_by_buffer_length():
    trainer = RecordingTrainer()
    scheduler = make_scheduler(filled_buffer(3), trainer, min_samples_to_train=2,
                               train_fire_probability=1.0, batch_size=10)
    scheduler.tick()
    assert len(trainer.calls) == 3


def test_accuracy_from_mean_error():
    scheduler = make_scheduler(filled_buffer(20), RecordingTrainer(error=0.1),
                               train_fire_probability=1.0, accuracy_scale=200)
    assert scheduler.tick() == pytest.approx(80.0)
    assert list(scheduler.error_history) == [pytest.approx(0.1)]
    assert scheduler.training_events == 1


def test_accuracy_clamps():
    low = make_scheduler(filled_buffer(20), RecordingTrainer(error=0.9),
                         train_fire_probability=1.0)
    assert low.tick() == 0.0

    high = make_scheduler(filled_buffer(20), RecordingTrainer(error=0.0),
                          train_fire_probability=1.0)
    assert high.tick() == 100.0
    assert low.accuracy_from_error(-1.0) == 100.0


def test_accuracy_unchanged_without_fire():
    trainer = RecordingTrainer(error=0.2)
    scheduler = make_scheduler(filled_buffer(20), trainer, train_fire_probability=1.0)
    assert scheduler.tick() == pytest.approx(60.0)
    scheduler.train_fire_probability = 0.0
    assert scheduler.tick() == pytest.approx(60.0)


def test_fire_rate_follows_probability():
    trainer = RecordingTrainer()
    scheduler = make_scheduler(filled_buffer(20), trainer,
                               train_fire_probability=0.1, batch_size=1)
    for _ in range(2000):
        scheduler.tick()
    assert 120 < scheduler.training_events < 280


def test_seeded_schedules_repeat():
    def fire_ticks(seed):
        scheduler = make_scheduler(filled_buffer(20), RecordingTrainer(),
                                   rng=np.random.default_rng(seed))
        fired = []
        for tick in range(300):
            before = scheduler.training_events
            scheduler.tick()
            if scheduler.training_events > before:
                fired.append(tick)
        return fired

    assert fire_ticks(7) == fire_ticks(7)
    assert fire_ticks(7) != fire_ticks(8)


def test_reset_clears_metric():
    scheduler = make_scheduler(filled_buffer(20), RecordingTrainer(),
                               train_fire_probability=1.0)
    scheduler.tick()
    scheduler.reset()
    assert scheduler.accuracy == 0.0
    assert len(scheduler.error_history) == 0
    assert scheduler.training_events == 0


def test_drives_real_trainer():
    net = NeuralNetwork(1, 3, 1, rng=np.random.default_rng(0))
    trainer = Trainer(net)
    scheduler = make_scheduler(filled_buffer(15), trainer,
                               train_fire_probability=1.0, batch_size=8)
    accuracy = scheduler.tick()
    assert trainer.training_step == 8
    assert 0.0 <= accuracy <= 100.0


def test_error_history_is_bounded():
    scheduler = make_scheduler(filled_buffer(20), RecordingTrainer(),
                               train_fire_probability=1.0, history_size=3)
    for _ in range(10):
        scheduler.tick()
    assert scheduler.training_events == 10
    assert len(scheduler.error_history) == 3
