"""
Sample Buffer
=============
Bounded, insertion-ordered history of observed (input, target) pairs.
The oldest sample is evicted first once capacity is reached.
"""

from collections import deque, namedtuple
from typing import List, Sequence

from adaptive_predictor.errors import InvalidConfigError


# Immutable observation pair
Sample = namedtuple('Sample', ['inputs', 'targets'])


def make_sample(inputs: Sequence[float], targets: Sequence[float]) -> Sample:
    """Freeze caller vectors into a Sample of float tuples"""
    return Sample(tuple(float(v) for v in inputs), tuple(float(v) for v in targets))


class SampleBuffer:
    """
    FIFO sample history

    Training reads entries without removing them; only overflow and
    clear() drop samples.
    """

    def __init__(self, capacity: int = 100):
        """
        Args:
            capacity: Maximum number of samples held
        """
        if capacity < 1:
            raise InvalidConfigError(f"buffer capacity must be >= 1, got {capacity}")
        self.buffer = deque(maxlen=capacity)
        self.capacity = capacity

    def push(self, sample: Sample):
        """Append a sample, evicting the oldest one on overflow"""
        self.buffer.append(sample)

    def recent(self, n: int) -> List[Sample]:
        """Return up to n samples, most recently pushed first"""
        n = min(n, len(self.buffer))
        return [self.buffer[-1 - i] for i in range(n)]

    def is_ready(self, min_samples: int) -> bool:
        """True once the buffer holds more than min_samples samples"""
        return len(self.buffer) > min_samples

    def front(self) -> Sample:
        """Oldest sample still held"""
        return self.buffer[0]

    def clear(self):
        self.buffer.clear()

    def __len__(self):
        return len(self.buffer)

    def __iter__(self):
        return iter(self.buffer)
