"""
Neural Network - One Hidden Layer
=================================
Sigmoid feed-forward network whose weights are queried every tick.
Parameters are only mutated by the Trainer.
"""

from typing import List, Optional, Sequence, Tuple

import numpy as np

from adaptive_predictor import matrix_ops as mx
from adaptive_predictor.errors import DimensionMismatchError, InvalidConfigError
from adaptive_predictor.matrix_ops import Activation, Matrix


class NeuralNetwork:
    """
    input -> hidden (sigmoid) -> output (sigmoid)

    Weight matrices are stored as (to x from), so a forward step is
    W . x + b with column vectors.
    """

    def __init__(self, input_size: int, hidden_size: int, output_size: int,
                 learning_rate: float = 0.1, momentum: float = 0.9,
                 rng: Optional[np.random.Generator] = None):
        """
        Initialize network parameters

        Args:
            input_size: Length of observation vectors
            hidden_size: Number of hidden units
            output_size: Length of output vectors
            learning_rate: Step size used by the Trainer
            momentum: Fraction of the previous applied delta carried over
            rng: Random generator for weight initialization (seedable)
        """
        for name, size in (("input_size", input_size),
                           ("hidden_size", hidden_size),
                           ("output_size", output_size)):
            if isinstance(size, bool) or not isinstance(size, (int, np.integer)) or size < 1:
                raise InvalidConfigError(f"{name} must be a positive integer, got {size!r}")

        self.input_size = int(input_size)
        self.hidden_size = int(hidden_size)
        self.output_size = int(output_size)
        self.learning_rate = learning_rate
        self.momentum = momentum
        self.rng = rng if rng is not None else np.random.default_rng()

        self.weights_input_hidden = mx.create(self.hidden_size, self.input_size, rng=self.rng)
        self.weights_hidden_output = mx.create(self.output_size, self.hidden_size, rng=self.rng)
        self.bias_hidden = mx.create(self.hidden_size, 1, rng=self.rng)
        self.bias_output = mx.create(self.output_size, 1, rng=self.rng)

        # Last applied update per weight matrix, for momentum carry-over
        self.prev_delta_input_hidden = mx.create(self.hidden_size, self.input_size, fill=0.0)
        self.prev_delta_hidden_output = mx.create(self.output_size, self.hidden_size, fill=0.0)

    @staticmethod
    def _check_vector(values, expected: int, what: str):
        try:
            shape = np.shape(values)
        except ValueError as e:
            # Ragged nesting
            raise DimensionMismatchError(f"Expected a flat vector of {expected} {what}") from e
        if len(shape) != 1 or shape[0] != expected:
            raise DimensionMismatchError(
                f"Expected a flat vector of {expected} {what}, got shape {shape}"
            )

    def check_input(self, inputs: Sequence[float]):
        self._check_vector(inputs, self.input_size, "inputs")

    def check_target(self, targets: Sequence[float]):
        self._check_vector(targets, self.output_size, "targets")

    def forward(self, inputs: Matrix) -> Tuple[Matrix, Matrix]:
        """
        Forward pass on a column vector

        Returns freshly allocated (hidden, output) activations so callers
        never alias the network's parameters.
        """
        hidden = mx.multiply(self.weights_input_hidden, inputs)
        mx.add(hidden, self.bias_hidden)
        mx.map_matrix(hidden, Activation.SIGMOID)

        output = mx.multiply(self.weights_hidden_output, hidden)
        mx.add(output, self.bias_output)
        mx.map_matrix(output, Activation.SIGMOID)

        return hidden, output

    def predict(self, inputs: Sequence[float]) -> List[float]:
        """
        Compute the network output for one observation

        Args:
            inputs: input_size floats

        Returns:
            output_size floats, each in (0, 1)
        """
        self.check_input(inputs)
        _, output = self.forward(mx.from_list(inputs))
        return mx.to_list(output)

    def reset_momentum(self):
        """Zero the momentum carry-over without touching the weights"""
        self.prev_delta_input_hidden = mx.create(self.hidden_size, self.input_size, fill=0.0)
        self.prev_delta_hidden_output = mx.create(self.output_size, self.hidden_size, fill=0.0)

    def num_parameters(self) -> int:
        return (self.hidden_size * self.input_size + self.hidden_size
                + self.output_size * self.hidden_size + self.output_size)

    def __repr__(self):
        return (f"NeuralNetwork({self.input_size} -> {self.hidden_size} -> {self.output_size}, "
                f"lr={self.learning_rate}, momentum={self.momentum})")
