"""
Trainer - Backpropagation with Momentum
=======================================
Applies one online update per (input, target) sample and reports the
mean absolute output error.
"""

from collections import deque
from typing import Sequence

import numpy as np

from adaptive_predictor import matrix_ops as mx
from adaptive_predictor.matrix_ops import Activation, Matrix
from adaptive_predictor.neural_network import NeuralNetwork


class Trainer:
    """
    Online trainer for a NeuralNetwork

    Weight matrices get a momentum-blended step; biases get the raw
    gradient with no momentum term.
    """

    def __init__(self, network: NeuralNetwork, history_size: int = 1000):
        self.network = network

        # Training statistics; only the newest history_size errors are kept
        self.training_step = 0
        self.losses = deque(maxlen=history_size)

    def _momentum_step(self, weights: Matrix, delta: Matrix, prev_delta: Matrix):
        """weights += delta + momentum * prev_delta; prev_delta <- applied delta"""
        applied = mx.scale(prev_delta.copy(), self.network.momentum)
        mx.add(applied, delta)
        mx.add(weights, applied)
        prev_delta.data[...] = applied.data

    def update(self, inputs: Sequence[float], targets: Sequence[float]) -> float:
        """
        Train on a single sample

        Args:
            inputs: input_size floats
            targets: output_size floats

        Returns:
            Mean absolute value of the output error
        """
        net = self.network

        # Validate before any mutation
        net.check_input(inputs)
        net.check_target(targets)

        input_col = mx.from_list(inputs)
        target_col = mx.from_list(targets)

        hidden, output = net.forward(input_col)

        output_error = mx.subtract(target_col, output)

        # Pre-update hidden->output weights are needed for back-propagation
        weights_ho_t = mx.transpose(net.weights_hidden_output)

        # Output layer
        output_gradient = mx.map_matrix(output, Activation.SIGMOID_DERIVATIVE, into_new=True)
        mx.multiply_elementwise(output_gradient, output_error)
        mx.scale(output_gradient, net.learning_rate)

        weights_ho_delta = mx.multiply(output_gradient, mx.transpose(hidden))
        self._momentum_step(net.weights_hidden_output, weights_ho_delta,
                            net.prev_delta_hidden_output)
        mx.add(net.bias_output, output_gradient)

        # Hidden layer
        hidden_error = mx.multiply(weights_ho_t, output_error)
        hidden_gradient = mx.map_matrix(hidden, Activation.SIGMOID_DERIVATIVE, into_new=True)
        mx.multiply_elementwise(hidden_gradient, hidden_error)
        mx.scale(hidden_gradient, net.learning_rate)

        weights_ih_delta = mx.multiply(hidden_gradient, mx.transpose(input_col))
        self._momentum_step(net.weights_input_hidden, weights_ih_delta,
                            net.prev_delta_input_hidden)
        mx.add(net.bias_hidden, hidden_gradient)

        error = float(np.mean(np.abs(output_error.data)))

        self.losses.append(error)
        self.training_step += 1

        return error
