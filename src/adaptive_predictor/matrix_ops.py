"""
Numeric Matrix
==============
Fixed-shape 2-D storage plus the small algebra the network needs.
Every binary operation checks shapes before touching any data.
"""

from enum import Enum
from typing import Optional, Sequence

import numpy as np

from adaptive_predictor.errors import ShapeMismatchError


# ============================================================================
# ACTIVATION STRATEGY
# ============================================================================

class Activation(Enum):
    """Element-wise functions that `map_matrix` dispatches on"""
    SIGMOID = "sigmoid"
    SIGMOID_DERIVATIVE = "sigmoid_derivative"

    def apply(self, values: np.ndarray) -> np.ndarray:
        if self is Activation.SIGMOID:
            return 1.0 / (1.0 + np.exp(-values))
        # Expects already-activated values: a * (1 - a)
        return values * (1.0 - values)


# ============================================================================
# MATRIX
# ============================================================================

class Matrix:
    """
    Dense rows x cols matrix of float64 values

    The shape is fixed at construction; operations that mutate a matrix
    write into the existing buffer and never resize it.
    """

    def __init__(self, data: np.ndarray):
        data = np.asarray(data, dtype=np.float64)
        if data.ndim != 2:
            raise ShapeMismatchError(f"Matrix needs 2-D data, got {data.ndim}-D")
        self.data = data

    @property
    def rows(self) -> int:
        return self.data.shape[0]

    @property
    def cols(self) -> int:
        return self.data.shape[1]

    @property
    def shape(self):
        return self.data.shape

    def copy(self) -> "Matrix":
        return Matrix(self.data.copy())

    def __getitem__(self, index):
        return self.data[index]

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and np.array_equal(self.data, other.data)

    def __repr__(self):
        return f"Matrix({self.rows}x{self.cols})"


def create(rows: int, cols: int, fill: Optional[float] = None,
           rng: Optional[np.random.Generator] = None) -> Matrix:
    """
    Create a rows x cols matrix

    Args:
        rows: Number of rows (positive)
        cols: Number of columns (positive)
        fill: Constant for every entry; when None each entry is drawn
            uniformly from [-0.5, 0.5] (parameter initialization)
        rng: Random generator used for the uniform draw

    Returns:
        New Matrix
    """
    if rows < 1 or cols < 1:
        raise ShapeMismatchError(f"Matrix dimensions must be positive, got {rows}x{cols}")

    if fill is not None:
        return Matrix(np.full((rows, cols), float(fill)))

    if rng is None:
        rng = np.random.default_rng()
    return Matrix(rng.uniform(-0.5, 0.5, size=(rows, cols)))


def _require_same_shape(a: Matrix, b: Matrix, op: str):
    if a.shape != b.shape:
        raise ShapeMismatchError(
            f"{op}: shapes {a.rows}x{a.cols} and {b.rows}x{b.cols} differ"
        )


def multiply(a: Matrix, b: Matrix) -> Matrix:
    """Matrix product a . b (requires a.cols == b.rows)"""
    if a.cols != b.rows:
        raise ShapeMismatchError(
            f"multiply: {a.rows}x{a.cols} cannot multiply {b.rows}x{b.cols}"
        )
    return Matrix(a.data @ b.data)


def add(a: Matrix, b: Matrix) -> Matrix:
    """Element-wise a += b, in place on a"""
    _require_same_shape(a, b, "add")
    a.data += b.data
    return a


def subtract(a: Matrix, b: Matrix) -> Matrix:
    """New matrix a - b"""
    _require_same_shape(a, b, "subtract")
    return Matrix(a.data - b.data)


def transpose(a: Matrix) -> Matrix:
    return Matrix(a.data.T.copy())


def multiply_elementwise(a: Matrix, b: Matrix) -> Matrix:
    """Hadamard product a *= b, in place on a"""
    _require_same_shape(a, b, "multiply_elementwise")
    a.data *= b.data
    return a


def scale(a: Matrix, k: float) -> Matrix:
    """Multiply every entry of a by k, in place"""
    a.data *= k
    return a


def map_matrix(a: Matrix, func: Activation, into_new: bool = False) -> Matrix:
    """
    Apply an activation to every entry

    Args:
        a: Source matrix
        func: Activation strategy to apply
        into_new: If True return a new matrix, otherwise mutate a

    Returns:
        The mapped matrix (a itself when into_new is False)
    """
    mapped = func.apply(a.data)
    if into_new:
        return Matrix(mapped)
    a.data[...] = mapped
    return a


def from_list(values: Sequence[float]) -> Matrix:
    """Flat sequence of length N -> N x 1 column vector"""
    column = np.asarray(values, dtype=np.float64)
    if column.ndim != 1 or column.size == 0:
        raise ShapeMismatchError("from_list expects a non-empty flat sequence")
    return Matrix(column.reshape(-1, 1))


def to_list(a: Matrix) -> list:
    """N x 1 column vector -> flat list of N floats"""
    if a.cols != 1:
        raise ShapeMismatchError(f"to_list expects a column vector, got {a.rows}x{a.cols}")
    return [float(v) for v in a.data[:, 0]]
