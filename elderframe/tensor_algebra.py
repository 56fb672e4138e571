"""Dense tensor algebra on nested lists and a registry of named tensor operations."""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass

Vector = Sequence[float]
Matrix = Sequence[Sequence[float]]


def _identity(dimension: int) -> list[list[float]]:
    return [[1.0 if i == j else 0.0 for j in range(dimension)] for i in range(dimension)]


class TensorAlgebra:
    """Linear algebra over a space with a standard basis and a Euclidean metric."""

    def __init__(self, dimension: int) -> None:
        self.dimension = dimension
        self.basis = _identity(dimension)
        self.metric = _identity(dimension)

    def tensor_product(self, u: Vector, v: Vector) -> list[list[float]]:
        """Outer product of two vectors."""
        return [[a * b for b in v] for a in u]

    def inner_product(self, u: Vector, v: Vector) -> float:
        """u^T g v over the common length, restricted to the metric's extent."""
        n = min(len(u), len(v))
        result = 0.0
        for i, row in enumerate(self.metric[:n]):
            for j, g in enumerate(row[:n]):
                result += u[i] * g * v[j]
        return result

    def cross_product(self, u: Vector, v: Vector) -> list[float]:
        """Cross product of two 3-vectors."""
        if len(u) != 3 or len(v) != 3:
            raise ValueError("cross product needs two vectors of length 3")
        return [
            u[1] * v[2] - u[2] * v[1],
            u[2] * v[0] - u[0] * v[2],
            u[0] * v[1] - u[1] * v[0],
        ]

    def trace(self, matrix: Matrix) -> float:
        """Sum of the diagonal entries that exist."""
        return sum(row[i] for i, row in enumerate(matrix) if i < len(row))

    def determinant(self, matrix: Matrix) -> float:
        """Determinant by cofactor expansion along the first row; 0.0 for an empty matrix."""
        n = len(matrix)
        if n == 0:
            return 0.0
        if n == 1:
            return matrix[0][0]
        if n == 2:
            return matrix[0][0] * matrix[1][1] - matrix[0][1] * matrix[1][0]
        return sum(
            (-1) ** j * matrix[0][j] * self.determinant(self._minor(matrix, 0, j))
            for j in range(n)
        )

    @staticmethod
    def _minor(matrix: Matrix, row: int, col: int) -> list[list[float]]:
        return [
            [value for j, value in enumerate(line) if j != col]
            for i, line in enumerate(matrix)
            if i != row
        ]

    def transpose(self, matrix: Matrix) -> list[list[float]]:
        """Transpose of a rectangular matrix."""
        return [list(column) for column in zip(*matrix)]

    def matrix_multiply(self, a: Matrix, b: Matrix) -> list[list[float]]:
        """Matrix product; an empty operand gives an empty result."""
        if not a or not b:
            return []
        if len(a[0]) != len(b):
            raise ValueError(
                f"cannot multiply: {len(a[0])} columns against {len(b)} rows"
            )
        columns = list(zip(*b))
        return [[sum(x * y for x, y in zip(row, col)) for col in columns] for row in a]


@dataclass(frozen=True)
class TensorOperation:
    """A named operation on a list of flat tensors, with its minimum arity."""

    name: str
    function: Callable[[Sequence[Vector]], list[float]]
    arity: int


def _add(tensors: Sequence[Vector]) -> list[float]:
    return [a + b for a, b in zip(tensors[0], tensors[1])]


def _multiply(tensors: Sequence[Vector]) -> list[float]:
    return [a * b for a, b in zip(tensors[0], tensors[1])]


def _contract(tensors: Sequence[Vector]) -> list[float]:
    return [sum(a * b for a, b in zip(tensors[0], tensors[1]))]


def _outer(tensors: Sequence[Vector]) -> list[float]:
    return [a * b for a in tensors[0] for b in tensors[1]]


def _transform(tensors: Sequence[Vector]) -> list[float]:
    return [math.tanh(value) for value in tensors[0]]


class TensorOperator:
    """A registry of elementwise and product operations on flat tensors."""

    def __init__(self) -> None:
        self.operations: dict[str, TensorOperation] = {
            op.name: op
            for op in (
                TensorOperation("add", _add, 2),
                TensorOperation("multiply", _multiply, 2),
                TensorOperation("contract", _contract, 2),
                TensorOperation("outer", _outer, 2),
                TensorOperation("transform", _transform, 1),
            )
        }

    def apply(self, name: str, tensors: Sequence[Vector]) -> list[float]:
        """Apply the operation called *name* to *tensors*."""
        try:
            operation = self.operations[name]
        except KeyError:
            raise KeyError(f"unknown tensor operation: {name}") from None
        if len(tensors) < operation.arity:
            raise ValueError(
                f"operation {name!r} needs {operation.arity} tensors, got {len(tensors)}"
            )
        return operation.function(tensors)

    def norm(self, tensor: Vector) -> float:
        """Euclidean norm."""
        return math.sqrt(sum(value * value for value in tensor))

    def normalize(self, tensor: Vector) -> list[float]:
        """Tensor scaled to unit norm; a zero tensor is returned unchanged."""
        norm = self.norm(tensor)
        if norm == 0:
            return list(tensor)
        return [value / norm for value in tensor]


class GravitationalTensor:
    """Metric and Einstein tensors of a space of given dimension."""

    def __init__(self, dimension: int) -> None:
        self.dimension = dimension
        self.metric_tensor = [[0.0] * dimension for _ in range(dimension)]
        self.einstein_tensor = [[0.0] * dimension for _ in range(dimension)]
        self.riemann_tensor: list = []

    def compute_curvature(self) -> list[list[float]]:
        """Curvature of the space: a zero matrix of the space's dimension."""
        return [[0.0] * self.dimension for _ in range(self.dimension)]


class HeliomorphicTensor:
    """A complex tensor described by its shape."""

    def __init__(self, shape: Sequence[int]) -> None:
        self.shape = list(shape)
        self.rank = len(self.shape)
        self.symmetries: list[str] = []
        self.data: list = []

    def contract(self, other: HeliomorphicTensor) -> HeliomorphicTensor:
        """Contract with *other*, giving a tensor of shape (self.shape[0], other.shape[1])."""
        if not self.shape or len(other.shape) < 2:
            raise ValueError("contraction needs a leading axis here and two axes in the other tensor")
        return HeliomorphicTensor([self.shape[0], other.shape[1]])