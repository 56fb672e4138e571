"""Tensors arranged in levels of a hierarchy, with propagation and level operations."""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

_LN2 = 0.693147
_DOWNWARD_FACTOR = 0.1
_COORDINATION_FACTOR = 0.3
_SUPERVISION_FACTOR = 0.2


@dataclass
class LevelTensor:
    """A flat tensor placed at one level, with links to its parent and children."""

    id: str
    data: list[float]
    dimensions: list[int]
    level: int
    parent: str = ""
    children: list[str] = field(default_factory=list)


@dataclass
class TensorLevel:
    """The tensors of one level and the references between levels."""

    level: int
    tensors: dict[str, LevelTensor] = field(default_factory=dict)
    parent_refs: dict[str, str] = field(default_factory=dict)
    child_refs: dict[str, list[str]] = field(default_factory=dict)


def _quadratic_entropy(data: Sequence[float]) -> float:
    """Entropy measure of a tensor: -ln(2) times the sum of squared probabilities."""
    total = sum(value for value in data if value > 0)
    if total == 0:
        return 0.0
    return -sum((value / total) ** 2 * _LN2 for value in data if value > 0)


class HierarchicalTensor:
    """A fixed number of levels, each holding tensors keyed by identifier."""

    def __init__(self, max_levels: int, structure: Sequence[int]) -> None:
        self.max_levels = max_levels
        self.structure = list(structure)
        self.levels: dict[int, TensorLevel] = {
            level: TensorLevel(level) for level in range(max_levels)
        }

    def _level(self, level: int) -> TensorLevel:
        try:
            return self.levels[level]
        except KeyError:
            raise ValueError(
                f"level {level} is outside 0..{self.max_levels - 1}"
            ) from None

    def add_tensor(
        self,
        level: int,
        tensor_id: str,
        data: Sequence[float],
        dimensions: Sequence[int],
    ) -> None:
        """Place a copy of *data* at *level* under *tensor_id*."""
        target = self._level(level)
        target.tensors[tensor_id] = LevelTensor(
            id=tensor_id,
            data=list(data),
            dimensions=list(dimensions),
            level=level,
        )

    def establish_hierarchy(
        self, parent_id: str, parent_level: int, child_id: str, child_level: int
    ) -> None:
        """Link a tensor at a higher level as parent of one at a lower level."""
        if parent_level >= child_level:
            raise ValueError(
                f"parent level {parent_level} must be above child level {child_level}"
            )
        parents = self._level(parent_level)
        children = self._level(child_level)
        parent = parents.tensors.get(parent_id)
        if parent is None:
            raise KeyError(f"no tensor {parent_id!r} at level {parent_level}")
        child = children.tensors.get(child_id)
        if child is None:
            raise KeyError(f"no tensor {child_id!r} at level {child_level}")

        parent.children.append(child_id)
        child.parent = parent_id
        parents.child_refs.setdefault(parent_id, []).append(child_id)
        children.parent_refs[child_id] = parent_id

    def propagate_down(self, source_level: int, source_id: str) -> None:
        """Add a tenth of a tensor's data into its children on the next level, recursively."""
        if source_level >= self.max_levels - 1:
            return
        level = self.levels.get(source_level)
        source = level.tensors.get(source_id) if level else None
        if source is None:
            return
        below = self.levels[source_level + 1].tensors
        for child_id in source.children:
            child = below.get(child_id)
            if child is not None:
                n = min(len(source.data), len(child.data))
                child.data[:n] = [
                    c + s * _DOWNWARD_FACTOR for c, s in zip(child.data, source.data)
                ]
                self.propagate_down(source_level + 1, child_id)

    def propagate_up(self, target_level: int, target_id: str) -> None:
        """Average a tensor into its parent on the level above, recursively."""
        if target_level <= 0:
            return
        level = self.levels.get(target_level)
        target = level.tensors.get(target_id) if level else None
        if target is None or not target.parent:
            return
        parent = self.levels[target_level - 1].tensors.get(target.parent)
        if parent is not None:
            n = min(len(target.data), len(parent.data))
            parent.data[:n] = [
                (p + t) * 0.5 for p, t in zip(parent.data, target.data)
            ]
            self.propagate_up(target_level - 1, target.parent)

    def level_entropy(self, level: int) -> float:
        """Mean entropy measure of the tensors at *level*; 0.0 for an empty or unknown level."""
        found = self.levels.get(level)
        if found is None or not found.tensors:
            return 0.0
        entropies = [_quadratic_entropy(t.data) for t in found.tensors.values()]
        return sum(entropies) / len(entropies)


@dataclass(frozen=True)
class HierarchyOperation:
    """An operation reading tensors from some levels and writing one level."""

    name: str
    input_levels: tuple[int, ...]
    output_level: int
    function: Callable[[list[list[float]]], list[float]]


def _shannon_positive(data: Sequence[float]) -> float:
    total = sum(value for value in data if value > 0)
    if total == 0:
        return 0.0
    return -sum(
        (value / total) * math.log2(value / total) for value in data if value > 0
    )


def _guided(inputs: list[list[float]], factor: float) -> list[float]:
    if len(inputs) < 2:
        return []
    guide, values = inputs[0], inputs[1]
    return [
        value + (guide[i] if i < len(guide) else 0.0) * factor
        for i, value in enumerate(values)
    ]


def _coordination(inputs: list[list[float]]) -> list[float]:
    return _guided(inputs, _COORDINATION_FACTOR)


def _supervision(inputs: list[list[float]]) -> list[float]:
    return _guided(inputs, _SUPERVISION_FACTOR)


def _aggregation(inputs: list[list[float]]) -> list[float]:
    if not inputs:
        return []
    dimension = len(inputs[0])
    result = [0.0] * dimension
    for row in inputs:
        for i, value in enumerate(row[:dimension]):
            result[i] += value
    return [value / len(inputs) for value in result]


def _synthesis(inputs: list[list[float]]) -> list[float]:
    if not inputs:
        return []
    dimension = len(inputs[0])
    weights = [math.exp(-_shannon_positive(row)) for row in inputs]
    total = sum(weights)
    if total > 0:
        weights = [weight / total for weight in weights]
    result = [0.0] * dimension
    for weight, row in zip(weights, inputs):
        for j, value in enumerate(row[:dimension]):
            result[j] += weight * value
    return result


class ElderTensorOperations:
    """Operations that move information between the elder, mentor and erudite levels."""

    def __init__(self) -> None:
        self.elder_level = 0
        self.mentor_level = 1
        self.erudite_level = 2
        self.operations: dict[str, HierarchyOperation] = {
            op.name: op
            for op in (
                HierarchyOperation(
                    "coordination",
                    (self.elder_level, self.mentor_level),
                    self.mentor_level,
                    _coordination,
                ),
                HierarchyOperation(
                    "supervision",
                    (self.mentor_level, self.erudite_level),
                    self.erudite_level,
                    _supervision,
                ),
                HierarchyOperation(
                    "aggregation",
                    (self.erudite_level,),
                    self.mentor_level,
                    _aggregation,
                ),
                HierarchyOperation(
                    "synthesis",
                    (self.mentor_level,),
                    self.elder_level,
                    _synthesis,
                ),
            )
        }

    def apply_operation(
        self, name: str, tensor: HierarchicalTensor, target_id: str
    ) -> None:
        """Run operation *name* on the tensors called *target_id* and write the result back."""
        try:
            operation = self.operations[name]
        except KeyError:
            raise KeyError(f"unknown hierarchy operation: {name}") from None

        inputs: list[list[float]] = []
        for level in operation.input_levels:
            found = tensor.levels.get(level)
            if found is not None and target_id in found.tensors:
                inputs.append(found.tensors[target_id].data)

        result = operation.function(inputs)

        output = tensor.levels.get(operation.output_level)
        if output is None:
            return
        target = output.tensors.get(target_id)
        if target is None:
            return
        n = min(len(result), len(target.data))
        target.data[:n] = result[:n]