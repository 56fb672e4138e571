"""Entropy measures of sampled fields, binned to a tolerance."""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field


def _round_half_away(x: float) -> float:
    """Round to the nearest integer, halves away from zero."""
    whole = math.trunc(x)
    if abs(x - whole) >= 0.5:
        whole += math.copysign(1.0, x)
    return float(whole)


def _entropy_bits(probabilities) -> float:
    return -sum(p * math.log2(p) for p in probabilities if p > 0)


@dataclass
class EntropyField:
    """A sampled field with its binned probability density."""

    id: str
    values: list[float]
    density: dict[float, float] = field(default_factory=dict)
    volume: float = 0.0


class FieldEntropyCalculator:
    """Holds fields by identifier and computes entropies between them."""

    def __init__(self, tolerance: float) -> None:
        self.tolerance = tolerance
        self.fields: dict[str, EntropyField] = {}

    def _bin(self, value: float) -> float:
        return _round_half_away(value / self.tolerance) * self.tolerance

    def _density(self, values: Sequence[float]) -> dict[float, float]:
        counts = Counter(self._bin(value) for value in values)
        total = len(values)
        return {key: count / total for key, count in counts.items()}

    def _field(self, field_id: str) -> EntropyField:
        try:
            return self.fields[field_id]
        except KeyError:
            raise KeyError(f"unknown field: {field_id}") from None

    def add_field(self, field_id: str, values: Sequence[float], volume: float) -> None:
        """Store a copy of *values* under *field_id*, replacing any earlier field."""
        self.fields[field_id] = EntropyField(
            id=field_id,
            values=list(values),
            density=self._density(values),
            volume=volume,
        )

    def entropy(self, field_id: str) -> float:
        """Shannon entropy in bits of the field's binned density."""
        return _entropy_bits(self._field(field_id).density.values())

    def relative_entropy(self, first_id: str, second_id: str) -> float:
        """Kullback-Leibler divergence over the bins both fields share."""
        first = self._field(first_id).density
        second = self._field(second_id).density
        return sum(
            p1 * math.log2(p1 / second[value])
            for value, p1 in first.items()
            if second.get(value, 0.0) > 0
        )

    def mutual_information(self, first_id: str, second_id: str) -> float:
        """H(first) + H(second) - H(first, second)."""
        return (
            self.entropy(first_id)
            + self.entropy(second_id)
            - self._joint_entropy(first_id, second_id)
        )

    def _joint_entropy(self, first_id: str, second_id: str) -> float:
        first = self._field(first_id).values
        second = self._field(second_id).values
        total = len(first)
        counts = Counter(
            (self._bin(a), self._bin(b)) for a, b in zip(first, second)
        )
        return _entropy_bits(count / total for count in counts.values())