"""Entropy and information measures over flat tensors of non-negative weights."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence


def _shannon(values: Iterable[float]) -> float:
    """Shannon entropy in bits of the positive entries of *values*, normalised by their total."""
    values = list(values)
    total = sum(values)
    if total == 0:
        return 0.0
    entropy = 0.0
    for value in values:
        if value > 0:
            prob = value / total
            entropy -= prob * math.log2(prob)
    return entropy


class EntropyTensor:
    """A tensor whose flat data is read as an unnormalised distribution."""

    def __init__(self, dimensions: Sequence[int]) -> None:
        self.dimensions: tuple[int, ...] = tuple(dimensions)
        self.shape: tuple[int, ...] = tuple(dimensions)
        self.rank: int = len(self.dimensions)
        self.data: list[float] = [0.0] * math.prod(self.dimensions)

    def entropy(self) -> float:
        """Shannon entropy of the data in bits; zero when the data sum to zero."""
        return _shannon(self.data)

    def joint_entropy(self, other: EntropyTensor) -> float:
        """Entropy of the elementwise product over the common length."""
        return _shannon(a * b for a, b in zip(self.data, other.data))

    def conditional_entropy(self, conditioning: EntropyTensor) -> float:
        """Joint entropy minus the entropy of *conditioning*."""
        return self.joint_entropy(conditioning) - conditioning.entropy()

    def mutual_information(self, other: EntropyTensor) -> float:
        """H(self) + H(other) - H(self, other)."""
        return self.entropy() + other.entropy() - self.joint_entropy(other)

    def kl_divergence(self, reference: EntropyTensor) -> float:
        """Kullback-Leibler divergence in bits over the common length.

        Infinite when either side sums to zero, or when this tensor has
        mass where the reference has none.
        """
        pairs = list(zip(self.data, reference.data))
        total_p = sum(p for p, _ in pairs)
        total_q = sum(q for _, q in pairs)
        if total_p == 0 or total_q == 0:
            return math.inf

        kl = 0.0
        for raw_p, raw_q in pairs:
            p = raw_p / total_p
            q = raw_q / total_q
            if p > 0 and q > 0:
                kl += p * math.log2(p / q)
            elif p > 0 and q == 0:
                return math.inf
        return kl

    def normalize(self) -> None:
        """Scale the data in place so that it sums to one, if its sum is positive."""
        total = sum(self.data)
        if total > 0:
            self.data = [value / total for value in self.data]


class InformationTensor:
    """An entropy tensor with a channel capacity and derived efficiency figures."""

    def __init__(self, dimensions: Sequence[int], capacity: float) -> None:
        self.tensor = EntropyTensor(dimensions)
        self.capacity = capacity
        self.efficiency = 0.0
        self.redundancy = 0.0

    def information_content(self) -> float:
        """Entropy of the tensor; also updates efficiency and redundancy."""
        entropy = self.tensor.entropy()
        size = len(self.tensor.data)
        max_entropy = math.log2(size) if size > 0 else -math.inf
        if max_entropy > 0:
            self.efficiency = entropy / max_entropy
            self.redundancy = 1.0 - self.efficiency
        return entropy

    def channel_capacity(self) -> float:
        """Information content, bounded by the capacity when one is set."""
        content = self.information_content()
        if self.capacity > 0:
            return min(content, self.capacity)
        return content

    def compression_ratio(self) -> float:
        """Number of elements per bit of information; 1.0 when there is none."""
        content = self.information_content()
        if content > 0:
            return len(self.tensor.data) / content
        return 1.0

    def estimate_complexity(self) -> float:
        """Entropy times the standard deviation of the data; NaN for empty data."""
        entropy = self.tensor.entropy()
        return entropy * math.sqrt(self._variance())

    def _variance(self) -> float:
        data = self.tensor.data
        if not data:
            return math.nan
        mean = sum(data) / len(data)
        return sum((value - mean) ** 2 for value in data) / len(data)