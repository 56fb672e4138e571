"""Losses that penalise slow convergence and unstable trajectories."""

from __future__ import annotations

import math
from collections.abc import Sequence

_MAX_PHASE_HISTORY = 1000
_LYAPUNOV_MIN_POINTS = 10
_RATE_EPSILON = 1e-12


def _fdiv(a: float, b: float) -> float:
    """IEEE division: a zero divisor gives an infinity or NaN instead of raising."""
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.inf if a > 0 else -math.inf
    return a / b


def _distance(first: Sequence[float], second: Sequence[float]) -> float:
    """Euclidean distance over the common length."""
    return math.sqrt(sum((a - b) ** 2 for a, b in zip(first, second)))


class ConvergenceLoss:
    """Penalises a convergence rate away from a target, instability and large gradients."""

    def __init__(self, target_rate: float, tolerance: float, history_length: int) -> None:
        self.target_rate = target_rate
        self.tolerance = tolerance
        self.history_length = history_length
        self.history: list[float] = []

    def compute_loss(self, current_value: float, gradient: Sequence[float]) -> float:
        """Record *current_value* and return the rate, stability and gradient penalties."""
        self._record(current_value)
        return self._rate_loss() + self._stability_loss() + self._gradient_loss(gradient)

    def _record(self, value: float) -> None:
        self.history.append(value)
        if len(self.history) > self.history_length:
            del self.history[0]

    def _last_three(self) -> tuple[float, float, float]:
        earlier, previous, recent = self.history[-3:]
        return recent, previous, earlier

    def _rate_loss(self) -> float:
        if len(self.history) < 3:
            return 0.0
        recent, previous, earlier = self._last_three()
        actual = _fdiv(abs(recent - previous), abs(previous - earlier))
        difference = abs(actual - self.target_rate)
        return difference * difference

    def _stability_loss(self) -> float:
        if len(self.history) < 2:
            return 0.0
        mean = sum(self.history) / len(self.history)
        variance = sum((v - mean) ** 2 for v in self.history) / len(self.history)
        bound = self.tolerance * self.tolerance
        return variance - bound if variance > bound else 0.0

    @staticmethod
    def _gradient_loss(gradient: Sequence[float]) -> float:
        norm = math.sqrt(sum(g * g for g in gradient))
        return (norm - 1.0) ** 2 if norm > 1.0 else 0.0

    def is_converged(self) -> bool:
        """Whether the last two recorded values differ by less than the tolerance."""
        if len(self.history) < 2:
            return False
        return abs(self.history[-1] - self.history[-2]) < self.tolerance

    def convergence_rate(self) -> float:
        """Ratio of the last step to the one before; 0.0 without enough history."""
        if len(self.history) < 3:
            return 0.0
        recent, previous, earlier = self._last_three()
        if abs(previous - earlier) < _RATE_EPSILON:
            return 0.0
        return abs(recent - previous) / abs(previous - earlier)


class StabilityLoss:
    """Penalises chaotic divergence, excess energy and escape from the attractor."""

    def __init__(self, lyapunov_threshold: float, energy_bound: float) -> None:
        self.lyapunov_threshold = lyapunov_threshold
        self.energy_bound = energy_bound
        self.phase_space: list[list[float]] = []
        self.energy_history: list[float] = []

    def compute_loss(self, state: Sequence[float], velocity: Sequence[float]) -> float:
        """Record a phase-space point and return the Lyapunov, energy and phase penalties."""
        self._record(state, velocity)
        return self._lyapunov_loss() + self._energy_loss() + self._phase_loss()

    def _record(self, state: Sequence[float], velocity: Sequence[float]) -> None:
        self.phase_space.append([*state, *velocity])
        self.energy_history.append(self._energy(state, velocity))
        if len(self.phase_space) > _MAX_PHASE_HISTORY:
            del self.phase_space[0]
        if len(self.energy_history) > _MAX_PHASE_HISTORY:
            del self.energy_history[0]

    @staticmethod
    def _energy(state: Sequence[float], velocity: Sequence[float]) -> float:
        kinetic = 0.5 * sum(v * v for v in velocity)
        potential = 0.5 * sum(s * s for s in state)
        return kinetic + potential

    def _lyapunov_loss(self) -> float:
        if len(self.phase_space) < _LYAPUNOV_MIN_POINTS:
            return 0.0
        exponent = self._lyapunov_exponent()
        if exponent > self.lyapunov_threshold:
            return (exponent - self.lyapunov_threshold) ** 2
        return 0.0

    def _lyapunov_exponent(self) -> float:
        logs = [
            math.log(d)
            for d in (
                _distance(current, previous)
                for previous, current in zip(self.phase_space, self.phase_space[1:])
            )
            if d > 0
        ]
        return sum(logs) / len(logs) if logs else 0.0

    def _energy_loss(self) -> float:
        if not self.energy_history:
            return 0.0
        current = self.energy_history[-1]
        if current > self.energy_bound:
            return (current - self.energy_bound) ** 2
        if len(self.energy_history) > 1:
            steps = [
                (b - a) ** 2
                for a, b in zip(self.energy_history, self.energy_history[1:])
            ]
            return sum(steps) / len(steps)
        return 0.0

    def _phase_loss(self) -> float:
        if len(self.phase_space) < 3:
            return 0.0
        centroid = self._centroid()
        radius = max(_distance(point, centroid) for point in self.phase_space)
        current = _distance(self.phase_space[-1], centroid)
        if current > radius * 2:
            return (current - radius * 2) ** 2
        return 0.0

    def _centroid(self) -> list[float]:
        if not self.phase_space:
            return []
        dimension = len(self.phase_space[0])
        centroid = [0.0] * dimension
        for point in self.phase_space:
            for i, value in enumerate(point[:dimension]):
                centroid[i] += value
        return [value / len(self.phase_space) for value in centroid]