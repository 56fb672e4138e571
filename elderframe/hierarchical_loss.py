"""Losses over the states of an elder, its mentors and their erudites."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

State = Sequence[float]


def _fdiv(a: float, b: float) -> float:
    """IEEE division: a zero divisor gives an infinity or NaN instead of raising."""
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.inf if a > 0 else -math.inf
    return a / b


def _mean(values: list[float]) -> float:
    return _fdiv(sum(values), len(values))


def _norm(state: State) -> float:
    return math.sqrt(sum(v * v for v in state))


def _distance(first: State, second: State) -> float:
    """Euclidean distance over the common length."""
    return math.sqrt(sum((a - b) ** 2 for a, b in zip(first, second)))


def _dot(first: State, second: State) -> float:
    return sum(a * b for a, b in zip(first, second))


def _variance(state: State) -> float:
    mean = _fdiv(sum(state), len(state))
    return _fdiv(sum((v - mean) ** 2 for v in state), len(state))


def _entropy(state: State) -> float:
    """-sum v log2 v over the positive entries, without normalising."""
    return -sum(v * math.log2(v) for v in state if v > 0)


@dataclass
class CrossLevelLoss:
    """Loss over information flow, hierarchy, causality and coherence across all levels."""

    information_flow: float = 1.0
    hierarchy_integrity: float = 0.9
    causal_consistency: float = 0.8
    temporal_coherence: float = 0.7

    def compute_loss(
        self,
        elder_state: State,
        mentor_states: Sequence[State],
        erudite_states: Sequence[State],
    ) -> float:
        """Weighted sum of the four cross-level terms."""
        return (
            self.information_flow
            * self._information_flow_loss(elder_state, mentor_states, erudite_states)
            + self.hierarchy_integrity
            * self._integrity_loss(elder_state, mentor_states, erudite_states)
            + self.causal_consistency
            * self._causal_loss(elder_state, mentor_states, erudite_states)
            + self.temporal_coherence
            * self._temporal_loss(elder_state, mentor_states, erudite_states)
        )

    @staticmethod
    def _information_flow_loss(elder, mentors, erudites) -> float:
        mentor_entropy = _mean([_entropy(s) for s in mentors])
        erudite_entropy = _mean([_entropy(s) for s in erudites])
        return abs(_entropy(elder) - mentor_entropy - erudite_entropy)

    @staticmethod
    def _integrity_loss(elder, mentors, erudites) -> float:
        loss = 0.0
        elder_norm = _norm(elder)
        for mentor in mentors:
            mentor_norm = _norm(mentor)
            if mentor_norm > elder_norm:
                loss += (mentor_norm - elder_norm) ** 2
        if erudites:
            average_mentor_norm = _mean([_norm(m) for m in mentors])
            for erudite in erudites:
                erudite_norm = _norm(erudite)
                if erudite_norm > average_mentor_norm:
                    loss += (erudite_norm - average_mentor_norm) ** 2
        return loss

    @staticmethod
    def _causal_loss(elder, mentors, erudites) -> float:
        loss = 0.0
        count = len(mentors)
        for i, mentor in enumerate(mentors):
            elder_influence = abs(_dot(elder, mentor))
            mentor_influence = sum(
                abs(_dot(mentor, erudite))
                for j, erudite in enumerate(erudites)
                if j % count == i
            )
            ratio = _fdiv(mentor_influence, elder_influence)
            if ratio < 0.5 or ratio > 2.0:
                loss += abs(ratio - 1.0)
        return _fdiv(loss, count)

    @staticmethod
    def _temporal_loss(elder, mentors, erudites) -> float:
        elder_variance = _variance(elder)
        mentor_variance = _mean([_variance(s) for s in mentors])
        erudite_variance = _mean([_variance(s) for s in erudites])
        first = _fdiv(mentor_variance, elder_variance)
        second = _fdiv(erudite_variance, mentor_variance)
        return abs(first - 1.0) + abs(second - 1.0)


@dataclass
class ElderMentorLoss:
    """Loss over an elder's coordination of its mentors."""

    coordination_weight: float = 1.0
    alignment_weight: float = 0.8
    efficiency_weight: float = 0.6
    stability_weight: float = 0.9
    hierarchy_levels: int = 3

    def compute_loss(self, elder_state: State, mentor_states: Sequence[State]) -> float:
        """Weighted sum of coordination, alignment, efficiency and stability terms."""
        return (
            self.coordination_weight * self._coordination(elder_state, mentor_states)
            + self.alignment_weight * self._alignment(mentor_states)
            + self.efficiency_weight * self._efficiency(mentor_states)
            + self.stability_weight * self._stability(elder_state)
        )

    @staticmethod
    def _coordination(elder, mentors) -> float:
        return _mean([_distance(elder, m) ** 2 for m in mentors])

    @staticmethod
    def _alignment(mentors) -> float:
        loss = sum(
            _distance(mentors[i], mentors[j])
            for i in range(len(mentors))
            for j in range(i + 1, len(mentors))
        )
        if len(mentors) > 1:
            loss /= len(mentors) * (len(mentors) - 1) // 2
        return loss

    @staticmethod
    def _efficiency(mentors) -> float:
        return _mean([sum(v * v for v in m) for m in mentors])

    @staticmethod
    def _stability(elder) -> float:
        return math.sqrt(_variance(elder))


@dataclass
class MentorEruditeLoss:
    """Loss over a mentor's supervision of its specialised erudites."""

    supervision_weight: float = 1.0
    specialization_weight: float = 0.8
    convergence_weight: float = 0.7
    diversity_weight: float = 0.5

    def compute_loss(
        self,
        mentor_state: State,
        erudite_states: Sequence[State],
        targets: Sequence[State],
    ) -> float:
        """Weighted sum of supervision, specialisation, convergence and diversity terms."""
        return (
            self.supervision_weight * self._supervision(mentor_state, erudite_states)
            + self.specialization_weight * self._specialization(erudite_states, targets)
            + self.convergence_weight * self._convergence(erudite_states)
            + self.diversity_weight * self._diversity(erudite_states)
        )

    @staticmethod
    def _supervision(mentor, erudites) -> float:
        return _mean([_distance(mentor, e) for e in erudites])

    @staticmethod
    def _specialization(erudites, targets) -> float:
        loss = sum(
            _fdiv(sum((p - t) ** 2 for p, t in zip(erudite, target)), min(len(erudite), len(target)))
            for erudite, target in zip(erudites, targets)
        )
        return _fdiv(loss, len(erudites))

    @staticmethod
    def _convergence(erudites) -> float:
        if len(erudites) < 2:
            return 0.0
        dimension = len(erudites[0])
        centroid = [0.0] * dimension
        for state in erudites:
            for i, value in enumerate(state[:dimension]):
                centroid[i] += value
        centroid = [value / len(erudites) for value in centroid]
        return _mean([_distance(s, centroid) ** 2 for s in erudites])

    @staticmethod
    def _diversity(erudites) -> float:
        if len(erudites) < 2:
            return 0.0
        similarities = [
            _cosine(erudites[i], erudites[j])
            for i in range(len(erudites))
            for j in range(i + 1, len(erudites))
        ]
        average = sum(similarities) / len(similarities)
        return max(0.0, average - 0.5)


def _cosine(first: State, second: State) -> float:
    n = min(len(first), len(second))
    a, b = first[:n], second[:n]
    norm_a, norm_b = _norm(a), _norm(b)
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return _dot(a, b) / (norm_a * norm_b)