"""Pointwise regression losses with a weight."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else math.nan


@dataclass
class ElderLossFunction:
    """A weighted mean squared ("mse") or mean absolute ("mae") error.

    Any other type name is treated as "mse". An empty prediction gives NaN.
    """

    type: str = "mse"
    weight: float = 1.0
    regularization: float = 0.0

    def compute_loss(
        self, predicted: Sequence[float], actual: Sequence[float]
    ) -> float:
        """The weighted loss of *predicted* against *actual*."""
        if len(actual) < len(predicted):
            raise ValueError(
                f"need at least {len(predicted)} actual values, got {len(actual)}"
            )
        pairs = zip(predicted, actual)
        if self.type == "mae":
            loss = _mean([abs(p - a) for p, a in pairs])
        else:
            loss = _mean([(p - a) ** 2 for p, a in pairs])
        return loss * self.weight