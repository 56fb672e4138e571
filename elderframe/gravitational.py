"""Gravitational fields: generation, eigenvalues, coupling, stability and strata."""

from __future__ import annotations

import cmath
import math
from collections.abc import Sequence
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Vector3D:
    """A vector in three dimensions."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def magnitude(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)


@dataclass
class Field:
    """A gravitational field with strength, unit direction, range and eigenvalue."""

    strength: float
    direction: Vector3D
    range: float
    eigenvalue: complex = 0j


@dataclass
class FieldGenerator:
    """Creates fields whose strength scales with mass, capped in range."""

    base_strength: float
    max_range: float

    def generate_field(self, position: Vector3D, mass: float) -> Field:
        """A field for a mass at *position*, pointing away from the origin."""
        strength = self.base_strength * mass
        return Field(
            strength=strength,
            direction=self._direction(position),
            range=min(self.max_range, strength * 10.0),
            eigenvalue=complex(strength, 0),
        )

    @staticmethod
    def _direction(position: Vector3D) -> Vector3D:
        length = position.magnitude()
        if length == 0:
            return Vector3D(0.0, 0.0, 1.0)
        return Vector3D(position.x / length, position.y / length, position.z / length)


@dataclass
class EigenvalueCalculator:
    """Computes field eigenvalues from strength and direction."""

    precision: float = 0.0
    max_iter: int = 0

    def eigenvalue(self, field: Field) -> complex:
        """|strength| plus the direction's z component as imaginary part."""
        magnitude = cmath.sqrt(complex(field.strength * field.strength, 0))
        return magnitude + complex(0, field.direction.z)

    def spectrum(self, fields: Sequence[Field]) -> list[complex]:
        """The eigenvalue of each field, in order."""
        return [self.eigenvalue(f) for f in fields]

    def dominant(self, spectrum: Sequence[complex]) -> complex:
        """The first eigenvalue of largest modulus; 0 for an empty spectrum."""
        if not spectrum:
            return 0j
        best = spectrum[0]
        for value in spectrum[1:]:
            if abs(value) > abs(best):
                best = value
        return best


@dataclass
class FieldPhaseCoupling:
    """Couples two fields with a strength and a phase shift."""

    coupling_strength: float
    phase_shift: float
    tensor: list[list[complex]] = field(default_factory=list)

    def coupling(self, first: Field, second: Field) -> complex:
        """Product of the strengths times the coupling, with the phase shift as imaginary part."""
        return complex(
            first.strength * second.strength * self.coupling_strength, self.phase_shift
        )


def _ratio(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.inf if a > 0 else -math.inf
    return a / b


@dataclass
class StabilityAnalyzer:
    """Scores how well a set of fields hold within their range."""

    fields: list[Field] = field(default_factory=list)
    threshold: float = 0.0

    def analyze(self) -> float:
        """Mean of min(1, strength / range); NaN when there are no fields."""
        if not self.fields:
            return math.nan
        total = 0.0
        for f in self.fields:
            ratio = _ratio(f.strength, f.range)
            total += ratio if math.isnan(ratio) else min(1.0, ratio)
        return total / len(self.fields)


@dataclass
class StratumLayer:
    """One layer of a stratification."""

    level: int
    strength: float
    entities: list[str] = field(default_factory=list)


@dataclass
class GravitationalStratification:
    """Layers of gravitational strength stacked by level."""

    layers: list[StratumLayer] = field(default_factory=list)
    depth: int = 0

    def add_layer(self, level: int, strength: float) -> None:
        """Append a layer and deepen the stratification by one."""
        self.layers.append(StratumLayer(level, strength))
        self.depth += 1