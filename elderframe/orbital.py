"""Orbital mechanics: periods, conservation laws, perturbations, resonances and trajectories."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from itertools import combinations

from .gravitational import Vector3D

G = 6.67430e-11
_KEPLER_G = 6.67e-11
_CENTRAL_MASS = 1e24
_SIMPLE_RATIOS: tuple[tuple[int, int], ...] = (
    (1, 2),
    (2, 3),
    (3, 4),
    (1, 3),
    (2, 5),
    (3, 5),
)


def _add(a: Vector3D, b: Vector3D) -> Vector3D:
    return Vector3D(a.x + b.x, a.y + b.y, a.z + b.z)


def _sub(a: Vector3D, b: Vector3D) -> Vector3D:
    return Vector3D(a.x - b.x, a.y - b.y, a.z - b.z)


def _scale(v: Vector3D, scalar: float) -> Vector3D:
    return Vector3D(v.x * scalar, v.y * scalar, v.z * scalar)


def _cross(a: Vector3D, b: Vector3D) -> Vector3D:
    return Vector3D(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


@dataclass(frozen=True)
class CelestialBody:
    """A point mass with position and velocity."""

    mass: float
    position: Vector3D = field(default_factory=Vector3D)
    velocity: Vector3D = field(default_factory=Vector3D)


@dataclass(frozen=True)
class OrbitalMechanics:
    """A body orbiting a central mass at the origin."""

    position: Vector3D = field(default_factory=Vector3D)
    velocity: Vector3D = field(default_factory=Vector3D)
    mass: float = 0.0

    def orbital_period(self, central_mass: float) -> float:
        """Kepler period of a circular orbit at the body's distance from the origin."""
        distance = self.position.magnitude()
        return 2 * math.pi * math.sqrt(distance**3 / (_KEPLER_G * central_mass))


class ConservationLaws:
    """Energy and angular momentum of a set of bodies, checked against their initial values."""

    def __init__(self, bodies: Sequence[CelestialBody]) -> None:
        self.bodies: list[CelestialBody] = list(bodies)
        self.g = G
        self.initial_energy = self.total_energy()
        self.initial_angular_momentum = self.total_angular_momentum()

    def total_energy(self) -> float:
        """Kinetic plus pairwise gravitational potential energy."""
        kinetic = sum(
            0.5 * body.mass * body.velocity.magnitude() ** 2 for body in self.bodies
        )
        potential = 0.0
        for first, second in combinations(self.bodies, 2):
            r = _sub(first.position, second.position).magnitude()
            if r > 0:
                potential -= self.g * first.mass * second.mass / r
        return kinetic + potential

    def total_angular_momentum(self) -> Vector3D:
        """Sum of r x (m v) over the bodies."""
        total = Vector3D()
        for body in self.bodies:
            total = _add(total, _cross(body.position, _scale(body.velocity, body.mass)))
        return total

    def energy_conserved(self, tolerance: float) -> bool:
        """Whether the energy is within *tolerance* of its initial value."""
        return abs(self.total_energy() - self.initial_energy) < tolerance

    def angular_momentum_conserved(self, tolerance: float) -> bool:
        """Whether the angular momentum is within *tolerance* of its initial value."""
        difference = _sub(self.total_angular_momentum(), self.initial_angular_momentum)
        return difference.magnitude() < tolerance


@dataclass
class PerturbationAnalyzer:
    """The pull of a third body on a test body orbiting a primary."""

    primary_body: CelestialBody
    perturbing_body: CelestialBody
    test_body: CelestialBody
    time_step: float

    def perturbation(self) -> Vector3D:
        """Direct plus indirect acceleration of the test body due to the perturbing body."""
        to_test = _sub(self.test_body.position, self.perturbing_body.position)
        to_perturber = _sub(self.perturbing_body.position, self.primary_body.position)
        test_distance = to_test.magnitude()
        perturber_distance = to_perturber.magnitude()
        if test_distance == 0 or perturber_distance == 0:
            raise ValueError("the perturbing body coincides with the test or primary body")
        gm = G * self.perturbing_body.mass
        direct = _scale(to_test, -gm / test_distance**3)
        indirect = _scale(to_perturber, gm / perturber_distance**3)
        return _add(direct, indirect)

    def evolve(self, duration: float) -> list[Vector3D]:
        """Positions of the test body, one per step, under the perturbation at its start."""
        if self.time_step == 0:
            raise ValueError("time step must be non-zero")
        steps = int(duration / self.time_step)
        if steps <= 0:
            return []
        acceleration = self.perturbation()
        position = self.test_body.position
        velocity = self.test_body.velocity
        trajectory: list[Vector3D] = []
        for _ in range(steps):
            trajectory.append(position)
            velocity = _add(velocity, _scale(acceleration, self.time_step))
            position = _add(position, _scale(velocity, self.time_step))
        return trajectory


@dataclass(frozen=True)
class OrbitalBody:
    """A body on an elliptic orbit around the central mass."""

    id: str
    mass: float
    semi_major_axis: float
    period: float
    eccentricity: float


@dataclass(frozen=True)
class Resonance:
    """A mean-motion resonance between two bodies."""

    body1: str
    body2: str
    ratio: tuple[int, int]
    strength: float
    type: str = "mean_motion"


class ResonanceAnalyzer:
    """Finds pairs of bodies whose periods stand in a simple ratio."""

    def __init__(self, tolerance: float) -> None:
        self.tolerance = tolerance
        self.bodies: list[OrbitalBody] = []
        self.resonances: dict[str, Resonance] = {}

    def add_body(
        self, body_id: str, mass: float, semi_major_axis: float, eccentricity: float
    ) -> None:
        """Add a body; its period follows from Kepler's third law."""
        period = 2 * math.pi * math.sqrt(
            semi_major_axis**3 / (G * (_CENTRAL_MASS + mass))
        )
        self.bodies.append(
            OrbitalBody(body_id, mass, semi_major_axis, period, eccentricity)
        )

    def detect(self) -> list[Resonance]:
        """Resonances between every pair of bodies, in the order the bodies were added."""
        found: list[Resonance] = []
        for first, second in combinations(self.bodies, 2):
            resonance = self._check(first, second)
            if resonance is not None:
                found.append(resonance)
        return found

    def _check(self, first: OrbitalBody, second: OrbitalBody) -> Resonance | None:
        ratio = first.period / second.period
        for numerator, denominator in _SIMPLE_RATIOS:
            if abs(ratio - numerator / denominator) < self.tolerance:
                mass_ratio = (first.mass + second.mass) / _CENTRAL_MASS
                eccentricity = math.hypot(first.eccentricity, second.eccentricity)
                return Resonance(
                    body1=first.id,
                    body2=second.id,
                    ratio=(numerator, denominator),
                    strength=mass_ratio * eccentricity * 0.1,
                )
        return None


@dataclass
class TrajectoryCalculator:
    """Straight-line propagation of a body at constant velocity."""

    initial_conditions: OrbitalMechanics
    time_step: float

    def compute(self, duration: float) -> list[Vector3D]:
        """Positions at times 0, dt, 2dt, ... strictly before *duration*."""
        if self.time_step <= 0 and duration > 0:
            raise ValueError("time step must be positive")
        position = self.initial_conditions.position
        velocity = self.initial_conditions.velocity
        trajectory: list[Vector3D] = []
        t = 0.0
        while t < duration:
            trajectory.append(position)
            position = _add(position, _scale(velocity, self.time_step))
            t += self.time_step
        return trajectory