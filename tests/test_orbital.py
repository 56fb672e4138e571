from dataclasses import replace

import pytest

from elderframe.gravitational import Vector3D
from elderframe.orbital import (
    CelestialBody,
    ConservationLaws,
    OrbitalMechanics,
    PerturbationAnalyzer,
    ResonanceAnalyzer,
    TrajectoryCalculator,
)


def test_orbital_period_follows_kepler_scaling():
    near = OrbitalMechanics(position=Vector3D(1e7, 0, 0))
    far = OrbitalMechanics(position=Vector3D(0, 4e7, 0))
    assert far.orbital_period(6e24) / near.orbital_period(6e24) == pytest.approx(8.0)
    assert near.orbital_period(4 * 6e24) == pytest.approx(near.orbital_period(6e24) / 2)


def test_single_body_kinetic_energy():
    laws = ConservationLaws([CelestialBody(2.0, Vector3D(), Vector3D(3, 0, 0))])
    assert laws.total_energy() == pytest.approx(9.0)


def test_angular_momentum_of_circular_motion():
    laws = ConservationLaws([CelestialBody(1.0, Vector3D(1, 0, 0), Vector3D(0, 1, 0))])
    assert laws.total_angular_momentum() == Vector3D(0.0, 0.0, 1.0)


def test_stationary_pair_has_symmetric_negative_energy():
    a = CelestialBody(1e10, Vector3D(0, 0, 0))
    b = CelestialBody(5e9, Vector3D(3, 4, 0))
    forward = ConservationLaws([a, b]).total_energy()
    assert forward < 0
    assert ConservationLaws([b, a]).total_energy() == pytest.approx(forward)


def test_conservation_detects_change():
    body = CelestialBody(1.0, Vector3D(1, 0, 0), Vector3D(0, 1, 0))
    laws = ConservationLaws([body])
    assert laws.energy_conserved(1e-9)
    assert laws.angular_momentum_conserved(1e-9)
    laws.bodies[0] = replace(body, velocity=Vector3D(0, -2, 0))
    assert not laws.energy_conserved(1e-9)
    assert not laws.angular_momentum_conserved(1e-9)


def test_conservation_copies_body_list():
    bodies = [CelestialBody(1.0, Vector3D(1, 0, 0), Vector3D(0, 1, 0))]
    laws = ConservationLaws(bodies)
    bodies.append(CelestialBody(5.0, Vector3D(), Vector3D(1, 1, 1)))
    assert len(laws.bodies) == 1
    assert laws.energy_conserved(1e-12)


def test_perturbation_points_towards_perturber():
    analyzer = PerturbationAnalyzer(
        primary_body=CelestialBody(1e24, Vector3D()),
        perturbing_body=CelestialBody(1e22, Vector3D(10, 0, 0)),
        test_body=CelestialBody(1.0, Vector3D(5, 0, 0)),
        time_step=1.0,
    )
    acceleration = analyzer.perturbation()
    assert acceleration.x > 0
    assert acceleration.y == 0 and acceleration.z == 0


def test_perturbation_of_coincident_bodies_raises():
    analyzer = PerturbationAnalyzer(
        primary_body=CelestialBody(1e24, Vector3D()),
        perturbing_body=CelestialBody(1e22, Vector3D()),
        test_body=CelestialBody(1.0, Vector3D(5, 0, 0)),
        time_step=1.0,
    )
    with pytest.raises(ValueError):
        analyzer.perturbation()


def test_evolve_without_perturbing_mass_is_straight_line():
    analyzer = PerturbationAnalyzer(
        primary_body=CelestialBody(1e24, Vector3D()),
        perturbing_body=CelestialBody(0.0, Vector3D(10, 0, 0)),
        test_body=CelestialBody(1.0, Vector3D(1, 0, 0), Vector3D(0, 1, 0)),
        time_step=0.5,
    )
    trajectory = analyzer.evolve(2.0)
    assert trajectory == [Vector3D(1, 0.5 * k, 0) for k in range(4)]


def test_resonance_detected_at_one_to_two():
    analyzer = ResonanceAnalyzer(tolerance=1e-6)
    outer = 1e7
    analyzer.add_body("inner", 0.0, outer * 0.5 ** (2 / 3), 0.0)
    analyzer.add_body("outer", 0.0, outer, 0.0)
    found = analyzer.detect()
    assert len(found) == 1
    assert found[0].body1 == "inner" and found[0].body2 == "outer"
    assert found[0].ratio == (1, 2)
    assert found[0].type == "mean_motion"
    assert found[0].strength == 0.0


def test_resonance_strength_uses_masses_and_eccentricities():
    analyzer = ResonanceAnalyzer(tolerance=1e-6)
    outer = 1e7
    analyzer.add_body("inner", 1e24, outer * 0.5 ** (2 / 3), 0.3)
    analyzer.add_body("outer", 1e24, outer, 0.4)
    (resonance,) = analyzer.detect()
    assert resonance.strength == pytest.approx(0.1)


def test_no_resonance_for_equal_periods():
    analyzer = ResonanceAnalyzer(tolerance=1e-3)
    analyzer.add_body("a", 0.0, 1e7, 0.1)
    analyzer.add_body("b", 0.0, 1e7, 0.1)
    assert analyzer.detect() == []
    assert analyzer.bodies[0].period == analyzer.bodies[1].period


def test_trajectory_steps_at_constant_velocity():
    calculator = TrajectoryCalculator(
        OrbitalMechanics(position=Vector3D(), velocity=Vector3D(1, 2, 0)), 0.25
    )
    trajectory = calculator.compute(1.0)
    assert trajectory == [Vector3D(0.25 * k, 0.5 * k, 0.0) for k in range(4)]


def test_trajectory_rejects_non_positive_step():
    calculator = TrajectoryCalculator(OrbitalMechanics(), 0.0)
    with pytest.raises(ValueError):
        calculator.compute(1.0)