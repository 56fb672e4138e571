"""Oscillating phase fields, their coherence and linear coupling between them."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from itertools import combinations


@dataclass
class PhaseField:
    """A field oscillating at a frequency and amplitude, with its current phase."""

    id: str
    phase: complex
    frequency: float
    amplitude: float
    coherence: float = 1.0

    def value_at(self, t: float) -> complex:
        """amplitude * e^(i * frequency * t)."""
        angle = self.frequency * t
        return complex(self.amplitude * math.cos(angle), self.amplitude * math.sin(angle))


class PhaseFieldSystem:
    """A set of phase fields with a global phase that is their mean."""

    def __init__(self) -> None:
        self.fields: dict[str, PhaseField] = {}
        self.couplings: dict[str, list[str]] = {}
        self.global_phase: complex = 0j

    def add_field(
        self, field_id: str, frequency: float, amplitude: float, initial_phase: complex
    ) -> None:
        """Add or replace the field called *field_id*."""
        self.fields[field_id] = PhaseField(field_id, initial_phase, frequency, amplitude)

    def evolve(self, delta_time: float) -> None:
        """Set each field's phase to its oscillation at *delta_time* and update the global phase."""
        for f in self.fields.values():
            f.phase = f.value_at(delta_time)
        if self.fields:
            self.global_phase = sum(f.phase for f in self.fields.values()) / len(
                self.fields
            )

    def coherence(self) -> float:
        """Mean over field pairs of |Re(phase difference)|; 1.0 with fewer than two fields."""
        if len(self.fields) < 2:
            return 1.0
        differences = [
            abs((a.phase - b.phase).real)
            for a, b in combinations(self.fields.values(), 2)
        ]
        return sum(differences) / len(differences)


class CouplingMatrix:
    """Directed coupling strengths between named fields."""

    def __init__(self, fields: Sequence[str]) -> None:
        self.fields = list(fields)
        self.couplings: dict[str, dict[str, float]] = {f: {} for f in self.fields}

    def set_coupling(self, source: str, target: str, strength: float) -> None:
        """Set how strongly *source* is driven by *target*."""
        self.couplings.setdefault(source, {})[target] = strength

    def coupled_evolution(
        self, fields: Mapping[str, PhaseField], delta_time: float
    ) -> dict[str, complex]:
        """New phase of each matrix field: its own plus strength * dt times each coupled phase.

        A matrix field missing from *fields* starts from a zero phase; missing
        targets are skipped.
        """
        result: dict[str, complex] = {}
        for field_id in self.fields:
            own = fields.get(field_id)
            phase = own.phase if own is not None else 0j
            for target_id, strength in self.couplings.get(field_id, {}).items():
                target = fields.get(target_id)
                if target is not None:
                    phase += complex(strength * delta_time, 0) * target.phase
            result[field_id] = phase
        return result

    def coupling_energy(self, fields: Mapping[str, PhaseField]) -> float:
        """Sum of strength * Re(source * conj(target)) over all couplings between known fields."""
        energy = 0.0
        for source_id, targets in self.couplings.items():
            source = fields.get(source_id)
            if source is None:
                continue
            for target_id, strength in targets.items():
                target = fields.get(target_id)
                if target is not None:
                    energy += strength * (source.phase * target.phase.conjugate()).real
        return energy