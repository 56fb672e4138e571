import math

import pytest

from elderframe.hierarchical_loss import CrossLevelLoss, ElderMentorLoss, MentorEruditeLoss


def _only(cls, keep, **names):
    weights = {name: 0.0 for name in names}
    weights[keep] = 1.0
    return cls(**weights)


CROSS = dict(information_flow=0, hierarchy_integrity=0, causal_consistency=0, temporal_coherence=0)
ELDER = dict(coordination_weight=0, alignment_weight=0, efficiency_weight=0, stability_weight=0)
ERUDITE = dict(supervision_weight=0, specialization_weight=0, convergence_weight=0, diversity_weight=0)


def test_cross_level_default_weights():
    loss = CrossLevelLoss()
    assert (loss.information_flow, loss.hierarchy_integrity) == (1.0, 0.9)
    assert (loss.causal_consistency, loss.temporal_coherence) == (0.8, 0.7)


def test_cross_level_identical_states_only_information_flow_remains():
    state = [0.2, 0.8]
    full = CrossLevelLoss().compute_loss(state, [state], [state])
    no_flow = CrossLevelLoss(information_flow=0.0).compute_loss(state, [state], [state])
    assert no_flow == pytest.approx(0.0)
    assert full > 0


def test_cross_level_weight_scales_loss():
    elder, mentors, erudites = [0.3, 0.6], [[0.2, 0.5]], [[0.1, 0.4]]
    single = CrossLevelLoss(**{**CROSS, "information_flow": 1.0}).compute_loss(elder, mentors, erudites)
    double = CrossLevelLoss(**{**CROSS, "information_flow": 2.0}).compute_loss(elder, mentors, erudites)
    assert double == pytest.approx(2 * single)


def test_cross_level_integrity_penalises_stronger_mentor():
    loss = _only(CrossLevelLoss, "hierarchy_integrity", **CROSS)
    assert loss.compute_loss([1.0, 0.0], [[2.0, 0.0]], [[1.0, 0.0]]) == pytest.approx(1.0)
    assert loss.compute_loss([2.0, 0.0], [[1.0, 0.0]], [[1.0, 0.0]]) == pytest.approx(0.0)


def test_cross_level_orthogonal_elder_gives_infinite_loss():
    result = CrossLevelLoss().compute_loss([1.0, 0.0], [[0.0, 1.0]], [[0.0, 1.0]])
    assert result == math.inf


def test_cross_level_no_mentors_is_nan():
    result = CrossLevelLoss().compute_loss([0.5, 0.5], [], [[0.5, 0.5]])
    assert result == pytest.approx(float("nan"), nan_ok=True)


def test_elder_mentor_identical_states_leave_only_efficiency():
    loss = ElderMentorLoss(efficiency_weight=0.0)
    assert loss.compute_loss([1.0, 1.0], [[1.0, 1.0], [1.0, 1.0]]) == pytest.approx(0.0)


def test_elder_mentor_efficiency_is_mean_energy():
    loss = _only(ElderMentorLoss, "efficiency_weight", **ELDER)
    assert loss.compute_loss([1.0, 1.0], [[1.0, 1.0]]) == pytest.approx(2.0)


def test_elder_mentor_stability_is_standard_deviation():
    loss = _only(ElderMentorLoss, "stability_weight", **ELDER)
    assert loss.compute_loss([1.0, 3.0], [[0.0, 0.0]]) == pytest.approx(1.0)


def test_elder_mentor_invariant_under_mentor_order():
    elder = [0.5, -1.0, 2.0]
    mentors = [[1.0, 0.0, 0.0], [0.0, 2.0, 1.0], [3.0, -1.0, 0.5]]
    loss = ElderMentorLoss()
    assert loss.compute_loss(elder, mentors) == pytest.approx(
        loss.compute_loss(elder, list(reversed(mentors)))
    )


def test_mentor_erudite_perfect_single_erudite_is_zero():
    state = [0.3, 0.7]
    assert MentorEruditeLoss().compute_loss(state, [state], [state]) == pytest.approx(0.0)


def test_mentor_erudite_diversity_of_identical_erudites():
    loss = _only(MentorEruditeLoss, "diversity_weight", **ERUDITE)
    assert loss.compute_loss([0.0, 0.0], [[1.0, 2.0], [1.0, 2.0]], []) == pytest.approx(0.5)
    assert loss.compute_loss([0.0, 0.0], [[1.0, 0.0], [0.0, 1.0]], []) == pytest.approx(0.0)


def test_mentor_erudite_convergence_zero_for_equal_erudites():
    loss = _only(MentorEruditeLoss, "convergence_weight", **ERUDITE)
    assert loss.compute_loss([9.0], [[1.0, 2.0], [1.0, 2.0]], []) == pytest.approx(0.0)
    assert loss.compute_loss([9.0], [[1.0, 2.0], [3.0, 2.0]], []) > 0


def test_mentor_erudite_supervision_grows_with_distance():
    loss = _only(MentorEruditeLoss, "supervision_weight", **ERUDITE)
    near = loss.compute_loss([0.0, 0.0], [[1.0, 0.0]], [])
    far = loss.compute_loss([0.0, 0.0], [[2.0, 0.0]], [])
    assert far == pytest.approx(2 * near)


def test_mentor_erudite_empty_target_is_nan():
    result = MentorEruditeLoss().compute_loss([1.0], [[1.0]], [[]])
    assert result == pytest.approx(float("nan"), nan_ok=True)