import pytest

from elderframe.hierarchical_tensor import (
    ElderTensorOperations,
    HierarchicalTensor,
)


def make_tree():
    ht = HierarchicalTensor(3, [1, 2, 4])
    ht.add_tensor(0, "root", [1.0, 2.0], [2])
    ht.add_tensor(1, "mid", [10.0, 20.0], [2])
    ht.add_tensor(2, "leaf", [5.0, 5.0], [2])
    ht.establish_hierarchy("root", 0, "mid", 1)
    ht.establish_hierarchy("mid", 1, "leaf", 2)
    return ht


def test_levels_created_for_each_index():
    ht = HierarchicalTensor(4, [1, 2])
    assert sorted(ht.levels) == [0, 1, 2, 3]
    assert ht.structure == [1, 2]


def test_add_tensor_copies_data():
    ht = HierarchicalTensor(2, [])
    data = [1.0, 2.0]
    ht.add_tensor(0, "a", data, [2])
    data[0] = 99.0
    assert ht.levels[0].tensors["a"].data == [1.0, 2.0]
    assert ht.levels[0].tensors["a"].level == 0


def test_add_tensor_out_of_range_raises():
    ht = HierarchicalTensor(2, [])
    with pytest.raises(ValueError):
        ht.add_tensor(2, "a", [1.0], [1])
    with pytest.raises(ValueError):
        ht.add_tensor(-1, "a", [1.0], [1])


def test_establish_hierarchy_links_both_sides():
    ht = make_tree()
    assert ht.levels[0].tensors["root"].children == ["mid"]
    assert ht.levels[1].tensors["mid"].parent == "root"
    assert ht.levels[0].child_refs["root"] == ["mid"]
    assert ht.levels[2].parent_refs["leaf"] == "mid"


def test_establish_hierarchy_requires_parent_above_child():
    ht = make_tree()
    with pytest.raises(ValueError):
        ht.establish_hierarchy("mid", 1, "root", 0)
    with pytest.raises(ValueError):
        ht.establish_hierarchy("mid", 1, "mid", 1)


def test_establish_hierarchy_missing_tensor_raises():
    ht = make_tree()
    with pytest.raises(KeyError):
        ht.establish_hierarchy("nope", 0, "mid", 1)
    with pytest.raises(KeyError):
        ht.establish_hierarchy("root", 0, "nope", 1)


def test_propagate_down_with_zero_source_leaves_children():
    ht = HierarchicalTensor(2, [])
    ht.add_tensor(0, "p", [0.0, 0.0], [2])
    ht.add_tensor(1, "c", [3.0, 4.0], [2])
    ht.establish_hierarchy("p", 0, "c", 1)
    ht.propagate_down(0, "p")
    assert ht.levels[1].tensors["c"].data == [3.0, 4.0]


def test_propagate_down_adds_proportionally_and_recurses():
    ht = make_tree()
    before_mid = list(ht.levels[1].tensors["mid"].data)
    before_leaf = list(ht.levels[2].tensors["leaf"].data)
    ht.propagate_down(0, "root")
    mid = ht.levels[1].tensors["mid"].data
    deltas = [a - b for a, b in zip(mid, before_mid)]
    root = ht.levels[0].tensors["root"].data
    assert deltas[0] > 0
    assert deltas[1] / deltas[0] == pytest.approx(root[1] / root[0])
    assert ht.levels[2].tensors["leaf"].data != before_leaf
    assert ht.levels[0].tensors["root"].data == [1.0, 2.0]


def test_propagate_down_from_last_level_is_noop():
    ht = make_tree()
    ht.propagate_down(2, "leaf")
    assert ht.levels[2].tensors["leaf"].data == [5.0, 5.0]


def test_propagate_up_moves_parent_towards_child():
    ht = make_tree()
    ht.propagate_up(2, "leaf")
    mid = ht.levels[1].tensors["mid"].data
    assert 5.0 < mid[0] < 10.0
    assert 5.0 < mid[1] < 20.0
    root = ht.levels[0].tensors["root"].data
    assert root[0] > 1.0 and root[1] > 2.0
    assert ht.levels[2].tensors["leaf"].data == [5.0, 5.0]


def test_propagate_up_with_equal_values_changes_nothing():
    ht = HierarchicalTensor(2, [])
    ht.add_tensor(0, "p", [2.0, 3.0], [2])
    ht.add_tensor(1, "c", [2.0, 3.0], [2])
    ht.establish_hierarchy("p", 0, "c", 1)
    ht.propagate_up(1, "c")
    assert ht.levels[0].tensors["p"].data == pytest.approx([2.0, 3.0])


def test_level_entropy_of_empty_level_is_zero():
    ht = HierarchicalTensor(2, [])
    assert ht.level_entropy(0) == 0.0
    assert ht.level_entropy(7) == 0.0


def test_level_entropy_ignores_non_positive_data():
    ht = HierarchicalTensor(1, [])
    ht.add_tensor(0, "a", [0.0, -1.0], [2])
    assert ht.level_entropy(0) == 0.0


def test_level_entropy_of_single_point_mass():
    ht = HierarchicalTensor(1, [])
    ht.add_tensor(0, "a", [5.0], [1])
    assert ht.level_entropy(0) == pytest.approx(-0.693147)


def test_level_entropy_is_mean_over_tensors():
    ht = HierarchicalTensor(3, [])
    ht.add_tensor(0, "a", [1.0, 3.0], [2])
    ht.add_tensor(1, "b", [2.0, 2.0, 4.0], [3])
    ht.add_tensor(2, "a", [1.0, 3.0], [2])
    ht.add_tensor(2, "b", [2.0, 2.0, 4.0], [3])
    expected = (ht.level_entropy(0) + ht.level_entropy(1)) / 2
    assert ht.level_entropy(2) == pytest.approx(expected)


def test_operations_registered():
    ops = ElderTensorOperations()
    assert set(ops.operations) == {"coordination", "supervision", "aggregation", "synthesis"}
    assert ops.operations["synthesis"].output_level == 0
    assert ops.operations["coordination"].input_levels == (0, 1)


def test_unknown_operation_raises():
    with pytest.raises(KeyError):
        ElderTensorOperations().apply_operation("nope", HierarchicalTensor(3, []), "x")


def test_coordination_with_zero_elder_leaves_mentor():
    ht = HierarchicalTensor(3, [])
    ht.add_tensor(0, "x", [0.0, 0.0, 0.0], [3])
    ht.add_tensor(1, "x", [1.0, 2.0], [2])
    ElderTensorOperations().apply_operation("coordination", ht, "x")
    assert ht.levels[1].tensors["x"].data == pytest.approx([1.0, 2.0])


def test_coordination_raises_mentor_and_keeps_elder():
    ht = HierarchicalTensor(3, [])
    ht.add_tensor(0, "x", [1.0, 1.0], [2])
    ht.add_tensor(1, "x", [1.0, 1.0], [2])
    ElderTensorOperations().apply_operation("coordination", ht, "x")
    mentor = ht.levels[1].tensors["x"].data
    assert all(value > 1.0 for value in mentor)
    assert ht.levels[0].tensors["x"].data == [1.0, 1.0]


def test_coordination_without_elder_changes_nothing():
    ht = HierarchicalTensor(3, [])
    ht.add_tensor(1, "x", [4.0, 5.0], [2])
    ElderTensorOperations().apply_operation("coordination", ht, "x")
    assert ht.levels[1].tensors["x"].data == [4.0, 5.0]


def test_supervision_raises_erudite():
    ht = HierarchicalTensor(3, [])
    ht.add_tensor(1, "x", [2.0], [1])
    ht.add_tensor(2, "x", [1.0, 1.0], [2])
    ElderTensorOperations().apply_operation("supervision", ht, "x")
    erudite = ht.levels[2].tensors["x"].data
    assert erudite[0] > 1.0
    assert erudite[1] == pytest.approx(1.0)


def test_aggregation_of_single_erudite_copies_it_to_mentor():
    ht = HierarchicalTensor(3, [])
    ht.add_tensor(1, "x", [0.0, 0.0, 0.0], [3])
    ht.add_tensor(2, "x", [1.0, 2.0, 3.0], [3])
    ElderTensorOperations().apply_operation("aggregation", ht, "x")
    assert ht.levels[1].tensors["x"].data == pytest.approx([1.0, 2.0, 3.0])


def test_synthesis_of_single_mentor_copies_into_elder():
    ht = HierarchicalTensor(3, [])
    ht.add_tensor(0, "x", [0.0, 0.0, 7.0], [3])
    ht.add_tensor(1, "x", [0.2, 0.8], [2])
    ElderTensorOperations().apply_operation("synthesis", ht, "x")
    assert ht.levels[0].tensors["x"].data == pytest.approx([0.2, 0.8, 7.0])