import pytest

from domino_ai import Bone, ExpectationWeightEvaluator, GameState, LinearPlyManager, TableStateEnumerator


def test_default_linear_ply_manager():
    pm = LinearPlyManager()
    assert pm.get_initial_ply() == 4
    root = GameState.root(TableStateEnumerator(), ExpectationWeightEvaluator(), 4, [Bone(1, 0), Bone(2, 2)], True)
    states = list(root.get_child_states())
    assert pm.get_ply_increases(states) == [2, 2]
    assert pm.get_ply_increases([]) == []


def test_custom_ply_values():
    pm = LinearPlyManager(initial_ply=6, increase=3)
    assert pm.get_initial_ply() == 6
    assert pm.get_ply_increases([None, None, None]) == [3, 3, 3]  # type: ignore[list-item]


def test_invalid_ply_values():
    with pytest.raises(ValueError):
        LinearPlyManager(initial_ply=0)
    with pytest.raises(ValueError):
        LinearPlyManager(increase=-1)
