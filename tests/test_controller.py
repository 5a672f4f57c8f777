import random
from typing import List

import pytest

from domino_ai import (
    ALL_BONES,
    Action,
    AIController,
    Bone,
    Choice,
    EmptyBoneyardError,
    EngineConfig,
    GameOverError,
    create_probabilistic_ai,
    create_quicker_probabilistic_ai,
    create_random_ai,
    resolve_pickup,
)


def _deal(seed: int):
    bones = list(ALL_BONES)
    random.Random(seed).shuffle(bones)
    return bones[:7], bones[7:14], bones[14:]


def _play_once(mover: AIController, other: AIController, boneyard: List[Bone]) -> None:
    choice = mover.get_best_choice()
    mover.choose(resolve_pickup(choice, boneyard))
    other.choose(choice)


def test_prefers_heaviest_bone_at_one_ply():
    ai = create_probabilistic_ai(EngineConfig(min_ply=1, lines_to_extend=0))
    ai.set_initial_state([Bone(6, 6), Bone(1, 0), Bone(2, 1)], True)
    assert ai.get_best_choice() == Choice(Action.PLACED_RIGHT, Bone(6, 6))
    assert [e.choice.bone for e in ai.explain] == [Bone(6, 6), Bone(2, 1), Bone(1, 0)]
    assert ai.explain[0].minimax_value >= ai.explain[-1].minimax_value


def test_best_choice_is_one_of_the_children():
    ai = create_quicker_probabilistic_ai()
    p1, _p2, _yard = _deal(3)
    ai.set_initial_state(p1, True)
    choice = ai.get_best_choice()
    assert ai.current is not None
    assert choice in [c.get_choice_taken() for c in ai.current.get_child_states()]
    assert len(ai.explain) == len(ai.current.get_child_states())


def test_selective_deepening_extends_best_lines():
    ai = create_probabilistic_ai(EngineConfig(min_ply=2, ply_increase=2, lines_to_extend=2))
    p1, _p2, _yard = _deal(11)
    ai.set_initial_state(p1, True)
    leaves = ai.best_final_states(2)
    assert all(leaf.get_child_states() == () for leaf in leaves)
    extended = ai.increase_ply_selectively()
    assert extended == 2
    assert all(leaf.extra_ply == 2 for leaf in leaves)
    assert all(len(leaf.get_child_states()) > 0 for leaf in leaves)


def test_game_over_raises_on_best_choice():
    ai = create_probabilistic_ai()
    ai.set_initial_state([Bone(0, 0), Bone(1, 1)], True, opponent_hand_size=0)
    assert ai.is_game_over()
    with pytest.raises(GameOverError):
        ai.get_best_choice()


def test_hand_weight_and_empty_hand():
    ai = create_random_ai(seed=1)
    ai.set_initial_state([Bone(6, 6), Bone(3, 1)], True)
    assert ai.get_hand_weight() == 16
    assert not ai.has_empty_hand()
    ai.choose(Choice(Action.PLACED_RIGHT, Bone(6, 6)))
    assert ai.get_hand_weight() == 4
    assert ai.logs[-1] == "MY_CHOICE: PLACED_RIGHT(6-6)"


def test_random_ai_is_reproducible_with_seed():
    p1, _p2, _yard = _deal(5)
    a = create_random_ai(seed=42)
    b = create_random_ai(seed=42)
    a.set_initial_state(p1, True)
    b.set_initial_state(p1, True)
    assert a.get_best_choice() == b.get_best_choice()


def test_resolve_pickup_binds_next_boneyard_bone():
    yard = [Bone(5, 5), Bone(4, 4)]
    assert resolve_pickup(Choice.pickup(), yard) == Choice.pickup(Bone(5, 5))
    assert yard == [Bone(4, 4)]
    placed = Choice(Action.PLACED_LEFT, Bone(1, 0))
    assert resolve_pickup(placed, yard) is placed
    with pytest.raises(EmptyBoneyardError):
        resolve_pickup(Choice.pickup(), [])


def test_choose_before_deal_fails():
    with pytest.raises(RuntimeError):
        create_random_ai().choose(Choice.pass_())


@pytest.mark.parametrize("seed", [1, 7, 2024])
def test_full_game_between_probabilistic_and_random(seed):
    p1bones, p2bones, yard = _deal(seed)
    player1 = create_quicker_probabilistic_ai()
    player2 = create_random_ai(seed=seed)
    player1.set_initial_state(p1bones, True)
    player2.set_initial_state(p2bones, False)

    turns = 0
    with pytest.raises(GameOverError):
        while turns < 200:
            _play_once(player1, player2, yard)
            _play_once(player2, player1, yard)
            turns += 1
    assert turns < 200

    assert player1.is_game_over() and player2.is_game_over()
    p1 = player1.current.get_bone_state()  # type: ignore[union-attr]
    p2 = player2.current.get_bone_state()  # type: ignore[union-attr]
    # Each side's view of the other's hand size matches reality
    assert p1.opponent_hand_size == p2.my_hand_size()
    assert p2.opponent_hand_size == p1.my_hand_size()
    assert p1.boneyard_size == p2.boneyard_size == len(yard)
    assert p1.placed == p2.placed
    assert (p1.left_end, p1.right_end) == (p2.left_end, p2.right_end)
    blocked = p1.boneyard_size == 0 and not (player1.has_empty_hand() or player2.has_empty_hand())
    assert player1.has_empty_hand() or player2.has_empty_hand() or blocked
    assert any(ln.startswith("MY_CHOICE") for ln in player1.logs)
    assert any(ln.startswith("OPPONENT_CHOICE") for ln in player1.logs)
