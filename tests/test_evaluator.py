import pytest

from domino_ai import (
    ALL_BONES,
    Action,
    Bone,
    Choice,
    ExpectationWeightEvaluator,
    HandState,
    UnhandledActionError,
)


def test_initial_value_with_no_opponent_term():
    mine = [Bone(0, 0), Bone(0, 1), Bone(1, 1)]
    hs = HandState.initial(mine, opponent_hand_size=0)
    assert hs.prob_opponent_has_bone() == 0.0
    assert ExpectationWeightEvaluator().evaluate_initial_value(hs) == -3.0


def test_initial_value_weights_unknown_bones_by_probability():
    mine = ALL_BONES[:7]
    hs = HandState.initial(mine)
    unknown_weight = sum(b.weight for b in hs.unknown_bones)
    my_weight = sum(b.weight for b in mine)
    expected = unknown_weight * hs.prob_opponent_has_bone() - my_weight
    assert ExpectationWeightEvaluator().evaluate_initial_value(hs) == pytest.approx(expected)


def test_my_placement_adds_its_weight():
    hs = HandState.initial([Bone(2, 2), Bone(6, 1)])
    ev = ExpectationWeightEvaluator()
    assert ev.added_value_from_choice(hs, True, False, Choice(Action.PLACED_LEFT, Bone(2, 2))) == 4.0
    assert ev.added_value_from_choice(hs, True, False, Choice(Action.PLACED_RIGHT, Bone(6, 1))) == 7.0


def test_opponent_placement_subtracts_expected_weight():
    hs = HandState.initial(ALL_BONES[:8], opponent_hand_size=10)
    assert hs.prob_opponent_has_bone() == 0.5
    delta = ExpectationWeightEvaluator().added_value_from_choice(hs, False, False, Choice(Action.PLACED_RIGHT, Bone(4, 0)))
    assert delta == -2.0


def test_pickups_use_mean_unknown_weight_and_constants():
    hs = HandState.initial(ALL_BONES[:7])
    mean = sum(b.weight for b in hs.unknown_bones) / float(hs.boneyard_size + hs.opponent_hand_size)
    ev = ExpectationWeightEvaluator()
    assert ev.added_value_from_choice(hs, True, False, Choice.pickup()) == pytest.approx(-(mean - 20))
    assert ev.added_value_from_choice(hs, False, False, Choice.pickup()) == pytest.approx(mean + 5)


def test_pickup_constants_are_configurable():
    hs = HandState.initial(ALL_BONES[:7])
    mean = sum(b.weight for b in hs.unknown_bones) / 21.0
    ev = ExpectationWeightEvaluator(cost_of_my_pickup=0, value_of_opponent_pickup=0)
    assert ev.added_value_from_choice(hs, True, False, Choice.pickup()) == pytest.approx(-mean)
    assert ev.added_value_from_choice(hs, False, True, Choice.pickup()) == pytest.approx(mean)


def test_pass_is_worth_nothing():
    hs = HandState.initial(ALL_BONES[:7])
    ev = ExpectationWeightEvaluator()
    assert ev.added_value_from_choice(hs, True, False, Choice.pass_()) == 0.0
    assert ev.added_value_from_choice(hs, False, True, Choice.pass_()) == 0.0


def test_unknown_action_is_rejected():
    hs = HandState.initial(ALL_BONES[:7])
    bogus = Choice("BOGUS", None)  # type: ignore[arg-type]
    with pytest.raises(UnhandledActionError):
        ExpectationWeightEvaluator().added_value_from_choice(hs, True, False, bogus)
