from __future__ import annotations

from typing import Protocol

from .errors import UnhandledActionError
from .hand_state import HandState
from .types import Action, Choice

COST_OF_MY_PICKUP = 20
VALUE_OF_OPPONENT_PICKUP = 5


class HandEvaluator(Protocol):
    def evaluate_initial_value(self, hand_state: HandState) -> float:
        ...

    def added_value_from_choice(
        self,
        prior_hand_state: HandState,
        was_my_turn: bool,
        did_prior_choice_end_in_pass: bool,
        choice: Choice,
    ) -> float:
        ...


class ExpectationWeightEvaluator:
    """
    Values a state as the expected weight of the opponent's hand minus the
    weight of mine. Each unknown bone counts towards the opponent with the
    probability that it is in their hand rather than the boneyard.
    """

    def __init__(
        self,
        cost_of_my_pickup: float = COST_OF_MY_PICKUP,
        value_of_opponent_pickup: float = VALUE_OF_OPPONENT_PICKUP,
    ) -> None:
        self.cost_of_my_pickup = float(cost_of_my_pickup)
        self.value_of_opponent_pickup = float(value_of_opponent_pickup)

    def evaluate_initial_value(self, hand_state: HandState) -> float:
        opponent_hand_weight = 0
        for bone in hand_state.possible_opponent_bones():
            opponent_hand_weight += bone.weight
        my_hand_weight = 0
        for bone in hand_state.get_my_bones():
            my_hand_weight += bone.weight
        return opponent_hand_weight * hand_state.prob_opponent_has_bone() - my_hand_weight

    def _mean_unknown_weight(self, hand_state: HandState) -> float:
        tot = hand_state.boneyard_size + hand_state.opponent_hand_size
        if tot <= 0:
            return 0.0
        s = 0.0
        for bone in hand_state.possible_opponent_bones():
            s += float(bone.weight)
        return s / float(tot)

    def added_value_from_choice(
        self,
        prior_hand_state: HandState,
        was_my_turn: bool,
        did_prior_choice_end_in_pass: bool,
        choice: Choice,
    ) -> float:
        action = choice.action
        if action in (Action.PLACED_LEFT, Action.PLACED_RIGHT):
            assert choice.bone is not None
            if was_my_turn:
                return float(choice.bone.weight)
            return -float(choice.bone.weight) * prior_hand_state.prob_opponent_has_bone()
        if action == Action.PICKED_UP:
            mean_weight = self._mean_unknown_weight(prior_hand_state)
            if was_my_turn:
                return -(mean_weight - self.cost_of_my_pickup)
            return mean_weight + self.value_of_opponent_pickup
        if action == Action.PASS:
            return 0.0
        raise UnhandledActionError(f"Unhandled action: {action!r}")
