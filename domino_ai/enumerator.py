from __future__ import annotations

from typing import Iterable, List, Protocol

from .hand_state import HandState
from .types import Action, Bone, Choice


class StateEnumerator(Protocol):
    def get_valid_choices(self, hand_state: HandState, is_my_turn: bool) -> List[Choice]:
        ...


def _sorted_bones(bones: Iterable[Bone]) -> List[Bone]:
    return sorted(bones, key=lambda b: (b.a, b.b), reverse=True)


def placements(hand_state: HandState, bones: Iterable[Bone]) -> List[Choice]:
    ordered = _sorted_bones(bones)
    if hand_state.layout_is_empty():
        return [Choice(Action.PLACED_RIGHT, b) for b in ordered]
    out: List[Choice] = []
    for b in ordered:
        if b.has(hand_state.left_end):  # type: ignore[arg-type]
            out.append(Choice(Action.PLACED_LEFT, b))
    for b in ordered:
        if b.has(hand_state.right_end):  # type: ignore[arg-type]
            out.append(Choice(Action.PLACED_RIGHT, b))
    return out


def _draw_or_pass(hand_state: HandState) -> Choice:
    if hand_state.boneyard_size > 0:
        return Choice.pickup()
    return Choice.pass_()


class TableStateEnumerator:
    """
    Enumerates legal choices against the two open ends of the layout.

    On the opponent's turn every unknown bone that fits is a candidate. A draw
    (or pass, once the boneyard is empty) is also offered whenever the opponent
    might be holding nothing that fits.
    """

    def get_valid_choices(self, hand_state: HandState, is_my_turn: bool) -> List[Choice]:
        if is_my_turn:
            choices = placements(hand_state, hand_state.my_bones)
            if not choices:
                choices = [_draw_or_pass(hand_state)]
            return choices

        opp = hand_state.opponent_hand_size
        choices = placements(hand_state, hand_state.unknown_bones) if opp > 0 else []
        if not choices:
            return [_draw_or_pass(hand_state)]
        if not hand_state.layout_is_empty():
            ends = hand_state.open_ends()
            blocked = sum(1 for b in hand_state.unknown_bones if not any(b.has(e) for e in ends))
            if blocked >= opp:
                choices.append(_draw_or_pass(hand_state))
        return choices
