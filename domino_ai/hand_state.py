from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import FrozenSet, Iterable, List, Optional, Set

from .errors import EmptyBoneyardError
from .types import ALL_BONES, Action, Bone, Choice


@dataclass(frozen=True)
class HandState:
    """
    What the searching player knows about the table.

    my_bones are fully known. unknown_bones are every bone that is neither mine
    nor on the table: each one sits either in the opponent's hand or in the
    boneyard. my_unseen_draws counts bones I drew during search whose identity
    has not been bound yet; it stays 0 along moves that were actually played.
    """

    my_bones: FrozenSet[Bone]
    unknown_bones: FrozenSet[Bone]
    opponent_hand_size: int
    boneyard_size: int
    left_end: Optional[int] = None
    right_end: Optional[int] = None
    placed: FrozenSet[Bone] = field(default_factory=frozenset)
    my_unseen_draws: int = 0

    def __post_init__(self) -> None:
        if self.opponent_hand_size < 0 or self.boneyard_size < 0 or self.my_unseen_draws < 0:
            raise ValueError(f"Negative bone count: {self.describe()}")
        expected = self.opponent_hand_size + self.boneyard_size + self.my_unseen_draws
        if len(self.unknown_bones) != expected:
            raise ValueError(
                f"Unknown bones ({len(self.unknown_bones)}) do not match "
                f"opponent hand + boneyard ({expected}): {self.describe()}"
            )
        if self.my_bones & self.unknown_bones:
            raise ValueError("A bone cannot be both mine and unknown")

    @staticmethod
    def initial(my_bones: Iterable[Bone], opponent_hand_size: Optional[int] = None) -> "HandState":
        mine = frozenset(my_bones)
        unknown = frozenset(b for b in ALL_BONES if b not in mine)
        opp = len(mine) if opponent_hand_size is None else int(opponent_hand_size)
        if opp > len(unknown):
            raise ValueError(f"Opponent cannot hold {opp} of {len(unknown)} unknown bones")
        return HandState(
            my_bones=mine,
            unknown_bones=unknown,
            opponent_hand_size=opp,
            boneyard_size=len(unknown) - opp,
        )

    # -------------------------
    # Queries
    # -------------------------
    def get_my_bones(self) -> FrozenSet[Bone]:
        return self.my_bones

    def possible_opponent_bones(self) -> FrozenSet[Bone]:
        return self.unknown_bones

    def prob_opponent_has_bone(self) -> float:
        tot = self.opponent_hand_size + self.boneyard_size
        if tot <= 0:
            return 0.0
        return self.opponent_hand_size / float(tot)

    def my_hand_size(self) -> int:
        return len(self.my_bones) + self.my_unseen_draws

    def my_hand_weight(self) -> int:
        return sum(b.weight for b in self.my_bones)

    def layout_is_empty(self) -> bool:
        return self.left_end is None

    def open_ends(self) -> Set[int]:
        if self.left_end is None or self.right_end is None:
            return set()
        return {self.left_end, self.right_end}

    # -------------------------
    # Transition
    # -------------------------
    def _place(self, action: Action, bone: Bone) -> "HandState":
        if self.left_end is None or self.right_end is None:
            return replace(self, left_end=bone.a, right_end=bone.b, placed=self.placed | {bone})
        if action == Action.PLACED_LEFT:
            return replace(self, left_end=bone.other(self.left_end), placed=self.placed | {bone})
        return replace(self, right_end=bone.other(self.right_end), placed=self.placed | {bone})

    def create_next(self, choice: Choice, is_my_turn: bool) -> "HandState":
        """Returns the HandState after the acting player takes choice. self is left untouched."""
        action = choice.action
        if action in (Action.PLACED_LEFT, Action.PLACED_RIGHT):
            bone = choice.bone
            if bone is None:
                raise ValueError(f"Placement without a bone: {choice}")
            if is_my_turn:
                if bone not in self.my_bones:
                    raise ValueError(f"I cannot place {bone}, it is not in my hand")
                nxt = replace(self, my_bones=self.my_bones - {bone})
            else:
                if bone not in self.unknown_bones or self.opponent_hand_size <= 0:
                    raise ValueError(f"Opponent cannot place {bone}")
                nxt = replace(
                    self,
                    unknown_bones=self.unknown_bones - {bone},
                    opponent_hand_size=self.opponent_hand_size - 1,
                )
            return nxt._place(action, bone)

        if action == Action.PICKED_UP:
            if self.boneyard_size <= 0:
                raise EmptyBoneyardError(f"Tried to take from empty boneyard! Choice = {choice}")
            if not is_my_turn:
                return replace(
                    self,
                    boneyard_size=self.boneyard_size - 1,
                    opponent_hand_size=self.opponent_hand_size + 1,
                )
            if choice.bone is None:
                return replace(
                    self,
                    boneyard_size=self.boneyard_size - 1,
                    my_unseen_draws=self.my_unseen_draws + 1,
                )
            if choice.bone not in self.unknown_bones:
                raise ValueError(f"Cannot draw {choice.bone}, it is not an unknown bone")
            return replace(
                self,
                my_bones=self.my_bones | {choice.bone},
                unknown_bones=self.unknown_bones - {choice.bone},
                boneyard_size=self.boneyard_size - 1,
            )

        if action == Action.PASS:
            return self

        raise ValueError(f"Unknown action: {action}")

    def describe(self) -> str:
        def _fmt(bones: Iterable[Bone]) -> List[str]:
            return [str(b) for b in sorted(bones, key=lambda b: (b.a, b.b))]

        return (
            f" myBones = {_fmt(self.my_bones)}"
            f"\n possibleOpponentBones = {_fmt(self.unknown_bones)}"
            f"\n opponentHandSize = {self.opponent_hand_size}, boneyardSize = {self.boneyard_size}"
            f", myUnseenDraws = {self.my_unseen_draws}"
            f"\n layout ends = ({self.left_end}, {self.right_end})"
        )
