from __future__ import annotations

import logging
import weakref
from typing import Iterable, List, Optional, Tuple

from .enumerator import StateEnumerator
from .errors import InvalidChoiceError
from .evaluator import HandEvaluator
from .hand_state import HandState
from .types import Action, Bone, Choice, Status

logger = logging.getLogger(__name__)


class MoveCounter:
    """Moves actually played in one game, shared by every node of that game's tree."""

    def __init__(self, min_ply: int) -> None:
        self.min_ply = int(min_ply)
        self.moves_played = 0

    def increment_moves_played(self) -> None:
        self.moves_played += 1


class GameState:
    """
    One ply of the search tree. Children are created lazily, once, and only up
    to the horizon moves_played + min_ply + extra_ply.

    A node owns its children. The parent link is a weak reference, so the
    tree is kept alive by whoever holds the root.
    """

    def __init__(
        self,
        *,
        state_enumerator: StateEnumerator,
        hand_evaluator: HandEvaluator,
        move_counter: MoveCounter,
        bone_state: HandState,
        is_my_turn: bool,
        value: float,
        move_number: int = 0,
        extra_ply: int = 0,
        parent: Optional["GameState"] = None,
        choice_taken: Optional[Choice] = None,
    ) -> None:
        self.state_enumerator = state_enumerator
        self.hand_evaluator = hand_evaluator
        self.move_counter = move_counter
        self.bone_state = bone_state
        self._is_my_turn = bool(is_my_turn)
        self.value = float(value)
        self.move_number = int(move_number)
        self.extra_ply = int(extra_ply)
        self.choice_taken = choice_taken
        self._parent_ref = weakref.ref(parent) if parent is not None else None
        self._prior_choice = parent.choice_taken if parent is not None else None

        self._children: Tuple["GameState", ...] = ()
        self._chosen: Optional["GameState"] = None  # realised child, owned even before expansion
        self._expanded = False
        self._status = Status.NOT_YET_CALCULATED

    @classmethod
    def root(
        cls,
        state_enumerator: StateEnumerator,
        hand_evaluator: HandEvaluator,
        min_ply: int,
        my_bones: Iterable[Bone],
        is_my_turn: bool,
        opponent_hand_size: Optional[int] = None,
    ) -> "GameState":
        """Creates the initial GameState for a fresh deal (empty layout)."""
        bone_state = HandState.initial(my_bones, opponent_hand_size)
        return cls.from_hand_state(state_enumerator, hand_evaluator, min_ply, bone_state, is_my_turn)

    @classmethod
    def from_hand_state(
        cls,
        state_enumerator: StateEnumerator,
        hand_evaluator: HandEvaluator,
        min_ply: int,
        bone_state: HandState,
        is_my_turn: bool,
    ) -> "GameState":
        return cls(
            state_enumerator=state_enumerator,
            hand_evaluator=hand_evaluator,
            move_counter=MoveCounter(min_ply),
            bone_state=bone_state,
            is_my_turn=is_my_turn,
            value=hand_evaluator.evaluate_initial_value(bone_state),
        )

    def _create_next_state(self, choice: Choice) -> "GameState":
        prior_was_pass = self.choice_taken is not None and self.choice_taken.action == Action.PASS
        added = self.hand_evaluator.added_value_from_choice(self.bone_state, self._is_my_turn, prior_was_pass, choice)
        return GameState(
            state_enumerator=self.state_enumerator,
            hand_evaluator=self.hand_evaluator,
            move_counter=self.move_counter,
            bone_state=self.bone_state.create_next(choice, self._is_my_turn),
            is_my_turn=not self._is_my_turn,
            value=self.value + added,
            move_number=self.move_number + 1,
            extra_ply=max(self.extra_ply - 1, 0),
            parent=self,
            choice_taken=choice,
        )

    def get_valid_choices(self) -> List[Choice]:
        return self.state_enumerator.get_valid_choices(self.bone_state, self._is_my_turn)

    # -------------------------
    # Status / expansion
    # -------------------------
    def _is_terminal(self) -> bool:
        # Second pass in a row
        if (
            self.choice_taken is not None
            and self.choice_taken.action == Action.PASS
            and self._prior_choice is not None
            and self._prior_choice.action == Action.PASS
        ):
            return True
        if self.bone_state.opponent_hand_size == 0:
            return True
        return self.bone_state.my_hand_size() == 0

    def get_status(self) -> Status:
        if self._status == Status.GAME_OVER:
            return Status.GAME_OVER
        counter = self.move_counter
        if counter.moves_played + counter.min_ply + self.extra_ply > self.move_number:
            return Status.HAS_CHILD_STATES
        return Status.NOT_YET_CALCULATED

    def _lazy_children_initialisation(self) -> None:
        if self._expanded:
            return
        if self.get_status() != Status.HAS_CHILD_STATES:
            return

        children = [self._reuse_chosen(choice) or self._create_next_state(choice) for choice in self.get_valid_choices()]
        if self._is_terminal():
            children.clear()

        self._children = tuple(children)
        self._expanded = True
        self._status = Status.GAME_OVER if not children else Status.HAS_CHILD_STATES
        logger.debug("expanded move %d into %d child states (%s)", self.move_number, len(children), self._status.value)

    def _reuse_chosen(self, choice: Choice) -> Optional["GameState"]:
        chosen = self._chosen
        if chosen is None or chosen.choice_taken is None:
            return None
        if chosen.choice_taken == choice:
            return chosen
        if choice == Choice.pickup() and self._is_bound_pickup(chosen.choice_taken):
            return chosen
        return None

    def get_child_states(self) -> Tuple["GameState", ...]:
        self._lazy_children_initialisation()
        return self._children

    # -------------------------
    # Choosing
    # -------------------------
    def _normalise(self, choice: Choice) -> Choice:
        # The opponent's drawn bone is never visible to me
        if not self._is_my_turn and choice.action == Action.PICKED_UP and choice.bone is not None:
            return Choice.pickup()
        return choice

    def _is_bound_pickup(self, choice: Choice) -> bool:
        return self._is_my_turn and choice.action == Action.PICKED_UP and choice.bone is not None

    def _invalid(self, choice: Choice) -> InvalidChoiceError:
        return InvalidChoiceError(
            choice,
            self.get_valid_choices(),
            self._status,
            self.bone_state,
            realised=[c.choice_taken for c in self._children if c.choice_taken is not None],
        )

    def choose(self, choice: Choice) -> "GameState":
        choice = self._normalise(choice)
        chosen: Optional[GameState] = None

        # A pickup I actually made must name the bone I drew
        if self._is_my_turn and choice.action == Action.PICKED_UP and choice.bone is None:
            raise self._invalid(choice)

        try:
            if self._status == Status.HAS_CHILD_STATES:
                for idx, child in enumerate(self._children):
                    if child.choice_taken == choice:
                        chosen = child
                        break
                    if self._is_bound_pickup(choice) and child.choice_taken == Choice.pickup():
                        chosen = self._create_next_state(choice)
                        self._children = self._children[:idx] + (chosen,) + self._children[idx + 1:]
                        break
            elif self._status == Status.NOT_YET_CALCULATED and not self._is_terminal():
                valid = self.get_valid_choices()
                if choice in valid or (self._is_bound_pickup(choice) and Choice.pickup() in valid):
                    chosen = self._create_next_state(choice)
        except ValueError as e:
            raise self._invalid(choice) from e

        if chosen is None:
            raise self._invalid(choice)

        self._chosen = chosen
        self.move_counter.increment_moves_played()
        return chosen

    # -------------------------
    # Accessors
    # -------------------------
    def increase_ply(self, ply_increase: int) -> None:
        self.extra_ply += int(ply_increase)

    def get_value(self) -> float:
        return self.value

    def get_choice_taken(self) -> Optional[Choice]:
        return self.choice_taken

    def is_my_turn(self) -> bool:
        return self._is_my_turn

    def get_parent(self) -> Optional["GameState"]:
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    def get_bone_state(self) -> HandState:
        return self.bone_state

    def get_move_number(self) -> int:
        return self.move_number

    def path(self) -> List[Choice]:
        out: List[Choice] = []
        node: Optional[GameState] = self
        while node is not None and node.choice_taken is not None:
            out.append(node.choice_taken)
            node = node.get_parent()
        out.reverse()
        return out

    def __str__(self) -> str:
        bs = self.bone_state
        return (
            f"{'opponent' if self._is_my_turn else 'I'} {self.choice_taken} , now value = {self.value:.1f} , "
            f"i have {bs.my_hand_size()}, opponent has {bs.opponent_hand_size}, boneyard has {bs.boneyard_size}"
        )
