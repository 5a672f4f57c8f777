from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterable, List, MutableSequence, Optional, Tuple

from .config import QUICKER_CONFIG, EngineConfig
from .enumerator import StateEnumerator, TableStateEnumerator
from .errors import EmptyBoneyardError, GameOverError
from .evaluator import ExpectationWeightEvaluator, HandEvaluator
from .game_state import GameState
from .ply import LinearPlyManager, PlyManager
from .types import Action, Bone, Choice, Status

logger = logging.getLogger(__name__)


@dataclass
class ChoiceEval:
    choice: Choice
    value: float          # heuristic value right after the choice
    minimax_value: float  # value backed up from the searched subtree
    leaf_depth: int       # move number of the principal-variation leaf


def resolve_pickup(choice: Choice, boneyard: MutableSequence[Bone]) -> Choice:
    """Binds the next bone of the real boneyard to an unbound pickup. Other choices pass through."""
    if choice.action != Action.PICKED_UP:
        return choice
    if not boneyard:
        raise EmptyBoneyardError(f"Tried to take from empty boneyard! Choice = {choice}")
    return Choice.pickup(boneyard.pop(0))


class AIController:
    """Holds the search tree for one player and advances it as moves are played."""

    def __init__(self, state_enumerator: StateEnumerator, hand_evaluator: HandEvaluator, min_ply: int) -> None:
        self.state_enumerator = state_enumerator
        self.hand_evaluator = hand_evaluator
        self.min_ply = int(min_ply)
        self.root: Optional[GameState] = None
        self.current: Optional[GameState] = None
        self.logs: List[str] = []
        self.explain: List[ChoiceEval] = []

    def _append_log(self, msg: str) -> None:
        self.logs.append(msg)

    def _node(self) -> GameState:
        if self.current is None:
            raise RuntimeError("set_initial_state must be called first")
        return self.current

    def set_initial_state(
        self, my_bones: Iterable[Bone], is_my_turn: bool, opponent_hand_size: Optional[int] = None
    ) -> None:
        self.root = GameState.root(
            self.state_enumerator, self.hand_evaluator, self.min_ply, my_bones, is_my_turn, opponent_hand_size
        )
        self.current = self.root
        self.logs = []
        self.explain = []
        dealt = sorted(self.root.bone_state.my_bones, key=lambda b: (b.a, b.b))
        self._append_log(f"DEALT: {' '.join(str(b) for b in dealt)}")

    def get_best_choice(self) -> Choice:
        raise NotImplementedError

    def choose(self, choice: Choice) -> None:
        node = self._node()
        who = "MY_CHOICE" if node.is_my_turn() else "OPPONENT_CHOICE"
        self.current = node.choose(choice)
        self._append_log(f"{who}: {self.current.choice_taken}")
        logger.info("%s %s (value now %.1f)", who, self.current.choice_taken, self.current.get_value())

    def is_game_over(self) -> bool:
        return len(self._node().get_child_states()) == 0

    def has_empty_hand(self) -> bool:
        return self._node().bone_state.my_hand_size() == 0

    def get_hand_weight(self) -> int:
        return self._node().bone_state.my_hand_weight()

    def _children_or_game_over(self) -> Tuple[GameState, ...]:
        children = self._node().get_child_states()
        if not children:
            raise GameOverError("Game is over, no choices left")
        return children


class ProbabilisticAI(AIController):
    """
    Minimax over the lazily expanded tree, followed by one round of selective
    deepening along the best lines before the final pick.
    """

    def __init__(
        self,
        state_enumerator: StateEnumerator,
        hand_evaluator: HandEvaluator,
        ply_manager: PlyManager,
        lines_to_extend: int = 3,
    ) -> None:
        super().__init__(state_enumerator, hand_evaluator, ply_manager.get_initial_ply())
        self.ply_manager = ply_manager
        self.lines_to_extend = int(lines_to_extend)

    @staticmethod
    def _minimax(node: GameState) -> Tuple[float, GameState]:
        children = node.get_child_states()
        if not children:
            return node.get_value(), node
        best: Optional[Tuple[float, GameState]] = None
        for child in children:
            v, leaf = ProbabilisticAI._minimax(child)
            if best is None or (v > best[0] if node.is_my_turn() else v < best[0]):
                best = (v, leaf)
        assert best is not None
        return best

    def _rank(self, node: GameState) -> List[Tuple[float, GameState, GameState]]:
        scored: List[Tuple[float, GameState, GameState]] = []
        for child in node.get_child_states():
            v, leaf = self._minimax(child)
            scored.append((v, child, leaf))
        # sorted() is stable, so ties keep enumeration order
        return sorted(scored, key=lambda t: -t[0] if node.is_my_turn() else t[0])

    def best_final_states(self, n: int) -> List[GameState]:
        """Principal-variation leaves of the n best lines from the current node."""
        ranked = self._rank(self._node())
        return [leaf for (_v, _child, leaf) in ranked[:n]]

    def increase_ply_selectively(self) -> int:
        leaves = [
            leaf for leaf in self.best_final_states(self.lines_to_extend)
            if leaf.get_status() == Status.NOT_YET_CALCULATED
        ]
        increases = self.ply_manager.get_ply_increases(leaves)
        for leaf, inc in zip(leaves, increases):
            leaf.increase_ply(inc)
        logger.debug("extended %d lines by %s plies", len(leaves), list(increases))
        return len(leaves)

    def get_best_choice(self) -> Choice:
        node = self._node()
        self._children_or_game_over()
        if self.lines_to_extend > 0:
            self.increase_ply_selectively()
        ranked = self._rank(node)
        self.explain = [
            ChoiceEval(
                choice=child.choice_taken,  # type: ignore[arg-type]
                value=child.get_value(),
                minimax_value=v,
                leaf_depth=leaf.get_move_number(),
            )
            for (v, child, leaf) in ranked
        ]
        best = ranked[0][1]
        assert best.choice_taken is not None
        return best.choice_taken


class RandomAI(AIController):
    """Picks uniformly among the valid choices. Used as a baseline opponent."""

    def __init__(self, state_enumerator: StateEnumerator, hand_evaluator: HandEvaluator, seed: Optional[int] = None) -> None:
        super().__init__(state_enumerator, hand_evaluator, min_ply=1)
        self.rng = random.Random(seed)

    def get_best_choice(self) -> Choice:
        children = self._children_or_game_over()
        pick = self.rng.choice(children).choice_taken
        assert pick is not None
        return pick


def create_probabilistic_ai(cfg: Optional[EngineConfig] = None) -> ProbabilisticAI:
    cfg = cfg or EngineConfig()
    cfg.validate()
    return ProbabilisticAI(
        TableStateEnumerator(),
        ExpectationWeightEvaluator(cfg.cost_of_my_pickup, cfg.value_of_opponent_pickup),
        LinearPlyManager(cfg.min_ply, cfg.ply_increase),
        lines_to_extend=cfg.lines_to_extend,
    )


def create_quicker_probabilistic_ai() -> ProbabilisticAI:
    return create_probabilistic_ai(QUICKER_CONFIG)


def create_random_ai(seed: Optional[int] = None) -> RandomAI:
    return RandomAI(TableStateEnumerator(), ExpectationWeightEvaluator(), seed=seed)
