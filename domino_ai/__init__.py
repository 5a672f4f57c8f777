from .types import ALL_BONES, Action, Bone, Choice, Status, parse_bone
from .errors import DominoError, EmptyBoneyardError, GameOverError, InvalidChoiceError, UnhandledActionError
from .hand_state import HandState
from .enumerator import StateEnumerator, TableStateEnumerator
from .evaluator import ExpectationWeightEvaluator, HandEvaluator
from .ply import LinearPlyManager, PlyManager
from .game_state import GameState, MoveCounter
from .config import EngineConfig
from .controller import (
    AIController,
    ChoiceEval,
    ProbabilisticAI,
    RandomAI,
    create_probabilistic_ai,
    create_quicker_probabilistic_ai,
    create_random_ai,
    resolve_pickup,
)
from .core import choice_to_obj, new_game, obj_to_choice, to_json

__all__ = [
    "ALL_BONES",
    "Action",
    "Bone",
    "Choice",
    "Status",
    "parse_bone",
    "DominoError",
    "EmptyBoneyardError",
    "GameOverError",
    "InvalidChoiceError",
    "UnhandledActionError",
    "HandState",
    "StateEnumerator",
    "TableStateEnumerator",
    "ExpectationWeightEvaluator",
    "HandEvaluator",
    "LinearPlyManager",
    "PlyManager",
    "GameState",
    "MoveCounter",
    "EngineConfig",
    "AIController",
    "ChoiceEval",
    "ProbabilisticAI",
    "RandomAI",
    "create_probabilistic_ai",
    "create_quicker_probabilistic_ai",
    "create_random_ai",
    "resolve_pickup",
    "choice_to_obj",
    "new_game",
    "obj_to_choice",
    "to_json",
]
