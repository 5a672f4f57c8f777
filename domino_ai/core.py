from __future__ import annotations

from typing import Any, Dict, Iterable, List, Literal, Optional

from .config import EngineConfig
from .controller import AIController, ProbabilisticAI, create_probabilistic_ai, create_random_ai
from .types import Action, Bone, Choice, parse_bone

SCHEMA_VERSION = 1

PlayerKind = Literal["probabilistic", "random"]


def new_game(
    kind: PlayerKind,
    hand: Iterable[Bone],
    my_turn: bool,
    cfg: Optional[EngineConfig] = None,
    opponent_hand_size: Optional[int] = None,
) -> AIController:
    cfg = cfg or EngineConfig()
    ctl: AIController
    if kind == "probabilistic":
        ctl = create_probabilistic_ai(cfg)
    elif kind == "random":
        ctl = create_random_ai(cfg.seed)
    else:
        raise ValueError(f"Unknown player kind: {kind}")
    ctl.set_initial_state(list(hand), my_turn, opponent_hand_size)
    return ctl


def _bones_to_list(bones: Iterable[Bone]) -> List[str]:
    return [str(b) for b in sorted(bones, key=lambda b: (b.a, b.b), reverse=True)]


def choice_to_obj(choice: Optional[Choice]) -> Optional[Dict[str, object]]:
    if choice is None:
        return None
    return {"action": choice.action.value, "bone": str(choice.bone) if choice.bone is not None else None}


def obj_to_choice(obj: Dict[str, Any]) -> Choice:
    try:
        action = Action(str(obj.get("action", "")).upper())
    except ValueError:
        raise ValueError(f"Unknown action: {obj.get('action')}") from None
    bone_raw = obj.get("bone")
    bone = parse_bone(str(bone_raw)) if bone_raw not in (None, "") else None
    if action in (Action.PLACED_LEFT, Action.PLACED_RIGHT) and bone is None:
        raise ValueError(f"{action.value} needs a bone")
    if action == Action.PASS and bone is not None:
        raise ValueError("PASS takes no bone")
    return Choice(action, bone)


def to_json(ctl: AIController) -> Dict[str, object]:
    node = ctl.current
    assert node is not None, "Controller has no game"
    bs = node.get_bone_state()
    children = node.get_child_states()
    out: Dict[str, object] = {
        "schemaVersion": SCHEMA_VERSION,
        "kind": "probabilistic" if isinstance(ctl, ProbabilisticAI) else "random",
        "myTurn": node.is_my_turn(),
        "moveNumber": node.get_move_number(),
        "status": node.get_status().value,
        "gameOver": len(children) == 0,
        "value": round(node.get_value(), 4),
        "lastChoice": choice_to_obj(node.get_choice_taken()),
        "myBones": _bones_to_list(bs.my_bones),
        "handWeight": bs.my_hand_weight(),
        "possibleOpponentBones": _bones_to_list(bs.unknown_bones),
        "opponentHandSize": bs.opponent_hand_size,
        "boneyardSize": bs.boneyard_size,
        "probOpponentHasBone": round(bs.prob_opponent_has_bone(), 6),
        "ends": {"left": bs.left_end, "right": bs.right_end},
        "validChoices": [choice_to_obj(c.get_choice_taken()) for c in children],
        "explain": [
            {
                "choice": choice_to_obj(e.choice),
                "value": round(e.value, 4),
                "minimaxValue": round(e.minimax_value, 4),
                "leafDepth": e.leaf_depth,
            }
            for e in ctl.explain
        ],
        "logs": list(ctl.logs),
    }
    return out
