from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .evaluator import COST_OF_MY_PICKUP, VALUE_OF_OPPONENT_PICKUP
from .ply import DEFAULT_INITIAL_PLY, DEFAULT_PLY_INCREASE


@dataclass
class EngineConfig:
    min_ply: int = DEFAULT_INITIAL_PLY
    ply_increase: int = DEFAULT_PLY_INCREASE
    lines_to_extend: int = 3  # best lines deepened after the first search of a turn
    cost_of_my_pickup: float = COST_OF_MY_PICKUP
    value_of_opponent_pickup: float = VALUE_OF_OPPONENT_PICKUP
    seed: Optional[int] = None  # only used by the random player

    def validate(self) -> None:
        if self.min_ply < 1:
            raise ValueError("min_ply must be >= 1")
        if self.ply_increase < 0:
            raise ValueError("ply_increase must be >= 0")
        if self.lines_to_extend < 0:
            raise ValueError("lines_to_extend must be >= 0")


QUICKER_CONFIG = EngineConfig(min_ply=2, ply_increase=2, lines_to_extend=2)
