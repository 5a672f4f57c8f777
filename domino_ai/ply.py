from __future__ import annotations

from typing import TYPE_CHECKING, List, Protocol, Sequence

if TYPE_CHECKING:
    from .game_state import GameState

DEFAULT_INITIAL_PLY = 4
DEFAULT_PLY_INCREASE = 2


class PlyManager(Protocol):
    def get_initial_ply(self) -> int:
        ...

    def get_ply_increases(self, selected_states: Sequence["GameState"]) -> List[int]:
        ...


class LinearPlyManager:
    """Fixed initial horizon; every selected line is extended by the same amount."""

    def __init__(self, initial_ply: int = DEFAULT_INITIAL_PLY, increase: int = DEFAULT_PLY_INCREASE) -> None:
        if initial_ply < 1:
            raise ValueError("Initial ply must be at least 1")
        if increase < 0:
            raise ValueError("Ply increase must be non-negative")
        self.initial_ply = int(initial_ply)
        self.increase = int(increase)

    def get_initial_ply(self) -> int:
        return self.initial_ply

    def get_ply_increases(self, selected_states: Sequence["GameState"]) -> List[int]:
        return [self.increase for _ in selected_states]
