from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

if TYPE_CHECKING:
    from .hand_state import HandState
    from .types import Choice, Status


class DominoError(Exception):
    """Base class for engine contract violations."""


class InvalidChoiceError(DominoError, ValueError):
    """A choice was made that is not valid from the current game state."""

    def __init__(
        self,
        choice: "Choice",
        valid_choices: Sequence["Choice"],
        status: "Status",
        hand_state: "HandState",
        realised: Optional[Sequence["Choice"]] = None,
    ) -> None:
        self.choice = choice
        self.valid_choices = list(valid_choices)
        self.status = status
        self.hand_state = hand_state
        realised_list = list(realised) if realised is not None else []
        msg = (
            f"Choice was not valid: {choice}"
            f"\nValid choices were: {[str(c) for c in realised_list]}"
            f" (should be {[str(c) for c in self.valid_choices]})"
            f"\nStatus is {status.value}"
            f"\n{hand_state.describe()}"
        )
        super().__init__(msg)


class UnhandledActionError(DominoError, ValueError):
    pass


class EmptyBoneyardError(DominoError, RuntimeError):
    pass


class GameOverError(DominoError, RuntimeError):
    pass
