from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

MAX_PIP = 6


class Action(str, Enum):
    PLACED_LEFT = "PLACED_LEFT"
    PLACED_RIGHT = "PLACED_RIGHT"
    PICKED_UP = "PICKED_UP"
    PASS = "PASS"


class Status(str, Enum):
    NOT_YET_CALCULATED = "NOT_YET_CALCULATED"
    HAS_CHILD_STATES = "HAS_CHILD_STATES"
    GAME_OVER = "GAME_OVER"


@dataclass(frozen=True)
class Bone:
    """A domino tile. Pips are stored high/low so (a, b) and (b, a) are the same bone."""

    a: int
    b: int

    def __post_init__(self) -> None:
        if not (0 <= self.a <= MAX_PIP and 0 <= self.b <= MAX_PIP):
            raise ValueError(f"Bone out of range: {self.a}-{self.b}")
        if self.a < self.b:
            hi, lo = self.b, self.a
            object.__setattr__(self, "a", hi)
            object.__setattr__(self, "b", lo)

    @property
    def weight(self) -> int:
        return self.a + self.b

    @property
    def is_double(self) -> bool:
        return self.a == self.b

    def has(self, pip: int) -> bool:
        return self.a == pip or self.b == pip

    def other(self, pip: int) -> int:
        if self.a == pip:
            return self.b
        if self.b == pip:
            return self.a
        raise ValueError(f"{self} does not contain {pip}")

    def __str__(self) -> str:
        return f"{self.a}-{self.b}"


def all_bones() -> List[Bone]:
    out: List[Bone] = []
    for hi in range(MAX_PIP + 1):
        for lo in range(hi + 1):
            out.append(Bone(hi, lo))
    return out


ALL_BONES: List[Bone] = all_bones()


def parse_bone(s: str) -> Bone:
    s = (s or "").strip().replace("[", "").replace("]", "").replace(" ", "")
    s = s.replace("|", "-").replace(",", "-")
    if "-" in s:
        a, b = s.split("-", 1)
        return Bone(int(a), int(b))
    if len(s) == 2 and s.isdigit():
        return Bone(int(s[0]), int(s[1]))
    raise ValueError(f"Cannot parse bone: {s}")


@dataclass(frozen=True)
class Choice:
    action: Action
    bone: Optional[Bone] = None  # None for PASS and for a pickup not yet bound to a drawn bone

    @staticmethod
    def pass_() -> "Choice":
        return Choice(Action.PASS)

    @staticmethod
    def pickup(bone: Optional[Bone] = None) -> "Choice":
        return Choice(Action.PICKED_UP, bone)

    @property
    def is_placement(self) -> bool:
        return self.action in (Action.PLACED_LEFT, Action.PLACED_RIGHT)

    def __str__(self) -> str:
        if self.bone is None:
            return self.action.value
        return f"{self.action.value}({self.bone})"
