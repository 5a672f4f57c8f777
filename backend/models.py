from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


ActionName = Literal["PLACED_LEFT", "PLACED_RIGHT", "PICKED_UP", "PASS"]


class ChoiceObj(BaseModel):
    action: ActionName
    bone: Optional[str] = None  # "a-b"


class NewGameReq(BaseModel):
    hand: List[str] = Field(..., min_length=1, max_length=14)
    myTurn: bool = True
    kind: Literal["probabilistic", "random"] = "probabilistic"
    opponentHandSize: Optional[int] = Field(None, ge=0, le=27)
    minPly: int = Field(4, ge=1, le=8)
    plyIncrease: int = Field(2, ge=0, le=6)
    linesToExtend: int = Field(3, ge=0, le=10)
    costOfMyPickup: float = 20
    valueOfOpponentPickup: float = 5
    seed: Optional[int] = None


class SessionReq(BaseModel):
    sessionId: str


class ChooseReq(BaseModel):
    sessionId: str
    choice: ChoiceObj


class GetStateResp(BaseModel):
    state: Dict[str, Any]


class StateEnvelope(BaseModel):
    sessionId: str
    state: Dict[str, Any]


class BestChoiceResp(BaseModel):
    choice: Dict[str, Any]
    state: Dict[str, Any]
