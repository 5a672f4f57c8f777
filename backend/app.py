from __future__ import annotations

from typing import Dict
import uuid

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from backend.models import (
    NewGameReq,
    SessionReq,
    ChooseReq,
    GetStateResp,
    StateEnvelope,
    BestChoiceResp,
)

from domino_ai import (
    AIController,
    DominoError,
    EngineConfig,
    GameOverError,
    choice_to_obj,
    new_game,
    obj_to_choice,
    parse_bone,
    to_json,
)


# In-memory session store
SESSIONS: Dict[str, AIController] = {}


def _new_session_id() -> str:
    return uuid.uuid4().hex


def get_session(session_id: str) -> AIController:
    ctl = SESSIONS.get(session_id)
    if ctl is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return ctl


def save_session(session_id: str, ctl: AIController) -> None:
    SESSIONS[session_id] = ctl


app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health() -> Dict[str, bool]:
    return {"ok": True}


@app.post("/new-game", response_model=StateEnvelope)
def new_game_endpoint(req: NewGameReq) -> StateEnvelope:
    try:
        hand = [parse_bone(s) for s in req.hand]
        if len(set(hand)) != len(hand):
            raise HTTPException(status_code=422, detail="Hand contains duplicate bones")
        cfg = EngineConfig(
            min_ply=req.minPly,
            ply_increase=req.plyIncrease,
            lines_to_extend=req.linesToExtend,
            cost_of_my_pickup=req.costOfMyPickup,
            value_of_opponent_pickup=req.valueOfOpponentPickup,
            seed=req.seed,
        )
        ctl = new_game(req.kind, hand, req.myTurn, cfg, req.opponentHandSize)
        sid = _new_session_id()
        save_session(sid, ctl)
        return StateEnvelope(sessionId=sid, state=to_json(ctl))
    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"new-game failed: {e}")


@app.get("/state/{sessionId}", response_model=GetStateResp)
def get_state_endpoint(sessionId: str) -> GetStateResp:
    ctl = get_session(sessionId)
    return GetStateResp(state=to_json(ctl))


@app.post("/best-choice", response_model=BestChoiceResp)
def best_choice_endpoint(req: SessionReq) -> BestChoiceResp:
    try:
        ctl = get_session(req.sessionId)
        choice = ctl.get_best_choice()
        obj = choice_to_obj(choice)
        assert obj is not None
        return BestChoiceResp(choice=obj, state=to_json(ctl))
    except HTTPException:
        raise
    except GameOverError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except (ValueError, DominoError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"best-choice failed: {e}")


@app.post("/choose", response_model=GetStateResp)
def choose_endpoint(req: ChooseReq) -> GetStateResp:
    try:
        ctl = get_session(req.sessionId)
        ctl.choose(obj_to_choice(req.choice.model_dump()))
        save_session(req.sessionId, ctl)
        return GetStateResp(state=to_json(ctl))
    except HTTPException:
        raise
    except GameOverError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except (ValueError, DominoError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"choose failed: {e}")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("backend.app:app", host="0.0.0.0", port=8000, reload=True)
