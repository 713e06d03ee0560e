# townhub/api/v1/endpoints/math_game.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from townhub.core.security import get_current_student
from townhub.db.session import get_db
from townhub.models.user import User
from townhub.schemas.game import (
    GameStart,
    GameStartResponse,
    GameSubmit,
    GameSubmitResult,
    MathGameStatus,
)
from townhub.services import math_game_service

router = APIRouter(prefix="/math-game", tags=["math-game"])


@router.get("/status", response_model=MathGameStatus)
def get_status(
    db: Session = Depends(get_db),
    current_student: User = Depends(get_current_student),
):
    return math_game_service.get_status(db, user=current_student)


@router.post("/start", response_model=GameStartResponse)
def start_game(
    obj_in: GameStart,
    db: Session = Depends(get_db),
    current_student: User = Depends(get_current_student),
):
    session = math_game_service.start_session(
        db, user=current_student, difficulty=obj_in.difficulty
    )
    return GameStartResponse(session=session)


@router.post("/submit", response_model=GameSubmitResult)
def submit_game(
    obj_in: GameSubmit,
    db: Session = Depends(get_db),
    current_student: User = Depends(get_current_student),
):
    return math_game_service.submit_session(db, user=current_student, payload=obj_in)
