# townhub/api/v1/endpoints/wordle_game.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from townhub.core.security import get_current_student
from townhub.db.session import get_db
from townhub.models.user import User
from townhub.schemas.game import (
    WordleComplete,
    WordleCompleteResult,
    WordleGuess,
    WordleGuessResult,
    WordleStartResponse,
    WordleStatus,
)
from townhub.services import wordle_service

router = APIRouter(prefix="/wordle-game", tags=["wordle-game"])


@router.get("/status", response_model=WordleStatus)
def get_status(
    db: Session = Depends(get_db),
    current_student: User = Depends(get_current_student),
):
    return wordle_service.get_status(db, user=current_student)


@router.post("/start", response_model=WordleStartResponse)
def start_game(
    db: Session = Depends(get_db),
    current_student: User = Depends(get_current_student),
):
    session = wordle_service.start_session(db, user=current_student)
    return WordleStartResponse(session_id=session.id)


@router.post("/guess", response_model=WordleGuessResult)
def guess(
    obj_in: WordleGuess,
    db: Session = Depends(get_db),
    current_student: User = Depends(get_current_student),
):
    return wordle_service.submit_guess(
        db, user=current_student, session_id=obj_in.session_id, guess=obj_in.guess
    )


@router.post("/complete", response_model=WordleCompleteResult)
def complete_game(
    obj_in: WordleComplete,
    db: Session = Depends(get_db),
    current_student: User = Depends(get_current_student),
):
    """Pay out a finished game. Repeated calls return the recorded earnings."""
    return wordle_service.complete_session(
        db, user=current_student, session_id=obj_in.session_id
    )
