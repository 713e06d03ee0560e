# townhub/api/v1/endpoints/job_challenges.py
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from townhub.core.security import get_current_student, get_current_user
from townhub.db.session import get_db
from townhub.games import questions
from townhub.models.user import User
from townhub.schemas.game import (
    AnswerCheck,
    AnswerResult,
    ChallengeStartResponse,
    ChallengeStatus,
    GameStart,
    GameSubmit,
    GameSubmitResult,
    QuestionPublic,
)
from townhub.services import job_challenge_service

router = APIRouter(prefix="/job-challenges", tags=["job-challenges"])


@router.get("", response_model=List[str])
@router.get("/", response_model=List[str], include_in_schema=False)
def list_challenges(current_user: User = Depends(get_current_user)):
    return questions.available_job_keys()


@router.get("/{job_key}/question", response_model=QuestionPublic)
def get_question(
    job_key: str,
    difficulty: str = Query("easy"),
    current_student: User = Depends(get_current_student),
):
    return job_challenge_service.next_question(
        current_student, job_key=job_key, difficulty=difficulty
    )


@router.post("/{job_key}/answer", response_model=AnswerResult)
def check_answer(
    job_key: str,
    obj_in: AnswerCheck,
    current_student: User = Depends(get_current_student),
):
    return job_challenge_service.check_answer(
        current_student, job_key=job_key, payload=obj_in
    )


@router.get("/{job_key}/status", response_model=ChallengeStatus)
def get_status(
    job_key: str,
    db: Session = Depends(get_db),
    current_student: User = Depends(get_current_student),
):
    return job_challenge_service.get_status(db, user=current_student, job_key=job_key)


@router.post("/{job_key}/start", response_model=ChallengeStartResponse)
def start_challenge(
    job_key: str,
    obj_in: GameStart,
    db: Session = Depends(get_db),
    current_student: User = Depends(get_current_student),
):
    session = job_challenge_service.start_session(
        db, user=current_student, job_key=job_key, difficulty=obj_in.difficulty
    )
    return ChallengeStartResponse(session=session)


@router.post("/{job_key}/submit", response_model=GameSubmitResult)
def submit_challenge(
    job_key: str,
    obj_in: GameSubmit,
    db: Session = Depends(get_db),
    current_student: User = Depends(get_current_student),
):
    return job_challenge_service.submit_session(
        db, user=current_student, job_key=job_key, payload=obj_in
    )
