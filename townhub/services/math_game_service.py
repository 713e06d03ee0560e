# townhub/services/math_game_service.py
from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import func
from sqlalchemy.orm import Session

from townhub.models.game import MathGameHighScore, MathGameSession
from townhub.models.user import User
from townhub.schemas.game import GameSubmit, GameSubmitResult, MathGameStatus
from townhub.services.economy import credit_earnings, to_money
from townhub.services.errors import NotFoundError, ServiceError
from townhub.services.game_rules import (
    MAX_EARNINGS_PER_GAME,
    daily_window_start,
    max_streak,
    record_high_score,
    validate_results,
)

logger = logging.getLogger(__name__)

DIFFICULTIES = ("easy", "medium", "hard")
DIFFICULTY_MULTIPLIERS = {"easy": 1.0, "medium": 1.2, "hard": 1.5}
DAILY_LIMIT = 3
RESET_HOUR = 6
MAX_PROBLEMS_PER_GAME = 30


def streak_bonus(sequence: list[bool]) -> float:
    streak = max_streak(sequence)
    if streak >= 15:
        return 2.5
    if streak >= 10:
        return 2.0
    if streak >= 5:
        return 1.5
    return 1.0


def calculate_earnings(difficulty: str, correct_answers: int, sequence: list[bool]) -> float:
    earnings = (
        correct_answers * DIFFICULTY_MULTIPLIERS.get(difficulty, 1.0) * streak_bonus(sequence)
    )
    return min(earnings, MAX_EARNINGS_PER_GAME)


def plays_today(db: Session, user: User, now: datetime | None = None) -> int:
    return (
        db.query(func.count(MathGameSession.id))
        .filter(
            MathGameSession.user_id == user.id,
            MathGameSession.played_at >= daily_window_start(RESET_HOUR, now),
        )
        .scalar()
    )


def get_status(db: Session, *, user: User) -> MathGameStatus:
    high_scores = {d: 0 for d in DIFFICULTIES}
    for row in db.query(MathGameHighScore).filter(MathGameHighScore.user_id == user.id):
        if row.difficulty in high_scores:
            high_scores[row.difficulty] = row.high_score

    recent = (
        db.query(MathGameSession)
        .filter(MathGameSession.user_id == user.id)
        .order_by(MathGameSession.played_at.desc(), MathGameSession.id.desc())
        .limit(5)
        .all()
    )
    return MathGameStatus(
        remaining_plays=max(0, DAILY_LIMIT - plays_today(db, user)),
        daily_limit=DAILY_LIMIT,
        high_scores=high_scores,
        recent_sessions=recent,
    )


def start_session(db: Session, *, user: User, difficulty: str) -> MathGameSession:
    if difficulty not in DIFFICULTIES:
        raise ServiceError("Invalid difficulty level")
    if plays_today(db, user) >= DAILY_LIMIT:
        raise ServiceError("No plays remaining today. Try again tomorrow!")

    session = MathGameSession(user_id=user.id, difficulty=difficulty)
    db.add(session)
    db.commit()
    db.refresh(session)
    return session


def submit_session(db: Session, *, user: User, payload: GameSubmit) -> GameSubmitResult:
    """
    Score a finished game:
      - validate the reported results against the answer sequence
      - compute earnings (difficulty multiplier x streak bonus, capped)
      - update the high score and credit the student's account
    """
    validate_results(payload, max_problems=MAX_PROBLEMS_PER_GAME, username=user.username)

    session = (
        db.query(MathGameSession)
        .filter(MathGameSession.id == payload.session_id, MathGameSession.user_id == user.id)
        .first()
    )
    if session is None:
        raise NotFoundError("Game session not found")
    if session.submitted_at is not None:
        logger.warning("SECURITY: %s tried to resubmit math session %s", user.username, session.id)
        raise ServiceError("Game session has already been submitted")

    earnings = to_money(
        calculate_earnings(session.difficulty, payload.correct_answers, payload.answer_sequence)
    )

    session.score = payload.score
    session.correct_answers = payload.correct_answers
    session.total_problems = payload.total_problems
    session.earnings = earnings
    session.submitted_at = datetime.now(timezone.utc)

    is_new_high_score = record_high_score(
        db, MathGameHighScore, payload.score, user_id=user.id, difficulty=session.difficulty
    )
    credit_earnings(
        db,
        user=user,
        amount=earnings,
        description=f"Math Game Earnings - {session.difficulty.capitalize()}",
    )
    db.commit()

    return GameSubmitResult(
        earnings=float(earnings),
        is_new_high_score=is_new_high_score,
    )
