# townhub/services/wordle_service.py
from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime, timezone

from sqlalchemy import func
from sqlalchemy.orm import Session

from townhub.games import words
from townhub.models.game import WordleSession
from townhub.models.user import User
from townhub.schemas.game import WordleCompleteResult, WordleGuessResult, WordleStatus
from townhub.services import settings_service
from townhub.services.economy import (
    award_experience,
    credit_earnings,
    is_doubles_day_enabled,
    to_money,
)
from townhub.services.errors import ForbiddenError, NotFoundError, ServiceError
from townhub.services.game_rules import daily_window_start

logger = logging.getLogger(__name__)

RESET_HOUR = 4
MAX_GUESSES = 6
XP_PER_WIN = 10

# guesses used -> base earnings
EARNINGS_BY_GUESSES = {1: 10, 2: 9, 3: 8, 4: 7, 5: 6, 6: 5}

STATUS_ACTIVE = "active"
STATUS_WON = "won"
STATUS_LOST = "lost"
FINISHED = (STATUS_WON, STATUS_LOST)


def compute_feedback(guess: str, target: str) -> list[int]:
    """2 = right letter in the right place, 1 = in the word elsewhere, 0 = absent.

    A letter is only marked present as many times as it occurs in the target
    beyond its exact matches.
    """
    feedback = [0] * len(target)
    remaining: Counter[str] = Counter()

    for i, (g, t) in enumerate(zip(guess, target)):
        if g == t:
            feedback[i] = 2
        else:
            remaining[t] += 1

    for i, g in enumerate(guess):
        if feedback[i] == 2:
            continue
        if remaining[g] > 0:
            feedback[i] = 1
            remaining[g] -= 1
    return feedback


def earnings_for(guesses_used: int) -> int:
    return EARNINGS_BY_GUESSES.get(guesses_used, EARNINGS_BY_GUESSES[MAX_GUESSES])


def finished_today(db: Session, user: User, now: datetime | None = None) -> int:
    return (
        db.query(func.count(WordleSession.id))
        .filter(
            WordleSession.user_id == user.id,
            WordleSession.status.in_(FINISHED),
            WordleSession.played_at >= daily_window_start(RESET_HOUR, now),
        )
        .scalar()
    )


def get_status(db: Session, *, user: User) -> WordleStatus:
    if not settings_service.get_bool(db, settings_service.WORDLE_CHORES_ENABLED):
        return WordleStatus(enabled=False, remaining_plays=0, daily_limit=0, recent_sessions=[])

    daily_limit = settings_service.get_int(db, settings_service.WORDLE_GAME_DAILY_LIMIT)
    recent = (
        db.query(WordleSession)
        .filter(WordleSession.user_id == user.id)
        .order_by(WordleSession.played_at.desc(), WordleSession.id.desc())
        .limit(5)
        .all()
    )
    return WordleStatus(
        remaining_plays=max(0, daily_limit - finished_today(db, user)),
        daily_limit=daily_limit,
        recent_sessions=recent,
    )


def start_session(db: Session, *, user: User) -> WordleSession:
    if not settings_service.get_bool(db, settings_service.WORDLE_CHORES_ENABLED):
        raise ForbiddenError("Wordle chores are currently disabled.")
    daily_limit = settings_service.get_int(db, settings_service.WORDLE_GAME_DAILY_LIMIT)
    if finished_today(db, user) >= daily_limit:
        raise ServiceError("No Wordle plays remaining today. Try again tomorrow!")

    session = WordleSession(user_id=user.id, target_word=words.random_word())
    db.add(session)
    db.commit()
    db.refresh(session)
    return session


def _get_session(db: Session, user: User, session_id: int) -> WordleSession:
    session = (
        db.query(WordleSession)
        .filter(WordleSession.id == session_id, WordleSession.user_id == user.id)
        .first()
    )
    if session is None:
        raise NotFoundError("Session not found")
    return session


def submit_guess(db: Session, *, user: User, session_id: int, guess: str) -> WordleGuessResult:
    normalized = words.normalize_word(guess)
    if len(normalized) != words.WORD_LENGTH:
        raise ServiceError("Guess must be exactly 5 letters")
    if not words.is_valid_word(normalized):
        raise ServiceError("Not a valid word")

    session = _get_session(db, user, session_id)
    if session.status != STATUS_ACTIVE:
        raise ServiceError("Game already finished")
    if session.guesses_count >= MAX_GUESSES:
        raise ServiceError("No guesses remaining")

    target = session.target_word.lower()
    feedback = compute_feedback(normalized, target)
    won = normalized == target
    session.guesses_count += 1
    lost = not won and session.guesses_count >= MAX_GUESSES
    if won:
        session.status = STATUS_WON
    elif lost:
        session.status = STATUS_LOST
    db.commit()

    return WordleGuessResult(
        feedback=feedback,
        game_over=won or lost,
        won=won,
        guesses_count=session.guesses_count,
    )


def complete_session(db: Session, *, user: User, session_id: int) -> WordleCompleteResult:
    session = _get_session(db, user, session_id)
    if session.status not in FINISHED:
        raise ServiceError("Game is not finished yet")
    if session.completed_at is not None:
        return WordleCompleteResult(earnings=float(session.earnings or 0))

    session.completed_at = datetime.now(timezone.utc)
    if session.status == STATUS_LOST:
        db.commit()
        return WordleCompleteResult(earnings=0)

    amount = earnings_for(session.guesses_count)
    if is_doubles_day_enabled(db):
        amount *= 2
    earnings = to_money(amount)
    session.earnings = earnings
    credit_earnings(db, user=user, amount=earnings, description="Wordle Chore Earnings")

    experience_points = 0
    new_level = None
    if user.job_id:
        experience_points = XP_PER_WIN
        new_level = award_experience(user, XP_PER_WIN)
    db.commit()

    logger.info(
        "%s won Wordle session %s in %d guesses (earned %s)",
        user.username, session.id, session.guesses_count, earnings,
    )
    return WordleCompleteResult(
        earnings=float(earnings),
        experience_points=experience_points,
        new_level=new_level,
    )
