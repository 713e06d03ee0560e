# townhub/services/game_rules.py
"""Rules shared by the timed mini-games (math game, job challenges)."""
import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from townhub.schemas.game import GameSubmit
from townhub.services.errors import ServiceError

logger = logging.getLogger(__name__)

MAX_EARNINGS_PER_GAME = 150


def daily_window_start(reset_hour: int, now: datetime | None = None) -> datetime:
    """Start of the current play day; days roll over at reset_hour (UTC)."""
    now = now or datetime.now(timezone.utc)
    start = now.replace(hour=reset_hour, minute=0, second=0, microsecond=0)
    if now < start:
        start -= timedelta(days=1)
    return start


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; they were stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def max_streak(sequence: list[bool]) -> int:
    best = current = 0
    for correct in sequence:
        current = current + 1 if correct else 0
        best = max(best, current)
    return best


def validate_results(payload: GameSubmit, *, max_problems: int, username: str) -> None:
    """Reject results that cannot come from an honest client."""
    if payload.total_problems > max_problems:
        logger.warning(
            "SECURITY: %s submitted %d problems (max %d)",
            username, payload.total_problems, max_problems,
        )
        raise ServiceError("Invalid game data: too many problems")
    if payload.correct_answers > payload.total_problems:
        logger.warning(
            "SECURITY: %s claimed %d correct of %d problems",
            username, payload.correct_answers, payload.total_problems,
        )
        raise ServiceError(
            "Invalid game data: correct answers cannot exceed total problems"
        )
    if len(payload.answer_sequence) != payload.total_problems:
        logger.warning(
            "SECURITY: %s sent answer_sequence of length %d for %d problems",
            username, len(payload.answer_sequence), payload.total_problems,
        )
        raise ServiceError("Invalid game data: answer sequence mismatch")
    actual_correct = sum(1 for a in payload.answer_sequence if a)
    if actual_correct != payload.correct_answers:
        logger.warning(
            "SECURITY: %s claimed %d correct but sequence shows %d",
            username, payload.correct_answers, actual_correct,
        )
        raise ServiceError("Invalid game data: correct answer count mismatch")


def record_high_score(db: Session, model, score: int, **key) -> bool:
    """Insert or raise the high score row identified by ``key``.

    Returns True when ``score`` is a new record.
    """
    row = db.query(model).filter_by(**key).first()
    if row is not None and score <= row.high_score:
        return False
    if row is None:
        row = model(high_score=score, **key)
        db.add(row)
    else:
        row.high_score = score
        row.achieved_at = datetime.now(timezone.utc)
    return True
