# townhub/models/game.py
from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)

from townhub.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MathGameSession(Base):
    __tablename__ = "math_game_sessions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    difficulty = Column(String(10), nullable=False)  # easy / medium / hard
    score = Column(Integer, nullable=False, default=0)
    correct_answers = Column(Integer, nullable=False, default=0)
    total_problems = Column(Integer, nullable=False, default=0)
    earnings = Column(Numeric(10, 2), nullable=False, default=0)
    submitted_at = Column(DateTime(timezone=True), nullable=True)
    played_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)


class MathGameHighScore(Base):
    __tablename__ = "math_game_high_scores"
    __table_args__ = (
        UniqueConstraint("user_id", "difficulty", name="uq_math_high_score_user_difficulty"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    difficulty = Column(String(10), nullable=False)
    high_score = Column(Integer, nullable=False, default=0)
    achieved_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)


class WordleSession(Base):
    __tablename__ = "wordle_sessions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    target_word = Column(String(5), nullable=False)
    # active / won / lost
    status = Column(String(10), nullable=False, default="active")
    guesses_count = Column(Integer, nullable=False, default=0)
    earnings = Column(Numeric(10, 2), nullable=False, default=0)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    played_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)


class JobChallengeSession(Base):
    __tablename__ = "job_challenge_sessions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    job_key = Column(String(50), nullable=False, index=True)
    difficulty = Column(String(10), nullable=False)  # easy / medium / hard / extreme
    score = Column(Integer, nullable=False, default=0)
    correct_answers = Column(Integer, nullable=False, default=0)
    total_problems = Column(Integer, nullable=False, default=0)
    experience_points = Column(Integer, nullable=False, default=0)
    earnings = Column(Numeric(10, 2), nullable=False, default=0)
    submitted_at = Column(DateTime(timezone=True), nullable=True)
    played_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)


class JobChallengeHighScore(Base):
    __tablename__ = "job_challenge_high_scores"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "job_key", "difficulty", name="uq_job_challenge_high_score"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    job_key = Column(String(50), nullable=False)
    difficulty = Column(String(10), nullable=False)
    high_score = Column(Integer, nullable=False, default=0)
    achieved_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)
