# townhub/services/job_challenge_service.py
"""Job challenges: timed quizzes only students holding the matching job may play.

Every job key shares the same rules; only the question bank differs.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy import func
from sqlalchemy.orm import Session

from townhub.games import questions
from townhub.models.game import JobChallengeHighScore, JobChallengeSession
from townhub.models.user import User
from townhub.schemas.game import (
    AnswerCheck,
    AnswerResult,
    ChallengeStatus,
    GameSubmit,
    GameSubmitResult,
    QuestionPublic,
)
from townhub.services.economy import (
    award_experience,
    credit_earnings,
    is_doubles_day_enabled,
    to_money,
)
from townhub.services.errors import ForbiddenError, NotFoundError, ServiceError
from townhub.services.game_rules import (
    MAX_EARNINGS_PER_GAME,
    as_utc,
    daily_window_start,
    max_streak,
    record_high_score,
    validate_results,
)

logger = logging.getLogger(__name__)

DAILY_LIMIT = 3
RESET_HOUR = 4
MAX_PROBLEMS_PER_GAME = 60
DIFFICULTY_MULTIPLIERS = {"easy": 1.0, "medium": 1.5, "hard": 2.0, "extreme": 3.0}
MIN_GAME_DURATION = timedelta(seconds=45)
RECENT_WINDOW = timedelta(minutes=3)
MAX_PAID_GAMES_IN_WINDOW = 2


def streak_bonus(sequence: list[bool]) -> float:
    streak = max_streak(sequence)
    if streak >= 5:
        return 1.2
    if streak >= 3:
        return 1.1
    return 1.0


def calculate_rewards(
    difficulty: str, correct_answers: int, sequence: list[bool], doubles_day: bool = False
) -> tuple[int, float]:
    """Return (experience points, earnings) for one finished challenge."""
    factor = DIFFICULTY_MULTIPLIERS.get(difficulty, 1.0) * streak_bonus(sequence)
    experience_points = round(correct_answers * factor)
    earnings = min(correct_answers * factor, MAX_EARNINGS_PER_GAME)
    if doubles_day:
        earnings *= 2
    return experience_points, earnings


def ensure_access(user: User, job_key: str) -> None:
    if job_key not in questions.JOB_NAMES:
        raise NotFoundError(f"Unknown job challenge '{job_key}'")
    if not questions.job_matches(job_key, user.job_name):
        raise ForbiddenError("Only students with this job can play this challenge")


def _check_difficulty(difficulty: str) -> None:
    if difficulty not in DIFFICULTY_MULTIPLIERS:
        raise ServiceError("Invalid difficulty level")


def next_question(user: User, *, job_key: str, difficulty: str) -> QuestionPublic:
    ensure_access(user, job_key)
    _check_difficulty(difficulty)
    index, question = questions.draw_question(job_key, difficulty)
    return QuestionPublic(
        job_key=job_key,
        difficulty=difficulty,
        question_id=index,
        question=question.question,
    )


def check_answer(user: User, *, job_key: str, payload: AnswerCheck) -> AnswerResult:
    ensure_access(user, job_key)
    try:
        question = questions.question_at(job_key, payload.difficulty, payload.question_id)
    except questions.UnknownQuestionBank:
        raise NotFoundError("Question not found")
    return AnswerResult(
        correct=question.is_correct(payload.answer),
        answer=question.answer,
        explanation=question.explanation,
    )


def check_pacing(
    db: Session, *, user: User, session: JobChallengeSession, now: datetime | None = None
) -> None:
    """Reject games finished faster than a person can play them, and bursts of paid games."""
    now = now or datetime.now(timezone.utc)
    elapsed = now - as_utc(session.played_at)
    if elapsed < MIN_GAME_DURATION:
        logger.warning(
            "SECURITY: %s submitted %s session %s after only %ds",
            user.username, session.job_key, session.id, elapsed.total_seconds(),
        )
        raise ServiceError(
            "Game submitted too quickly. Each game must run for at least 45 seconds."
        )

    recent_paid = (
        db.query(func.count(JobChallengeSession.id))
        .filter(
            JobChallengeSession.user_id == user.id,
            JobChallengeSession.job_key == session.job_key,
            JobChallengeSession.earnings > 0,
            JobChallengeSession.played_at > now - RECENT_WINDOW,
        )
        .scalar()
    )
    if recent_paid >= MAX_PAID_GAMES_IN_WINDOW:
        logger.warning(
            "SECURITY: %s finished %d paid %s games in the last few minutes",
            user.username, recent_paid, session.job_key,
        )
        raise ServiceError(
            "Too many games completed recently. Please wait a few minutes before playing again.",
            status_code=429,
        )


def plays_today(db: Session, user: User, job_key: str, now: datetime | None = None) -> int:
    return (
        db.query(func.count(JobChallengeSession.id))
        .filter(
            JobChallengeSession.user_id == user.id,
            JobChallengeSession.job_key == job_key,
            JobChallengeSession.played_at >= daily_window_start(RESET_HOUR, now),
        )
        .scalar()
    )


def get_status(db: Session, *, user: User, job_key: str) -> ChallengeStatus:
    ensure_access(user, job_key)

    high_scores = {d: 0 for d in DIFFICULTY_MULTIPLIERS}
    rows = db.query(JobChallengeHighScore).filter(
        JobChallengeHighScore.user_id == user.id,
        JobChallengeHighScore.job_key == job_key,
    )
    for row in rows:
        if row.difficulty in high_scores:
            high_scores[row.difficulty] = row.high_score

    recent = (
        db.query(JobChallengeSession)
        .filter(
            JobChallengeSession.user_id == user.id,
            JobChallengeSession.job_key == job_key,
        )
        .order_by(JobChallengeSession.played_at.desc(), JobChallengeSession.id.desc())
        .limit(5)
        .all()
    )
    return ChallengeStatus(
        job_key=job_key,
        remaining_plays=max(0, DAILY_LIMIT - plays_today(db, user, job_key)),
        daily_limit=DAILY_LIMIT,
        high_scores=high_scores,
        recent_sessions=recent,
    )


def start_session(
    db: Session, *, user: User, job_key: str, difficulty: str
) -> JobChallengeSession:
    ensure_access(user, job_key)
    _check_difficulty(difficulty)
    if plays_today(db, user, job_key) >= DAILY_LIMIT:
        raise ServiceError("No plays remaining today. Try again tomorrow!")

    session = JobChallengeSession(user_id=user.id, job_key=job_key, difficulty=difficulty)
    db.add(session)
    db.commit()
    db.refresh(session)
    return session


def submit_session(
    db: Session, *, user: User, job_key: str, payload: GameSubmit
) -> GameSubmitResult:
    ensure_access(user, job_key)
    validate_results(payload, max_problems=MAX_PROBLEMS_PER_GAME, username=user.username)

    session = (
        db.query(JobChallengeSession)
        .filter(
            JobChallengeSession.id == payload.session_id,
            JobChallengeSession.user_id == user.id,
            JobChallengeSession.job_key == job_key,
        )
        .first()
    )
    if session is None:
        raise NotFoundError("Game session not found")
    if session.submitted_at is not None:
        logger.warning(
            "SECURITY: %s tried to resubmit %s session %s", user.username, job_key, session.id
        )
        raise ServiceError("Game session has already been submitted")
    check_pacing(db, user=user, session=session)

    experience_points, amount = calculate_rewards(
        session.difficulty,
        payload.correct_answers,
        payload.answer_sequence,
        doubles_day=is_doubles_day_enabled(db),
    )
    earnings = to_money(amount)

    session.score = payload.score
    session.correct_answers = payload.correct_answers
    session.total_problems = payload.total_problems
    session.experience_points = experience_points
    session.earnings = earnings
    session.submitted_at = datetime.now(timezone.utc)

    is_new_high_score = record_high_score(
        db,
        JobChallengeHighScore,
        payload.score,
        user_id=user.id,
        job_key=job_key,
        difficulty=session.difficulty,
    )
    new_level = award_experience(user, experience_points)
    credit_earnings(
        db,
        user=user,
        amount=earnings,
        description=f"{job_key.replace('-', ' ').title()} Challenge Earnings",
    )
    db.commit()

    return GameSubmitResult(
        earnings=float(earnings),
        experience_points=experience_points,
        new_level=new_level,
        is_new_high_score=is_new_high_score,
    )
