# townhub/schemas/game.py
from datetime import datetime
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field, StrictBool

MathDifficulty = Literal["easy", "medium", "hard"]
ChallengeDifficulty = Literal["easy", "medium", "hard", "extreme"]


class GameStart(BaseModel):
    difficulty: str


class GameSubmit(BaseModel):
    """Results reported by the client at the end of a timed game."""
    session_id: int
    score: int = Field(ge=0)
    correct_answers: int = Field(ge=0)
    total_problems: int = Field(ge=0)
    answer_sequence: list[StrictBool]


class GameSessionPublic(BaseModel):
    id: int
    user_id: int
    difficulty: str
    score: int
    correct_answers: int
    total_problems: int
    earnings: float
    played_at: datetime | None = None

    model_config = {"from_attributes": True}


class ChallengeSessionPublic(GameSessionPublic):
    job_key: str
    experience_points: int


class GameStartResponse(BaseModel):
    session: GameSessionPublic


class ChallengeStartResponse(BaseModel):
    session: ChallengeSessionPublic


class MathGameStatus(BaseModel):
    remaining_plays: int
    daily_limit: int
    high_scores: dict[str, int]
    recent_sessions: list[GameSessionPublic]


class ChallengeStatus(BaseModel):
    job_key: str
    remaining_plays: int
    daily_limit: int
    high_scores: dict[str, int]
    recent_sessions: list[ChallengeSessionPublic]


class GameSubmitResult(BaseModel):
    success: bool = True
    earnings: float
    experience_points: int = 0
    new_level: int | None = None
    is_new_high_score: bool = Field(
        validation_alias=AliasChoices("isNewHighScore", "is_new_high_score"),
        serialization_alias="isNewHighScore",
    )


class WordleGuess(BaseModel):
    session_id: int
    guess: str


class WordleComplete(BaseModel):
    session_id: int


class WordleSessionSummary(BaseModel):
    id: int
    status: str
    guesses_count: int
    earnings: float
    played_at: datetime | None = None

    model_config = {"from_attributes": True}


class WordleStatus(BaseModel):
    enabled: bool = True
    remaining_plays: int
    daily_limit: int
    recent_sessions: list[WordleSessionSummary]


class WordleStartResponse(BaseModel):
    session_id: int


class WordleGuessResult(BaseModel):
    feedback: list[int]
    game_over: bool
    won: bool
    guesses_count: int


class WordleCompleteResult(BaseModel):
    success: bool = True
    earnings: float
    experience_points: int = 0
    new_level: int | None = None


class QuestionPublic(BaseModel):
    job_key: str
    difficulty: str
    question_id: int
    question: str


class AnswerCheck(BaseModel):
    difficulty: ChallengeDifficulty
    question_id: int = Field(ge=0)
    answer: float


class AnswerResult(BaseModel):
    correct: bool
    answer: float
    explanation: str | None = None
