# townhub/games/questions/__init__.py
"""Job challenge question banks.

One JSON file per job key, each holding numeric-answer questions split into
four difficulty tiers. True/false style questions encode True=1, False=0.
"""
import json
import random
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

DIFFICULTIES = ("easy", "medium", "hard", "extreme")

ANSWER_TOLERANCE = 0.01

_BANK_DIR = Path(__file__).parent

# job key -> job names (lowercase) that unlock the challenge
JOB_NAMES: dict[str, tuple[str, ...]] = {
    "architect": ("architect", "town architect"),
    "civil-engineer": ("civil engineer",),
    "entrepreneur": ("entrepreneur", "entrepreneur – town business founder"),
    "event-planner": ("event planner",),
    "hr-director": ("hr director",),
    "marketing-manager": ("marketing manager",),
    "nurse": ("nurse",),
    "police-lieutenant": ("police lieutenant",),
    "principal": ("principal",),
    "retail-manager": ("retail manager",),
    "software-engineer": ("software engineer", "assistant software engineer"),
    "teacher": ("teacher",),
}


@dataclass(frozen=True)
class Question:
    question: str
    answer: float
    explanation: str | None = None

    def is_correct(self, answer: float) -> bool:
        return abs(float(answer) - self.answer) <= ANSWER_TOLERANCE


class UnknownQuestionBank(KeyError):
    pass


def available_job_keys() -> list[str]:
    return sorted(JOB_NAMES)


def job_matches(job_key: str, job_name: str | None) -> bool:
    return (job_name or "").strip().lower() in JOB_NAMES.get(job_key, ())


@lru_cache(maxsize=None)
def load_bank(job_key: str) -> dict[str, tuple[Question, ...]]:
    if job_key not in JOB_NAMES:
        raise UnknownQuestionBank(f"No question bank for job '{job_key}'")
    raw = json.loads((_BANK_DIR / f"{job_key}.json").read_text("utf-8"))
    return {
        tier: tuple(
            Question(
                question=item["question"],
                answer=float(item["answer"]),
                explanation=item.get("explanation"),
            )
            for item in raw.get(tier, [])
        )
        for tier in DIFFICULTIES
    }


def _tier(job_key: str, difficulty: str) -> tuple[Question, ...]:
    if difficulty not in DIFFICULTIES:
        raise UnknownQuestionBank(f"Unknown difficulty '{difficulty}'")
    return load_bank(job_key)[difficulty]


def draw_question(
    job_key: str, difficulty: str, rng: random.Random | None = None
) -> tuple[int, Question]:
    """Pick one question uniformly at random (with replacement)."""
    questions = _tier(job_key, difficulty)
    index = (rng or random).randrange(len(questions))
    return index, questions[index]


def get_question(job_key: str, difficulty: str) -> Question:
    return draw_question(job_key, difficulty)[1]


def question_at(job_key: str, difficulty: str, index: int) -> Question:
    questions = _tier(job_key, difficulty)
    if not 0 <= index < len(questions):
        raise UnknownQuestionBank(f"No question {index} in {job_key}/{difficulty}")
    return questions[index]
