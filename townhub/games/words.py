# townhub/games/words.py
"""Word list for the Wordle chore game.

Words come from ``valid-wordle-words.txt`` (one word per line) and are used
both as target words and as valid guesses. When the file is missing or holds
no usable word, the embedded list below is used instead.
"""
import logging
import random
from functools import lru_cache
from pathlib import Path

from townhub.core.config import settings

logger = logging.getLogger(__name__)

WORD_LENGTH = 5

DEFAULT_WORDS_PATH = Path(__file__).with_name("valid-wordle-words.txt")

FALLBACK_WORDS = (
    "about", "above", "actor", "adult", "after", "again", "agent", "agree", "ahead", "alarm",
    "album", "alert", "alike", "alive", "allow", "alone", "along", "alter", "among", "angel",
    "anger", "angle", "angry", "apart", "apple", "apply", "arena", "argue", "arise", "array",
    "asset", "audio", "audit", "avoid", "award", "aware", "bread", "break", "build", "chair",
    "chief", "child", "class", "clean", "clear", "clock", "close", "cloud", "coast", "color",
    "could", "count", "court", "cover", "craft", "cream", "cross", "crowd", "dance", "death",
    "dream", "dress", "drink", "earth", "enemy", "enjoy", "enter", "equal", "event", "every",
    "faith", "false", "field", "first", "floor", "focus", "force", "front", "fruit", "glass",
    "grass", "great", "green", "group", "guess", "guest", "heart", "horse", "hotel", "house",
    "human", "ideal", "image", "issue", "judge", "juice", "known", "label", "large", "later",
    "learn", "least", "leave", "level", "light", "limit", "local", "major", "maker", "march",
    "match", "maybe", "metal", "model", "money", "month", "motor", "mouse", "mouth", "music",
    "never", "night", "north", "novel", "nurse", "occur", "ocean", "offer", "order", "other",
    "panel", "paper", "party", "peace", "phase", "phone", "place", "plain", "plane", "plant",
    "point", "power", "press", "price", "prime", "proof", "proud", "quick", "quiet", "quote",
    "radio", "raise", "range", "reach", "ready", "right", "river", "round", "scale", "score",
    "sense", "serve", "seven", "shape", "share", "sharp", "sheet", "shift", "shine", "short",
    "sight", "since", "skill", "sleep", "small", "smart", "smile", "solid", "sound", "south",
    "space", "speak", "speed", "spend", "sport", "staff", "stage", "stand", "start", "state",
    "steam", "stick", "still", "stock", "stone", "store", "storm", "story", "study", "style",
    "sugar", "table", "taken", "taste", "teach", "thank", "theme", "there", "these", "thing",
    "think", "those", "three", "throw", "times", "title", "today", "total", "touch", "tough",
    "tower", "track", "trade", "train", "treat", "trial", "tribe", "trick", "trust", "truth",
    "under", "union", "until", "upper", "usual", "valid", "value", "video", "visit", "voice",
    "water", "wheel", "where", "which", "while", "white", "whole", "woman", "world", "would",
    "write", "wrong", "young", "youth",
)


def normalize_word(word: str) -> str:
    return word.strip().lower()


def load_word_list(path: Path | str | None = None) -> list[str]:
    path = Path(path) if path else DEFAULT_WORDS_PATH
    try:
        if path.is_file():
            words = [
                w
                for w in (normalize_word(line) for line in path.read_text("utf-8").splitlines())
                if len(w) == WORD_LENGTH and w.isalpha()
            ]
            if words:
                logger.info("Loaded %d words from %s", len(words), path)
                return words
            logger.warning("Word file %s has no %d-letter words", path, WORD_LENGTH)
    except OSError as exc:
        logger.warning("Could not read word file %s: %s", path, exc)
    return list(FALLBACK_WORDS)


@lru_cache(maxsize=1)
def get_word_list() -> tuple[str, ...]:
    return tuple(load_word_list(settings.WORDLE_WORDS_PATH))


@lru_cache(maxsize=1)
def _word_set() -> frozenset[str]:
    return frozenset(get_word_list())


def random_word() -> str:
    return random.choice(get_word_list())


def is_valid_word(word: str) -> bool:
    normalized = normalize_word(word)
    return len(normalized) == WORD_LENGTH and normalized in _word_set()
