"""Question/info text banks and avatar pools consumed by the simulation."""

from __future__ import annotations

import logging
from pathlib import Path
import random
import re
from typing import Iterable, Mapping, Sequence

from knowledge_keepers.config import INFO_PATH, QUESTIONS_PATH

logger = logging.getLogger(__name__)

DIFFICULTIES = (1, 2, 3)
_LEVEL_LINE = re.compile(r"^\[Level (\d)\]\s?(.*)$")

DEFAULT_QUESTIONS = {
    1: [
        "What does a variable store?",
        "Which loop runs at least once?",
        "What is the index of the first element in a list?",
    ],
    2: [
        "What is the difference between a list and a tuple?",
        "When does a dictionary lookup raise KeyError?",
        "What does a recursive function need to terminate?",
    ],
    3: [
        "What is the amortised cost of appending to a dynamic array?",
        "Why can a hash table degrade to linear lookups?",
        "How does a heap support extracting the minimum in O(log n)?",
    ],
}

DEFAULT_INFOS = {
    1: [
        "A variable is a name bound to a value.",
        "Lists keep their elements in insertion order.",
        "Indentation defines blocks in Python.",
    ],
    2: [
        "Tuples are immutable; lists are not.",
        "Dictionaries map hashable keys to values.",
        "Every recursion needs a base case.",
    ],
    3: [
        "Appending to a dynamic array is O(1) amortised.",
        "Hash collisions share buckets and slow lookups down.",
        "A binary heap keeps its minimum at the root.",
    ],
}


class ContentExhaustedError(LookupError):
    """No text is available for the requested payload kind and difficulty."""


def parse_level_lines(lines: Iterable[str]) -> dict[int, list[str]]:
    """Group ``[Level N] text`` lines by difficulty; other lines are skipped."""
    pools: dict[int, list[str]] = {difficulty: [] for difficulty in DIFFICULTIES}
    for line in lines:
        match = _LEVEL_LINE.match(line.rstrip("\n"))
        if match is None:
            continue
        difficulty = int(match.group(1))
        text = match.group(2).strip()
        if difficulty in pools and text:
            pools[difficulty].append(text)
    return pools


class ContentBank:
    """Preloaded question and info pools, sampled uniformly per difficulty."""

    def __init__(
        self,
        questions: Mapping[int, Sequence[str]],
        infos: Mapping[int, Sequence[str]],
        rng: random.Random | None = None,
    ):
        self.questions = {difficulty: list(questions.get(difficulty, ())) for difficulty in DIFFICULTIES}
        self.infos = {difficulty: list(infos.get(difficulty, ())) for difficulty in DIFFICULTIES}
        self.rng = rng or random.Random()

    @classmethod
    def default(cls, rng: random.Random | None = None) -> "ContentBank":
        return cls(DEFAULT_QUESTIONS, DEFAULT_INFOS, rng=rng)

    @classmethod
    def from_lines(
        cls,
        question_lines: Iterable[str],
        info_lines: Iterable[str],
        rng: random.Random | None = None,
    ) -> "ContentBank":
        return cls(parse_level_lines(question_lines), parse_level_lines(info_lines), rng=rng)

    @classmethod
    def from_files(
        cls,
        questions_path: str | Path,
        info_path: str | Path,
        rng: random.Random | None = None,
    ) -> "ContentBank":
        with open(questions_path, encoding="utf-8") as question_file:
            question_lines = question_file.readlines()
        with open(info_path, encoding="utf-8") as info_file:
            info_lines = info_file.readlines()
        bank = cls.from_lines(question_lines, info_lines, rng=rng)
        logger.info(
            "Loaded content bank: %d questions, %d infos",
            sum(len(pool) for pool in bank.questions.values()),
            sum(len(pool) for pool in bank.infos.values()),
        )
        return bank

    def get_question(self, difficulty: int) -> str:
        return self._pick(self.questions, difficulty, "question")

    def get_info(self, difficulty: int) -> str:
        return self._pick(self.infos, difficulty, "info")

    def _pick(self, pools: dict[int, list[str]], difficulty: int, kind: str) -> str:
        pool = pools.get(difficulty)
        if not pool:
            raise ContentExhaustedError(f"no {kind} text for difficulty {difficulty}")
        return self.rng.choice(pool)


class AvatarPool:
    """Opaque visual handles per entity role; the simulation never inspects them."""

    def __init__(self, pools: Mapping[object, Sequence[object]]):
        self.pools = {role: list(handles) for role, handles in pools.items()}

    def pick(self, role: object, rng: random.Random) -> object | None:
        handles = self.pools.get(role)
        if not handles:
            return None
        return rng.choice(handles)


def load_content_bank(
    rng: random.Random,
    questions_path: str | Path | None = None,
    info_path: str | Path | None = None,
) -> ContentBank:
    """Load the text banks from disk when both files exist, else use the built-in bank."""
    questions_path = Path(questions_path or QUESTIONS_PATH)
    info_path = Path(info_path or INFO_PATH)
    if questions_path.is_file() and info_path.is_file():
        return ContentBank.from_files(questions_path, info_path, rng=rng)
    logger.info("Content files not found under %s; using the built-in bank", questions_path.parent)
    return ContentBank.default(rng=rng)
