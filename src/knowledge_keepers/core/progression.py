"""Level, score threshold and game-over state machine."""

from __future__ import annotations

from enum import Enum

from knowledge_keepers.config import LEVEL_SETTINGS, MAX_LEVEL, MIN_LEVEL
from knowledge_keepers.core.actor import Player


class Outcome(str, Enum):
    WON = "won"
    LOST = "lost"


class Transition(str, Enum):
    NONE = "none"
    LEVEL_UP = "level_up"
    WON = "won"
    LOST = "lost"


def required_score_for(level: int) -> int:
    level = max(MIN_LEVEL, min(level, MAX_LEVEL))
    return int(LEVEL_SETTINGS[level]["required_score"])


class ProgressionController:
    """Level1 -> Level2 -> Level3 -> Won, with Lost reachable from any level.

    Once an outcome is set the controller never transitions again.
    """

    def __init__(self, level: int = MIN_LEVEL):
        self.level = max(MIN_LEVEL, min(level, MAX_LEVEL))
        self.required_score = required_score_for(self.level)
        self.outcome: Outcome | None = None

    @property
    def game_over(self) -> bool:
        return self.outcome is not None

    def evaluate(self, player: Player) -> Transition:
        if self.game_over:
            return Transition.NONE
        if player.score >= self.required_score:
            return self.level_up()
        if player.health <= 0:
            self.outcome = Outcome.LOST
            return Transition.LOST
        return Transition.NONE

    def level_up(self) -> Transition:
        if self.game_over:
            return Transition.NONE
        if self.level >= MAX_LEVEL:
            self.outcome = Outcome.WON
            return Transition.WON
        self.level += 1
        self.required_score = required_score_for(self.level)
        return Transition.LEVEL_UP
