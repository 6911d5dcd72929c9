"""Falling payloads and the per-enemy timers that launch them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import random
from typing import Callable

from knowledge_keepers.config import (
    SHOT_DELAY_MAX_MS,
    SHOT_DELAY_MIN_MS,
    SHOT_HEIGHT,
    SHOT_WIDTH,
    EnemyTier,
)
from knowledge_keepers.runtime import Rect, SimulationClock


class PayloadKind(str, Enum):
    INFO = "info"
    QUESTION = "question"


@dataclass(eq=False)
class ShotBox:
    """A falling payload.

    Reward and damage are copied from the firing enemy when the shot is made,
    so a shot never keeps its enemy alive across a roster change.
    """

    x: int
    y: int
    speed: int
    kind: PayloadKind
    text: str
    source_id: int
    source_tier: EnemyTier
    info_reward: int
    question_damage: int

    width = SHOT_WIDTH
    height = SHOT_HEIGHT

    @property
    def bounds(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    @property
    def is_info(self) -> bool:
        return self.kind is PayloadKind.INFO

    def advance(self) -> None:
        self.y += self.speed


class EmissionTimer:
    """Fires ``on_fire`` after a delay re-rolled in [min, max) ms every time.

    Runs on the shared :class:`SimulationClock`. ``stop()`` is idempotent and
    no callback runs after it returns.
    """

    def __init__(
        self,
        clock: SimulationClock,
        rng: random.Random,
        on_fire: Callable[[], None],
        min_delay_ms: int = SHOT_DELAY_MIN_MS,
        max_delay_ms: int = SHOT_DELAY_MAX_MS,
    ):
        if max_delay_ms <= min_delay_ms:
            raise ValueError(f"empty delay range [{min_delay_ms}, {max_delay_ms})")
        self.clock = clock
        self.rng = rng
        self.on_fire = on_fire
        self.min_delay_ms = min_delay_ms
        self.max_delay_ms = max_delay_ms
        self.active = False
        self.fire_count = 0

    def start(self) -> None:
        if self.active:
            return
        self.active = True
        self._schedule_next()

    def stop(self) -> None:
        if not self.active:
            return
        self.active = False
        self.clock.unschedule(self._fire)

    def next_delay_ms(self) -> int:
        return self.rng.randrange(self.min_delay_ms, self.max_delay_ms)

    def _schedule_next(self) -> None:
        delay_ms = self.next_delay_ms()
        self.clock.schedule_once(self._fire, delay_ms / 1000.0)

    def _fire(self, dt: float) -> None:
        if not self.active:
            return
        self.fire_count += 1
        self.on_fire()
        # on_fire may have stopped us (game over); only re-arm while active.
        if self.active:
            self._schedule_next()
