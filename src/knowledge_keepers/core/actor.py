"""Entity model for the player and the knowledge keepers."""

from __future__ import annotations

import logging
import random
from typing import Callable

from knowledge_keepers.config import (
    DECISION_INTERVAL_MS,
    ENEMY_HEIGHT,
    ENEMY_START_Y,
    ENEMY_WIDTH,
    PLAYER_HEIGHT,
    PLAYER_MAX_HEALTH,
    PLAYER_START_X,
    PLAYER_START_Y,
    PLAYER_STEP_PX,
    PLAYER_WIDTH,
    TIER_SETTINGS,
    EnemyTier,
    TierSpec,
)
from knowledge_keepers.content import ContentBank, ContentExhaustedError
from knowledge_keepers.core.shots import EmissionTimer, PayloadKind, ShotBox
from knowledge_keepers.runtime import Rect, clamp

logger = logging.getLogger(__name__)


class Player:
    """The avatar at the bottom of the playfield; moves horizontally only."""

    width = PLAYER_WIDTH
    height = PLAYER_HEIGHT

    def __init__(self, x: int = PLAYER_START_X, y: int = PLAYER_START_Y, avatar: object | None = None):
        self.x = x
        self.y = y
        self.avatar = avatar
        self.health = PLAYER_MAX_HEALTH
        self.score = 0

    @property
    def bounds(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    def move_left(self) -> None:
        self.x = max(0, self.x - PLAYER_STEP_PX)

    def move_right(self, panel_width: int) -> None:
        self.x = min(panel_width - self.width, self.x + PLAYER_STEP_PX)

    def add_score(self, amount: int) -> None:
        self.score += max(0, amount)

    def take_damage(self, damage: int) -> None:
        self.health = max(0, self.health - max(0, damage))


class Enemy:
    """A knowledge keeper; its tier decides speed, rewards, damage and AI."""

    width = ENEMY_WIDTH
    height = ENEMY_HEIGHT

    def __init__(
        self,
        tier: EnemyTier,
        x: int,
        y: int = ENEMY_START_Y,
        *,
        rng: random.Random,
        content: ContentBank,
        time_ms: Callable[[], float],
        avatar: object | None = None,
        enemy_id: int = 0,
    ):
        self.tier = EnemyTier(tier)
        self.x = x
        self.y = y
        self.avatar = avatar
        self.enemy_id = enemy_id
        self.rng = rng
        self.content = content
        self.time_ms = time_ms
        self.moving_right = rng.random() < 0.5
        self.tracking = False
        self.last_decision_ms: float | None = None
        self.shoot_timer: EmissionTimer | None = None

    @property
    def spec(self) -> TierSpec:
        return TIER_SETTINGS[self.tier]

    @property
    def speed(self) -> int:
        return self.spec.speed

    @property
    def info_reward(self) -> int:
        return self.spec.info_reward

    @property
    def question_damage(self) -> int:
        return self.spec.question_damage

    @property
    def bounds(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    def move(self, player: Player, boundary_width: int) -> None:
        if self.spec.tracks_player:
            self._refresh_tracking_decision()
            if self.tracking:
                self._step_toward(player.x, boundary_width)
                return
        self._bounce(boundary_width)

    def _refresh_tracking_decision(self) -> None:
        now = self.time_ms()
        if self.last_decision_ms is None or now - self.last_decision_ms > DECISION_INTERVAL_MS:
            self.tracking = self.rng.random() < self.spec.tracking_probability
            self.last_decision_ms = now

    def _step_toward(self, target_x: int, boundary_width: int) -> None:
        if target_x > self.x:
            self.x += self.speed
        elif target_x < self.x:
            self.x -= self.speed
        self.x = clamp(self.x, 0, boundary_width - self.width)

    def _bounce(self, boundary_width: int) -> None:
        max_x = boundary_width - self.width
        if self.moving_right:
            self.x += self.speed
            if self.x >= max_x:
                self.x = max_x
                self.moving_right = False
        else:
            self.x -= self.speed
            if self.x <= 0:
                self.x = 0
                self.moving_right = True

    def shoot(self) -> ShotBox | None:
        """Draw a payload for this tier, or None if the content bank is empty."""
        spec = self.spec
        if self.rng.random() < spec.info_probability:
            kind = PayloadKind.INFO
        else:
            kind = PayloadKind.QUESTION

        try:
            if kind is PayloadKind.INFO:
                text = self.content.get_info(spec.difficulty)
            else:
                text = self.content.get_question(spec.difficulty)
        except ContentExhaustedError as exc:
            logger.warning("%s #%d skipped a shot: %s", spec.name, self.enemy_id, exc)
            return None

        return ShotBox(
            x=self.x,
            y=self.y,
            speed=spec.speed,
            kind=kind,
            text=text,
            source_id=self.enemy_id,
            source_tier=self.tier,
            info_reward=spec.info_reward,
            question_damage=spec.question_damage,
        )

    def start_shooting(self, timer: EmissionTimer) -> None:
        self.stop_shooting()
        self.shoot_timer = timer
        timer.start()

    def stop_shooting(self) -> None:
        if self.shoot_timer is not None:
            self.shoot_timer.stop()

    def __repr__(self) -> str:
        return f"Enemy({self.spec.name!r}, id={self.enemy_id}, x={self.x}, y={self.y})"

