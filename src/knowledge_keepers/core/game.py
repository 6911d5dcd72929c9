"""Core simulation: roster setup and the fixed-rate tick driver."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from functools import partial
import logging
import random
from typing import Callable, Protocol

from knowledge_keepers.config import (
    AVATAR_POOLS,
    EXPIRE_OFFSCREEN_SHOTS,
    LEVEL_SETTINGS,
    MIN_LEVEL,
    PANEL_HEIGHT,
    PANEL_WIDTH,
    ROSTER_START_X,
    TICK_SECONDS,
)
from knowledge_keepers.content import AvatarPool, ContentBank
from knowledge_keepers.core.actor import Enemy, Player
from knowledge_keepers.core.collision import CollisionEvent, HudText, resolve_collisions
from knowledge_keepers.core.progression import Outcome, ProgressionController, Transition
from knowledge_keepers.core.shots import EmissionTimer, PayloadKind, ShotBox
from knowledge_keepers.logging_utils import log_session_event
from knowledge_keepers.runtime import SimulationClock, clamp

logger = logging.getLogger(__name__)


class MoveCommand(str, Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class SessionResult:
    player_name: str
    score: int
    health: int
    level: int
    outcome: Outcome

    @property
    def won(self) -> bool:
        return self.outcome is Outcome.WON


@dataclass(frozen=True)
class Frame:
    """What the renderer gets once per tick."""

    tick: int
    player: Player
    enemies: tuple[Enemy, ...]
    shots: tuple[ShotBox, ...]
    hud: HudText
    level: int
    required_score: int
    outcome: Outcome | None


class FrameSink(Protocol):
    def draw_frame(self, frame: Frame) -> None: ...


class BaseGame:
    """Single-player simulation: enemies drop shots, the player collects or dodges them."""

    def __init__(
        self,
        *,
        clock: SimulationClock | None = None,
        rng: random.Random | None = None,
        content: ContentBank | None = None,
        avatars: AvatarPool | None = None,
        frame_sink: FrameSink | None = None,
        session_sink: Callable[[SessionResult], None] | None = None,
        player_name: str = "player",
        level: int = MIN_LEVEL,
        panel_width: int = PANEL_WIDTH,
        panel_height: int = PANEL_HEIGHT,
    ):
        self.clock = clock or SimulationClock()
        self.rng = rng or random.Random()
        self.content = content or ContentBank.default(rng=self.rng)
        self.avatars = avatars or AvatarPool(AVATAR_POOLS)
        self.frame_sink = frame_sink
        self.session_sink = session_sink
        self.player_name = player_name
        self.panel_width = panel_width
        self.panel_height = panel_height

        self.player = Player(avatar=self.avatars.pick("player", self.rng))
        self.progression = ProgressionController(level)
        self.enemies: list[Enemy] = []
        self.shots: list[ShotBox] = []
        self.hud = HudText()
        self.tick_count = 0
        self.running = False
        self.result: SessionResult | None = None
        self._next_enemy_id = 0

    @property
    def level(self) -> int:
        return self.progression.level

    @property
    def game_over(self) -> bool:
        return self.progression.game_over

    def start(self) -> None:
        """Spawn the roster and schedule the tick on the clock."""
        if self.running or self.game_over:
            return
        self.running = True
        log_session_event("Game Start", player=self.player_name, level=self.level)
        self.setup_level()
        self.clock.schedule_interval(self._on_tick, TICK_SECONDS)

    def stop(self) -> None:
        """Halt the tick and every emission timer without recording a result."""
        self.running = False
        self.clock.unschedule(self._on_tick)
        self._stop_enemies()

    def _on_tick(self, dt: float) -> None:
        self.step()

    def setup_level(self) -> None:
        self.clear_level()
        self.enemies = self.generate_enemies(self.level)
        for enemy in self.enemies:
            timer = EmissionTimer(self.clock, self.rng, partial(self._emit_shot, enemy))
            enemy.start_shooting(timer)
        log_session_event(
            "Knowledge Keepers Entered",
            level=self.level,
            enemies=len(self.enemies),
            required_score=self.progression.required_score,
        )

    def clear_level(self) -> None:
        # Timers stop before the roster goes so none fires into a cleared level.
        self._stop_enemies()
        self.enemies.clear()
        self.shots.clear()

    def _stop_enemies(self) -> None:
        for enemy in self.enemies:
            enemy.stop_shooting()

    def generate_enemies(self, level: int) -> list[Enemy]:
        settings = LEVEL_SETTINGS[level]
        spacing = int(settings["spacing"])
        enemies: list[Enemy] = []
        for tier, count in settings["roster"]:
            for index in range(count):
                enemies.append(
                    Enemy(
                        tier,
                        clamp(ROSTER_START_X + index * spacing, 0, self.panel_width - Enemy.width),
                        rng=self.rng,
                        content=self.content,
                        time_ms=self.clock.now_ms,
                        avatar=self.avatars.pick(tier, self.rng),
                        enemy_id=self._next_enemy_id,
                    )
                )
                self._next_enemy_id += 1
        return enemies

    def _emit_shot(self, enemy: Enemy) -> None:
        if self.game_over or enemy not in self.enemies:
            return
        shot = enemy.shoot()
        if shot is not None:
            self.shots.append(shot)

    def apply_input(self, command: MoveCommand) -> None:
        if self.game_over:
            return
        if command is MoveCommand.LEFT:
            self.player.move_left()
        elif command is MoveCommand.RIGHT:
            self.player.move_right(self.panel_width)

    def step(self) -> Transition:
        """Run one tick: shots, enemies, collisions, progression, then render."""
        if self.game_over:
            return Transition.NONE
        self.tick_count += 1

        for shot in self.shots:
            shot.advance()
        for enemy in self.enemies:
            enemy.move(self.player, self.panel_width)

        events = resolve_collisions(self.player, self.shots, self.hud)
        self._log_collisions(events)
        if EXPIRE_OFFSCREEN_SHOTS:
            self._expire_offscreen_shots()

        transition = self.progression.evaluate(self.player)
        if transition is Transition.LEVEL_UP:
            log_session_event("Level Transition", player=self.player_name, level=self.level)
            self.setup_level()
        elif transition in (Transition.WON, Transition.LOST):
            self.end_game()

        self.draw_frame()
        return transition

    def _expire_offscreen_shots(self) -> None:
        visible = [shot for shot in self.shots if shot.y < self.panel_height]
        if len(visible) != len(self.shots):
            logger.debug("Expired %d off-screen shots", len(self.shots) - len(visible))
            self.shots[:] = visible

    def _log_collisions(self, events: list[CollisionEvent]) -> None:
        for event in events:
            if event.kind is PayloadKind.INFO:
                log_session_event(
                    "Info Collected",
                    player=self.player_name,
                    tier=event.source_tier.name,
                    points=event.score_delta,
                    score=event.score_after,
                )
            else:
                log_session_event(
                    "Question Hit",
                    player=self.player_name,
                    tier=event.source_tier.name,
                    damage=-event.health_delta,
                    health=event.health_after,
                )

    def end_game(self) -> None:
        self.running = False
        self.clock.unschedule(self._on_tick)
        self._stop_enemies()
        outcome = self.progression.outcome
        if outcome is None:
            return
        self.result = SessionResult(
            player_name=self.player_name,
            score=self.player.score,
            health=self.player.health,
            level=self.level,
            outcome=outcome,
        )
        log_session_event(
            "Victory" if self.result.won else "Game Over",
            player=self.player_name,
            score=self.result.score,
            level=self.result.level,
        )
        if self.session_sink is not None:
            self.session_sink(self.result)

    def snapshot(self) -> Frame:
        return Frame(
            tick=self.tick_count,
            player=self.player,
            enemies=tuple(self.enemies),
            shots=tuple(self.shots),
            hud=replace(self.hud),
            level=self.level,
            required_score=self.progression.required_score,
            outcome=self.progression.outcome,
        )

    def draw_frame(self) -> None:
        if self.frame_sink is not None:
            self.frame_sink.draw_frame(self.snapshot())
