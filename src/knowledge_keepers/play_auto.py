"""Headless autoplay: a scripted player on a fast-forwarded clock."""

from __future__ import annotations

if __package__ in {None, ""}:
    import sys
    from pathlib import Path

    sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import random

from knowledge_keepers.config import FLAGS, HEADLESS_MAX_SECONDS, PLAYER_STEP_PX, TICK_SECONDS
from knowledge_keepers.content import ContentBank, load_content_bank
from knowledge_keepers.core import BaseGame, MoveCommand, SessionResult, ShotBox
from knowledge_keepers.logging_utils import configure_logging, log_key_values, log_run_context
from knowledge_keepers.runtime import SimulationClock


class AutoPilot:
    """Dodge the closest incoming question, otherwise chase the closest info."""

    def __init__(self, dodge_margin: int = PLAYER_STEP_PX):
        self.dodge_margin = dodge_margin

    def choose(self, game: BaseGame) -> MoveCommand | None:
        player = game.player
        incoming = [shot for shot in game.shots if shot.y + shot.height <= player.y + player.height]
        threat = self._closest(
            shot
            for shot in incoming
            if not shot.is_info
            and shot.x < player.x + player.width + self.dodge_margin
            and shot.x + shot.width > player.x - self.dodge_margin
        )
        if threat is not None:
            threat_center = threat.x + threat.width / 2
            player_center = player.x + player.width / 2
            if player_center <= threat_center and player.x > 0:
                return MoveCommand.LEFT
            if player.x + player.width < game.panel_width:
                return MoveCommand.RIGHT
            return MoveCommand.LEFT

        target = self._closest(shot for shot in incoming if shot.is_info)
        if target is None:
            return None
        offset = (target.x + target.width / 2) - (player.x + player.width / 2)
        if abs(offset) < PLAYER_STEP_PX:
            return None
        return MoveCommand.RIGHT if offset > 0 else MoveCommand.LEFT

    @staticmethod
    def _closest(shots) -> ShotBox | None:
        # Lowest on screen means closest to the player.
        return max(shots, key=lambda shot: shot.y, default=None)


class AutoGame(BaseGame):
    """Simulation driven by a manual clock, as fast as the CPU allows."""

    def __init__(self, seed: int | None = None, content: ContentBank | None = None, player_name: str = "autopilot"):
        rng = random.Random(seed)
        super().__init__(
            clock=SimulationClock.manual(),
            rng=rng,
            content=content or load_content_bank(rng),
            player_name=player_name,
        )
        self.pilot = AutoPilot()

    def play_step(self) -> None:
        command = self.pilot.choose(self)
        if command is not None:
            self.apply_input(command)
        self.clock.advance(TICK_SECONDS, TICK_SECONDS)

    def play(self, max_seconds: float = HEADLESS_MAX_SECONDS) -> SessionResult | None:
        self.start()
        max_ticks = int(max_seconds / TICK_SECONDS)
        for _ in range(max_ticks):
            if not self.running:
                break
            self.play_step()
        if self.running:
            self.stop()
        return self.result


def run_auto(games: int = 5) -> None:
    configure_logging(FLAGS.log_level, FLAGS.log_file)
    log_run_context(
        "play-auto",
        {
            "games": games,
            "seed": FLAGS.seed,
            "max_seconds": HEADLESS_MAX_SECONDS,
            "log_file": FLAGS.log_file,
        },
    )
    base_seed = FLAGS.seed if FLAGS.seed is not None else random.randrange(1 << 30)
    wins = 0
    for index in range(games):
        result = AutoGame(seed=base_seed + index).play()
        if result is not None and result.won:
            wins += 1
        log_key_values(
            "knowledge_keepers.run",
            {
                "game": index + 1,
                "outcome": result.outcome.value if result is not None else "timeout",
                "score": result.score if result is not None else None,
                "level": result.level if result is not None else None,
            },
            prefix="Autoplay",
        )
    log_key_values("knowledge_keepers.run", {"wins": wins, "games": games}, prefix="Autoplay Summary")


if __name__ == "__main__":
    run_auto()
