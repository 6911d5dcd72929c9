"""Human-play loop: arcade window, arrow keys, real-time clock."""

from __future__ import annotations

if __package__ in {None, ""}:
    import sys
    from pathlib import Path

    sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import getpass
import random
import time

from knowledge_keepers.config import BOARD, FLAGS, TICK_MS, TICK_SECONDS, WINDOW_TITLE
from knowledge_keepers.content import load_content_bank
from knowledge_keepers.core import BaseGame
from knowledge_keepers.logging_utils import configure_logging, log_run_context
from knowledge_keepers.runtime import SimulationClock
from knowledge_keepers.ui.renderer import Renderer

GAME_END_HOLD_SECONDS = 3.0


class HumanGame(BaseGame):
    """Keyboard-controlled session rendered in an arcade window."""

    def __init__(self, player_name: str, show_game: bool = True, seed: int | None = None):
        rng = random.Random(seed)
        self.renderer = Renderer(
            width=BOARD.screen_width_px,
            height=BOARD.screen_height_px,
            title=WINDOW_TITLE,
            enabled=show_game,
        )
        super().__init__(
            clock=SimulationClock(),
            rng=rng,
            content=load_content_bank(rng),
            frame_sink=self.renderer,
            player_name=player_name,
        )

    @property
    def window_open(self) -> bool:
        return not self.renderer.closed

    def play_step(self) -> None:
        # Commands land between ticks; the clock then runs whatever is due.
        for command in self.renderer.poll_events():
            self.apply_input(command)
        self.clock.tick()

    def wait(self) -> None:
        sleep_for = self.clock.seconds_until_next()
        if sleep_for is None:
            sleep_for = TICK_SECONDS
        time.sleep(max(0.0, min(sleep_for, TICK_SECONDS)))

    def hold_final_frame(self, seconds: float = GAME_END_HOLD_SECONDS) -> None:
        deadline = time.monotonic() + seconds
        while self.window_open and time.monotonic() < deadline:
            self.renderer.poll_events()
            time.sleep(TICK_SECONDS)

    def close(self) -> None:
        self.stop()
        self.renderer.close()


def run_human(player_name: str | None = None) -> None:
    configure_logging(FLAGS.log_level, FLAGS.log_file)
    game = HumanGame(
        player_name=player_name or getpass.getuser(),
        show_game=FLAGS.show_game,
        seed=FLAGS.seed,
    )
    log_run_context(
        "play-human",
        {
            "player": game.player_name,
            "render": FLAGS.show_game,
            "tick_ms": TICK_MS,
            "seed": FLAGS.seed,
            "log_file": FLAGS.log_file,
        },
    )
    try:
        game.start()
        while game.running and game.window_open:
            game.play_step()
            game.wait()
        if game.result is not None:
            game.hold_final_frame()
    finally:
        game.close()


if __name__ == "__main__":
    run_human()
