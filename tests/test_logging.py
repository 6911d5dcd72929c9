import logging
import random

from helpers import make_shot
from knowledge_keepers.config import EnemyTier
from knowledge_keepers.core import BaseGame, PayloadKind, Transition
from knowledge_keepers.logging_utils import (
    SESSION_LOGGER,
    attach_session_log_file,
    detach_session_log_files,
    log_session_event,
)
from knowledge_keepers.runtime import SimulationClock


def test_session_events_are_appended_to_the_log_file(tmp_path, caplog):
    caplog.set_level(logging.INFO, logger=SESSION_LOGGER)
    log_path = tmp_path / "logs.txt"
    log_path.write_text("earlier session\n", encoding="utf-8")
    attach_session_log_file(log_path)
    try:
        game = BaseGame(clock=SimulationClock.manual(), rng=random.Random(4), player_name="ada")
        game.start()
        game.shots.append(make_shot(PayloadKind.QUESTION, EnemyTier.TEACHING_ASSISTANT))
        game.player.score = 50

        assert game.step() is Transition.LEVEL_UP
    finally:
        detach_session_log_files()

    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "earlier session"
    hit = next(line for line in lines if "Question Hit" in line)
    assert "player=ada" in hit
    assert "tier=TEACHING_ASSISTANT" in hit
    assert "health=90" in hit
    assert any("Level Transition" in line and "level=2" in line for line in lines)


def test_detached_log_file_stops_receiving_events(tmp_path, caplog):
    caplog.set_level(logging.INFO, logger=SESSION_LOGGER)
    log_path = tmp_path / "logs.txt"
    attach_session_log_file(log_path)
    log_session_event("Game Start", player="ada")
    detach_session_log_files()
    log_session_event("Victory", player="ada")

    text = log_path.read_text(encoding="utf-8")
    assert "Game Start" in text
    assert "Victory" not in text
    assert not any(isinstance(handler, logging.FileHandler) for handler in logging.getLogger(SESSION_LOGGER).handlers)
