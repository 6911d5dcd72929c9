import random

from helpers import RecordingSink, make_shot
from knowledge_keepers.config import EnemyTier
from knowledge_keepers.core import BaseGame, MoveCommand, Outcome, PayloadKind, Transition
from knowledge_keepers.play_auto import AutoGame, AutoPilot
from knowledge_keepers.runtime import SimulationClock


def make_game(**kwargs):
    kwargs.setdefault("clock", SimulationClock.manual())
    kwargs.setdefault("rng", random.Random(4))
    return BaseGame(**kwargs)


def test_start_spawns_level_one_roster_inside_the_panel():
    game = make_game()
    game.start()

    assert [enemy.tier for enemy in game.enemies] == [EnemyTier.SECTION_LEADER] * 4
    assert [enemy.x for enemy in game.enemies] == [100, 400, 700, 900]
    assert all(enemy.shoot_timer.active for enemy in game.enemies)
    assert game.running


def test_emission_timers_feed_the_shared_shot_list():
    game = make_game()
    game.start()
    game.clock.advance(4.1, 0.02)

    assert all(enemy.shoot_timer.fire_count >= 1 for enemy in game.enemies)
    assert {shot.source_id for shot in game.shots} == {enemy.enemy_id for enemy in game.enemies}


def test_shot_spawned_between_ticks_moves_on_the_next_tick():
    game = make_game()
    game.start()
    enemy = game.enemies[0]
    enemy.rng = random.Random(0)
    game._emit_shot(enemy)
    shot = game.shots[-1]
    start_y = shot.y

    game.step()

    assert shot.y == start_y + enemy.speed


def test_shots_advance_before_collision_check():
    game = make_game()
    shot = make_shot(PayloadKind.QUESTION, EnemyTier.SECTION_LEADER, x=game.player.x, y=game.player.y - 42)
    game.shots.append(shot)

    game.step()

    assert game.player.health == 95
    assert game.shots == []
    assert game.hud.question == shot.text


def test_reaching_threshold_starts_next_level():
    game = make_game()
    game.start()
    old_enemies = list(game.enemies)
    old_ids = {enemy.enemy_id for enemy in old_enemies}
    game.shots.append(make_shot(PayloadKind.QUESTION, x=0, y=300))
    game.player.score = 50

    assert game.step() is Transition.LEVEL_UP

    assert game.level == 2
    assert game.shots == []
    assert not any(enemy.shoot_timer.active for enemy in old_enemies)
    assert sorted(enemy.tier for enemy in game.enemies) == [1, 1, 1, 1, 2, 2]
    assert not old_ids & {enemy.enemy_id for enemy in game.enemies}

    game.clock.advance(10.0, 0.02)
    assert not old_ids & {shot.source_id for shot in game.shots}


def test_level_three_roster():
    game = make_game(level=3)
    game.start()

    assert sorted(enemy.tier for enemy in game.enemies) == [2, 2, 2, 3, 3]


def test_losing_ends_the_session_once():
    results = []
    sink = RecordingSink()
    game = make_game(session_sink=results.append, frame_sink=sink, player_name="ada")
    game.start()
    game.player.health = 0

    assert game.step() is Transition.LOST
    assert game.step() is Transition.NONE

    assert len(results) == 1
    assert results[0].outcome is Outcome.LOST
    assert results[0].player_name == "ada"
    assert not results[0].won
    assert game.running is False
    assert not any(enemy.shoot_timer.active for enemy in game.enemies)
    assert sink.frames[-1].outcome is Outcome.LOST

    ticks = game.tick_count
    shots = len(game.shots)
    game.clock.advance(10.0, 0.02)
    assert game.tick_count == ticks
    assert len(game.shots) == shots


def test_clearing_level_three_wins():
    results = []
    game = make_game(level=3, session_sink=results.append)
    game.start()
    game.player.score = 300

    assert game.step() is Transition.WON
    assert results[0].won
    assert results[0].score == 300
    assert game.level == 3


def test_input_moves_player_until_game_over():
    game = make_game()
    start_x = game.player.x
    game.apply_input(MoveCommand.LEFT)
    assert game.player.x == start_x - 15
    game.apply_input(MoveCommand.RIGHT)
    game.apply_input(MoveCommand.RIGHT)
    assert game.player.x == start_x + 15

    game.player.health = 0
    game.step()
    game.apply_input(MoveCommand.LEFT)
    assert game.player.x == start_x + 15


def test_clock_drives_ticks_and_frames():
    sink = RecordingSink()
    game = make_game(frame_sink=sink)
    game.start()
    game.clock.advance(1.0, 0.02)

    assert 45 <= game.tick_count <= 50
    assert len(sink.frames) == game.tick_count
    assert sink.frames[-1].level == 1
    assert len(sink.frames[-1].enemies) == 4


def test_offscreen_shots_expire_without_scoring():
    game = make_game()
    game.shots.append(make_shot(PayloadKind.INFO, x=0, y=game.panel_height - 1))

    game.step()

    assert game.shots == []
    assert game.player.score == 0


def test_stop_halts_everything_without_result():
    results = []
    game = make_game(session_sink=results.append)
    game.start()
    game.stop()
    game.clock.advance(10.0, 0.02)

    assert game.tick_count == 0
    assert game.shots == []
    assert results == []


def test_autopilot_dodges_questions_and_chases_info():
    game = make_game()
    player = game.player
    pilot = AutoPilot()

    game.shots.append(make_shot(PayloadKind.QUESTION, x=player.x + 10, y=300))
    assert pilot.choose(game) is MoveCommand.LEFT

    game.shots.clear()
    game.shots.append(make_shot(PayloadKind.INFO, x=player.x + 200, y=300))
    assert pilot.choose(game) is MoveCommand.RIGHT

    game.shots.clear()
    assert pilot.choose(game) is None


def test_autoplay_session_finishes_cleanly():
    game = AutoGame(seed=3)
    result = game.play(max_seconds=120)

    assert game.running is False
    if result is not None:
        assert result.outcome in (Outcome.WON, Outcome.LOST)
        assert result.score == game.player.score
