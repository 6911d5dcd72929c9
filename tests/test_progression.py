from knowledge_keepers.core import Outcome, Player, ProgressionController, Transition


def test_initial_state():
    progression = ProgressionController()

    assert progression.level == 1
    assert progression.required_score == 50
    assert progression.outcome is None


def test_threshold_reached_exactly_levels_up():
    progression = ProgressionController()
    player = Player()
    player.score = 49
    assert progression.evaluate(player) is Transition.NONE

    player.score = 50
    assert progression.evaluate(player) is Transition.LEVEL_UP
    assert progression.level == 2
    assert progression.required_score == 150


def test_full_run_to_victory():
    progression = ProgressionController()
    player = Player()
    transitions = []
    for score in (50, 150, 300):
        player.score = score
        transitions.append(progression.evaluate(player))

    assert transitions == [Transition.LEVEL_UP, Transition.LEVEL_UP, Transition.WON]
    assert progression.level == 3
    assert progression.outcome is Outcome.WON


def test_zero_health_loses_from_any_level():
    for level in (1, 2, 3):
        progression = ProgressionController(level)
        player = Player()
        player.health = 0

        assert progression.evaluate(player) is Transition.LOST
        assert progression.outcome is Outcome.LOST
        assert progression.level == level


def test_score_threshold_is_checked_before_health():
    progression = ProgressionController()
    player = Player()
    player.score = 50
    player.health = 0

    assert progression.evaluate(player) is Transition.LEVEL_UP
    assert progression.evaluate(player) is Transition.LOST


def test_game_over_is_terminal():
    progression = ProgressionController(3)
    player = Player()
    player.score = 300
    assert progression.evaluate(player) is Transition.WON

    player.score = 10_000
    player.health = 0
    assert progression.evaluate(player) is Transition.NONE
    assert progression.level_up() is Transition.NONE
    assert progression.outcome is Outcome.WON
    assert progression.level == 3


def test_lost_game_ignores_later_score():
    progression = ProgressionController()
    player = Player()
    player.health = 0
    progression.evaluate(player)

    player.score = 500
    assert progression.evaluate(player) is Transition.NONE
    assert progression.level == 1
    assert progression.outcome is Outcome.LOST


def test_out_of_range_levels_resolve_to_known_levels():
    assert ProgressionController(7).level == 3
    assert ProgressionController(0).level == 1

    progression = ProgressionController(3)
    assert progression.level_up() is Transition.WON
    assert progression.level == 3
