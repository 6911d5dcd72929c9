"""Central configuration for Knowledge Keepers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
import os
from pathlib import Path

from knowledge_keepers.utils import env_flag, env_int, env_path, validate_level_settings


PROJECT_ROOT = Path(__file__).resolve().parents[2]
DATA_DIR = PROJECT_ROOT / "data"
QUESTIONS_PATH = DATA_DIR / "questions.txt"
INFO_PATH = DATA_DIR / "info.txt"


class EnemyTier(IntEnum):
    SECTION_LEADER = 1
    TEACHING_ASSISTANT = 2
    PROFESSOR = 3


@dataclass(frozen=True)
class RuntimeFlags:
    show_game: bool
    seed: int | None
    log_level: str
    log_file: Path | None


@dataclass(frozen=True)
class BoardConfig:
    panel_width: int
    panel_height: int
    top_bar_height_px: int
    bottom_bar_height_px: int

    @property
    def screen_width_px(self) -> int:
        return self.panel_width

    @property
    def screen_height_px(self) -> int:
        return self.top_bar_height_px + self.panel_height + self.bottom_bar_height_px


@dataclass(frozen=True)
class TierSpec:
    """Per-tier constants looked up by enemies and their shots."""

    name: str
    speed: int
    info_reward: int
    question_damage: int
    info_probability: float
    tracking_probability: float | None
    difficulty: int

    @property
    def tracks_player(self) -> bool:
        return self.tracking_probability is not None


FLAGS = RuntimeFlags(
    show_game=env_flag("KK_SHOW_GAME", True),
    seed=env_int("KK_SEED", None),
    log_level=os.getenv("KK_LOG_LEVEL", "INFO"),
    log_file=env_path("KK_LOG_FILE"),
)

BOARD = BoardConfig(
    panel_width=955,
    panel_height=700,
    top_bar_height_px=64,
    bottom_bar_height_px=100,
)

# Runtime
WINDOW_TITLE = "Knowledge Keepers"
TICK_MS = 20
TICK_SECONDS = TICK_MS / 1000.0
HEADLESS_MAX_SECONDS = 600

# Playfield
PANEL_WIDTH = BOARD.panel_width
PANEL_HEIGHT = BOARD.panel_height

# Player
PLAYER_WIDTH = 40
PLAYER_HEIGHT = 54
PLAYER_START_X = 500
PLAYER_START_Y = 640
PLAYER_STEP_PX = 15
PLAYER_MAX_HEALTH = 100

# Enemies
ENEMY_WIDTH = 55
ENEMY_HEIGHT = 70
ENEMY_START_Y = 60
DECISION_INTERVAL_MS = 1000

# Shots
SHOT_WIDTH = 40
SHOT_HEIGHT = 40
SHOT_DELAY_MIN_MS = 2000
SHOT_DELAY_MAX_MS = 4000  # exclusive
# Shots below the playfield can no longer reach the player; drop them.
EXPIRE_OFFSCREEN_SHOTS = True

TIER_SETTINGS = {
    EnemyTier.SECTION_LEADER: TierSpec(
        name="Section Leader",
        speed=3,
        info_reward=10,
        question_damage=5,
        info_probability=0.7,
        tracking_probability=None,
        difficulty=1,
    ),
    EnemyTier.TEACHING_ASSISTANT: TierSpec(
        name="Teaching Assistant",
        speed=5,
        info_reward=20,
        question_damage=10,
        info_probability=0.5,
        tracking_probability=0.4,
        difficulty=2,
    ),
    EnemyTier.PROFESSOR: TierSpec(
        name="Professor",
        speed=7,
        info_reward=30,
        question_damage=20,
        info_probability=0.3,
        tracking_probability=0.6,
        difficulty=3,
    ),
}

# Levels
MIN_LEVEL = 1
MAX_LEVEL = 3
ROSTER_START_X = 100
LEVEL_SETTINGS = {
    1: {
        "required_score": 50,
        "spacing": 300,
        "roster": [(EnemyTier.SECTION_LEADER, 4)],
    },
    2: {
        "required_score": 150,
        "spacing": 200,
        "roster": [(EnemyTier.SECTION_LEADER, 4), (EnemyTier.TEACHING_ASSISTANT, 2)],
    },
    3: {
        "required_score": 300,
        "spacing": 250,
        "roster": [(EnemyTier.TEACHING_ASSISTANT, 3), (EnemyTier.PROFESSOR, 2)],
    },
}

validate_level_settings(
    min_level=MIN_LEVEL,
    max_level=MAX_LEVEL,
    level_settings=LEVEL_SETTINGS,
    known_tiers=TIER_SETTINGS.keys(),
)

# Avatar pools (opaque handles; the renderer treats them as fill colours)
AVATAR_POOLS = {
    "player": [(38, 110, 105)],
    EnemyTier.SECTION_LEADER: [(102, 212, 200), (97, 180, 120), (120, 160, 220)],
    EnemyTier.TEACHING_ASSISTANT: [(244, 137, 120), (230, 170, 90)],
    EnemyTier.PROFESSOR: [(150, 62, 54), (120, 40, 110)],
}

# Rendering
FONT_SIZE_BAR = 18
FONT_SIZE_TEXT = 14
COLOR_BACKGROUND = (230, 240, 250)
COLOR_TOP_BAR = (240, 255, 240)
COLOR_BOTTOM_BAR = (210, 210, 235)
COLOR_TEXT = (28, 30, 36)
COLOR_HEALTH = (102, 180, 120)
COLOR_HEALTH_BACK = (97, 101, 107)
COLOR_INFO_SHOT = (255, 224, 130)
COLOR_QUESTION_SHOT = (150, 62, 54)
