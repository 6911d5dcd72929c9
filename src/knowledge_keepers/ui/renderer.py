"""Arcade renderer for the Knowledge Keepers playfield."""

from __future__ import annotations

from collections import deque

import arcade

from knowledge_keepers.config import (
    BOARD,
    COLOR_BACKGROUND,
    COLOR_BOTTOM_BAR,
    COLOR_HEALTH,
    COLOR_HEALTH_BACK,
    COLOR_INFO_SHOT,
    COLOR_QUESTION_SHOT,
    COLOR_TEXT,
    COLOR_TOP_BAR,
    FONT_SIZE_BAR,
    FONT_SIZE_TEXT,
    PLAYER_MAX_HEALTH,
)
from knowledge_keepers.core.game import Frame, MoveCommand
from knowledge_keepers.core.progression import Outcome

DEFAULT_AVATAR_COLOR = (97, 101, 107)
HEALTH_BAR_WIDTH = 150
HEALTH_BAR_HEIGHT = 30


class Renderer:
    """Draw entities and the status bars; collect arrow-key commands."""

    def __init__(self, width: int, height: int, title: str, enabled: bool):
        self.enabled = bool(enabled)
        self.width = int(width)
        self.height = int(height)
        self.closed = False
        self.pending_commands: deque[MoveCommand] = deque()
        self.window = None
        if not self.enabled:
            return

        self.window = arcade.Window(self.width, self.height, title, vsync=False)
        self.window.push_handlers(on_key_press=self._on_key_press, on_close=self._on_close)

        top_center_y = self.height - BOARD.top_bar_height_px / 2
        self.health_label = self._text("Health:", 10, top_center_y, FONT_SIZE_BAR)
        self.level_text = self._text("", self.width / 2, top_center_y, FONT_SIZE_BAR, anchor_x="center")
        self.score_text = self._text("", self.width - 10, top_center_y, FONT_SIZE_BAR, anchor_x="right")
        self.question_text = self._text("", 25, BOARD.bottom_bar_height_px * 0.7, FONT_SIZE_TEXT)
        self.info_text = self._text("", 25, BOARD.bottom_bar_height_px * 0.3, FONT_SIZE_TEXT)
        self.banner_text = self._text("", self.width / 2, self.height / 2, FONT_SIZE_BAR * 2, anchor_x="center")

    @staticmethod
    def _text(text: str, x: float, y: float, size: int, anchor_x: str = "left") -> arcade.Text:
        return arcade.Text(text, x, y, COLOR_TEXT, size, anchor_x=anchor_x, anchor_y="center")

    def _on_key_press(self, symbol: int, modifiers: int) -> None:
        if symbol == arcade.key.LEFT:
            self.pending_commands.append(MoveCommand.LEFT)
        elif symbol == arcade.key.RIGHT:
            self.pending_commands.append(MoveCommand.RIGHT)

    def _on_close(self) -> None:
        self.closed = True

    def close(self) -> None:
        if self.window is not None and not self.closed:
            self.window.close()
        self.closed = True
        self.window = None

    def poll_events(self) -> list[MoveCommand]:
        if self.window is not None and not self.closed:
            self.window.dispatch_events()
        commands = list(self.pending_commands)
        self.pending_commands.clear()
        return commands

    def _to_arcade_bottom(self, top: float, height: float) -> float:
        # Playfield coordinates are top-left and start below the top bar.
        return self.height - BOARD.top_bar_height_px - top - height

    def draw_frame(self, frame: Frame) -> None:
        if self.window is None or self.closed:
            return

        self.window.switch_to()
        self.window.clear(color=COLOR_BACKGROUND)

        for enemy in frame.enemies:
            self._draw_box(enemy.x, enemy.y, enemy.width, enemy.height, enemy.avatar)
        player = frame.player
        self._draw_box(player.x, player.y, player.width, player.height, player.avatar)
        for shot in frame.shots:
            color = COLOR_INFO_SHOT if shot.is_info else COLOR_QUESTION_SHOT
            self._draw_box(shot.x, shot.y, shot.width, shot.height, color)

        self._draw_top_bar(frame)
        self._draw_bottom_bar(frame)
        if frame.outcome is not None:
            self.banner_text.text = "You won the game!" if frame.outcome is Outcome.WON else "You lost the game!"
            self.banner_text.draw()
        self.window.flip()

    def _draw_box(self, left: float, top: float, width: float, height: float, avatar) -> None:
        color = avatar if avatar is not None else DEFAULT_AVATAR_COLOR
        arcade.draw_lbwh_rectangle_filled(left, self._to_arcade_bottom(top, height), width, height, color)

    def _draw_top_bar(self, frame: Frame) -> None:
        bar_height = BOARD.top_bar_height_px
        arcade.draw_lbwh_rectangle_filled(0, self.height - bar_height, self.width, bar_height, COLOR_TOP_BAR)

        bar_left = 90
        bar_bottom = self.height - bar_height / 2 - HEALTH_BAR_HEIGHT / 2
        arcade.draw_lbwh_rectangle_filled(bar_left, bar_bottom, HEALTH_BAR_WIDTH, HEALTH_BAR_HEIGHT, COLOR_HEALTH_BACK)
        filled = HEALTH_BAR_WIDTH * max(0, frame.player.health) / PLAYER_MAX_HEALTH
        if filled > 0:
            arcade.draw_lbwh_rectangle_filled(bar_left, bar_bottom, filled, HEALTH_BAR_HEIGHT, COLOR_HEALTH)

        self.level_text.text = f"LEVEL: {frame.level}"
        self.score_text.text = f"Score: {frame.player.score} / {frame.required_score}"
        self.health_label.draw()
        self.level_text.draw()
        self.score_text.draw()

    def _draw_bottom_bar(self, frame: Frame) -> None:
        arcade.draw_lbwh_rectangle_filled(0, 0, self.width, BOARD.bottom_bar_height_px, COLOR_BOTTOM_BAR)
        self.question_text.text = f"QUESTION: {frame.hud.question}"
        self.info_text.text = f"INFO: {frame.hud.info}"
        self.question_text.draw()
        self.info_text.draw()
