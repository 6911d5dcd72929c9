"""Axis-aligned rectangle helpers for the top-left playfield."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in top-left coordinate space."""

    left: int
    top: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.left + self.width

    @property
    def bottom(self) -> int:
        return self.top + self.height

    def colliderect(self, other: "Rect") -> bool:
        # Touching edges do not count as an overlap.
        return not (
            self.right <= other.left
            or self.left >= other.right
            or self.bottom <= other.top
            or self.top >= other.bottom
        )


def clamp(value: int, min_value: int, max_value: int) -> int:
    return max(min_value, min(max_value, value))
