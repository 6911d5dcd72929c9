"""Shared utility helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Mapping


def env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def env_int(name: str, default: int | None) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def env_path(name: str) -> Path | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return Path(raw.strip()).expanduser()


def validate_level_settings(
    *,
    min_level: int,
    max_level: int,
    level_settings: Mapping[int, Mapping[str, object]],
    known_tiers: Iterable[object],
) -> None:
    expected_levels = set(range(int(min_level), int(max_level) + 1))
    configured_levels = set(level_settings.keys())
    missing_levels = sorted(expected_levels - configured_levels)
    extra_levels = sorted(configured_levels - expected_levels)
    if missing_levels or extra_levels:
        raise ValueError(
            "LEVEL_SETTINGS must cover exactly MIN_LEVEL..MAX_LEVEL. "
            f"missing={missing_levels}, extra={extra_levels}"
        )

    tiers = set(known_tiers)
    previous_score = 0
    for level in sorted(level_settings):
        settings = level_settings[level]
        for key in ("required_score", "spacing", "roster"):
            if key not in settings:
                raise ValueError(f"LEVEL_SETTINGS[{level}] is missing required key '{key}'")

        required_score = int(settings["required_score"])
        if required_score <= previous_score:
            raise ValueError(
                f"LEVEL_SETTINGS[{level}]['required_score'] must increase per level, got {required_score}"
            )
        previous_score = required_score

        roster = settings["roster"]
        if not roster:
            raise ValueError(f"LEVEL_SETTINGS[{level}]['roster'] must not be empty")
        for tier, count in roster:
            if tier not in tiers:
                raise ValueError(f"LEVEL_SETTINGS[{level}] references unknown tier {tier!r}")
            if int(count) <= 0:
                raise ValueError(f"LEVEL_SETTINGS[{level}] roster count must be positive, got {count}")
