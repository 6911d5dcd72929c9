"""Core gameplay modules."""

from .actor import Enemy, Player
from .collision import CollisionEvent, HudText, resolve_collisions
from .game import BaseGame, Frame, MoveCommand, SessionResult
from .progression import Outcome, ProgressionController, Transition
from .shots import EmissionTimer, PayloadKind, ShotBox

__all__ = [
    "BaseGame",
    "CollisionEvent",
    "EmissionTimer",
    "Enemy",
    "Frame",
    "HudText",
    "MoveCommand",
    "Outcome",
    "PayloadKind",
    "Player",
    "ProgressionController",
    "SessionResult",
    "ShotBox",
    "Transition",
    "resolve_collisions",
]
