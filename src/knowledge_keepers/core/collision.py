"""Player versus shot collision resolution."""

from __future__ import annotations

from dataclasses import dataclass

from knowledge_keepers.config import EnemyTier
from knowledge_keepers.core.actor import Player
from knowledge_keepers.core.shots import PayloadKind, ShotBox


@dataclass
class HudText:
    """Question/info text currently shown to the player."""

    question: str = ""
    info: str = ""


@dataclass(frozen=True)
class CollisionEvent:
    kind: PayloadKind
    text: str
    source_id: int
    source_tier: EnemyTier
    score_delta: int
    health_delta: int
    score_after: int
    health_after: int


def resolve_collisions(player: Player, shots: list[ShotBox], hud: HudText) -> list[CollisionEvent]:
    """Apply every shot overlapping the player, in list order, and remove it.

    Iterates over a snapshot so removing a consumed shot never skips or
    repeats its neighbour.
    """
    player_bounds = player.bounds
    events: list[CollisionEvent] = []
    for shot in list(shots):
        if not shot.bounds.colliderect(player_bounds):
            continue

        if shot.kind is PayloadKind.INFO:
            before = player.score
            player.add_score(shot.info_reward)
            hud.question = ""
            hud.info = shot.text
            score_delta, health_delta = player.score - before, 0
        else:
            before = player.health
            player.take_damage(shot.question_damage)
            hud.info = ""
            hud.question = shot.text
            score_delta, health_delta = 0, player.health - before

        shots.remove(shot)
        events.append(
            CollisionEvent(
                kind=shot.kind,
                text=shot.text,
                source_id=shot.source_id,
                source_tier=shot.source_tier,
                score_delta=score_delta,
                health_delta=health_delta,
                score_after=player.score,
                health_after=player.health,
            )
        )
    return events
