import random

from knowledge_keepers.config import TIER_SETTINGS, EnemyTier
from knowledge_keepers.core import PayloadKind, ShotBox


class ScriptedRandom(random.Random):
    """Returns queued values from random(), then falls back to a seeded stream."""

    def __init__(self, values, seed=0):
        super().__init__(seed)
        self.values = list(values)

    def random(self):
        if self.values:
            return self.values.pop(0)
        return super().random()


class FakeTime:
    def __init__(self, now_ms: float = 0.0):
        self.now_ms = now_ms

    def __call__(self) -> float:
        return self.now_ms


class RecordingSink:
    def __init__(self):
        self.frames = []

    def draw_frame(self, frame):
        self.frames.append(frame)


def make_shot(kind=PayloadKind.QUESTION, tier=EnemyTier.SECTION_LEADER, x=500, y=640, text="payload"):
    spec = TIER_SETTINGS[tier]
    return ShotBox(
        x=x,
        y=y,
        speed=spec.speed,
        kind=kind,
        text=text,
        source_id=int(tier),
        source_tier=tier,
        info_reward=spec.info_reward,
        question_damage=spec.question_damage,
    )
