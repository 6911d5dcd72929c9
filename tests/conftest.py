import random

import pytest

from helpers import FakeTime
from knowledge_keepers.config import EnemyTier
from knowledge_keepers.content import ContentBank
from knowledge_keepers.core import Enemy


@pytest.fixture
def content():
    return ContentBank.default(rng=random.Random(7))


@pytest.fixture
def fake_time():
    return FakeTime()


@pytest.fixture
def make_enemy(content, fake_time):
    def _make(tier=EnemyTier.SECTION_LEADER, x=100, moving_right=True, rng=None, bank=None):
        enemy = Enemy(
            tier,
            x,
            rng=random.Random(0),
            content=bank or content,
            time_ms=fake_time,
        )
        enemy.moving_right = moving_right
        if rng is not None:
            enemy.rng = rng
        return enemy

    return _make
