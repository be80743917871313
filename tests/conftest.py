from __future__ import annotations

import pytest

from tests._helpers import MONGO_COMPOSE, REDIS_COMPOSE, FakeFetcher


@pytest.fixture
def fake_fetcher() -> FakeFetcher:
    return FakeFetcher(
        {
            ("A/B", "main", "f.yml"): REDIS_COMPOSE,
            ("C/D", "main", "f.yml"): MONGO_COMPOSE,
        }
    )
