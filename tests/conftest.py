import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.routers.recommend import get_clock, get_scoring_config
from app.services.weights import ScoringConfig, build_weight_table

NOW = 1_700_000_000
DAY = 86400


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def scoring_config():
    return ScoringConfig(weights=build_weight_table(), half_life_days=7)


@pytest.fixture
def client(clock, scoring_config):
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_scoring_config] = lambda: scoring_config
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
