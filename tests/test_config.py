import pytest
from pydantic import ValidationError

from app.core.config import DEFAULT_EVENT_WEIGHTS, Settings
from app.services.weights import build_weight_table, scoring_config_from_settings


def test_default_weight_table():
    table = build_weight_table()
    assert table.weight_for("ProductAddToCart") == 10
    assert table.weight_for("MyCustomWishlistEvent") == 20
    assert table.weight_for("Unknown") == 1
    assert table.weight_for(None) == 1


def test_weight_table_is_read_only():
    table = build_weight_table()
    with pytest.raises(TypeError):
        table.weights["ProductAddToCart"] = 0


def test_env_weights_merge_over_defaults(monkeypatch):
    monkeypatch.setenv("EVENT_WEIGHTS", '{"ProductDetailsView": 7, "Share": 3}')
    s = Settings()
    assert s.event_weights["ProductDetailsView"] == 7
    assert s.event_weights["Share"] == 3
    assert s.event_weights["ProductAddToCart"] == DEFAULT_EVENT_WEIGHTS["ProductAddToCart"]


@pytest.mark.parametrize("raw", ["{oops", "[1, 2]"])
def test_bad_env_weights_fail_fast(monkeypatch, raw):
    monkeypatch.setenv("EVENT_WEIGHTS", raw)
    with pytest.raises(ValueError):
        Settings()


def test_non_numeric_weight_is_rejected(monkeypatch):
    monkeypatch.setenv("EVENT_WEIGHTS", '{"Share": "lots"}')
    with pytest.raises(ValidationError):
        Settings()


def test_tracked_names_from_env(monkeypatch):
    monkeypatch.setenv("TRACKED_EVENT_NAMES", " Share, ,Like ")
    assert Settings().tracked_event_names == ["Share", "Like"]


def test_half_life_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(recency_half_life_days=0)


def test_scoring_config_from_settings():
    s = Settings(event_weights={"OnlyThis": 4}, default_event_weight=0.5, recency_half_life_days=3)
    cfg = scoring_config_from_settings(s)
    assert cfg.half_life_days == 3
    assert cfg.weights.weight_for("OnlyThis") == 4
    assert cfg.weights.weight_for("ProductAddToCart") == 0.5


@pytest.mark.parametrize("raw", ['{"Share": NaN}', '{"Share": Infinity}', '{"Share": -Infinity}', '{"Share": 1e400}'])
def test_non_finite_env_weights_fail_fast(monkeypatch, raw):
    monkeypatch.setenv("EVENT_WEIGHTS", raw)
    with pytest.raises(ValueError):
        Settings()


@pytest.mark.parametrize("value", [float("nan"), float("inf")])
def test_non_finite_weights_are_rejected(value):
    with pytest.raises(ValidationError):
        Settings(event_weights={"Share": value})
    with pytest.raises(ValidationError):
        Settings(default_event_weight=value)


def test_table_defaults_match_settings_defaults():
    from app.core.config import DEFAULT_EVENT_WEIGHT, RECENCY_HALF_LIFE_DAYS
    from app.services.weights import ScoringConfig

    assert build_weight_table().default_weight == DEFAULT_EVENT_WEIGHT
    assert ScoringConfig(weights=build_weight_table()).half_life_days == RECENCY_HALF_LIFE_DAYS
