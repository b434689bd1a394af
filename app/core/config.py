import json
import math
import os
from typing import Dict, List

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

load_dotenv()

DEFAULT_EVENT_WEIGHTS: Dict[str, float] = {
    "ProductAddToCart": 10,
    "ProductDetailsView": 5,
    "Purchase": -100,
    "MyCustomEvent": 15,
    "MyCustomWishlistEvent": 20,
}
DEFAULT_EVENT_WEIGHT = 1.0
RECENCY_HALF_LIFE_DAYS = 7.0


def _weights_from_env() -> Dict[str, float]:
    weights = dict(DEFAULT_EVENT_WEIGHTS)
    raw = os.getenv("EVENT_WEIGHTS")
    if not raw:
        return weights
    try:
        overrides = json.loads(raw, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise ValueError(f"EVENT_WEIGHTS is not valid JSON: {e}") from e
    if not isinstance(overrides, dict):
        raise ValueError("EVENT_WEIGHTS must be a JSON object")
    weights.update(overrides)
    return weights


def _reject_constant(name: str) -> float:
    raise ValueError(f"EVENT_WEIGHTS may not contain {name}")


def _names_from_env() -> List[str]:
    raw = os.getenv("TRACKED_EVENT_NAMES", "MyCustomEvent,MyCustomWishlistEvent")
    return [n.strip() for n in raw.split(",") if n.strip()]


class Settings(BaseModel):
    model_config = ConfigDict(validate_default=True)

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    event_weights: Dict[str, float] = Field(default_factory=_weights_from_env)
    default_event_weight: float = float(os.getenv("DEFAULT_EVENT_WEIGHT", DEFAULT_EVENT_WEIGHT))
    recency_half_life_days: float = float(os.getenv("RECENCY_HALF_LIFE_DAYS", RECENCY_HALF_LIFE_DAYS))

    default_requested_items: int = int(os.getenv("DEFAULT_REQUESTED_ITEMS", "3"))
    tracked_event_names: List[str] = Field(default_factory=_names_from_env)

    @field_validator("event_weights")
    @classmethod
    def _finite_weights(cls, v: Dict[str, float]) -> Dict[str, float]:
        bad = sorted(name for name, w in v.items() if not math.isfinite(w))
        if bad:
            raise ValueError(f"EVENT_WEIGHTS must be finite numbers: {bad}")
        return v

    @field_validator("default_event_weight")
    @classmethod
    def _finite_default_weight(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("DEFAULT_EVENT_WEIGHT must be a finite number")
        return v

    @field_validator("recency_half_life_days")
    @classmethod
    def _positive_half_life(cls, v: float) -> float:
        if not v > 0:
            raise ValueError("RECENCY_HALF_LIFE_DAYS must be > 0")
        return v

    @field_validator("default_requested_items")
    @classmethod
    def _positive_requested_items(cls, v: int) -> int:
        if v < 1:
            raise ValueError("DEFAULT_REQUESTED_ITEMS must be >= 1")
        return v


settings = Settings()
