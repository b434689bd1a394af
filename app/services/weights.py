from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from app.core.config import (
    DEFAULT_EVENT_WEIGHT,
    DEFAULT_EVENT_WEIGHTS,
    RECENCY_HALF_LIFE_DAYS,
    Settings,
)


@dataclass(frozen=True)
class WeightTable:
    weights: Mapping[str, float]
    default_weight: float = DEFAULT_EVENT_WEIGHT

    def weight_for(self, name: Optional[str]) -> float:
        if name is None:
            return self.default_weight
        return self.weights.get(name, self.default_weight)


@dataclass(frozen=True)
class ScoringConfig:
    weights: WeightTable
    half_life_days: float = RECENCY_HALF_LIFE_DAYS

    def __post_init__(self) -> None:
        if not self.half_life_days > 0:
            raise ValueError("half_life_days must be > 0")


def build_weight_table(
    overrides: Optional[Mapping[str, float]] = None,
    default_weight: float = DEFAULT_EVENT_WEIGHT,
    *,
    include_defaults: bool = True,
) -> WeightTable:
    merged = dict(DEFAULT_EVENT_WEIGHTS) if include_defaults else {}
    if overrides:
        merged.update({str(k): float(v) for k, v in overrides.items()})
    return WeightTable(weights=MappingProxyType(merged), default_weight=default_weight)


def scoring_config_from_settings(s: Settings) -> ScoringConfig:
    # Settings already merged env overrides over the defaults
    table = build_weight_table(s.event_weights, s.default_event_weight, include_defaults=False)
    return ScoringConfig(weights=table, half_life_days=s.recency_half_life_days)
