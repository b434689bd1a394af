import logging
import math
import time
from typing import Callable, Dict, Iterable, List, Optional, Set

from app.core.config import settings
from app.models import Event, ScoredProduct
from app.services.extraction import extract_product_ids
from app.services.weights import ScoringConfig, scoring_config_from_settings

logger = logging.getLogger("fastapi-reco.scoring")

PURCHASE_EVENT = "Purchase"
SECONDS_PER_DAY = 86400

Clock = Callable[[], float]


def recency_factor(age_days: float, half_life_days: float) -> float:
    """Exponential decay: 1.0 at age 0, 0.5 at one half-life.

    Negative ages (future timestamps) give a boost above 1.0.
    Raises OverflowError when the boost does not fit in a float.
    """
    return math.pow(0.5, age_days / half_life_days)


def score_events(
    events: Iterable[Event],
    limit: int,
    *,
    config: Optional[ScoringConfig] = None,
    clock: Clock = time.time,
) -> List[ScoredProduct]:
    if config is None:
        config = scoring_config_from_settings(settings)

    scores: Dict[str, float] = {}
    purchased: Set[str] = set()
    now = math.floor(clock())

    for event in events:
        ids = extract_product_ids(event)

        if event.name == PURCHASE_EVENT:
            purchased.update(ids)
            continue

        if not ids:
            continue

        weight = config.weights.weight_for(event.name)
        ts = event.timestamp if event.timestamp is not None else now
        age_days = (now - ts) / SECONDS_PER_DAY
        try:
            contribution = weight * recency_factor(age_days, config.half_life_days)
        except OverflowError:
            contribution = math.inf
        if not math.isfinite(contribution):
            logger.warning("Skipping event %r: timestamp %s is too far in the future", event.name, ts)
            continue

        # apply the whole event or none of it, so accumulated scores stay finite
        pending: Dict[str, float] = {}
        for pid in ids:
            pending[pid] = pending.get(pid, scores.get(pid, 0.0)) + contribution
        if not all(math.isfinite(v) for v in pending.values()):
            logger.warning("Skipping event %r: accumulated score for %s would overflow", event.name, ids)
            continue
        scores.update(pending)

    ranked = [
        (score, idx, pid)
        for idx, (pid, score) in enumerate(scores.items())
        if pid not in purchased
    ]
    ranked.sort(key=lambda x: (-x[0], x[1]))

    if limit <= 0:
        return []
    return [ScoredProduct(id=pid, score=score) for score, _, pid in ranked[:limit]]
