import json
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from app.models import Event, ScoredProduct

logger = logging.getLogger("fastapi-reco.recommend")

RULE = "=" * 60


def _iso(ts: Optional[float]) -> str:
    if ts is None:
        return "n/a"
    try:
        return datetime.fromtimestamp(ts, tz=timezone.utc).isoformat()
    except (OverflowError, OSError, ValueError):
        return "out of range"


def event_breakdown(events: Sequence[Event]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for e in events:
        key = e.name if e.name is not None else "<unnamed>"
        counts[key] = counts.get(key, 0) + 1
    return counts


def log_incoming(path: str, requested_items: int, events: Sequence[Event], tracked_names: Sequence[str]):
    logger.info(RULE)
    logger.info("Incoming request")
    logger.info("  Path: %s", path)
    logger.info("  requestedItems: %d", requested_items)
    logger.info("  Total events: %d", len(events))
    logger.info("  Event breakdown:")
    for name, count in event_breakdown(events).items():
        logger.info("    %s: %d", name, count)

    for tracked in tracked_names:
        matching = [e for e in events if e.name == tracked]
        if not matching:
            logger.info("  >>> No %s found in this request", tracked)
            continue
        logger.info("  >>> %s details:", tracked)
        for e in matching:
            data = e.data.model_dump(exclude_none=True) if e.data is not None else None
            logger.info("    timestamp: %s (%s)", e.timestamp, _iso(e.timestamp))
            logger.info("    data: %s", json.dumps(data))
            logger.info("    productIds: %s", json.dumps(e.productIds))


def log_outcome(ranked: Sequence[ScoredProduct], result: List[str]):
    logger.info("  Scoring:")
    for r in ranked:
        logger.info("    %s: %.2f", r.id, r.score)
    logger.info("  Response: %s", json.dumps(result))
    logger.info(RULE)
