import json
import logging
import re
import time
from functools import lru_cache
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.core.config import Settings, settings
from app.models import Event
from app.services import request_log
from app.services.scoring import Clock, score_events
from app.services.weights import ScoringConfig, scoring_config_from_settings

logger = logging.getLogger("fastapi-reco.recommend")

router = APIRouter(tags=["recommend"])

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class MalformedRequestBody(ValueError):
    pass


def _reject_constant(name: str) -> Any:
    raise MalformedRequestBody(f"{name} is not valid JSON")


def get_settings() -> Settings:
    return settings


@lru_cache
def _default_scoring_config() -> ScoringConfig:
    return scoring_config_from_settings(settings)


def get_scoring_config() -> ScoringConfig:
    return _default_scoring_config()


def get_clock() -> Clock:
    return time.time


def parse_requested_items(raw: Optional[str], default: int) -> int:
    if raw is None:
        return default
    m = _LEADING_INT.match(raw)
    if not m:
        return default
    n = int(m.group(1))
    return n if n > 0 else default


def parse_body(raw: bytes) -> dict:
    try:
        payload = json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        # ValueError covers JSONDecodeError, bad encodings and oversized integers
        raise MalformedRequestBody(str(e)) from e
    if not isinstance(payload, dict):
        raise MalformedRequestBody(f"expected a JSON object, got {type(payload).__name__}")
    return payload


def parse_events(items: Any) -> List[Event]:
    if not isinstance(items, list):
        return []
    out: List[Event] = []
    for i, item in enumerate(items):
        if not isinstance(item, dict):
            logger.warning("Skipping event #%d: not an object", i)
            continue
        try:
            out.append(Event.model_validate(item))
        except ValidationError as e:
            logger.warning("Skipping event #%d: %s", i, e)
    return out


@router.post("/recommend")
async def recommend(
    request: Request,
    requested_items: Optional[str] = Query(None, alias="requestedItems"),
    cfg: Settings = Depends(get_settings),
    scoring: ScoringConfig = Depends(get_scoring_config),
    clock: Clock = Depends(get_clock),
):
    limit = parse_requested_items(requested_items, cfg.default_requested_items)

    raw = await request.body()
    try:
        payload = parse_body(raw)
    except MalformedRequestBody as e:
        logger.error("Failed to parse request body: %s", e)
        return JSONResponse(status_code=400, content=[])

    events = parse_events(payload.get("events"))
    path = request.url.path + (f"?{request.url.query}" if request.url.query else "")
    request_log.log_incoming(path, limit, events, cfg.tracked_event_names)

    ranked = score_events(events, limit, config=scoring, clock=clock)
    result = [r.id for r in ranked]

    request_log.log_outcome(ranked, result)
    return JSONResponse(status_code=200, content=result)
