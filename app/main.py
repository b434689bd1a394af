from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.routers import health, recommend

logger = logging.getLogger("fastapi-reco")
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(levelname)s | %(name)s: %(message)s",
)

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    scoring = recommend.get_scoring_config()
    logger.info("[startup] Event reco listening on port %s", settings.port)
    logger.info("[startup] Endpoint: POST http://localhost:%s/recommend?requestedItems=N", settings.port)
    logger.info("[startup] Health:   GET  http://localhost:%s/health", settings.port)
    logger.info(
        "[startup] weights=%s default=%s half_life_days=%s",
        dict(scoring.weights.weights),
        scoring.weights.default_weight,
        scoring.half_life_days,
    )

    yield

    logger.info("[shutdown] Event reco stopped")

app = FastAPI(
    title="Event Reco Service",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    logger.info(
        "%s %s -> %s (%.2f ms)",
        request.method,
        request.url.path,
        response.status_code,
        (time.perf_counter() - start) * 1000,
    )
    return response


app.include_router(health.router)
app.include_router(recommend.router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host=settings.host, port=settings.port)
