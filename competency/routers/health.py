"""
Health Check Router - R&D Competency Platform
competency/routers/health.py

Returns service status and a real Redis connection check. Redis is an
optional cache, so an unreachable Redis degrades the status without
failing the check.
"""
from fastapi import APIRouter
from pydantic import BaseModel
from typing import Dict, Optional
from datetime import datetime, timezone
import time

import redis

from competency.config import settings
from competency.services.cache import get_cache

router = APIRouter(prefix=settings.API_V1_PREFIX, tags=["Health"])


#  Schemas


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    dependencies: Dict[str, str]


class CacheStatsResponse(BaseModel):
    redis_connected: bool
    keys_count: Optional[int] = None
    memory_used: Optional[str] = None
    latency_ms: Optional[float] = None
    error: Optional[str] = None


#  Dependency Health Checks


def check_redis() -> str:
    """Check Redis connection health."""
    try:
        client = redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=2,
        )
        client.ping()
        client.close()
        return "healthy"
    except (redis.RedisError, OSError) as e:
        error_msg = str(e)[:100] + "..." if len(str(e)) > 100 else str(e)
        return f"unhealthy: {error_msg}"


#  Main Health Check Route


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={200: {"description": "Service is up; dependency status reported"}},
    summary="Health check",
    description="Check the service and its Redis cache.",
)
async def health_check() -> HealthResponse:
    dependencies = {"redis": check_redis()}
    all_healthy = all(v.startswith("healthy") for v in dependencies.values())

    return HealthResponse(
        status="healthy" if all_healthy else "degraded",
        timestamp=datetime.now(timezone.utc),
        version=settings.APP_VERSION,
        dependencies=dependencies,
    )


@router.get(
    "/health/cache/stats",
    response_model=CacheStatsResponse,
    summary="Redis cache statistics",
)
async def cache_stats() -> CacheStatsResponse:
    cache = get_cache()
    if not cache:
        return CacheStatsResponse(redis_connected=False, error="Redis not configured or unreachable")

    try:
        start_time = time.time()
        cache.client.ping()
        latency_ms = (time.time() - start_time) * 1000
        info = cache.client.info()
        return CacheStatsResponse(
            redis_connected=True,
            keys_count=cache.client.dbsize(),
            memory_used=info.get("used_memory_human"),
            latency_ms=round(latency_ms, 2),
        )
    except redis.RedisError as e:
        return CacheStatsResponse(redis_connected=False, error=str(e))
