"""
cache.py - Redis caching layer for NaijaTax.

Namespace conventions:
  calc:{sha256(inputs)}   → TaxCalculationResult dict   TTL settings.calc_cache_ttl

Design:
  - Uses redis.asyncio (async client, part of redis-py 5.x)
  - Pool created once in lifespan, stored on app.state.redis
  - Helper functions take the client as a param - no module-level global state
  - Key is the SHA-256 of the canonical (sorted-key) JSON of the inputs, so two
    requests with the same figures hit the same entry regardless of field order
  - Logs only key digests - never income values
"""
import hashlib
import json
import logging
from typing import Optional

import redis.asyncio as aioredis

from naijatax.calculator.schemas import TaxCalculationResult, TaxInputs
from naijatax.config import settings

logger = logging.getLogger(__name__)

CALC_PREFIX = "calc"


# ---------------------------------------------------------------------------
# Key builders
# ---------------------------------------------------------------------------

def make_calc_key(inputs: TaxInputs) -> str:
    """Build Redis key for a calculation: calc:{sha256hex}"""
    canonical = json.dumps(inputs.model_dump(mode="json"), sort_keys=True)
    digest = hashlib.sha256(canonical.encode("utf-8")).hexdigest()
    return f"{CALC_PREFIX}:{digest}"


# ---------------------------------------------------------------------------
# Pool factory - called once in lifespan
# ---------------------------------------------------------------------------

async def create_redis_pool() -> aioredis.Redis:
    """
    Create and return an async Redis connection pool.
    Verifies connectivity with PING before returning.
    """
    client = aioredis.from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
        max_connections=20,
    )
    await client.ping()
    logger.info("Redis connection pool established at %s", settings.redis_url)
    return client


# ---------------------------------------------------------------------------
# Calculation cache helpers
# ---------------------------------------------------------------------------

async def get_cached_result(
    client: aioredis.Redis, inputs: TaxInputs
) -> Optional[TaxCalculationResult]:
    """Return the cached result for these inputs, or None on miss."""
    key = make_calc_key(inputs)
    raw = await client.get(key)
    if raw is None:
        return None
    logger.info("Calculation cache hit key=%s", key)
    return TaxCalculationResult.model_validate_json(raw)


async def set_cached_result(
    client: aioredis.Redis, inputs: TaxInputs, result: TaxCalculationResult
) -> None:
    """Store a result with TTL settings.calc_cache_ttl."""
    key = make_calc_key(inputs)
    await client.setex(key, settings.calc_cache_ttl, result.model_dump_json())
    logger.info("Calculation cached key=%s ttl=%ds", key, settings.calc_cache_ttl)
