"""Health check utilities.

The orchestrator holds no database; the only infrastructure it depends on
directly is the Celery broker (Redis).
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

import redis

from .logging_config import get_logger

logger = get_logger(__name__)


class HealthStatus(str, Enum):
    """Health check status enum."""
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    DEGRADED = "degraded"


@dataclass
class ComponentHealth:
    """Health status for a single component."""
    status: HealthStatus
    message: Optional[str] = None
    latency_ms: Optional[float] = None


def check_redis_health(redis_url: str) -> ComponentHealth:
    """Check Redis (Celery broker) connectivity.

    Args:
        redis_url: Redis connection URL

    Returns:
        ComponentHealth: Redis health status
    """
    try:
        client = redis.from_url(redis_url, decode_responses=True)

        start = time.time()
        client.ping()
        latency_ms = (time.time() - start) * 1000

        return ComponentHealth(
            status=HealthStatus.HEALTHY,
            message="Redis connection OK",
            latency_ms=round(latency_ms, 2)
        )
    except redis.RedisError as e:
        logger.error(f"Redis health check failed: {e}", exc_info=True)
        return ComponentHealth(
            status=HealthStatus.UNHEALTHY,
            message=f"Redis error: {str(e)}"
        )


def get_overall_health(components: Dict[str, ComponentHealth]) -> HealthStatus:
    """Determine overall health from component statuses."""
    if all(c.status == HealthStatus.HEALTHY for c in components.values()):
        return HealthStatus.HEALTHY

    if any(c.status == HealthStatus.UNHEALTHY for c in components.values()):
        return HealthStatus.UNHEALTHY

    return HealthStatus.DEGRADED
