"""Redis client for sharing the translation cache between processes."""

import os
import redis
import logging

logger = logging.getLogger(__name__)

# One connection per Redis URL (lazy initialization)
_redis_clients = {}


def get_redis(redis_url: str = None):
    """Get or create the Redis connection for a URL.

    Falls back to REDIS_URL when no URL is given. Returns None when no URL is
    configured or the server is unreachable, so callers can fall back to the
    local store.
    """
    redis_url = redis_url or os.environ.get('REDIS_URL')

    if not redis_url:
        logger.warning("REDIS_URL not set - translation cache will stay local")
        return None

    if redis_url in _redis_clients:
        return _redis_clients[redis_url]

    try:
        client = redis.from_url(redis_url, decode_responses=True)
        # Test connection
        client.ping()
        _redis_clients[redis_url] = client
        logger.info("Redis connected successfully")
        return client
    except redis.RedisError as e:
        logger.error(f"Redis connection failed: {e}")
        return None


def reset_redis():
    """Drop cached connections (tests, config reloads)."""
    _redis_clients.clear()
