"""
Redis Connection Module for the Shardable UUID Service

This module owns the lifecycle of the async Redis client that backs the
per-(type, shard) sequence counters. Identifiers themselves are never stored;
the only persisted state is one small integer per sequence key.

Connection Management:
    - Dual-environment support: development (external, TLS, auth) and
      production (internal, no TLS)
    - A single global client with connection pooling and health checks
    - Explicit shutdown through `close_redis()`

Dependencies:
    - redis: Async Redis client for the sequence counters
    - core.config: Environment configuration and settings management
    - services.logger: Structured logging for monitoring and debugging
"""

import redis.asyncio as redis
from redis.exceptions import ConnectionError

from shardable_uuid.core.config import settings
from shardable_uuid.core.exceptions import NotInitializedError
from shardable_uuid.services.logger import setup_logger

# Global Redis client instance
redis_client: redis.Redis = None

# Setup logger
logger = setup_logger()


def connect_to_redis() -> redis.Redis:
    """
    Create the global Redis client with environment-specific configuration.

    Environment Configurations:
        Development (ENV="dev"):
            - External Redis host with SSL/TLS encryption
            - Username/password authentication

        Production (any other ENV):
            - Internal Redis host without SSL
            - No authentication (secured by network isolation)

    The client is created lazily by redis-py, so an unreachable server surfaces
    on the first command rather than here.

    Returns:
        redis.Redis: The configured async client, also stored globally for
        `get_redis_client()`.

    Raises:
        ConnectionError: If the client cannot be configured.
    """
    global redis_client

    logger.info("Initializing Redis connection...")

    try:
        host = (
            settings.REDIS_HOST_EXTERNAL
            if settings.ENV == "dev"
            else settings.REDIS_HOST_INTERNAL
        )

        password = settings.REDIS_PASSWORD if settings.ENV == "dev" else None

        username = settings.REDIS_USERNAME if settings.ENV == "dev" else None

        use_ssl = settings.ENV == "dev"

        logger.info(
            f"Connecting to Redis at {host}:{settings.REDIS_PORT} "
            f"(SSL: {use_ssl}, Auth: {bool(username)})"
        )

        redis_client = redis.Redis(
            host=host,
            password=password,
            username=username,
            port=settings.REDIS_PORT,
            ssl=use_ssl,
            decode_responses=True,  # Automatically decode responses to strings
            health_check_interval=30,  # Check connection health every 30 seconds
            socket_connect_timeout=20,  # Connection establishment timeout
            socket_timeout=10,  # Socket operation timeout
        )

        logger.info("Redis client configured.")

        return redis_client
    except ConnectionError as e:
        logger.error(f"Redis connection failed: {e}")
        raise e


def get_redis_client() -> redis.Redis:
    """
    Retrieve the global Redis client instance for dependency injection.

    Returns:
        redis.Redis: The client created by `connect_to_redis()`.

    Raises:
        NotInitializedError: If called before `connect_to_redis()`.
    """
    if redis_client is None:
        logger.error("Redis client not initialized. Call connect_to_redis() first.")
        raise NotInitializedError()

    return redis_client


async def close_redis() -> None:
    """Close the global Redis client, if one was created."""
    global redis_client

    if redis_client is not None:
        await redis_client.aclose()
        redis_client = None
        logger.info("Redis connection closed.")
