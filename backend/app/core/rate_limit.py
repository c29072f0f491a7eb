"""
Rate limiting and login lockout backed by Redis counters.

Key patterns:
- ``ratelimit:{endpoint}:{ip}``  fixed window request counter
- ``failed_login:{user_id}``     consecutive failed logins
- ``lockout:{user_id}``          present while the account is locked
"""
import logging
from typing import Optional

from redis.exceptions import RedisError

from app.config import get_settings
from app.database.connections import get_redis_client

logger = logging.getLogger(__name__)


async def check_rate_limit(
    ip: str,
    endpoint: str,
    limit: Optional[int] = None,
    window_seconds: Optional[int] = None,
) -> bool:
    """
    Count a request and tell whether it is still within the window limit.

    Redis being unreachable never blocks a request; the failure is logged.

    Returns:
        True if request is allowed, False if rate limited
    """
    settings = get_settings()
    limit = limit or settings.login_rate_limit_attempts
    window_seconds = window_seconds or settings.login_rate_limit_window_seconds

    key = f"ratelimit:{endpoint}:{ip}"
    try:
        redis = await get_redis_client()
        current = await redis.incr(key)
        if current == 1:
            await redis.expire(key, window_seconds)
    except RedisError as e:
        logger.warning("Rate limit check skipped for %s: %s", endpoint, e)
        return True

    return current <= limit


async def increment_failed_login(user_id: str) -> int:
    """Increment and return the failed login counter for a user."""
    settings = get_settings()
    key = f"failed_login:{user_id}"
    try:
        redis = await get_redis_client()
        count = await redis.incr(key)
        await redis.expire(key, settings.user_lockout_duration_minutes * 60)
    except RedisError as e:
        logger.warning("Could not record failed login for %s: %s", user_id, e)
        return 0
    return count


async def check_user_lockout(user_id: str) -> bool:
    """Return True while the user is locked out."""
    try:
        redis = await get_redis_client()
        return bool(await redis.exists(f"lockout:{user_id}"))
    except RedisError as e:
        logger.warning("Lockout check skipped for %s: %s", user_id, e)
        return False


async def set_user_lockout(user_id: str, duration_minutes: int) -> None:
    """Lock out a user for ``duration_minutes``."""
    try:
        redis = await get_redis_client()
        await redis.setex(f"lockout:{user_id}", duration_minutes * 60, "1")
        logger.info("User %s locked out for %d minutes", user_id, duration_minutes)
    except RedisError as e:
        logger.warning("Could not lock out %s: %s", user_id, e)


async def reset_failed_attempts(user_id: str) -> None:
    """Reset the failed login counter after a successful login."""
    try:
        redis = await get_redis_client()
        await redis.delete(f"failed_login:{user_id}")
    except RedisError as e:
        logger.warning("Could not reset failed logins for %s: %s", user_id, e)
