"""
Core module - Security, rate limiting, logging and error types.
"""
from app.core.security import (
    hash_password,
    verify_password,
    create_access_token,
    decode_token,
)
from app.core.rate_limit import (
    check_rate_limit,
    increment_failed_login,
    check_user_lockout,
    set_user_lockout,
    reset_failed_attempts,
)
from app.core.exceptions import (
    PortalError,
    LLMUnavailableError,
    ExchangeRateUnavailableError,
    OrderNumberError,
)

__all__ = [
    "hash_password",
    "verify_password",
    "create_access_token",
    "decode_token",
    "check_rate_limit",
    "increment_failed_login",
    "check_user_lockout",
    "set_user_lockout",
    "reset_failed_attempts",
    "PortalError",
    "LLMUnavailableError",
    "ExchangeRateUnavailableError",
    "OrderNumberError",
]
