"""
Authentication dependencies for route protection.

Every protected route takes the JWT as the ``token`` query parameter, the
way the Streamlit client and the WebSocket both send it.
"""
from typing import Annotated

from fastapi import Depends, HTTPException, Query, Request, status

from app.database.connections import get_mongo_client
from app.database.databases import auth_db
from app.models.user import User, UserStatus
from app.services.auth_service import AuthService


async def get_current_user(
    token: Annotated[str, Query(description="JWT access token")]
) -> User:
    """
    Resolve the signed-in user from the ``token`` query parameter.

    Raises:
        HTTPException 401: If token is invalid, expired or the user is gone
    """
    client = await get_mongo_client()
    user = await AuthService(client[auth_db.DB_NAME]).get_user_from_token(token)

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


async def get_current_active_user(
    current_user: Annotated[User, Depends(get_current_user)]
) -> User:
    """
    Reject accounts that were disabled after the token was issued.

    Raises:
        HTTPException 403: If user account is disabled
    """
    if current_user.status == UserStatus.DISABLED:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is disabled",
        )
    return current_user


def get_client_ip(request: Request) -> str:
    """Client address for rate limiting, honouring the proxy header."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


# Signed-in, active user for route signatures
CurrentUser = Annotated[User, Depends(get_current_active_user)]
