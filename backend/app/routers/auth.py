"""
Authentication router for sign-in, registration, and token refresh.
"""
from fastapi import APIRouter, Depends, HTTPException, Request, status

from app.core.rate_limit import check_rate_limit
from app.database.connections import get_mongo_client
from app.database.databases import auth_db
from app.dependencies.auth import CurrentUser, get_client_ip
from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    TokenRefreshResponse,
    UserInfoResponse,
)
from app.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


async def get_auth_service() -> AuthService:
    """Dependency to get AuthService instance."""
    client = await get_mongo_client()
    db = client[auth_db.DB_NAME]
    return AuthService(db)


async def _enforce_login_rate_limit(request: Request, endpoint: str) -> None:
    client_ip = get_client_ip(request)
    if not await check_rate_limit(client_ip, endpoint):
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many login attempts. Please try again later.",
        )


def _unauthorized(e: ValueError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=str(e),
        headers={"WWW-Authenticate": "Bearer"},
    )


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def register(
    request: Request,
    body: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Register a new user account.

    - **email**: Valid email address (must be unique)
    - **password**: Password (minimum 6 characters)
    - **password_confirm**: Must match password
    """
    client_ip = get_client_ip(request)
    if not await check_rate_limit(client_ip, "/auth/register", limit=10, window_seconds=60):
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many registration attempts. Please try again later.",
        )

    try:
        return await auth_service.register_user(body)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Login and get access token",
)
async def login(
    request: Request,
    body: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Authenticate with email and password to receive a JWT token.

    The token should be passed as a query parameter `token` to protected endpoints.

    **Rate limited** per IP, account lockout after repeated failures.
    """
    await _enforce_login_rate_limit(request, "/auth/login")

    try:
        return await auth_service.login(body)
    except ValueError as e:
        raise _unauthorized(e)


@router.post(
    "/sign-in",
    response_model=LoginResponse,
    summary="Sign in, creating the account on first use",
)
async def sign_in(
    request: Request,
    body: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Sign in with email and password.

    If no account exists for the email it is created and `created` is true
    in the response. An existing account still needs the right password.
    """
    await _enforce_login_rate_limit(request, "/auth/sign-in")

    try:
        return await auth_service.sign_in(body)
    except ValueError as e:
        raise _unauthorized(e)


@router.post(
    "/refresh",
    response_model=TokenRefreshResponse,
    summary="Refresh access token",
)
async def refresh_token(
    current_user: CurrentUser,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Refresh the JWT token for an authenticated user.

    Requires valid token as query parameter: `?token=xxx`
    """
    try:
        result = await auth_service.refresh_token(current_user.id)
    except ValueError as e:
        raise _unauthorized(e)

    return TokenRefreshResponse(
        access_token=result.access_token,
        token_type=result.token_type,
        expires_in=result.expires_in,
    )


@router.get(
    "/me",
    response_model=UserInfoResponse,
    summary="Get current user info",
)
async def get_current_user_info(current_user: CurrentUser):
    """
    Get information about the currently authenticated user.

    Requires valid token as query parameter: `?token=xxx`
    """
    return {
        "id": current_user.id,
        "email": current_user.email,
        "roles": current_user.roles,
        "status": current_user.status,
        "created_at": current_user.created_at,
    }
