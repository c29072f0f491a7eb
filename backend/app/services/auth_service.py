"""
Authentication service for user management and login.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId
from jose import JWTError
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from app.core.security import create_access_token, decode_token, hash_password, verify_password
from app.core.rate_limit import (
    check_user_lockout,
    increment_failed_login,
    reset_failed_attempts,
    set_user_lockout,
)
from app.config import get_settings
from app.database.databases import auth_db
from app.models.user import User, UserRole, UserStatus
from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
)

logger = logging.getLogger(__name__)


class AuthService:
    """Service for authentication operations."""

    def __init__(self, db: AsyncIOMotorDatabase):
        """Initialize with auth database."""
        self.db = db
        self.users_collection = db[auth_db.Collections.USERS]
        self.settings = get_settings()

    async def register_user(self, request: RegisterRequest) -> RegisterResponse:
        """
        Register a new user.

        Raises:
            ValueError: If passwords don't match or email exists
        """
        if not request.passwords_match():
            raise ValueError("Passwords do not match")

        existing = await self.users_collection.find_one({"email": request.email})
        if existing:
            raise ValueError("Email already registered")

        user_id = await self._create_user(request.email, request.password)

        return RegisterResponse(
            user_id=user_id,
            email=request.email,
            message="Registration successful"
        )

    async def login(self, request: LoginRequest) -> LoginResponse:
        """
        Authenticate user and return JWT token.

        Raises:
            ValueError: If credentials are invalid or account is locked
        """
        user_doc = await self.users_collection.find_one({"email": request.email})

        if not user_doc:
            raise ValueError("Invalid email or password")

        return await self._authenticate(user_doc, request.password)

    async def sign_in(self, request: LoginRequest) -> LoginResponse:
        """
        Sign in, creating the account the first time an email is seen.

        An existing account still requires the right password.

        Raises:
            ValueError: If the account exists and the credentials are invalid
        """
        user_doc = await self.users_collection.find_one({"email": request.email})

        if user_doc:
            return await self._authenticate(user_doc, request.password)

        try:
            user_id = await self._create_user(request.email, request.password)
        except DuplicateKeyError:
            # Another request created it first
            user_doc = await self.users_collection.find_one({"email": request.email})
            return await self._authenticate(user_doc, request.password)

        logger.info("Created account for %s on first sign-in", request.email)
        response = self._token_response(user_id, request.email, [UserRole.USER.value])
        response.created = True
        return response

    async def refresh_token(self, user_id: str) -> LoginResponse:
        """
        Refresh JWT token for an authenticated user.

        Raises:
            ValueError: If user not found or disabled
        """
        user_doc = await self.users_collection.find_one({"_id": ObjectId(user_id)})

        if not user_doc:
            raise ValueError("User not found")

        if user_doc.get("status") == UserStatus.DISABLED.value:
            raise ValueError("Account is disabled")

        roles = user_doc.get("roles", [UserRole.USER.value])
        return self._token_response(user_id, user_doc["email"], roles)

    async def get_user_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID, or None if the ID is unknown or malformed."""
        try:
            user_doc = await self.users_collection.find_one({"_id": ObjectId(user_id)})
        except (InvalidId, TypeError):
            return None

        if not user_doc:
            return None

        user_doc["_id"] = str(user_doc["_id"])
        return User(**user_doc)

    async def get_user_from_token(self, token: str) -> Optional[User]:
        """User a JWT was issued to, or None if the token is invalid or expired."""
        try:
            payload = decode_token(token)
        except JWTError:
            return None

        user_id = payload.get("sub")
        if not user_id:
            return None
        return await self.get_user_by_id(user_id)

    async def _create_user(self, email: str, password: str) -> str:
        user_doc = {
            "email": email,
            "hashed_password": hash_password(password),
            "roles": [UserRole.USER.value],
            "status": UserStatus.ACTIVE.value,
            "created_at": datetime.now(timezone.utc),
        }
        result = await self.users_collection.insert_one(user_doc)
        return str(result.inserted_id)

    async def _authenticate(self, user_doc: dict, password: str) -> LoginResponse:
        user_id = str(user_doc["_id"])

        if await check_user_lockout(user_id):
            raise ValueError("Account temporarily locked due to too many failed attempts")

        if user_doc.get("status") == UserStatus.DISABLED.value:
            raise ValueError("Account is disabled")

        if not verify_password(password, user_doc["hashed_password"]):
            failed_count = await increment_failed_login(user_id)

            if failed_count >= self.settings.user_lockout_threshold:
                await set_user_lockout(
                    user_id,
                    self.settings.user_lockout_duration_minutes
                )

            raise ValueError("Invalid email or password")

        await reset_failed_attempts(user_id)

        roles = user_doc.get("roles", [UserRole.USER.value])
        return self._token_response(user_id, user_doc["email"], roles)

    def _token_response(self, user_id: str, email: str, roles: list[str]) -> LoginResponse:
        access_token = create_access_token(user_id=user_id, email=email, roles=roles)
        return LoginResponse(
            access_token=access_token,
            token_type="bearer",
            expires_in=self.settings.jwt_access_token_expire_minutes * 60,
            user_id=user_id,
            email=email,
            roles=roles,
        )
