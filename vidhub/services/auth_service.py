"""Authentication helpers: password hashing, bearer tokens, current-user resolution."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext

from ..config import get_settings
from ..database import EntityStore, get_store
from ..errors import ConflictError
from ..models import Snapshot, User
from ..schemas import RegisterRequest
from .lookups import find_user_by_email, find_user_by_username

logger = logging.getLogger(__name__)

_security = HTTPBearer(auto_error=False)
_pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    """Hash a plain-text password."""

    return _pwd_context.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    """Verify that ``password`` matches ``hashed_password``."""

    try:
        return _pwd_context.verify(password, hashed_password)
    except (ValueError, TypeError):
        logger.warning("Stored password hash could not be parsed")
        return False


def create_access_token(subject: str, *, expires_minutes: Optional[int] = None) -> str:
    """Create a signed JWT holding the provided ``subject``."""

    settings = get_settings()
    expire_delta = timedelta(minutes=expires_minutes or settings.jwt_expires_minutes)
    now = datetime.now(timezone.utc)
    payload = {"sub": subject, "exp": now + expire_delta, "iat": now}
    return jwt.encode(payload, settings.require_jwt_secret(), algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> str:
    """Decode and validate a JWT, returning the embedded user id."""

    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.require_jwt_secret(), algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token") from exc

    subject = payload.get("sub")
    if not subject:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token payload")
    return str(subject)


def register_user(store: EntityStore, payload: RegisterRequest) -> Tuple[User, str]:
    """Persist a new user and return it with an access token.

    The very first account on an empty store is promoted to admin.
    """

    username = payload.username.strip()
    email = str(payload.email).strip().lower()
    hashed = hash_password(payload.password)

    def _apply(snapshot: Snapshot) -> User:
        if find_user_by_username(snapshot, username) is not None:
            raise ConflictError("Username already in use")
        if find_user_by_email(snapshot, email) is not None:
            raise ConflictError("Email already registered")
        user = User(
            username=username,
            email=email,
            hashed_password=hashed,
            display_name=(payload.display_name or "").strip() or username,
            is_admin=not snapshot.users,
        )
        snapshot.users.append(user)
        return user

    user = store.mutate(_apply)
    if user.is_admin:
        logger.info("First user created as admin: %s", user.username)
    return user, create_access_token(user.id)


def authenticate_user(store: EntityStore, username: str, password: str) -> Optional[User]:
    """Authenticate a user against stored credentials."""

    user = store.read(lambda snapshot: find_user_by_username(snapshot, username))
    if user is None or not verify_password(password, user.hashed_password):
        return None
    return user


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_security),
    store: EntityStore = Depends(get_store),
) -> User:
    """Resolve the authenticated, non-banned user from the bearer token."""

    if not credentials or credentials.scheme.lower() != "bearer":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing bearer token")

    user_id = decode_access_token(credentials.credentials)
    user = store.get("users", user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    if user.is_banned:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is banned")
    return user


async def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_security),
    store: EntityStore = Depends(get_store),
) -> User | None:
    """Return the authenticated user when a bearer token is provided."""

    if not credentials or credentials.scheme.lower() != "bearer":
        return None
    try:
        user_id = decode_access_token(credentials.credentials)
    except HTTPException:
        return None
    return store.get("users", user_id)


async def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
    return user


__all__ = [
    "authenticate_user",
    "create_access_token",
    "decode_access_token",
    "get_current_user",
    "get_optional_user",
    "hash_password",
    "register_user",
    "require_admin",
    "verify_password",
]
