"""Authentication related API routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from ..database import EntityStore, get_store
from ..models import User
from ..schemas import AuthResponse, LoginRequest, RegisterRequest, UserProfileResponse
from ..services import authenticate_user, create_access_token, get_current_user, register_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register_endpoint(
    payload: RegisterRequest,
    store: EntityStore = Depends(get_store),
) -> AuthResponse:
    user, token = register_user(store, payload)
    return AuthResponse(access_token=token, user_id=user.id, is_admin=user.is_admin)


@router.post("/login", response_model=AuthResponse)
async def login_endpoint(
    payload: LoginRequest,
    store: EntityStore = Depends(get_store),
) -> AuthResponse:
    user = authenticate_user(store, payload.username, payload.password)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    if user.is_banned:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is banned")
    token = create_access_token(user.id)
    return AuthResponse(access_token=token, user_id=user.id, is_admin=user.is_admin)


@router.get("/me", response_model=UserProfileResponse)
async def me_endpoint(current_user: User = Depends(get_current_user)) -> UserProfileResponse:
    return UserProfileResponse.model_validate(current_user)


__all__ = ["router"]
