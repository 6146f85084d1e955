"""
Auth Router - session bootstrap after Firebase sign-in.

Endpoints:
- POST /api/auth/login - Upsert the local profile from the Firebase token
- GET  /api/auth/me    - Get the current user's local profile
"""

import logging

from fastapi import APIRouter, Depends

from app.api.schemas.user import LoginResponse, UserEnvelope, UserResponse
from app.core.auth import Identity, get_identity
from app.core.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(
    identity: Identity = Depends(get_identity),
    service: UserService = Depends(UserService.instance),
):
    """Called by the frontend right after Firebase sign-in."""
    user = await service.login(identity)
    return LoginResponse(
        message="Login successful",
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserEnvelope)
async def get_me(
    identity: Identity = Depends(get_identity),
    service: UserService = Depends(UserService.instance),
):
    """Get the authenticated user's local profile."""
    user = await service.get_by_uid(identity.uid)
    return UserEnvelope(user=UserResponse.model_validate(user))
