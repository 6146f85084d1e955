"""
Firebase Authentication and role gate for FastAPI.

Two layers:
- ``get_identity`` verifies the Firebase ID token (Authorization: Bearer)
  on every request and yields the caller's identity.
- ``require_role(*roles)`` resolves the caller's role from the local
  ``users`` table on every request (no role cache, so role changes apply
  immediately) and yields an ``AuthContext`` for the handler.

``admin`` satisfies any role requirement.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from firebase_admin import auth as firebase_auth
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import AppError, AuthenticationError, PermissionDeniedError
from app.database.models.article import Article
from app.database.models.user import User
from app.database.repositories.user_repository import UserRepository
from app.database.session import get_db
from app.utils.enums import UserRole
from app.utils.firebase_config import get_firebase_app

logger = logging.getLogger(__name__)


def init_firebase() -> None:
    """Initialize Firebase Admin SDK. Call once at app startup."""
    if get_firebase_app() is None:
        logger.warning(
            "Firebase Admin SDK not initialized: no credentials configured. "
            "Token verification will fail until FIREBASE_CREDENTIALS is set."
        )


@dataclass
class Identity:
    """Verified caller identity from the identity provider."""
    uid: str
    email: str
    name: Optional[str] = None
    picture: Optional[str] = None
    provider: str = "password"


@dataclass
class AuthContext:
    """Identity plus the local user record, handed to role-gated handlers."""
    identity: Identity
    user: User

    @property
    def uid(self) -> str:
        return self.identity.uid

    @property
    def role(self) -> str:
        return self.user.role

    @property
    def is_admin(self) -> bool:
        return self.user.role == UserRole.ADMIN

    def owns(self, article: Article) -> bool:
        return article.author_uid == self.identity.uid


security = HTTPBearer(auto_error=False)
DEV_MODE = os.getenv("AUTH_DEV_MODE", "false").lower() == "true"


def verify_firebase_token(token: str) -> Dict[str, Any]:
    """Verify an ID token with Firebase and return its decoded claims."""
    app = get_firebase_app()
    if app is None:
        raise AppError("Authentication service not available")
    return firebase_auth.verify_id_token(token, app=app)


def identity_from_claims(claims: Dict[str, Any]) -> Identity:
    firebase_claims = claims.get("firebase") or {}
    return Identity(
        uid=claims["uid"],
        email=claims.get("email") or "",
        name=claims.get("name"),
        picture=claims.get("picture"),
        provider=firebase_claims.get("sign_in_provider") or "password",
    )


async def _dev_identity(request: Request, db: AsyncSession) -> Identity:
    """Resolve the caller from X-Dev-User-Email (AUTH_DEV_MODE only)."""
    dev_email = (request.headers.get("X-Dev-User-Email") or "").strip()
    if not dev_email:
        raise AuthenticationError("Missing or invalid Authorization header")
    user = await UserRepository(db).get_by_email(dev_email)
    if user is None:
        raise AuthenticationError(
            f"Dev user not found: {dev_email}. Run scripts/seed-test-users.py."
        )
    return Identity(
        uid=user.uid,
        email=user.email,
        name=user.display_name,
        picture=user.photo_url,
        provider=user.provider,
    )


async def get_identity(
    request: Request,
    cred: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> Identity:
    """
    FastAPI dependency that extracts and verifies the Firebase ID token.

    In dev mode (AUTH_DEV_MODE=true) a request without a token may name an
    existing local user through the X-Dev-User-Email header.
    """
    if cred is None:
        if DEV_MODE:
            return await _dev_identity(request, db)
        raise AuthenticationError("Missing or invalid Authorization header")

    try:
        claims = verify_firebase_token(cred.credentials)
    except (firebase_auth.InvalidIdTokenError, firebase_auth.CertificateFetchError, ValueError) as e:
        # Expired / revoked tokens are InvalidIdTokenError subclasses
        raise AuthenticationError("Invalid or expired token", error=str(e))

    return identity_from_claims(claims)


def allowed_roles(permitted: Iterable[str]) -> FrozenSet[str]:
    """Required role set with the implicit admin superuser added."""
    return frozenset(permitted) | {UserRole.ADMIN}


def has_role(role: str, permitted: Iterable[str]) -> bool:
    """Single authorization predicate: admin, or one of ``permitted``."""
    return role in allowed_roles(permitted)


def require_role(*permitted: str):
    """
    Dependency factory gating a handler on the caller's persisted role.

    Raises:
        AuthenticationError: no local user record for the verified identity
        PermissionDeniedError: role not in ``permitted`` (admin always passes)
    """
    allowed = allowed_roles(permitted)
    required = " or ".join(permitted) if permitted else UserRole.ADMIN

    async def role_gate(
        identity: Identity = Depends(get_identity),
        db: AsyncSession = Depends(get_db),
    ) -> AuthContext:
        user = await UserRepository(db).get_by_uid(identity.uid)
        if user is None:
            raise AuthenticationError("User not found in database")
        if user.role not in allowed:
            raise PermissionDeniedError(f"Access denied. Required role: {required}")
        return AuthContext(identity=identity, user=user)

    return role_gate


require_author = require_role(UserRole.AUTHOR)
require_admin = require_role(UserRole.ADMIN)
