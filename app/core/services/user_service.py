import logging
from typing import List

from fastapi import Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import Identity
from app.core.exceptions import BadRequestError, ConflictError, NotFoundError
from app.database.models.model_base import utcnow
from app.database.models.user import User
from app.database.repositories.user_repository import UserRepository
from app.database.session import get_db
from app.utils.enums import UserRole

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, session: AsyncSession):
        self.repo = UserRepository(session)

    @staticmethod
    def instance(session: AsyncSession = Depends(get_db)) -> "UserService":
        return UserService(session)

    async def login(self, identity: Identity) -> User:
        """
        Upsert the local profile from the verified token.

        First login creates the user as ``student``; later logins refresh the
        profile fields and ``last_login_at`` but never touch the role.
        """
        if not identity.email:
            raise BadRequestError("Token has no email claim")

        other = await self.repo.get_by_email(identity.email)
        if other is not None and other.uid != identity.uid:
            raise ConflictError("Email already registered to another account")

        user = await self.repo.get_by_uid(identity.uid)
        try:
            if user is None:
                user = await self.repo.create(
                    uid=identity.uid,
                    email=identity.email,
                    display_name=identity.name,
                    photo_url=identity.picture,
                    provider=identity.provider,
                    role=UserRole.STUDENT,
                    last_login_at=utcnow(),
                )
                logger.info(f"User created on first login: {identity.email}")
            else:
                changes = {
                    "email": identity.email,
                    "provider": identity.provider,
                    "last_login_at": utcnow(),
                }
                if identity.name is not None:
                    changes["display_name"] = identity.name
                if identity.picture is not None:
                    changes["photo_url"] = identity.picture
                await self.repo.update(user, **changes)
                logger.info(f"User logged in: {identity.email}")
        except IntegrityError as e:
            raise ConflictError("Email already registered to another account", error=str(e.orig))
        return user

    async def get_by_uid(self, uid: str) -> User:
        user = await self.repo.get_by_uid(uid)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def list_users(self) -> List[User]:
        return await self.repo.list_newest_first()

    async def set_role(self, uid: str, role: str) -> User:
        if role not in UserRole.ALL:
            raise BadRequestError("Invalid role. Must be: student, author, or admin")
        user = await self.get_by_uid(uid)
        previous = user.role
        await self.repo.update(user, role=role)
        logger.warning(f"Role changed for {user.email}: {previous} -> {role}")
        return user
