from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.core.security import create_access_token, create_refresh_token, verify_refresh_token, verify_token
from app.db.repositories.user_repository import UserRepository
from app.domains.identity.entities import User
from app.domains.identity.schemas import UserCreate, UserLogin

logger = get_logger(__name__)


class IdentityService:
    """Registration, login and token resolution"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repository = UserRepository(session)

    async def register_user(self, user_data: UserCreate) -> User:
        if await self.user_repository.email_exists(user_data.email):
            raise ValueError("Email already registered")

        if await self.user_repository.username_exists(user_data.username):
            raise ValueError("Username already taken")

        user = User.create_user(
            email=user_data.email,
            username=user_data.username,
            password=user_data.password,
            full_name=user_data.full_name,
            role=user_data.role
        )

        created = await self.user_repository.create(user)
        logger.info("User registered", user_id=created.id, role=created.role)
        return created

    async def authenticate_user(self, login_data: UserLogin) -> Optional[User]:
        user = await self.user_repository.get_by_email(login_data.email)

        if not user or not user.is_active:
            return None

        if not user.authenticate(login_data.password):
            return None

        return user

    async def login_user(self, login_data: UserLogin) -> Optional[Tuple[str, str]]:
        """Access and refresh tokens for valid credentials"""
        user = await self.authenticate_user(login_data)

        if not user:
            logger.info("Login rejected", email=login_data.email)
            return None

        return self._issue_tokens(user)

    async def refresh(self, refresh_token: str) -> Optional[Tuple[str, str]]:
        payload = verify_refresh_token(refresh_token)
        if payload is None:
            return None

        user = await self._active_user(payload.get("sub"))
        if user is None:
            return None

        return self._issue_tokens(user)

    async def get_current_user_from_token(self, token: str) -> Optional[User]:
        payload = verify_token(token)
        if payload is None:
            return None

        return await self._active_user(payload.get("sub"))

    async def list_staff(self, exclude_id: Optional[int] = None) -> List[User]:
        return await self.user_repository.get_staff(exclude_id)

    async def _active_user(self, subject: Optional[str]) -> Optional[User]:
        try:
            user_id = int(subject)
        except (TypeError, ValueError):
            return None

        user = await self.user_repository.get_by_id(user_id)
        if user is None or not user.is_active:
            return None

        return user

    def _issue_tokens(self, user: User) -> Tuple[str, str]:
        token_data = {"sub": str(user.id), "role": user.role}
        return create_access_token(data=token_data), create_refresh_token(data=token_data)
