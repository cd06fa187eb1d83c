import logging
from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.config import Settings
from app.core.exceptions import ConflictError, ForbiddenError, NotFoundError, StoreError, UnauthorizedError
from app.core.security import create_access_token, decode_access_token, hash_password, verify_password
from app.models.user import User
from app.schemas.user import CurrentUser, RegisterRequest


class IdentityProvider:
    """Registers users and turns bearer tokens back into user identities."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], settings: Settings):
        self.session_factory = session_factory
        self.settings = settings

    async def register(self, data: RegisterRequest, is_admin: bool = False) -> User:
        username = data.username.strip()
        email = str(data.email) if data.email else None
        async with self.session_factory() as db:
            try:
                clauses = [User.username == username]
                if email:
                    clauses.append(User.email == email)
                existing = await db.execute(select(User.id).where(or_(*clauses)))
                if existing.first() is not None:
                    raise ConflictError("Username or email already exists")

                user = User(
                    username=username,
                    email=email,
                    password_hash=hash_password(data.password),
                    display_name=(data.display_name or "").strip() or username,
                    is_admin=is_admin,
                )
                db.add(user)
                await db.commit()
                logging.info(f"registered user {user.id} ({username})")
                return user
            except ConflictError:
                raise
            except IntegrityError:
                await db.rollback()
                raise ConflictError("Username or email already exists")
            except SQLAlchemyError as e:
                logging.error(f"Failed to register user: {e}", exc_info=True)
                await db.rollback()
                raise StoreError("Failed to register user")

    async def authenticate(self, username: str, password: str) -> User:
        async with self.session_factory() as db:
            result = await db.execute(select(User).where(User.username == username.strip()))
            user = result.scalar_one_or_none()
        if user is None or not verify_password(password, user.password_hash):
            raise UnauthorizedError("Invalid credentials")
        return user

    def issue_token(self, user: User) -> str:
        return create_access_token(
            subject=str(user.id),
            secret_key=self.settings.SECRET_KEY,
            algorithm=self.settings.ALGORITHM,
            expires_minutes=self.settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        )

    async def current_user(self, token: Optional[str]) -> Optional[CurrentUser]:
        """
        Resolve a bearer token.

        No token means an anonymous caller (None). A token that does not
        verify, or that names a user who no longer exists, is rejected.
        Admin status is read from the store each time so a demotion takes
        effect without waiting for the token to expire.
        """
        if not token:
            return None
        subject = decode_access_token(
            token, self.settings.SECRET_KEY, self.settings.ALGORITHM)
        if subject is None or not subject.isdigit():
            raise UnauthorizedError("Invalid or expired token")

        user = await self.get_user(int(subject))
        if user is None:
            raise UnauthorizedError("Invalid or expired token")
        return CurrentUser.model_validate(user)

    async def get_user(self, user_id: int) -> Optional[User]:
        async with self.session_factory() as db:
            return await db.get(User, user_id)

    async def list_users(self) -> List[User]:
        async with self.session_factory() as db:
            result = await db.execute(select(User).order_by(User.created_at.desc(), User.id.desc()))
            return list(result.scalars().all())

    async def get_profile(self, user_id: int, requester: CurrentUser) -> User:
        """A user may read their own profile; admins may read anyone's."""
        if user_id != requester.id and not requester.is_admin:
            raise ForbiddenError("Not authorized")
        user = await self.get_user(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user
