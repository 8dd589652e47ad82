from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from gtonline.models.user import User
from gtonline.models.profile import RegularUser
from gtonline.repositories.errors import RecordNotFound, translate_integrity_error
from gtonline.schemas.user import UserRecord


class UserRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_user_by_email(self, email: str) -> UserRecord:
        """Get user by email"""
        query = select(User).filter(User.email == email)
        result = await self.db.execute(query)
        user = result.scalar_one_or_none()
        if user is None:
            raise RecordNotFound(f"user {email}")
        return UserRecord.model_validate(user)

    async def create_user(self, user: UserRecord) -> None:
        """Create a user together with its empty profile row"""
        try:
            self.db.add(User(
                email=user.email,
                password=user.password,
                first_name=user.first_name,
                last_name=user.last_name
            ))
            await self.db.flush()
            self.db.add(RegularUser(email=user.email))
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise translate_integrity_error(e) from e
