from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import Select, or_, and_, select, delete
from sqlalchemy.exc import IntegrityError
from typing import List, Optional

from gtonline.models.friendship import Friendship
from gtonline.models.profile import RegularUser
from gtonline.models.user import User
from gtonline.repositories.errors import RecordNotFound, translate_integrity_error
from gtonline.schemas.friendship import FriendshipRecord, SearchUsersQuery, UserSummary


class FriendshipRepository:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_row(self, email: str, friend_email: str) -> Friendship:
        stmt = select(Friendship).where(
            and_(Friendship.email == email, Friendship.friend_email == friend_email)
        )
        result = await self.db.execute(stmt)
        friendship = result.scalar_one_or_none()
        if friendship is None:
            raise RecordNotFound(f"friendship {email} -> {friend_email}")
        return friendship

    async def get_friendship(self, email: str, friend_email: str) -> FriendshipRecord:
        """Get the row for the ordered pair (email, friend_email)"""
        friendship = await self._get_row(email, friend_email)
        return FriendshipRecord.model_validate(friendship)

    async def insert_friendship(self, friendship: FriendshipRecord) -> None:
        """Insert a new row; fails if the pair exists or an email is unknown"""
        try:
            self.db.add(Friendship(
                email=friendship.email,
                friend_email=friendship.friend_email,
                relationship=friendship.relationship or None,
                date_connected=friendship.date_connected
            ))
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise translate_integrity_error(e) from e

    async def update_friendship(self, friendship: FriendshipRecord) -> None:
        """Overwrite relationship and date_connected of an existing row"""
        row = await self._get_row(friendship.email, friendship.friend_email)
        row.relationship = friendship.relationship or None
        row.date_connected = friendship.date_connected
        await self.db.commit()

    async def delete_friendship(self, email: str, friend_email: str) -> None:
        """Delete the row for the ordered pair, if any"""
        stmt = delete(Friendship).where(
            and_(Friendship.email == email, Friendship.friend_email == friend_email)
        )
        await self.db.execute(stmt)
        await self.db.commit()

    async def list_pending_friendships(self, email: str) -> List[FriendshipRecord]:
        """Pending rows where the user is on either side"""
        stmt = select(Friendship).where(
            and_(
                or_(Friendship.email == email, Friendship.friend_email == email),
                Friendship.date_connected.is_(None)
            )
        )
        result = await self.db.execute(stmt)
        return [FriendshipRecord.model_validate(f) for f in result.scalars().all()]

    async def list_friends(self, email: str) -> List[FriendshipRecord]:
        """Accepted rows where the user is on either side"""
        stmt = select(Friendship).where(
            and_(
                or_(Friendship.email == email, Friendship.friend_email == email),
                Friendship.date_connected.is_not(None)
            )
        ).order_by(Friendship.date_connected)
        result = await self.db.execute(stmt)
        return [FriendshipRecord.model_validate(f) for f in result.scalars().all()]

    async def search_users(self, query: SearchUsersQuery) -> List[UserSummary]:
        """Users matching ANY of the supplied criteria"""
        stmt = build_search_query(query)
        if stmt is None:
            return []

        result = await self.db.execute(stmt)
        return [
            UserSummary(
                email=row.email,
                first_name=row.first_name,
                last_name=row.last_name,
                hometown=row.hometown
            )
            for row in result.all()
        ]


def build_search_query(query: SearchUsersQuery) -> Optional[Select]:
    """OR of exact email, name substring and hometown substring; None without criteria.

    Substring matches ignore case on every backend.
    """
    conditions = []
    if query.email:
        conditions.append(User.email == query.email)
    if query.name:
        pattern = f"%{query.name}%"
        conditions.append(or_(User.first_name.ilike(pattern), User.last_name.ilike(pattern)))
    if query.hometown:
        conditions.append(RegularUser.hometown.ilike(f"%{query.hometown}%"))
    if not conditions:
        return None

    return select(
        User.email, User.first_name, User.last_name, RegularUser.hometown
    ).outerjoin(
        RegularUser, RegularUser.email == User.email
    ).where(or_(*conditions)).order_by(User.email)
