"""Store contracts the services depend on.

Implementations: the SQLAlchemy repositories in this package and
``MemoryStorage`` in ``gtonline.repositories.memory``. Every method raises
the sentinels from ``gtonline.repositories.errors`` for the conditions a
service must tell apart; anything else propagates as-is.
"""

from typing import List, Protocol

from gtonline.schemas.friendship import FriendshipRecord, SearchUsersQuery, UserSummary
from gtonline.schemas.profile import Employer, Profile, School, UpdateProfileRequest
from gtonline.schemas.user import UserRecord


class UserStore(Protocol):
    async def find_user_by_email(self, email: str) -> UserRecord: ...
    async def create_user(self, user: UserRecord) -> None: ...


class FriendshipStore(Protocol):
    async def get_friendship(self, email: str, friend_email: str) -> FriendshipRecord: ...
    async def insert_friendship(self, friendship: FriendshipRecord) -> None: ...
    async def update_friendship(self, friendship: FriendshipRecord) -> None: ...
    async def delete_friendship(self, email: str, friend_email: str) -> None: ...
    async def list_pending_friendships(self, email: str) -> List[FriendshipRecord]: ...
    async def list_friends(self, email: str) -> List[FriendshipRecord]: ...
    async def search_users(self, query: SearchUsersQuery) -> List[UserSummary]: ...


class ProfileStore(Protocol):
    async def get_profile(self, email: str) -> Profile: ...
    async def update_profile(self, email: str, request: UpdateProfileRequest) -> None: ...


class CatalogStore(Protocol):
    async def list_schools(self) -> List[School]: ...
    async def list_employers(self) -> List[Employer]: ...
