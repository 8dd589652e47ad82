import asyncio
from typing import Dict, Iterable, List, Tuple

from gtonline.repositories.errors import DuplicateRecord, InvalidReference, RecordNotFound
from gtonline.schemas.friendship import FriendshipRecord, SearchUsersQuery, UserSummary
from gtonline.schemas.profile import Employer, Profile, School, UpdateProfileRequest
from gtonline.schemas.user import UserRecord


class MemoryStorage:
    """In-process implementation of every store contract.

    Mirrors the relational constraints: ordered-pair uniqueness for
    friendships and foreign keys from friendships, attends and employments.
    """

    def __init__(self):
        self._lock = asyncio.Lock()
        self._users: Dict[str, UserRecord] = {}
        self._profiles: Dict[str, Profile] = {}
        self._friendships: Dict[Tuple[str, str], FriendshipRecord] = {}
        self._schools: Dict[str, School] = {}
        self._employers: Dict[str, Employer] = {}

    # Seeding

    def add_users(self, users: Iterable[UserRecord]) -> None:
        for user in users:
            self._users[user.email] = user.model_copy()
            self._profiles[user.email] = Profile(
                email=user.email, first_name=user.first_name, last_name=user.last_name
            )

    def add_schools(self, schools: Iterable[School]) -> None:
        for school in schools:
            self._schools[school.school_name] = school.model_copy()

    def add_employers(self, employers: Iterable[Employer]) -> None:
        for employer in employers:
            self._employers[employer.employer_name] = employer.model_copy()

    # UserStore

    async def find_user_by_email(self, email: str) -> UserRecord:
        async with self._lock:
            user = self._users.get(email)
            if user is None:
                raise RecordNotFound(f"user {email}")
            return user.model_copy()

    async def create_user(self, user: UserRecord) -> None:
        async with self._lock:
            if user.email in self._users:
                raise DuplicateRecord(f"user {user.email}")
            self.add_users([user])

    # FriendshipStore

    async def get_friendship(self, email: str, friend_email: str) -> FriendshipRecord:
        async with self._lock:
            friendship = self._friendships.get((email, friend_email))
            if friendship is None:
                raise RecordNotFound(f"friendship {email} -> {friend_email}")
            return friendship.model_copy()

    async def insert_friendship(self, friendship: FriendshipRecord) -> None:
        async with self._lock:
            for email in (friendship.email, friendship.friend_email):
                if email not in self._users:
                    raise InvalidReference(f"unknown user {email}")
            key = (friendship.email, friendship.friend_email)
            if key in self._friendships:
                raise DuplicateRecord(f"friendship {key[0]} -> {key[1]}")
            self._friendships[key] = friendship.model_copy()

    async def update_friendship(self, friendship: FriendshipRecord) -> None:
        async with self._lock:
            key = (friendship.email, friendship.friend_email)
            if key not in self._friendships:
                raise RecordNotFound(f"friendship {key[0]} -> {key[1]}")
            self._friendships[key] = friendship.model_copy()

    async def delete_friendship(self, email: str, friend_email: str) -> None:
        async with self._lock:
            self._friendships.pop((email, friend_email), None)

    async def list_pending_friendships(self, email: str) -> List[FriendshipRecord]:
        async with self._lock:
            return [
                f.model_copy() for f in self._friendships.values()
                if email in (f.email, f.friend_email) and not f.is_connected
            ]

    async def list_friends(self, email: str) -> List[FriendshipRecord]:
        async with self._lock:
            friends = [
                f.model_copy() for f in self._friendships.values()
                if email in (f.email, f.friend_email) and f.is_connected
            ]
        return sorted(friends, key=lambda f: f.date_connected)

    async def search_users(self, query: SearchUsersQuery) -> List[UserSummary]:
        name = (query.name or "").lower()
        hometown = (query.hometown or "").lower()

        def matches(user: UserRecord, profile: Profile) -> bool:
            if query.email and user.email == query.email:
                return True
            if name and (name in user.first_name.lower() or name in user.last_name.lower()):
                return True
            if hometown and hometown in profile.hometown.lower():
                return True
            return False

        async with self._lock:
            return [
                UserSummary(
                    email=user.email,
                    first_name=user.first_name,
                    last_name=user.last_name,
                    hometown=self._profiles[email].hometown
                )
                for email, user in sorted(self._users.items())
                if matches(user, self._profiles[email])
            ]

    # ProfileStore

    async def get_profile(self, email: str) -> Profile:
        async with self._lock:
            profile = self._profiles.get(email)
            if profile is None:
                raise RecordNotFound(f"user {email}")
            result = profile.model_copy(deep=True)
        result.interests = sorted(result.interests)
        result.education = sorted(result.education, key=lambda a: a.school)
        result.professional = sorted(result.professional, key=lambda e: e.employer)
        return result

    async def update_profile(self, email: str, request: UpdateProfileRequest) -> None:
        update_data = request.model_dump(exclude_unset=True)
        async with self._lock:
            current = self._profiles.get(email)
            if current is None:
                raise RecordNotFound(f"user {email}")
            # References are checked before any state changes.
            if "education" in update_data:
                for attend in request.education:
                    if attend.school not in self._schools:
                        raise InvalidReference(f"unknown school {attend.school}")
            if "professional" in update_data:
                for employment in request.professional:
                    if employment.employer not in self._employers:
                        raise InvalidReference(f"unknown employer {employment.employer}")

            request = request.model_copy(deep=True)
            changes = {field: getattr(request, field) for field in update_data}
            self._profiles[email] = current.model_copy(update=changes, deep=True)

    # CatalogStore

    async def list_schools(self) -> List[School]:
        return [s.model_copy() for _, s in sorted(self._schools.items())]

    async def list_employers(self) -> List[Employer]:
        return [e.model_copy() for _, e in sorted(self._employers.items())]
