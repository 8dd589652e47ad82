import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from gtonline.repositories.base import FriendshipStore
from gtonline.repositories.errors import DuplicateRecord, InvalidReference, RecordNotFound
from gtonline.schemas.friendship import (
    FriendshipRecord, FriendRequest, PendingRequests, Friend, FriendsList,
    SearchUsersQuery, SearchUsersResponse
)
from gtonline.utils.exceptions import (
    AlreadyExistsError, FailedPreconditionError, InternalError,
    InvalidArgumentError, NotFoundError
)

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _same_email(a: str, b: str) -> bool:
    return a.casefold() == b.casefold()


class FriendshipService:
    """Friend request lifecycle over a FriendshipStore.

    A row (email, friend_email) is pending until date_connected is set.
    Lookups are always by the ordered pair: a request B -> A is a different
    row from A -> B and is never consulted when A sends to B.
    """

    def __init__(self, store: FriendshipStore, clock: Optional[Callable[[], datetime]] = None):
        self.store = store
        self.clock = clock or _utcnow

    async def search_users(self, query: SearchUsersQuery) -> SearchUsersResponse:
        """Search users matching any of the supplied criteria"""
        try:
            users = await self.store.search_users(query)
        except Exception as e:
            raise InternalError(cause=e)
        return SearchUsersResponse(count=len(users), users=users)

    async def list_friends(self, email: str) -> FriendsList:
        """Get accepted friendships of the user, whichever side sent the request"""
        try:
            rows = await self.store.list_friends(email)
        except Exception as e:
            raise InternalError(cause=e)

        friends = []
        for row in rows:
            other = row.friend_email if _same_email(row.email, email) else row.email
            friends.append(Friend(
                friend_email=other,
                relationship=row.relationship,
                date_connected=row.date_connected
            ))
        return FriendsList(friends=friends)

    async def list_friend_requests(self, email: str) -> PendingRequests:
        """Get pending friend requests (sent and received)"""
        try:
            rows = await self.store.list_pending_friendships(email)
        except Exception as e:
            raise InternalError(cause=e)

        res = PendingRequests()
        for row in rows:
            if _same_email(email, row.email):
                res.request_to.append(FriendRequest(email=row.friend_email, relationship=row.relationship))
            if _same_email(email, row.friend_email):
                res.request_from.append(FriendRequest(email=row.email, relationship=row.relationship))
        return res

    async def create_friend_request(self, email: str, friend_email: str, relationship: str = "") -> None:
        """Send a friend request, or relabel one that is still pending"""
        if _same_email(email, friend_email):
            raise InvalidArgumentError("can't be friend with yourself")

        try:
            existing = await self.store.get_friendship(email, friend_email)
        except RecordNotFound:
            existing = None
        except Exception as e:
            raise InternalError(cause=e)

        if existing is None:
            try:
                await self._insert_friendship(email, friend_email, relationship)
                logger.info("Friend request sent", extra={"email": email})
                return
            except DuplicateRecord:
                # Another request for the same pair landed first; merge into it.
                try:
                    existing = await self.store.get_friendship(email, friend_email)
                except Exception as e:
                    raise InternalError(cause=e)

        if existing.is_connected:
            raise AlreadyExistsError(f"{email} and {friend_email} already friends")

        existing.relationship = relationship
        try:
            await self.store.update_friendship(existing)
        except Exception as e:
            raise InternalError(cause=e)

    async def _insert_friendship(self, email: str, friend_email: str, relationship: str) -> None:
        try:
            await self.store.insert_friendship(FriendshipRecord(
                email=email,
                friend_email=friend_email,
                relationship=relationship
            ))
        except InvalidReference as e:
            raise NotFoundError(
                f"the requested email is not found: email={email} friend_email={friend_email}",
                cause=e
            )
        except DuplicateRecord:
            raise
        except Exception as e:
            raise InternalError(cause=e)

    async def accept_friend_request(self, email: str, requester_email: str) -> None:
        """Accept the pending request sent by requester_email to email"""
        if _same_email(email, requester_email):
            raise InvalidArgumentError("2 email must be different")

        try:
            friendship = await self.store.get_friendship(requester_email, email)
        except RecordNotFound as e:
            raise FailedPreconditionError(
                f"the friend request from {requester_email} to {email} is not exist", cause=e
            )
        except Exception as e:
            raise InternalError(cause=e)

        if friendship.is_connected:
            raise AlreadyExistsError(f"{email} already accept the request from {requester_email}")

        friendship.date_connected = self.clock()
        try:
            await self.store.update_friendship(friendship)
        except RecordNotFound as e:
            raise FailedPreconditionError(
                f"the friend request from {requester_email} to {email} is not exist", cause=e
            )
        except Exception as e:
            raise InternalError(cause=e)
        logger.info("Friend request accepted", extra={"email": email})

    async def cancel_friend_request(self, email: str, friend_email: str) -> None:
        """Withdraw a request the user sent to friend_email"""
        await self._delete(email, friend_email)

    async def reject_friend_request(self, email: str, friend_email: str) -> None:
        """Decline a request friend_email sent to the user"""
        await self._delete(friend_email, email)

    async def _delete(self, email: str, friend_email: str) -> None:
        try:
            await self.store.delete_friendship(email, friend_email)
        except Exception as e:
            raise InternalError("failed to delete friend request", cause=e)
