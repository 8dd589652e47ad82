from fastapi import APIRouter, Depends

from gtonline.api.deps import get_current_user, get_friendship_service
from gtonline.schemas.friendship import FriendRequestCreate, FriendsList, PendingRequests
from gtonline.schemas.user import CurrentUser
from gtonline.services.friendship import FriendshipService

router = APIRouter()


@router.get("", response_model=FriendsList)
async def list_friends(
    current_user: CurrentUser = Depends(get_current_user),
    service: FriendshipService = Depends(get_friendship_service)
):
    """Get the current user's accepted friends"""
    return await service.list_friends(current_user.email)


@router.get("/requests", response_model=PendingRequests)
async def list_friend_requests(
    current_user: CurrentUser = Depends(get_current_user),
    service: FriendshipService = Depends(get_friendship_service)
):
    """Get all pending friend requests (sent and received)"""
    return await service.list_friend_requests(current_user.email)


@router.put("/requests/{friend_email}")
async def create_friend_request(
    friend_email: str,
    request_data: FriendRequestCreate,
    current_user: CurrentUser = Depends(get_current_user),
    service: FriendshipService = Depends(get_friendship_service)
):
    """Send a friend request, or change the label of a pending one"""
    await service.create_friend_request(current_user.email, friend_email, request_data.relationship)
    return {"message": "Friend request sent successfully"}


@router.delete("/requests/{friend_email}")
async def cancel_friend_request(
    friend_email: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: FriendshipService = Depends(get_friendship_service)
):
    """Cancel a friend request the current user sent"""
    await service.cancel_friend_request(current_user.email, friend_email)
    return {"message": "Friend request cancelled successfully"}


@router.put("/requests/{friend_email}/accept")
async def accept_friend_request(
    friend_email: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: FriendshipService = Depends(get_friendship_service)
):
    """Accept a friend request sent to the current user"""
    await service.accept_friend_request(current_user.email, friend_email)
    return {"message": "Friend request accepted successfully"}


@router.delete("/requests/{friend_email}/reject")
async def reject_friend_request(
    friend_email: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: FriendshipService = Depends(get_friendship_service)
):
    """Reject a friend request sent to the current user"""
    await service.reject_friend_request(current_user.email, friend_email)
    return {"message": "Friend request rejected successfully"}
