from typing import Optional

from fastapi import APIRouter, Depends, Query

from gtonline.api.deps import get_current_user, get_friendship_service, get_profile_service
from gtonline.schemas.friendship import SearchUsersQuery, SearchUsersResponse
from gtonline.schemas.profile import Profile, UpdateProfileRequest
from gtonline.schemas.user import CurrentUser
from gtonline.services.friendship import FriendshipService
from gtonline.services.profile import ProfileService
from gtonline.utils.exceptions import InvalidArgumentError

router = APIRouter()


@router.get("", response_model=SearchUsersResponse)
async def search_users(
    email: Optional[str] = Query(None, description="Exact email"),
    name: Optional[str] = Query(None, description="Part of the first or last name"),
    hometown: Optional[str] = Query(None, description="Part of the hometown"),
    current_user: CurrentUser = Depends(get_current_user),
    service: FriendshipService = Depends(get_friendship_service)
):
    """Search users matching any of the given filters"""
    query = SearchUsersQuery(email=email, name=name, hometown=hometown)
    if query.is_empty():
        raise InvalidArgumentError("Must provide at least 1 params")
    return await service.search_users(query)


@router.get("/profile", response_model=Profile, response_model_exclude_none=True)
async def get_profile(
    current_user: CurrentUser = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Get current user profile"""
    return await service.get_profile(current_user.email)


@router.put("/profile", response_model=Profile, response_model_exclude_none=True)
async def update_profile(
    profile_update: UpdateProfileRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Update current user profile and return what was stored"""
    return await service.update_profile(current_user.email, profile_update)
