from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from gtonline.core.config import Settings
from gtonline.core.database import get_db
from gtonline.repositories.base import CatalogStore, FriendshipStore, ProfileStore, UserStore
from gtonline.repositories.catalog import CatalogRepository
from gtonline.repositories.friendship import FriendshipRepository
from gtonline.repositories.profile import ProfileRepository
from gtonline.repositories.user import UserRepository
from gtonline.schemas.user import CurrentUser
from gtonline.services.auth import AuthService
from gtonline.services.friendship import FriendshipService
from gtonline.services.profile import ProfileService
from gtonline.utils.exceptions import AuthenticationError

bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


# Stores: one repository per request session, or the shared in-memory storage

def get_user_store(request: Request, db: Optional[AsyncSession] = Depends(get_db)) -> UserStore:
    if db is None:
        return request.app.state.memory_storage
    return UserRepository(db)


def get_friendship_store(request: Request, db: Optional[AsyncSession] = Depends(get_db)) -> FriendshipStore:
    if db is None:
        return request.app.state.memory_storage
    return FriendshipRepository(db)


def get_profile_store(request: Request, db: Optional[AsyncSession] = Depends(get_db)) -> ProfileStore:
    if db is None:
        return request.app.state.memory_storage
    return ProfileRepository(db)


def get_catalog_store(request: Request, db: Optional[AsyncSession] = Depends(get_db)) -> CatalogStore:
    if db is None:
        return request.app.state.memory_storage
    return CatalogRepository(db)


# Services

def get_auth_service(
    store: UserStore = Depends(get_user_store),
    settings: Settings = Depends(get_settings)
) -> AuthService:
    return AuthService(store, settings)


def get_friendship_service(store: FriendshipStore = Depends(get_friendship_store)) -> FriendshipService:
    return FriendshipService(store)


def get_profile_service(
    request: Request,
    store: ProfileStore = Depends(get_profile_store),
    catalog: CatalogStore = Depends(get_catalog_store),
    settings: Settings = Depends(get_settings)
) -> ProfileService:
    return ProfileService(
        store,
        catalog,
        cache=request.app.state.redis,
        cache_seconds=settings.CATALOG_CACHE_SECONDS
    )


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: AuthService = Depends(get_auth_service)
) -> CurrentUser:
    """Resolve the Authorization header to the calling user"""
    if credentials is None:
        raise AuthenticationError()
    return auth.authenticate(credentials.scheme, credentials.credentials)
