import logging
from typing import Optional

from gtonline.core.redis import RedisClient
from gtonline.repositories.base import CatalogStore, ProfileStore
from gtonline.repositories.errors import InvalidReference, RecordNotFound
from gtonline.schemas.profile import (
    Employer, EmployerList, Profile, School, SchoolList, UpdateProfileRequest
)
from gtonline.utils.exceptions import InternalError, InvalidArgumentError, NotFoundError

logger = logging.getLogger(__name__)

SCHOOLS_CACHE_KEY = "catalog:schools"
EMPLOYERS_CACHE_KEY = "catalog:employers"


def validate_profile_update(req: UpdateProfileRequest) -> None:
    """Field rules for interests, education and professional history"""
    seen = set()
    for interest in req.interests:
        if interest == "":
            raise InvalidArgumentError("empty interest value")
        seen.add(interest)
    if len(seen) != len(req.interests):
        raise InvalidArgumentError("duplicate interest value")

    for attend in req.education:
        if attend.school == "":
            raise InvalidArgumentError("empty school value")
        if attend.year_graduated < 0:
            raise InvalidArgumentError("negative year_graduated")

    for employment in req.professional:
        if employment.employer == "":
            raise InvalidArgumentError("empty employer value")
        if employment.job_title == "":
            raise InvalidArgumentError("empty job_title value")


class ProfileService:

    def __init__(
        self,
        store: ProfileStore,
        catalog: CatalogStore,
        cache: Optional[RedisClient] = None,
        cache_seconds: int = 3600,
    ):
        self.store = store
        self.catalog = catalog
        self.cache = cache
        self.cache_seconds = cache_seconds

    async def get_profile(self, email: str) -> Profile:
        try:
            return await self.store.get_profile(email)
        except RecordNotFound as e:
            raise NotFoundError(f"user {email} not found", cause=e)
        except Exception as e:
            raise InternalError(cause=e)

    async def update_profile(self, email: str, req: UpdateProfileRequest) -> Profile:
        """Validate, persist, then return the stored profile"""
        validate_profile_update(req)

        try:
            await self.store.update_profile(email, req)
        except RecordNotFound as e:
            raise NotFoundError(f"user {email} not found", cause=e)
        except InvalidReference as e:
            raise InvalidArgumentError("unknown school or employer", cause=e)
        except Exception as e:
            raise InternalError(cause=e)

        try:
            return await self.store.get_profile(email)
        except Exception as e:
            raise InternalError(cause=e)

    async def list_schools(self) -> SchoolList:
        cached = await self._cached(SCHOOLS_CACHE_KEY)
        if cached is not None:
            return SchoolList(schools=[School(**s) for s in cached])

        try:
            schools = await self.catalog.list_schools()
        except Exception as e:
            raise InternalError(cause=e)

        await self._store(SCHOOLS_CACHE_KEY, [s.model_dump() for s in schools])
        return SchoolList(schools=schools)

    async def list_employers(self) -> EmployerList:
        cached = await self._cached(EMPLOYERS_CACHE_KEY)
        if cached is not None:
            return EmployerList(employers=[Employer(**e) for e in cached])

        try:
            employers = await self.catalog.list_employers()
        except Exception as e:
            raise InternalError(cause=e)

        await self._store(EMPLOYERS_CACHE_KEY, [e.model_dump() for e in employers])
        return EmployerList(employers=employers)

    async def _cached(self, key: str):
        if self.cache is None:
            return None
        return await self.cache.get_json(key)

    async def _store(self, key: str, value) -> None:
        if self.cache is None:
            return
        await self.cache.set_json(key, value, expire=self.cache_seconds)
