from fastapi import APIRouter, Depends

from gtonline.api.deps import get_current_user, get_profile_service
from gtonline.schemas.profile import EmployerList, SchoolList
from gtonline.schemas.user import CurrentUser
from gtonline.services.profile import ProfileService

router = APIRouter()


@router.get("/schools", response_model=SchoolList)
async def list_schools(
    current_user: CurrentUser = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    return await service.list_schools()


@router.get("/employers", response_model=EmployerList)
async def list_employers(
    current_user: CurrentUser = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    return await service.list_employers()
