from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gtonline.models.catalog import School as SchoolModel, Employer as EmployerModel
from gtonline.schemas.profile import Employer, School


class CatalogRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_schools(self) -> List[School]:
        result = await self.db.execute(select(SchoolModel).order_by(SchoolModel.school_name))
        return [School(school_name=s.school_name, type=s.type or "") for s in result.scalars().all()]

    async def list_employers(self) -> List[Employer]:
        result = await self.db.execute(select(EmployerModel).order_by(EmployerModel.employer_name))
        return [Employer.model_validate(e) for e in result.scalars().all()]
