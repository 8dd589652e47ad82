from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError

from gtonline.models.profile import RegularUser, Interest, Attend, Employment
from gtonline.models.user import User
from gtonline.repositories.errors import RecordNotFound, translate_integrity_error
from gtonline.schemas import profile as schemas
from gtonline.schemas.profile import Profile, UpdateProfileRequest

SCALAR_FIELDS = ("sex", "birthdate", "current_city", "hometown")


class ProfileRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_profile(self, email: str) -> Profile:
        """Assemble the profile from users, regular_users and the child tables"""
        user = (await self.db.execute(select(User).where(User.email == email))).scalar_one_or_none()
        if user is None:
            raise RecordNotFound(f"user {email}")

        profile = Profile(email=user.email, first_name=user.first_name, last_name=user.last_name)

        regular = (await self.db.execute(
            select(RegularUser).where(RegularUser.email == email)
        )).scalar_one_or_none()
        if regular is None:
            return profile

        profile.sex = regular.sex or ""
        profile.birthdate = regular.birthdate
        profile.current_city = regular.current_city or ""
        profile.hometown = regular.hometown or ""

        interests = await self.db.execute(
            select(Interest.interest).where(Interest.email == email).order_by(Interest.interest)
        )
        profile.interests = list(interests.scalars().all())

        attends = await self.db.execute(
            select(Attend.school_name, Attend.year_graduated).where(Attend.email == email).order_by(Attend.school_name)
        )
        profile.education = [
            schemas.Attend(school=a.school_name, year_graduated=a.year_graduated or 0)
            for a in attends.all()
        ]

        employments = await self.db.execute(
            select(Employment.employer_name, Employment.job_title).where(Employment.email == email).order_by(Employment.employer_name)
        )
        profile.professional = [
            schemas.Employment(employer=e.employer_name, job_title=e.job_title)
            for e in employments.all()
        ]
        return profile

    async def update_profile(self, email: str, request: UpdateProfileRequest) -> None:
        """Apply the fields present in the request in a single transaction.

        Child collections are replaced wholesale (delete then insert). Any
        failure rolls the whole update back.
        """
        update_data = request.model_dump(exclude_unset=True)
        try:
            user = (await self.db.execute(select(User).where(User.email == email))).scalar_one_or_none()
            if user is None:
                raise RecordNotFound(f"user {email}")

            regular = (await self.db.execute(
                select(RegularUser).where(RegularUser.email == email)
            )).scalar_one_or_none()
            if regular is None:
                regular = RegularUser(email=email)
                self.db.add(regular)

            for field in SCALAR_FIELDS:
                if field in update_data:
                    setattr(regular, field, getattr(request, field) or None)
            await self.db.flush()

            if "interests" in update_data:
                await self.db.execute(delete(Interest).where(Interest.email == email))
                self.db.add_all([Interest(email=email, interest=i) for i in request.interests])

            if "education" in update_data:
                await self.db.execute(delete(Attend).where(Attend.email == email))
                self.db.add_all([
                    Attend(email=email, school_name=a.school, year_graduated=a.year_graduated or None)
                    for a in request.education
                ])

            if "professional" in update_data:
                await self.db.execute(delete(Employment).where(Employment.email == email))
                self.db.add_all([
                    Employment(email=email, employer_name=e.employer, job_title=e.job_title)
                    for e in request.professional
                ])

            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise translate_integrity_error(e) from e
        except Exception:
            await self.db.rollback()
            raise
