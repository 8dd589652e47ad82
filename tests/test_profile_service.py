"""Profile reads, validated updates and the school/employer catalog."""

from datetime import date

import pytest

from gtonline.schemas.profile import Attend, Employment, UpdateProfileRequest
from gtonline.services.profile import (
    EMPLOYERS_CACHE_KEY, SCHOOLS_CACHE_KEY, ProfileService, validate_profile_update
)
from gtonline.utils.exceptions import AppError, ErrorKind

from tests.conftest import ALICE


@pytest.fixture
def service(storage):
    return ProfileService(storage, storage)


@pytest.mark.parametrize("req, message", [
    (UpdateProfileRequest(interests=["chess", ""]), "empty interest value"),
    (UpdateProfileRequest(interests=["chess", "chess"]), "duplicate interest value"),
    (UpdateProfileRequest(education=[Attend(school="")]), "empty school value"),
    (UpdateProfileRequest(education=[Attend(school="Georgia Tech", year_graduated=-1)]), "negative year_graduated"),
    (UpdateProfileRequest(professional=[Employment(employer="", job_title="Dev")]), "empty employer value"),
    (UpdateProfileRequest(professional=[Employment(employer="Acme", job_title="")]), "empty job_title value"),
])
def test_validation_rules(req, message):
    with pytest.raises(AppError) as exc:
        validate_profile_update(req)
    assert exc.value.kind == ErrorKind.INVALID_ARGUMENT
    assert exc.value.message == message


def test_validation_accepts_empty_lists():
    validate_profile_update(UpdateProfileRequest())


async def test_new_user_has_empty_profile(service):
    profile = await service.get_profile(ALICE)
    assert profile.first_name == "Alice"
    assert profile.interests == [] and profile.education == [] and profile.professional == []
    assert profile.birthdate is None


async def test_unknown_user_not_found(service):
    with pytest.raises(AppError) as exc:
        await service.get_profile("ghost@example.com")
    assert exc.value.kind == ErrorKind.NOT_FOUND


async def test_update_round_trip(service):
    req = UpdateProfileRequest(
        sex="F",
        birthdate="02/01/1990",
        current_city="Atlanta",
        hometown="Savannah",
        interests=["running", "chess"],
        education=[Attend(school="Georgia Tech", year_graduated=2012)],
        professional=[Employment(employer="Acme", job_title="Engineer")],
    )

    profile = await service.update_profile(ALICE, req)

    assert profile.sex == "F"
    assert profile.birthdate == date(1990, 1, 2)
    assert profile.hometown == "Savannah"
    assert profile.interests == ["chess", "running"]
    assert profile.education == [Attend(school="Georgia Tech", year_graduated=2012)]
    assert profile.professional == [Employment(employer="Acme", job_title="Engineer")]
    assert await service.get_profile(ALICE) == profile


async def test_omitted_fields_are_unchanged(service):
    await service.update_profile(ALICE, UpdateProfileRequest(hometown="Savannah", interests=["chess"]))

    profile = await service.update_profile(ALICE, UpdateProfileRequest(current_city="Atlanta"))

    assert profile.hometown == "Savannah"
    assert profile.interests == ["chess"]
    assert profile.current_city == "Atlanta"


async def test_empty_list_clears_collection(service):
    await service.update_profile(ALICE, UpdateProfileRequest(interests=["chess", "go"]))

    profile = await service.update_profile(ALICE, UpdateProfileRequest(interests=[]))

    assert profile.interests == []


async def test_unknown_school_rejected_without_changes(service):
    await service.update_profile(ALICE, UpdateProfileRequest(interests=["chess"]))

    with pytest.raises(AppError) as exc:
        await service.update_profile(ALICE, UpdateProfileRequest(
            interests=["go"],
            education=[Attend(school="Hogwarts", year_graduated=1998)],
        ))
    assert exc.value.kind == ErrorKind.INVALID_ARGUMENT

    assert (await service.get_profile(ALICE)).interests == ["chess"]


async def test_unknown_employer_rejected(service):
    with pytest.raises(AppError) as exc:
        await service.update_profile(ALICE, UpdateProfileRequest(
            professional=[Employment(employer="Initech", job_title="Analyst")],
        ))
    assert exc.value.kind == ErrorKind.INVALID_ARGUMENT


async def test_update_unknown_user_not_found(service):
    with pytest.raises(AppError) as exc:
        await service.update_profile("ghost@example.com", UpdateProfileRequest(hometown="x"))
    assert exc.value.kind == ErrorKind.NOT_FOUND


async def test_catalog_is_sorted(service):
    schools = await service.list_schools()
    employers = await service.list_employers()

    assert [s.school_name for s in schools.schools] == ["Georgia Tech", "Lakeside High"]
    assert schools.schools[0].type == "University"
    assert [e.employer_name for e in employers.employers] == ["Acme", "Globex"]


class DictCache:
    """Stands in for RedisClient.get_json/set_json."""

    def __init__(self):
        self.values = {}

    async def get_json(self, key):
        return self.values.get(key)

    async def set_json(self, key, value, expire=3600):
        self.values[key] = value
        return True


async def test_catalog_served_from_cache(storage):
    cache = DictCache()
    service = ProfileService(storage, storage, cache=cache)

    await service.list_schools()
    await service.list_employers()
    assert SCHOOLS_CACHE_KEY in cache.values
    assert EMPLOYERS_CACHE_KEY in cache.values

    cache.values[SCHOOLS_CACHE_KEY] = [{"school_name": "Cached U", "type": "University"}]
    schools = await service.list_schools()
    assert [s.school_name for s in schools.schools] == ["Cached U"]
