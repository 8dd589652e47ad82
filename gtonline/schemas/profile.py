from datetime import date
from typing import Annotated, List, Literal, Optional
from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer

from gtonline.utils.dates import decode_date, encode_date


# DD/MM/YYYY on the wire
Birthdate = Annotated[
    Optional[date],
    BeforeValidator(decode_date),
    PlainSerializer(encode_date, return_type=Optional[str], when_used="json"),
]


class School(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    school_name: str
    type: str = ""


class Employer(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    employer_name: str


class Attend(BaseModel):
    school: str
    year_graduated: int = 0


class Employment(BaseModel):
    employer: str
    job_title: str


class Profile(BaseModel):
    email: str
    first_name: str
    last_name: str
    sex: str = ""
    birthdate: Birthdate = None
    current_city: str = ""
    hometown: str = ""
    interests: List[str] = []
    education: List[Attend] = []
    professional: List[Employment] = []


class UpdateProfileRequest(BaseModel):
    """Fields left out of the request body keep their stored value"""
    sex: Literal["", "M", "F"] = ""
    birthdate: Birthdate = None
    current_city: str = ""
    hometown: str = ""
    interests: List[str] = []
    education: List[Attend] = []
    professional: List[Employment] = []


class SchoolList(BaseModel):
    schools: List[School]


class EmployerList(BaseModel):
    employers: List[Employer]
