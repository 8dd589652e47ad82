from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer, field_validator
from datetime import datetime
from typing import Annotated, List, Optional

from gtonline.utils.dates import decode_connected, encode_connected


ConnectedDate = Annotated[
    Optional[datetime],
    BeforeValidator(decode_connected),
    PlainSerializer(encode_connected, return_type=str, when_used="json"),
]


class FriendshipRecord(BaseModel):
    """One stored row of the friendships table"""
    model_config = ConfigDict(from_attributes=True)

    email: str
    friend_email: str
    relationship: str = ""
    date_connected: Optional[datetime] = None

    @field_validator("relationship", mode="before")
    @classmethod
    def empty_relationship(cls, v: Optional[str]) -> str:
        return v or ""

    @property
    def is_connected(self) -> bool:
        return self.date_connected is not None


class SearchUsersQuery(BaseModel):
    email: Optional[str] = None
    name: Optional[str] = None
    hometown: Optional[str] = None

    def is_empty(self) -> bool:
        return not (self.email or self.name or self.hometown)


class UserSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    email: str
    first_name: str
    last_name: str
    hometown: str = ""

    @field_validator("hometown", mode="before")
    @classmethod
    def empty_hometown(cls, v: Optional[str]) -> str:
        return v or ""


class SearchUsersResponse(BaseModel):
    count: int
    users: List[UserSummary]


class FriendRequestCreate(BaseModel):
    relationship: str = ""


class FriendRequest(BaseModel):
    email: str
    relationship: str = ""


class PendingRequests(BaseModel):
    # Requests sent by the user that are still pending
    request_to: List[FriendRequest] = []
    # Requests sent to the user that are still pending
    request_from: List[FriendRequest] = []


class Friend(BaseModel):
    friend_email: str
    relationship: str = ""
    date_connected: ConnectedDate = None


class FriendsList(BaseModel):
    friends: List[Friend]
