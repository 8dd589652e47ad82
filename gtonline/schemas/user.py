from pydantic import BaseModel, ConfigDict


class UserRecord(BaseModel):
    """A stored user; password holds the bcrypt hash"""
    model_config = ConfigDict(from_attributes=True)

    email: str
    password: str
    first_name: str
    last_name: str


class CurrentUser(BaseModel):
    email: str
