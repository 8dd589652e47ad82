from pydantic import BaseModel, EmailStr, Field, model_validator


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
    password_confirmation: str
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def passwords_match(self) -> "RegisterRequest":
        if self.password != self.password_confirmation:
            raise ValueError("password_confirmation must match password")
        return self


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class Token(BaseModel):
    access_token: str
    token_type: str = "Bearer"


class RegisterResponse(BaseModel):
    email: str
    token: Token
