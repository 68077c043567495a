from pydantic import BaseModel, Field, field_validator
from typing import Optional


# -------- USERS --------
class UserCredentials(BaseModel):
    username: Optional[str] = Field(None, max_length=50)
    password: Optional[str] = None

    @field_validator("username", mode="before")
    def strip_username(cls, v):
        # Length limit applies to the name as stored
        if isinstance(v, str):
            return v.strip()
        return v


class UserDisplaySchema(BaseModel):
    id: int
    username: str

    class Config:
        from_attributes = True


class UserStatusSchema(BaseModel):
    user: dict[str, str]


# -------- TOKENS --------
class TokenResponse(BaseModel):
    id: int
    username: str
    access_token: str
    token_type: str = "bearer"
    expires_in: int
