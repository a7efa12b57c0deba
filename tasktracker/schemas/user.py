from typing import Annotated

from pydantic import BaseModel, EmailStr, Field, StringConstraints

from tasktracker.models.user import UserRole

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class UserCreate(BaseModel):
    name: NonEmptyStr
    email: EmailStr
    password: str = Field(min_length=6)
    role: UserRole


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class UserOut(BaseModel):
    id: int
    name: str
    email: str
    role: UserRole

    model_config = {
        "from_attributes": True
    }
