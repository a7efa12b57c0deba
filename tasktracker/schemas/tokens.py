# tasktracker/schemas/tokens.py
from pydantic import BaseModel

from tasktracker.schemas.user import UserOut


class AuthResponse(BaseModel):
    token: str
    user: UserOut


class CurrentUserResponse(BaseModel):
    user: UserOut
