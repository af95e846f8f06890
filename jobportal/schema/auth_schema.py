# jobportal/schema/auth_schema.py
from pydantic import BaseModel

from jobportal.schema.user_schema import UserResponse


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class LoginResponse(Token):
    user: UserResponse
