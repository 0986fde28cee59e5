from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from fleetflow.schemas.common import CamelModel, ORMModel


class UserSchema(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    username: str = Field(...)
    email: EmailStr = Field(...)
    mobile: Optional[str] = None
    address: Optional[str] = None
    password: str = Field(...)


class UserLoginSchema(BaseModel):
    username: str = Field(...)
    password: str = Field(...)


class UserOut(ORMModel):
    id: int
    username: str
    first_name: Optional[str] = None


class RegisterResponse(BaseModel):
    message: str
    user: UserOut


class LoginResponse(BaseModel):
    message: str
    user: UserOut
    access_token: str


class SessionOut(BaseModel):
    user_id: int
    username: str
    expires_at: datetime
