from typing import Optional
from pydantic import BaseModel

from socialfeed.modules.user_management.schemas.user import User


class RegisterRequest(BaseModel):
    # Everything is optional here so that missing fields reach validate_registration
    # and are reported together with the other field errors
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    password_confirmation: Optional[str] = None
    profile_picture_url: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class RegisterResponse(BaseModel):
    user: User
    token: str


class LoginResponse(BaseModel):
    id: str
    name: str
    email: str
    token: str


class MessageResponse(BaseModel):
    message: str
