# admin_auth/schemas/auth.py
from pydantic import BaseModel, EmailStr, Field


class RegisterIn(BaseModel):
    first_name: str = Field(default="", max_length=100)
    last_name: str = Field(default="", max_length=100)
    email: EmailStr
    password: str = Field(min_length=1)
    password_confirm: str


class LoginIn(BaseModel):
    # Plain str: an unknown or odd-looking email is a 404 lookup miss, not a validation error.
    email: str
    password: str


class MessageOut(BaseModel):
    message: str
