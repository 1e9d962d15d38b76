from typing import Optional

from .base import CamelModel


# 1. For Login (Input)
class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


# 2. For Registration (Input)
class RegisterRequest(CamelModel):
    email: Optional[str] = None
    first_name: Optional[str] = None
    second_name: Optional[str] = None
    password: Optional[str] = None
    confirmed_password: Optional[str] = None


# 3. Output
class TokenResponse(CamelModel):
    token: str
