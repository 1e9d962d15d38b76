from datetime import datetime
from typing import Literal

from .base import DomainModel


class NewUser(DomainModel):
    email: str
    first_name: str
    second_name: str
    password: str  # argon2 hash, never the plain password
    role: Literal["user", "admin"] = "user"


class User(NewUser):
    user_id: str
    created_at: datetime
