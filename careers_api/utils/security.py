import re

from passlib.context import CryptContext

# THE PASSWORD TOOLS (Using Argon2!)
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

MIN_PASSWORD_LENGTH = 9

PASSWORD_RULES = [
    (lambda p: len(p) >= MIN_PASSWORD_LENGTH, "Password must be more than 8 characters long"),
    (lambda p: re.search(r"[a-z]", p), "Password must contain at least one lowercase letter"),
    (lambda p: re.search(r"[A-Z]", p), "Password must contain at least one uppercase letter"),
    (lambda p: re.search(r"[^A-Za-z0-9]", p), "Password must contain at least one special character"),
]


def verify_password(plain_password, hashed_password):
    """Checks if the typed password matches the saved hash."""
    return pwd_context.verify(plain_password, hashed_password)


def dummy_verify():
    """Burns the same time as a real verify, for unknown accounts."""
    pwd_context.dummy_verify()


def get_password_hash(password):
    """Converts a plain password into an argon2 hash."""
    return pwd_context.hash(password)


def password_policy_errors(password: str) -> list:
    return [message for rule, message in PASSWORD_RULES if not rule(password)]
