import logging

from careers_api.config import Settings
from careers_api.errors import (
    DuplicateEmailError,
    InvalidCredentialsError,
    PasswordMismatchError,
    PasswordPolicyError,
)
from careers_api.models.user import NewUser
from careers_api.utils.auth import create_access_token
from careers_api.utils.security import (
    dummy_verify,
    get_password_hash,
    password_policy_errors,
    verify_password,
)

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, user_dao, settings: Settings):
        self.user_dao = user_dao
        self.settings = settings

    async def login(self, email: str, password: str) -> dict:
        """Return ``{"token": ...}``; every failure is the same InvalidCredentialsError."""
        user = await self.user_dao.find_user_by_email(email)

        if user is None:
            dummy_verify()
            logger.warning("Login rejected: invalid credentials")
            raise InvalidCredentialsError()

        if not verify_password(password, user.password):
            logger.warning("Login rejected: invalid credentials")
            raise InvalidCredentialsError()

        logger.info("User %s logged in", user.user_id)
        return {"token": create_access_token(user, self.settings)}

    async def register(
        self,
        email: str,
        first_name: str,
        second_name: str,
        password: str,
        confirmed_password: str,
    ) -> dict:
        if password != confirmed_password:
            raise PasswordMismatchError()

        policy_errors = password_policy_errors(password)
        if policy_errors:
            raise PasswordPolicyError(". ".join(policy_errors))

        if await self.user_dao.find_user_by_email(email) is not None:
            raise DuplicateEmailError()

        user = await self.user_dao.create_user(
            NewUser(
                email=email,
                first_name=first_name,
                second_name=second_name,
                password=get_password_hash(password),
            )
        )
        logger.info("Registered user %s", user.user_id)
        return {"token": create_access_token(user, self.settings)}
