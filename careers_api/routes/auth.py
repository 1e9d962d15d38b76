from email_validator import EmailNotValidError, validate_email
from fastapi import APIRouter, Depends, HTTPException

from careers_api.dependencies import get_auth_service
from careers_api.schemas.user import LoginRequest, RegisterRequest, TokenResponse
from careers_api.services.auth_service import AuthService

router = APIRouter(prefix="/api", tags=["Auth"])


def is_valid_email(email: str) -> bool:
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


# ✅ 1. LOGIN
@router.post("/login", response_model=TokenResponse)
async def login(credentials: LoginRequest, auth_service: AuthService = Depends(get_auth_service)):
    """Login and get a JWT access token."""

    if not credentials.email or not credentials.password:
        raise HTTPException(status_code=400, detail="Email and password are required")

    if not is_valid_email(credentials.email):
        raise HTTPException(status_code=400, detail="Invalid email format")

    return await auth_service.login(credentials.email, credentials.password)


# ✅ 2. REGISTER
@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(user: RegisterRequest, auth_service: AuthService = Depends(get_auth_service)):
    """Register a new user account. New accounts always get the 'user' role."""

    if not all([user.email, user.first_name, user.second_name, user.password, user.confirmed_password]):
        raise HTTPException(
            status_code=400,
            detail="All fields are required: email, firstName, secondName, password, confirmedPassword",
        )

    if not is_valid_email(user.email):
        raise HTTPException(status_code=400, detail="Invalid email format")

    return await auth_service.register(
        email=user.email,
        first_name=user.first_name,
        second_name=user.second_name,
        password=user.password,
        confirmed_password=user.confirmed_password,
    )
