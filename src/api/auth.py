"""Authentication API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_identity
from src.config import get_settings
from src.database import get_db
from src.schemas.auth import (
    AuthResponse,
    MessageResponse,
    SessionIdentity,
    UserLogin,
    UserRegister,
    UserResponse,
)
from src.services.auth import (
    authenticate_user,
    create_user,
    get_password_hash,
    get_token_codec,
    get_user_by_email,
    identity_for,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

EMAIL_TAKEN_MESSAGE = "Email already registered"
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


def set_session_cookie(response: Response, token: str) -> None:
    """Attach the session token as an HTTP-only, same-site cookie."""
    settings = get_settings()
    response.set_cookie(
        key=settings.cookie_name,
        value=token,
        max_age=settings.session_max_age,
        path="/",
        secure=settings.is_production,
        httponly=True,
        samesite="strict",
    )


def clear_session_cookie(response: Response) -> None:
    """Overwrite the session cookie with an empty, immediately expired value."""
    settings = get_settings()
    response.set_cookie(
        key=settings.cookie_name,
        value="",
        max_age=0,
        path="/",
        secure=settings.is_production,
        httponly=True,
        samesite="strict",
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserRegister,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new user and start a session."""
    # Check if user already exists
    if get_user_by_email(db, user_data.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=EMAIL_TAKEN_MESSAGE,
        )

    password_hash = await run_in_threadpool(get_password_hash, user_data.password)

    try:
        user = create_user(db, user_data.email, password_hash, user_data.name)
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=EMAIL_TAKEN_MESSAGE,
        ) from None

    set_session_cookie(response, get_token_codec().issue(identity_for(user)))

    return AuthResponse(user=UserResponse.model_validate(user))


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with email and password."""
    user = await run_in_threadpool(authenticate_user, db, credentials.email, credentials.password)

    if not user:
        logger.info("Rejected login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_CREDENTIALS_MESSAGE,
        )

    set_session_cookie(response, get_token_codec().issue(identity_for(user)))
    logger.info(f"User {user.id} logged in")

    return AuthResponse(user=UserResponse.model_validate(user))


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response):
    """Logout by expiring the session cookie. Works with or without a session."""
    clear_session_cookie(response)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=SessionIdentity)
async def get_me(
    identity: Annotated[SessionIdentity, Depends(get_current_identity)],
):
    """Get the identity of the current session."""
    return identity
