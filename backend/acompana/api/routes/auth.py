"""
Authentication routes: registration, login and token refresh.
"""

import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from acompana.core.exceptions import AuthError
from acompana.core.security import (
    create_access_token,
    create_refresh_token,
    verify_token,
)
from acompana.db.models import User
from acompana.db.session import get_db
from acompana.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    Token,
    TokenRefresh,
    UserResponse,
)
from acompana.services.users import authenticate_user, register_user

router = APIRouter(prefix="/api/auth", tags=["auth"])


def issue_tokens(user: User) -> dict:
    return {
        "access_token": create_access_token(data={"sub": str(user.id)}),
        "refresh_token": create_refresh_token(data={"sub": str(user.id)}),
        "token_type": "bearer",
    }


@router.post(
    "/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED
)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    """
    Register a new user.

    A profile sent along with the registration is stored best-effort.
    """
    return register_user(
        db,
        email=payload.email,
        password=payload.password,
        name=payload.name,
        profile=payload.profile,
    )


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    """Exchange email and password for access and refresh tokens."""
    user = authenticate_user(db, payload.email, payload.password)
    return {**issue_tokens(user), "user": user}


@router.post("/token/refresh", response_model=Token)
def refresh_token(payload: TokenRefresh, db: Session = Depends(get_db)):
    """Issue a new access token for a valid refresh token."""
    claims = verify_token(payload.refresh_token, token_type="refresh")

    try:
        user_id = uuid.UUID(claims["sub"])
    except ValueError:
        raise AuthError("Invalid refresh token")

    user = db.query(User).filter(User.id == user_id).first()
    if not user or not user.is_active:
        raise AuthError("Invalid refresh token")

    return {
        "access_token": create_access_token(data={"sub": str(user.id)}),
        "refresh_token": payload.refresh_token,
        "token_type": "bearer",
    }
