"""
Dependency injection functions for the API.
"""

import uuid
from functools import lru_cache
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from acompana.core.exceptions import AuthError
from acompana.core.security import verify_token
from acompana.db.models import User
from acompana.db.session import get_db
from acompana.services.responder import GeminiResponder


# Database dependency
db_dependency = get_db

# Bearer scheme for token extraction from the Authorization header
bearer_scheme = HTTPBearer(auto_error=False)


async def get_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """Extract the bearer token from the Authorization header."""
    if credentials is None or not credentials.credentials:
        raise AuthError("Missing auth header")
    return credentials.credentials


async def get_current_user(
    token: str = Depends(get_token), db: Session = Depends(db_dependency)
) -> User:
    """
    Get the current authenticated user from a JWT token.

    The user id in the token is authoritative for everything the request
    reads or writes.
    """
    payload = verify_token(token)

    try:
        user_id = uuid.UUID(payload["sub"])
    except (KeyError, ValueError):
        raise AuthError("Invalid token")

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise AuthError("Invalid token")

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user",
        )

    return user


@lru_cache(maxsize=1)
def get_responder() -> GeminiResponder:
    """Shared responder client, configured from the environment."""
    return GeminiResponder()
