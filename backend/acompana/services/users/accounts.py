"""
Registration and login.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from acompana.core.exceptions import (
    AuthError,
    StorageError,
    ValidationError,
)
from acompana.core.security import get_password_hash, verify_password
from acompana.db.models import User
from acompana.schemas.profile import ProfileIn
from acompana.services.suggestions.profile_store import create_initial_profile

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def register_user(
    db: Session,
    email: str,
    password: str,
    name: Optional[str] = None,
    profile: Optional[ProfileIn] = None,
) -> User:
    """
    Create a user account, plus a profile when one is supplied.

    The profile is best-effort: if writing it fails the account is still
    created and the failure is only logged.

    Raises:
        ValidationError: If the email is already registered
    """
    email = normalize_email(email)
    if db.query(User).filter(User.email == email).first():
        raise ValidationError("Email already registered")

    user = User(
        email=email,
        name=name,
        password_hash=get_password_hash(password),
        is_active=True,
    )

    try:
        db.add(user)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ValidationError("Email already registered") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error registering {email}: {str(e)}")
        raise StorageError("Could not register user") from e

    db.refresh(user)
    logger.info(f"Registered user {user.id}")

    if profile is not None:
        try:
            create_initial_profile(db, user.id, profile)
        except StorageError as e:
            logger.warning(f"UserProfile insert failed for user {user.id}: {e.message}")

    return user


def authenticate_user(db: Session, email: str, password: str) -> User:
    """
    Check credentials and return the matching user.

    Raises:
        AuthError: If the email is unknown or the password is wrong
    """
    user = db.query(User).filter(User.email == normalize_email(email)).first()
    if not user or not verify_password(password, user.password_hash):
        raise AuthError("Invalid email or password")
    if not user.is_active:
        raise AuthError("Inactive user")
    return user
