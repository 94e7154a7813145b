"""
Access token handling and current user descriptor.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from sqlalchemy.orm import Session

from app.config import settings
from app.exceptions import UnauthorizedError, NotFoundError
from domain.models import User
from repositories import UserRepository

logger = logging.getLogger("lodging.auth")


class AuthService:
    @staticmethod
    def create_access_token(user_id: int, validity: Optional[int] = None) -> str:
        """Issue a signed access token for the given user"""
        validity = validity if validity is not None else settings.auth_access_token_validity
        now = datetime.now(timezone.utc)
        payload = {
            "id": user_id,
            "iat": now,
            "exp": now + timedelta(seconds=validity),
        }
        return jwt.encode(payload, settings.auth_secret_key, algorithm=settings.auth_algorithm)

    @staticmethod
    def decode_access_token(token: str) -> int:
        """Return the user id held by a valid token"""
        try:
            payload = jwt.decode(
                token, settings.auth_secret_key, algorithms=[settings.auth_algorithm]
            )
        except jwt.ExpiredSignatureError:
            raise UnauthorizedError("Access token expired", code="auth_expired_token")
        except jwt.PyJWTError as e:
            logger.debug("Rejected access token: %s", e)
            raise UnauthorizedError("Invalid access token", code="auth_invalid_token")

        user_id = payload.get("id")
        if not isinstance(user_id, int) or user_id <= 0:
            raise UnauthorizedError("Invalid access token", code="auth_invalid_token")
        return user_id

    @staticmethod
    def get_user(db: Session, user_id: int) -> User:
        user = UserRepository(db).get_by_id(user_id)
        if not user:
            raise NotFoundError(f"User not found: {user_id}", code="unknown_user")
        return user

    @staticmethod
    def get_user_info(user: User) -> Dict[str, Any]:
        """Descriptor of a user, with its identity expanded"""
        identity = None
        if user.identity is not None:
            identity = {
                "id": user.identity.id,
                "firstname": user.identity.firstname,
                "lastname": user.identity.lastname,
            }
        return {
            "id": user.id,
            "login": user.login,
            "language": user.language,
            "groups": sorted(g.name for g in user.groups),
            "identity_id": identity,
            "organisation_id": user.organisation_id,
        }
