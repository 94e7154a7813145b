"""
API dependencies for dependency injection
"""

from typing import Callable, Optional
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.exceptions import UnauthorizedError, ForbiddenError
from domain.models import User, get_db_session
from services.auth_service import AuthService

ACCESS_TOKEN_COOKIE = "access_token"

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db_session),
) -> User:
    """Resolve the user holding the access token (bearer header or cookie)"""
    token = credentials.credentials if credentials else request.cookies.get(ACCESS_TOKEN_COOKIE)
    if not token:
        raise UnauthorizedError("Missing access token", code="auth_missing_token")
    user_id = AuthService.decode_access_token(token)
    return AuthService.get_user(db, user_id)


def require_group(group_name: str) -> Callable[..., User]:
    """Dependency factory restricting a route to the members of a group"""

    def checker(user: User = Depends(get_current_user)) -> User:
        if not user.has_group(group_name):
            raise ForbiddenError(
                f"User {user.id} is not a member of {group_name}", code="not_allowed"
            )
        return user

    return checker
