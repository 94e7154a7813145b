"""Current user routes"""

from urllib.parse import urlparse

from fastapi import APIRouter, Depends, Response
import logging

from api.dependencies import ACCESS_TOKEN_COOKIE, get_current_user
from api.responses import error_responses
from app.config import settings
from domain.models import User
from domain.schemas.identity_schemas import UserInfoResponse
from services.auth_service import AuthService

router = APIRouter(tags=["Identity"])
logger = logging.getLogger("lodging.api.userinfo")


@router.get("/userinfo", response_model=UserInfoResponse, responses=error_responses(401, 404))
def get_userinfo(response: Response, user: User = Depends(get_current_user)):
    """Return the descriptor of the current user and renew its access token"""
    validity = settings.auth_access_token_validity
    token = AuthService.create_access_token(user.id, validity)
    response.set_cookie(
        key=ACCESS_TOKEN_COOKIE,
        value=token,
        max_age=validity,
        domain=urlparse(settings.backend_url).hostname,
        secure=settings.auth_token_https,
        httponly=True,
    )
    logger.debug("Renewed access token of user %s", user.id)
    return AuthService.get_user_info(user)
