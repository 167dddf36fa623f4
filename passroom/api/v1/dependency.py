from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request
from loguru import logger

from passroom.app_config import AppEnvironConfig, get_app_environ_config
from passroom.domain.user.user_domain import UserService
from passroom.domain.user.user_models import AuthUser
from passroom.utils.app_errors import ERRMESG_INVALID_TOKEN, AppError, AppErrorCode, HttpStatusCode

BEARER_PREFIX = "bearer "


@lru_cache
def get_user_service() -> UserService:
    """Get the singleton UserService instance."""
    return UserService()


def extract_bearer_token(request: Request) -> str | None:
    # Do not log request headers here (may include secrets like Authorization).
    authorization = request.headers.get("Authorization", "")
    if not authorization.lower().startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX) :].strip()
    return token or None


async def get_optional_user(
    request: Request,
    cfg: AppEnvironConfig = Depends(get_app_environ_config),
    users: UserService = Depends(get_user_service),
) -> AuthUser | None:
    """Caller identity when OAuth is enabled, otherwise always None."""
    if not cfg.ENABLE_OAUTH:
        return None

    token = extract_bearer_token(request)
    if not token:
        return None

    user = await users.get_user_by_token(token)
    if user is not None:
        logger.debug("Authenticated user_id: {}", user.user_id)
    return user


def _invalid_token() -> AppError:
    return AppError(
        errcode=AppErrorCode.E_BAD_TOKEN,
        errmesg=ERRMESG_INVALID_TOKEN,
        status_code=HttpStatusCode.UNAUTHORIZED,
    )


async def get_current_user(user: AuthUser | None = Depends(get_optional_user)) -> AuthUser:
    if user is None:
        raise _invalid_token()
    return user


async def get_oauth_user(
    cfg: AppEnvironConfig = Depends(get_app_environ_config),
    user: AuthUser | None = Depends(get_optional_user),
) -> AuthUser | None:
    """None when OAuth is disabled; otherwise a valid bearer token is required."""
    if not cfg.ENABLE_OAUTH:
        return None
    if user is None:
        raise _invalid_token()
    return user


OptionalUser = Annotated[AuthUser | None, Depends(get_optional_user)]
CurrentUser = Annotated[AuthUser, Depends(get_current_user)]
OAuthUser = Annotated[AuthUser | None, Depends(get_oauth_user)]
