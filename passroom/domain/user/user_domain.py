"""User and login session operations (OAuth mode)."""

from loguru import logger

from passroom.schemas import Token, User
from passroom.schemas.schema_utils import utc_now
from passroom.utils.app_errors import AppError, AppErrorCode, HttpStatusCode

from .user_models import AuthUser


def _to_auth_user(user: User) -> AuthUser:
    return AuthUser(user_id=user.user_id, identifier=user.identifier, name=user.user_name)


class UserService:
    """Lookups and updates over the ``user`` and ``token`` collections."""

    async def get_user_by_token(self, token_id: str) -> AuthUser | None:
        """Resolve a bearer token to its user, or None when either is unknown."""
        if not token_id:
            return None

        token = await Token.find_one(Token.token_id == token_id)
        if token is None:
            logger.debug("Bearer token not found")
            return None

        user = await User.find_one(User.user_id == token.user_id)
        if user is None:
            logger.warning(f"Token references missing user {token.user_id}")
            return None

        return _to_auth_user(user)

    async def update_user_name(self, user_id: str, name: str) -> AuthUser:
        if not name or not name.strip():
            raise AppError(
                errcode=AppErrorCode.E_INVALID_REQUEST,
                errmesg="Name is required",
                status_code=HttpStatusCode.BAD_REQUEST,
            )

        user = await User.find_one(User.user_id == user_id)
        if user is None:
            raise AppError(
                errcode=AppErrorCode.E_INVALID_REQUEST,
                errmesg="User not found",
                status_code=HttpStatusCode.BAD_REQUEST,
            )

        user.user_name = name.strip()
        user.updated_at = utc_now()
        await user.save()
        logger.info(f"Updated name of user {user_id}")
        return _to_auth_user(user)

    async def list_sessions(self, user_id: str) -> list[str]:
        """Return the token ids of every login session of the user."""
        tokens = await Token.find(Token.user_id == user_id).sort("+created_at").to_list()
        return [token.token_id for token in tokens]

    async def logout_session(self, user_id: str, token_id: str) -> list[str]:
        """Delete one login session and return the remaining token ids.

        Raises:
            AppError: E_INVALID_REQUEST when the token does not belong to the user
        """
        token = await Token.find_one(Token.token_id == token_id, Token.user_id == user_id)
        if token is None:
            raise AppError(
                errcode=AppErrorCode.E_INVALID_REQUEST,
                errmesg="Token does not exist",
                status_code=HttpStatusCode.BAD_REQUEST,
            )

        await token.delete()
        logger.info(f"Deleted session of user {user_id}")
        return await self.list_sessions(user_id)
