"""Tests for user and session operations (requires MongoDB)."""

from datetime import timedelta

import pytest

from passroom.domain.user.user_domain import UserService
from passroom.schemas import Token, User
from passroom.schemas.schema_utils import utc_now
from passroom.utils.app_errors import AppError, AppErrorCode
from passroom.utils.idgen import new_opaque_id, new_ulid


async def _create_user(name: str | None = "Ada") -> User:
    now = utc_now()
    user = User(
        user_id=new_ulid("us_"),
        identifier=f"sub-{new_opaque_id()}",
        user_name=name,
        created_at=now,
        updated_at=now,
    )
    await user.insert()
    return user


async def _create_token(user: User, age_seconds: int = 0) -> Token:
    token = Token(
        token_id=new_opaque_id(),
        user_id=user.user_id,
        created_at=utc_now() - timedelta(seconds=age_seconds),
    )
    await token.insert()
    return token


@pytest.mark.usefixtures("clear_collections")
class TestUserService:
    @pytest.fixture
    def service(self) -> UserService:
        return UserService()

    async def test_get_user_by_token(self, beanie_db, service):
        user = await _create_user()
        token = await _create_token(user)

        auth_user = await service.get_user_by_token(token.token_id)

        assert auth_user is not None
        assert auth_user.user_id == user.user_id
        assert auth_user.name == "Ada"

    async def test_unknown_token(self, beanie_db, service):
        assert await service.get_user_by_token("missing") is None
        assert await service.get_user_by_token("") is None

    async def test_token_of_deleted_user(self, beanie_db, service):
        user = await _create_user()
        token = await _create_token(user)
        await user.delete()

        assert await service.get_user_by_token(token.token_id) is None

    async def test_update_user_name(self, beanie_db, service):
        user = await _create_user()

        updated = await service.update_user_name(user.user_id, "  Grace  ")

        assert updated.name == "Grace"
        stored = await User.find_one(User.user_id == user.user_id)
        assert stored is not None
        assert stored.user_name == "Grace"

    async def test_update_user_name_rejects_blank(self, beanie_db, service):
        user = await _create_user()

        with pytest.raises(AppError) as exc_info:
            await service.update_user_name(user.user_id, "   ")

        assert exc_info.value.errcode == AppErrorCode.E_INVALID_REQUEST

    async def test_list_sessions_oldest_first(self, beanie_db, service):
        user = await _create_user()
        older = await _create_token(user, age_seconds=60)
        newer = await _create_token(user)

        assert await service.list_sessions(user.user_id) == [older.token_id, newer.token_id]

    async def test_logout_session_returns_remaining(self, beanie_db, service):
        user = await _create_user()
        first = await _create_token(user, age_seconds=60)
        second = await _create_token(user)

        remaining = await service.logout_session(user.user_id, first.token_id)

        assert remaining == [second.token_id]
        assert await Token.find_one(Token.token_id == first.token_id) is None

    async def test_logout_missing_token(self, beanie_db, service):
        user = await _create_user()

        with pytest.raises(AppError) as exc_info:
            await service.logout_session(user.user_id, "missing")

        assert exc_info.value.errcode == AppErrorCode.E_INVALID_REQUEST

    async def test_logout_other_users_token(self, beanie_db, service):
        owner = await _create_user()
        other = await _create_user("Eve")
        token = await _create_token(owner)

        with pytest.raises(AppError):
            await service.logout_session(other.user_id, token.token_id)

        assert await Token.find_one(Token.token_id == token.token_id) is not None
