from fastapi import APIRouter, Depends

from passroom.api.v1.dependency import CurrentUser, OAuthUser, get_user_service
from passroom.api.v1.schemas.base import ApiOut
from passroom.api.v1.schemas.user import LogoutSessionIn, SessionsOut, UpdateUserNameIn, UserOut
from passroom.domain.user.user_domain import UserService

router = APIRouter(prefix="/user")


@router.get("/get_user")
async def get_user(user: OAuthUser) -> ApiOut[UserOut | None]:
    """Return the authenticated user, or null when OAuth is disabled."""
    if user is None:
        return ApiOut[UserOut | None](results=None)

    return ApiOut[UserOut | None](results=UserOut(user_id=user.user_id, name=user.name))


@router.post("/update_user_name")
async def update_user_name(
    payload: UpdateUserNameIn,
    user: OAuthUser,
    service: UserService = Depends(get_user_service),
) -> ApiOut[UserOut | None]:
    if user is None:
        return ApiOut[UserOut | None](results=None)

    updated = await service.update_user_name(user.user_id, payload.name)

    return ApiOut[UserOut | None](results=UserOut(user_id=updated.user_id, name=updated.name))


@router.post("/logout_session")
async def logout_session(
    payload: LogoutSessionIn,
    user: CurrentUser,
    service: UserService = Depends(get_user_service),
) -> ApiOut[SessionsOut]:
    """End one login session and return the ones that remain."""
    remaining = await service.logout_session(user.user_id, payload.token)

    return ApiOut[SessionsOut](results=SessionsOut(tokens=remaining))


@router.get("/get_sessions")
async def get_sessions(
    user: CurrentUser,
    service: UserService = Depends(get_user_service),
) -> ApiOut[SessionsOut]:
    tokens = await service.list_sessions(user.user_id)

    return ApiOut[SessionsOut](results=SessionsOut(tokens=tokens))
