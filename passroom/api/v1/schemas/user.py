from pydantic import BaseModel, Field


class UserOut(BaseModel):
    user_id: str
    name: str | None = None


class UpdateUserNameIn(BaseModel):
    name: str = Field(min_length=1, max_length=100, description="New display name")


class LogoutSessionIn(BaseModel):
    token: str = Field(description="Token id of the session to end")


class SessionsOut(BaseModel):
    tokens: list[str]
