from datetime import datetime

from pydantic import BaseModel, Field, field_serializer, field_validator

from passroom.domain.live.channel.channel_models import JoinSession, ShareResponse
from passroom.services.integrations.credential_service import JoinCredential
from passroom.utils.app_errors import AppError, AppErrorCode, HttpStatusCode


class CreateChannelIn(BaseModel):
    title: str = Field(description="Title of the channel")
    enable_pstn: bool = Field(default=False, description="Provision a dial-in DTMF code")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise AppError(
                errcode=AppErrorCode.E_INVALID_REQUEST,
                errmesg="Title is required",
                status_code=HttpStatusCode.BAD_REQUEST,
            )
        return v


class PassphraseOut(BaseModel):
    host: str | None = Field(default=None, description="Host passphrase, hidden from viewers")
    view: str = Field(description="Viewer passphrase")


class PstnOut(BaseModel):
    number: str
    dtmf: str


class ShareOut(BaseModel):
    passphrase: PassphraseOut
    title: str
    channel: str = Field(description="Media channel name")
    pstn: PstnOut | None = None

    @classmethod
    def from_domain(cls, share: ShareResponse) -> "ShareOut":
        return cls.model_validate(share.model_dump())


class CredentialOut(BaseModel):
    uid: int
    rtc: str = Field(description="Signed media token")
    expires_at: datetime

    @field_serializer("expires_at")
    @classmethod
    def serialize_datetime(cls, v: datetime) -> str:
        return v.isoformat()

    @classmethod
    def from_domain(cls, credential: JoinCredential) -> "CredentialOut":
        return cls(uid=credential.uid, rtc=credential.rtc, expires_at=credential.expires_at)


class JoinChannelOut(BaseModel):
    title: str
    channel: str
    is_host: bool
    secret: str = Field(description="Media encryption secret")
    main_user: CredentialOut
    screen_share: CredentialOut

    @classmethod
    def from_domain(cls, session: JoinSession) -> "JoinChannelOut":
        return cls(
            title=session.title,
            channel=session.channel,
            is_host=session.is_host,
            secret=session.secret,
            main_user=CredentialOut.from_domain(session.main_user),
            screen_share=CredentialOut.from_domain(session.screen_share),
        )
