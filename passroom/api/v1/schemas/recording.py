from pydantic import BaseModel, Field


class StartRecordingIn(BaseModel):
    passphrase: str = Field(description="Host passphrase of the channel")
    secret: str | None = Field(
        default=None, description="Media secret; enables decryption of the recorded stream"
    )


class StopRecordingIn(BaseModel):
    passphrase: str = Field(description="Host passphrase of the channel")
