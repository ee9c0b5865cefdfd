from datetime import datetime
from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    field_validator,
)


class IceCandidate(BaseModel):
    model_config = ConfigDict(extra="allow")

    candidate: StrictStr
    sdpMLineIndex: StrictInt | StrictFloat
    sdpMid: StrictStr


class SignalPayload(BaseModel):
    """WebRTC session description or ICE candidate, relayed verbatim."""

    model_config = ConfigDict(extra="allow")

    type: Literal["offer", "pranswer", "answer", "rollback"]
    sdp: StrictStr | None = None
    candidate: IceCandidate | None = None

    # Either key may be left out, but an explicit null is not a valid value.
    @field_validator("sdp", "candidate", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("must not be null")
        return value

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class SignalIn(BaseModel):
    signal: SignalPayload


class SignalOut(BaseModel):
    signal: dict[str, Any]


class RoomOut(BaseModel):
    id: str
    expires_at: datetime = Field(serialization_alias="expiresAt")


class StatusOut(BaseModel):
    status: str
