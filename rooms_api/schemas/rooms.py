"""Data contracts for the rooms endpoints."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


class Room(CamelModel):
    sid: str = Field(..., description="Platform-assigned room identifier")
    name: str = Field(..., description="Unique room name")


class Participant(CamelModel):
    identity: str
    status: str


class RoomNameRequest(CamelModel):
    """Room name inputs are loose: any JSON scalar is taken as its string form."""

    room_name: str | None = Field(default=None, description="Room sid or unique name")

    @field_validator("room_name", mode="before")
    @classmethod
    def _stringify_room_name(cls, value: object) -> object:
        return _stringify(value)


class TokenRequest(RoomNameRequest):
    """Unknown fields are kept so they can be echoed back with the token."""

    model_config = ConfigDict(extra="allow")

    username: str | None = Field(default=None, description="Identity embedded in the token")

    @field_validator("username", mode="before")
    @classmethod
    def _stringify_username(cls, value: object) -> object:
        return _stringify(value)


class CreateRoomRequest(RoomNameRequest):
    # Accepted for client compatibility, not forwarded to the platform.
    tracks: Any = None
    token: Any = None


class ParticipantsRequest(RoomNameRequest):
    pass


class ActiveRoomsResponse(CamelModel):
    message: str | None = None
    active_rooms: list[Room] = Field(default_factory=list)


class RoomResponse(CamelModel):
    room: Room


class ClosedRoomResponse(CamelModel):
    closed_room: Room


class ParticipantsResponse(CamelModel):
    participants: list[Participant] = Field(default_factory=list)


def _stringify(value: object) -> object:
    if value is None or isinstance(value, str):
        return value
    return str(value)
