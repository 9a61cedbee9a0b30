"""Token, room lifecycle and participant endpoints."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from ..schemas import rooms as rooms_schema
from ..services import participants as participants_service
from ..services import rooms as rooms_service
from ..services import tokens as tokens_service
from ..services.video import VideoClient, get_video_client

router = APIRouter()


@router.post("/token")
async def create_token(
    payload: rooms_schema.TokenRequest | None = None,
    client: VideoClient = Depends(get_video_client),
) -> dict[str, Any]:
    """Echo the request body with a signed access token added."""

    payload = payload or rooms_schema.TokenRequest()
    token = tokens_service.issue_token(client, payload.room_name, payload.username)
    return {**payload.model_dump(by_alias=True, exclude_unset=True), "token": token}


@router.post("/create", response_model=rooms_schema.Room)
async def create_room(
    payload: rooms_schema.CreateRoomRequest | None = None,
    client: VideoClient = Depends(get_video_client),
) -> rooms_schema.Room:
    """Create a new video room."""

    payload = payload or rooms_schema.CreateRoomRequest()
    return await rooms_service.create_room(client, payload.room_name)


@router.post("/participants", response_model=rooms_schema.ParticipantsResponse)
async def list_participants(
    payload: rooms_schema.ParticipantsRequest | None = None,
    client: VideoClient = Depends(get_video_client),
) -> rooms_schema.ParticipantsResponse:
    """Return the connected participants of a room."""

    payload = payload or rooms_schema.ParticipantsRequest()
    participants = await participants_service.list_participants(client, payload.room_name)
    return rooms_schema.ParticipantsResponse(participants=participants)


@router.get("/", response_model=rooms_schema.ActiveRoomsResponse, response_model_exclude_none=True)
async def list_active_rooms(
    client: VideoClient = Depends(get_video_client),
) -> rooms_schema.ActiveRoomsResponse:
    """List in-progress rooms, capped at the configured limit."""

    return await rooms_service.list_active_rooms(client)


@router.get("/{sid}", response_model=rooms_schema.RoomResponse)
async def get_room(
    sid: str,
    client: VideoClient = Depends(get_video_client),
) -> rooms_schema.RoomResponse:
    """Return a room of any status by sid."""

    room = await rooms_service.get_room(client, sid)
    return rooms_schema.RoomResponse(room=room)


@router.post("/{sid}/complete", response_model=rooms_schema.ClosedRoomResponse)
async def complete_room(
    sid: str,
    client: VideoClient = Depends(get_video_client),
) -> rooms_schema.ClosedRoomResponse:
    """End the room and disconnect everyone in it."""

    room = await rooms_service.complete_room(client, sid)
    return rooms_schema.ClosedRoomResponse(closed_room=room)
