"""Room lifecycle operations against the video platform."""
from __future__ import annotations

import logging
from typing import Any

from ..core.config import settings
from ..core.exceptions import VendorCallError
from ..schemas import rooms as schemas
from .video import ROOM_STATUS_IN_PROGRESS, VENDOR_ERRORS, VideoClient, describe_vendor_error

logger = logging.getLogger(__name__)

NO_ACTIVE_ROOMS_MESSAGE = "No active rooms found"


def to_room(record: Any) -> schemas.Room:
    """Project a platform room record onto the public `Room` shape."""

    return schemas.Room(sid=record.sid, name=getattr(record, "unique_name", None) or "")


async def create_room(client: VideoClient, room_name: str | None) -> schemas.Room:
    """Create a new room; an empty name lets the platform pick one."""

    room_name = room_name or ""
    try:
        record = await client.create_room(room_name)
    except VENDOR_ERRORS as exc:
        logger.warning("Room creation failed for name=%r: %s", room_name, exc)
        raise VendorCallError(
            f"Unable to create new room with name={room_name}",
            error=describe_vendor_error(exc),
        ) from exc

    room = to_room(record)
    logger.info("Created room sid=%s name=%s", room.sid, room.name)
    return room


async def list_active_rooms(
    client: VideoClient,
    limit: int | None = None,
) -> schemas.ActiveRoomsResponse:
    """Return at most `limit` rooms that are currently in progress.

    The cap defaults to the configured `rooms_list_limit`.
    """

    limit = limit or settings.rooms_list_limit

    try:
        records = await client.list_rooms(status=ROOM_STATUS_IN_PROGRESS, limit=limit)
    except VENDOR_ERRORS as exc:
        logger.warning("Listing active rooms failed: %s", exc)
        raise VendorCallError("Unable to list active rooms", error=describe_vendor_error(exc)) from exc

    active_rooms = [to_room(record) for record in list(records)[:limit]]
    if not active_rooms:
        return schemas.ActiveRoomsResponse(message=NO_ACTIVE_ROOMS_MESSAGE, active_rooms=[])
    return schemas.ActiveRoomsResponse(active_rooms=active_rooms)


async def get_room(client: VideoClient, sid: str) -> schemas.Room:
    """Fetch a room of any status by sid."""

    try:
        record = await client.fetch_room(sid)
    except VENDOR_ERRORS as exc:
        logger.warning("Fetching room sid=%s failed: %s", sid, exc)
        raise VendorCallError(f"Unable to get room with sid={sid}", error=describe_vendor_error(exc)) from exc

    return to_room(record)


async def complete_room(client: VideoClient, sid: str) -> schemas.Room:
    """Mark a room completed, disconnecting its participants.

    Completing an already completed room is rejected by the platform.
    """

    try:
        record = await client.complete_room(sid)
    except VENDOR_ERRORS as exc:
        logger.warning("Completing room sid=%s failed: %s", sid, exc)
        raise VendorCallError(
            f"Unable to complete room with sid={sid}",
            error=describe_vendor_error(exc),
        ) from exc

    room = to_room(record)
    logger.info("Completed room sid=%s name=%s", room.sid, room.name)
    return room
