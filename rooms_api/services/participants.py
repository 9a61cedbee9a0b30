"""Connected participant lookup for a room."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import status

from ..core.exceptions import VendorCallError
from ..schemas import rooms as schemas
from .video import PARTICIPANT_STATUS_CONNECTED, VENDOR_ERRORS, VideoClient, describe_vendor_error

logger = logging.getLogger(__name__)


def to_participant(record: Any) -> schemas.Participant:
    return schemas.Participant(identity=record.identity or "", status=str(record.status or ""))


async def list_participants(client: VideoClient, room_name: str | None) -> list[schemas.Participant]:
    """Collect every connected participant of the room into one list."""

    room_name = room_name or ""
    try:
        records = await client.list_participants(room_name, status=PARTICIPANT_STATUS_CONNECTED)
    except VENDOR_ERRORS as exc:
        logger.exception("Listing participants of room=%r failed", room_name)
        raise VendorCallError(
            f"Unable to list participants of room {room_name}",
            error=describe_vendor_error(exc),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        ) from exc

    return [to_participant(record) for record in records]
