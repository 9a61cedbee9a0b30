"""Twilio Video client adapter.

One adapter is built at startup from the settings and shared by every request
through the `get_video_client` dependency. It holds the only reference to the
Twilio REST client and keeps the vendor calls single-shot: no retries, no
pagination beyond the requested limit."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from aiohttp import ClientError
from fastapi import Request
from twilio.base import values
from twilio.base.exceptions import TwilioException, TwilioRestException
from twilio.http.async_http_client import AsyncTwilioHttpClient
from twilio.rest import Client

from ..core.config import Settings
from ..core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ROOM_STATUS_IN_PROGRESS = "in-progress"
ROOM_STATUS_COMPLETED = "completed"
PARTICIPANT_STATUS_CONNECTED = "connected"

# Failures that come from the platform or the wire, as opposed to bugs.
VENDOR_ERRORS: tuple[type[BaseException], ...] = (TwilioException, ClientError, asyncio.TimeoutError)


@dataclass(frozen=True, slots=True)
class TwilioCredentials:
    account_sid: str
    api_key: str
    api_secret: str


class VideoClient:
    """Thin async facade over the Twilio Video REST resources."""

    def __init__(
        self,
        credentials: TwilioCredentials,
        *,
        room_type: str = "group",
        token_ttl: int = 3600,
        timeout: float | None = None,
        rest_client: Client | None = None,
    ) -> None:
        self.credentials = credentials
        self.room_type = room_type
        self.token_ttl = token_ttl
        self._rest = rest_client or Client(
            credentials.api_key,
            credentials.api_secret,
            credentials.account_sid,
            http_client=AsyncTwilioHttpClient(timeout=timeout),
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> VideoClient:
        """Build the adapter, failing fast when a credential is missing."""

        missing = settings.missing_twilio_credentials
        if missing:
            raise ConfigurationError(f"Unable to initialize Twilio client, missing {', '.join(missing)}")

        credentials = TwilioCredentials(
            account_sid=settings.twilio_account_sid.strip(),
            api_key=settings.twilio_api_key.strip(),
            api_secret=settings.twilio_api_secret.strip(),
        )
        return cls(
            credentials,
            room_type=settings.twilio_room_type,
            token_ttl=settings.token_ttl_seconds,
            timeout=settings.twilio_timeout,
        )

    async def aclose(self) -> None:
        http_client = getattr(self._rest, "http_client", None)
        if isinstance(http_client, AsyncTwilioHttpClient):
            await http_client.close()

    async def create_room(self, unique_name: str) -> Any:
        # An empty name lets the platform fall back to the room sid.
        logger.debug("Creating %s room name=%r", self.room_type, unique_name)
        return await self._rest.video.v1.rooms.create_async(
            unique_name=unique_name or values.unset,
            type=self.room_type,
        )

    async def list_rooms(self, status: str, limit: int) -> list[Any]:
        logger.debug("Listing rooms status=%s limit=%d", status, limit)
        return await self._rest.video.v1.rooms.list_async(status=status, limit=limit)

    async def fetch_room(self, sid: str) -> Any:
        return await self._rest.video.v1.rooms(sid).fetch_async()

    async def complete_room(self, sid: str) -> Any:
        logger.debug("Completing room sid=%s", sid)
        return await self._rest.video.v1.rooms(sid).update_async(status=ROOM_STATUS_COMPLETED)

    async def list_participants(self, room: str, status: str) -> list[Any]:
        """List participants of a room addressed by sid or unique name."""

        return await self._rest.video.v1.rooms(room).participants.list_async(status=status)


def describe_vendor_error(exc: BaseException) -> dict[str, Any]:
    """Serialize a vendor failure for the `error` field of the envelope."""

    if isinstance(exc, TwilioRestException):
        return {
            "status": exc.status,
            "code": exc.code,
            "message": exc.msg,
            "moreInfo": f"https://www.twilio.com/docs/errors/{exc.code}" if exc.code else None,
            "details": exc.details,
        }
    return {"message": str(exc) or exc.__class__.__name__}


def get_video_client(request: Request) -> VideoClient:
    """FastAPI dependency returning the process-wide adapter."""

    return request.app.state.video_client
