"""Shared fixtures: an in-memory stand-in for the Twilio adapter."""
from __future__ import annotations

from types import SimpleNamespace

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from twilio.base.exceptions import TwilioRestException

from rooms_api.main import app
from rooms_api.services.video import TwilioCredentials, get_video_client

ACCOUNT_SID = "AC" + "a" * 32
API_KEY = "SK" + "b" * 32
API_SECRET = "test-secret-that-is-long-enough-for-hs256"


class FakeVideoClient:
    """Mimics `VideoClient` with rooms and participants kept in memory."""

    def __init__(self) -> None:
        self.credentials = TwilioCredentials(ACCOUNT_SID, API_KEY, API_SECRET)
        self.room_type = "group"
        self.token_ttl = 3600
        self.rooms: dict[str, SimpleNamespace] = {}
        self.participants: dict[str, list[SimpleNamespace]] = {}
        self.fail_with: BaseException | None = None
        self.ignore_limit = False
        self.calls: list[tuple] = []

    def _maybe_fail(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def _not_found(self, key: str) -> TwilioRestException:
        uri = f"/v1/Rooms/{key}"
        return TwilioRestException(404, uri, msg=f"The requested resource {uri} was not found", code=20404)

    def _lookup(self, key: str) -> SimpleNamespace:
        room = self.rooms.get(key)
        if room is None:
            room = next(
                (r for r in self.rooms.values() if r.unique_name == key and r.status == "in-progress"),
                None,
            )
        if room is None:
            raise self._not_found(key)
        return room

    def add_room(self, unique_name: str, status: str = "in-progress") -> SimpleNamespace:
        sid = f"RM{len(self.rooms) + 1:032d}"
        room = SimpleNamespace(sid=sid, unique_name=unique_name or sid, status=status, type=self.room_type)
        self.rooms[sid] = room
        return room

    def add_participant(self, room: SimpleNamespace, identity: str, status: str = "connected") -> None:
        sid = f"PA{identity}"
        self.participants.setdefault(room.sid, []).append(
            SimpleNamespace(sid=sid, identity=identity, status=status, room_sid=room.sid)
        )

    async def create_room(self, unique_name: str) -> SimpleNamespace:
        self.calls.append(("create_room", unique_name))
        self._maybe_fail()
        if unique_name and any(
            r.unique_name == unique_name and r.status == "in-progress" for r in self.rooms.values()
        ):
            raise TwilioRestException(400, "/v1/Rooms", msg="Room exists", code=53113, method="POST")
        return self.add_room(unique_name)

    async def list_rooms(self, status: str, limit: int) -> list[SimpleNamespace]:
        self.calls.append(("list_rooms", status, limit))
        self._maybe_fail()
        rooms = [room for room in self.rooms.values() if room.status == status]
        return rooms if self.ignore_limit else rooms[:limit]

    async def fetch_room(self, sid: str) -> SimpleNamespace:
        self.calls.append(("fetch_room", sid))
        self._maybe_fail()
        if sid not in self.rooms:
            raise self._not_found(sid)
        return self.rooms[sid]

    async def complete_room(self, sid: str) -> SimpleNamespace:
        self.calls.append(("complete_room", sid))
        self._maybe_fail()
        room = self._lookup(sid)
        if room.status == "completed":
            raise TwilioRestException(
                400, f"/v1/Rooms/{sid}", msg="Room status is completed", code=53118, method="POST"
            )
        room.status = "completed"
        return room

    async def list_participants(self, room: str, status: str) -> list[SimpleNamespace]:
        self.calls.append(("list_participants", room, status))
        self._maybe_fail()
        record = self._lookup(room)
        return [p for p in self.participants.get(record.sid, []) if p.status == status]

    async def aclose(self) -> None:
        return None


@pytest.fixture
def video_client() -> FakeVideoClient:
    return FakeVideoClient()


@pytest_asyncio.fixture
async def client(video_client: FakeVideoClient):
    app.dependency_overrides[get_video_client] = lambda: video_client
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://testserver") as http_client:
            yield http_client
    finally:
        app.dependency_overrides.pop(get_video_client, None)


@pytest.fixture
def twilio_credentials() -> TwilioCredentials:
    return TwilioCredentials(ACCOUNT_SID, API_KEY, API_SECRET)
