"""Access token issuance for joining video rooms."""
from __future__ import annotations

import logging

from twilio.base.exceptions import TwilioException
from twilio.jwt.access_token import AccessToken
from twilio.jwt.access_token.grants import VideoGrant

from ..core.exceptions import TokenIssueError
from .video import VideoClient

logger = logging.getLogger(__name__)


def issue_token(client: VideoClient, room_name: str | None, username: str | None) -> str:
    """Return a signed JWT granting `username` access to `room_name`.

    Missing values are treated as empty strings; an empty room name yields a
    grant that is not scoped to a single room.
    """

    room_name = room_name or ""
    username = username or ""
    credentials = client.credentials

    token = AccessToken(
        credentials.account_sid,
        credentials.api_key,
        credentials.api_secret,
        identity=username,
        ttl=client.token_ttl,
    )
    token.add_grant(VideoGrant(room=room_name))

    try:
        jwt = token.to_jwt()
    except (TwilioException, ValueError, TypeError) as exc:
        logger.exception("Failed signing access token for room=%r", room_name)
        raise TokenIssueError(
            f"Unable to issue token for room={room_name}",
            error={"message": str(exc) or exc.__class__.__name__},
        ) from exc

    logger.info("Issued access token identity=%r room=%r", username, room_name)
    return jwt
