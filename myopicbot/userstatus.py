"""Polling of the bot account's online status."""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Callable, Optional

import httpx

from myopicbot.lichess import LichessError

STATUS_ENDPOINT = "https://lichess.org/api/users/status"


@dataclass(frozen=True)
class UserStatus:
    id: str
    online: bool = False

    @classmethod
    def from_json(cls, data: Any) -> "UserStatus":
        if not isinstance(data, dict):
            raise ValueError(f"user status must be a JSON object, got {type(data).__name__}")
        user_id = data.get("id")
        if not isinstance(user_id, str):
            raise ValueError(f"field 'id' must be a string, got {user_id!r}")
        online = data.get("online", False)
        if not isinstance(online, bool):
            raise ValueError(f"field 'online' must be a boolean, got {online!r}")
        return cls(id=user_id, online=online)


def parse_user_statuses(text: str) -> list[UserStatus]:
    """Decode a JSON array of user statuses."""
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError("user statuses must be a JSON array")
    return [UserStatus.from_json(item) for item in data]


async def fetch_user_status(client: httpx.AsyncClient, user_id: str) -> UserStatus:
    """Fetch the status of a single user."""
    try:
        response = await client.get(STATUS_ENDPOINT, params={"ids": user_id})
    except httpx.HTTPError as error:
        raise LichessError(f"Error fetching status of {user_id}: {error}") from error
    try:
        statuses = parse_user_statuses(response.text)
    except ValueError as error:
        raise LichessError(f"Could not decode status of {user_id}: {error}") from error
    if not statuses:
        raise LichessError(f"No statuses for {user_id}")
    return statuses[0]


class StatusService:
    """Fetches our status at most once per poll interval."""

    def __init__(
        self,
        our_bot_id: str,
        status_poll_frequency: timedelta,
        client: Optional[httpx.AsyncClient] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.user_id = our_bot_id
        self.status_poll_gap = status_poll_frequency
        self._client = client if client is not None else httpx.AsyncClient()
        self._clock = clock
        self._checkpoint = clock()

    async def user_status(self) -> Optional[UserStatus]:
        """Return a fresh status if the poll interval has passed, otherwise ``None``."""
        now = self._clock()
        if now - self._checkpoint > self.status_poll_gap.total_seconds():
            self._checkpoint = now
            return await fetch_user_status(self._client, self.user_id)
        return None