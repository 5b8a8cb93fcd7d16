"""Asynchronous client for the Lichess bot API."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Optional, TypeVar

import httpx

from myopicbot.ratings import (
    ChallengeRequest,
    OnlineBot,
    TimeLimitType,
    UserDetails,
    UserDetailsGamePerf,
)

GAME_ENDPOINT = "https://lichess.org/api/bot/game"
CHALLENGE_ENDPOINT = "https://lichess.org/api/challenge"
ACCOUNT_ENDPOINT = "https://lichess.org/api/account"
USER_ENDPOINT = "https://lichess.org/api/user"
ONLINE_BOTS_ENDPOINT = "https://lichess.org/api/bot/online"
PLAYING_ENDPOINT = "https://lichess.org/api/account/playing"

T = TypeVar("T")


class LichessError(Exception):
    """A request to Lichess failed or returned something unusable."""


class LichessChatRoom(Enum):
    PLAYER = "player"
    SPECTATOR = "spectator"


def _mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"{what} must be a JSON object, got {type(data).__name__}")
    return data


def _str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string, got {value!r}")
    return value


@dataclass(frozen=True)
class Account:
    id: str

    @classmethod
    def from_json(cls, data: Any) -> "Account":
        return cls(id=_str(_mapping(data, "account"), "id"))


@dataclass(frozen=True)
class OngoingGame:
    game_id: str


@dataclass(frozen=True)
class OngoingGames:
    now_playing: list[OngoingGame]

    @classmethod
    def from_json(cls, data: Any) -> "OngoingGames":
        data = _mapping(data, "ongoing games")
        games = data.get("nowPlaying")
        if not isinstance(games, list):
            raise ValueError("field 'nowPlaying' must be a list")
        return cls(
            now_playing=[
                OngoingGame(game_id=_str(_mapping(game, "game"), "gameId")) for game in games
            ]
        )


class LichessClient:
    """Authenticated access to the endpoints the bot uses."""

    def __init__(self, auth_token: str, client: Optional[httpx.AsyncClient] = None) -> None:
        self._auth_token = auth_token
        self._client = client if client is not None else httpx.AsyncClient()

    async def __aenter__(self) -> "LichessClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    @property
    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._auth_token}"}

    async def _send(
        self, method: str, url: str, context: str, *, auth: bool = True, **kwargs: Any
    ) -> httpx.Response:
        headers = self._auth_headers if auth else None
        try:
            return await self._client.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as error:
            raise LichessError(f"{context}: {error}") from error

    @staticmethod
    def _decode(response: httpx.Response, parser: Callable[[Any], T]) -> T:
        try:
            return parser(response.json())
        except ValueError as error:
            raise LichessError(f"Could not decode response from {response.url}: {error}") from error

    async def get_our_profile(self) -> Account:
        response = await self._send("GET", ACCOUNT_ENDPOINT, "Error fetching account")
        return self._decode(response, Account.from_json)

    async def post_challenge_response(self, challenge_id: str, decision: str) -> int:
        response = await self._send(
            "POST",
            f"{CHALLENGE_ENDPOINT}/{challenge_id}/{decision}",
            f"Error responding to challenge {challenge_id}",
        )
        return response.status_code

    async def abort_game(self, game_id: str) -> int:
        response = await self._send(
            "POST", f"{GAME_ENDPOINT}/{game_id}/abort", f"Error aborting game {game_id}"
        )
        return response.status_code

    async def post_move(self, game_id: str, move: str) -> int:
        response = await self._send(
            "POST", f"{GAME_ENDPOINT}/{game_id}/move/{move}", "Error posting move"
        )
        if response.is_success:
            return response.status_code
        raise LichessError(
            f"Error posting move {move} in {game_id}: {response.status_code} -> {response.text}"
        )

    async def post_chatline(self, game_id: str, text: str, room: LichessChatRoom) -> int:
        response = await self._send(
            "POST",
            f"{GAME_ENDPOINT}/{game_id}/chat",
            "Error posting chatline",
            data={"room": room.value, "text": text},
        )
        return response.status_code

    async def create_challenge(self, request: ChallengeRequest) -> tuple[int, str]:
        params = {
            "rated": "true" if request.rated else "false",
            "clock.limit": str(request.time_limit.limit),
            "clock.increment": str(request.time_limit.increment),
        }
        response = await self._send(
            "POST",
            f"{CHALLENGE_ENDPOINT}/{request.target_user_id}",
            f"Error challenging {request.target_user_id}",
            data=params,
        )
        return response.status_code, response.text

    async def fetch_rating(
        self, user_id: str, time_limit_type: TimeLimitType
    ) -> Optional[UserDetailsGamePerf]:
        response = await self._send(
            "GET", f"{USER_ENDPOINT}/{user_id}", f"Error fetching user {user_id}", auth=False
        )
        details = self._decode(response, UserDetails.from_json)
        return details.perfs.rating_for(time_limit_type)

    async def fetch_online_bots(self) -> list[OnlineBot]:
        response = await self._send(
            "GET", ONLINE_BOTS_ENDPOINT, "Error fetching online bots", auth=False
        )
        bots = []
        for line in response.text.split("\n"):
            line = line.strip()
            if not line:
                continue
            try:
                bots.append(OnlineBot.from_json(json.loads(line)))
            except ValueError as error:
                raise LichessError(f"Could not parse online bot {line!r}: {error}") from error
        return bots

    async def get_our_live_games(self) -> OngoingGames:
        response = await self._send("GET", PLAYING_ENDPOINT, "Error fetching live games")
        return self._decode(response, OngoingGames.from_json)