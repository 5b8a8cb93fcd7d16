"""Pieces shared by a single game's handling."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

import httpx

from myopicbot.lichess import LichessClient

INTRO = (
    "In this shared endeavor, victory is not the ultimate goal; "
    "rather, it is the pursuit of wisdom, the cultivation of patience, and the enrichment of our "
    "minds."
)


class CancellationHook(ABC):
    """Called when a game is cancelled; returns a description of what it did."""

    @abstractmethod
    async def run(self) -> str:
        """Run the hook."""


class EmptyCancellationHook(CancellationHook):
    """A hook that does nothing."""

    async def run(self) -> str:
        return ""


class LichessService:
    """The API client bound to one game."""

    def __init__(
        self,
        auth_token: str,
        game_id: str,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.client = LichessClient(auth_token, http_client)
        self.game_id = game_id