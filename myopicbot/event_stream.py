"""Long-running consumption of the account event stream."""

from __future__ import annotations

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import timedelta
from typing import AsyncIterator, Callable, NoReturn, Optional

import httpx

from myopicbot.events import EventParseError, LichessEvent, parse_lichess_event_json
from myopicbot.lichess import LichessError
from myopicbot.stream import Break, handle_stream
from myopicbot.userstatus import StatusService

EVENT_STREAM_ENDPOINT = "https://lichess.org/api/stream/event"

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class StreamParams:
    status_poll_frequency: timedelta
    max_lifespan: timedelta
    retry_wait: timedelta
    our_bot_id: str
    auth_token: str


class EventProcessor(ABC):
    """Receives every decoded account event."""

    @abstractmethod
    async def process(self, event: LichessEvent) -> None:
        """Act on one event."""


class StreamLineProcessor:
    """Turns stream lines into events, and keep-alives into status checks."""

    def __init__(self, status_service: StatusService, event_processor: EventProcessor) -> None:
        self.status_service = status_service
        self.event_processor = event_processor

    async def handle_stream_read(self, line: str) -> Optional[Break[None]]:
        if not line:
            return await self._user_status()
        try:
            event = parse_lichess_event_json(line)
        except EventParseError as error:
            log.warning('Parse error: %s for "%s"', error, line)
        else:
            log.info("Received event: %s", line)
            await self.event_processor.process(event)
        return None

    async def _user_status(self) -> Optional[Break[None]]:
        try:
            status = await self.status_service.user_status()
        except LichessError as error:
            log.warning("Error fetching user status: %s", error)
            return None
        if status is None or status.online:
            return None
        return Break(None)


class StreamRefreshHandler:
    """Passes lines on until the stream has been open longer than allowed."""

    def __init__(
        self,
        processor: StreamLineProcessor,
        max_duration: timedelta,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.processor = processor
        self.max_duration = max_duration
        self._clock = clock
        self._start = clock()

    async def handle(self, line: str) -> Optional[Break[None]]:
        elapsed = self._clock() - self._start
        if elapsed > self.max_duration.total_seconds():
            log.info("Refreshing event stream after %d mins", int(elapsed) // 60)
            return Break(None)
        return await self.processor.handle_stream_read(line)


@asynccontextmanager
async def open_event_stream(
    client: httpx.AsyncClient, auth_token: str
) -> AsyncIterator[httpx.Response]:
    """Open the event stream as a streaming response."""
    headers = {"Authorization": f"Bearer {auth_token}"}
    async with client.stream("GET", EVENT_STREAM_ENDPOINT, headers=headers) as response:
        yield response


async def stream(params: StreamParams, processor: EventProcessor) -> NoReturn:
    """Consume the event stream forever, reopening it after it ends or fails."""
    async with httpx.AsyncClient(timeout=None) as client:
        line_processor = StreamLineProcessor(
            StatusService(params.our_bot_id, params.status_poll_frequency, client),
            processor,
        )
        while True:
            log.info("Opening event stream")
            handler = StreamRefreshHandler(line_processor, params.max_lifespan)
            try:
                async with open_event_stream(client, params.auth_token) as response:
                    try:
                        await handle_stream(response.aiter_bytes(), handler)
                    except (httpx.HTTPError, UnicodeDecodeError) as error:
                        log.error("%s", error)
            except httpx.HTTPError as error:
                log.warning("Cannot connect to event stream %s", error)

            log.info("Sleeping for %d seconds", int(params.retry_wait.total_seconds()))
            await asyncio.sleep(params.retry_wait.total_seconds())