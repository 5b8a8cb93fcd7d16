"""Line-by-line handling of a streamed HTTP response body."""

from __future__ import annotations

from dataclasses import dataclass
from typing import AsyncIterable, Generic, Optional, Protocol, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Break(Generic[T]):
    """Returned by a handler to stop reading the stream with a result."""

    value: Optional[T] = None


class StreamHandler(Protocol[T]):
    async def handle(self, line: str) -> Optional[Break[T]]:
        """Handle one line; return ``Break`` to stop, ``None`` to continue."""


async def handle_stream(
    chunks: AsyncIterable[bytes], handler: StreamHandler[T]
) -> Optional[T]:
    """Feed each line of each received chunk to ``handler`` until it breaks.

    Every chunk is decoded as UTF-8 and trimmed before being split on newlines,
    so a keep-alive chunk reaches the handler as an empty line.  Returns the
    value carried by the ``Break``, or ``None`` if the stream ends first.
    """
    async for chunk in chunks:
        text = bytes(chunk).decode("utf-8").strip()
        for line in text.split("\n"):
            action = await handler.handle(line)
            if isinstance(action, Break):
                return action.value
    return None