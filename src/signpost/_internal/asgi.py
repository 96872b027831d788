"""ASGI type aliases and body buffering.

The router only ever sees fully buffered requests; ``read_body`` drains
the ASGI receive channel before dispatch.
"""

from collections.abc import Awaitable, Callable, MutableMapping
from typing import Any, TypeAlias

from signpost.errors import PayloadTooLarge


class ClientDisconnected(Exception):  # noqa: N818
    """The client sent ``http.disconnect`` before the body was complete."""


# Raw ASGI types (matching the ASGI 3.0 interface)
Scope: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[MutableMapping[str, Any]]]
Send: TypeAlias = Callable[[MutableMapping[str, Any]], Awaitable[None]]


async def read_body(receive: Receive, max_length: int | None = None) -> bytes:
    """Read every ``http.request`` chunk into one bytes object.

    Raises ``PayloadTooLarge`` as soon as the running total exceeds
    *max_length*, and ``ClientDisconnected`` if the client goes away
    before the last chunk.
    """
    chunks: list[bytes] = []
    total = 0
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            raise ClientDisconnected
        chunk = message.get("body", b"")
        if chunk:
            total += len(chunk)
            if max_length is not None and total > max_length:
                raise PayloadTooLarge(max_length)
            chunks.append(chunk)
        if not message.get("more_body", False):
            break
    return b"".join(chunks)
