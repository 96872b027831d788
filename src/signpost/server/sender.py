"""Write a signpost Response back through ASGI ``send()``."""

from signpost._internal.asgi import Send
from signpost.http.response import Response

# Statuses that never carry a message body
_BODYLESS = frozenset({204, 304})


def encode_headers(response: Response, content_length: int) -> list[tuple[bytes, bytes]]:
    """Response headers as lower-cased ASGI byte pairs, content-type first."""
    pairs = [("content-type", response.content_type), *response.headers]
    encoded = [(name.lower().encode("latin-1"), value.encode("latin-1")) for name, value in pairs]
    encoded.append((b"content-length", str(content_length).encode("latin-1")))
    return encoded


async def send_response(response: Response, send: Send) -> None:
    """Emit ``http.response.start`` then a single ``http.response.body``."""
    status = response.status
    body = b"" if status < 200 or status in _BODYLESS else response.body_bytes
    await send(
        {
            "type": "http.response.start",
            "status": status,
            "headers": encode_headers(response, len(body)),
        }
    )
    await send({"type": "http.response.body", "body": body})
