"""
Streaming helpers shared by all provider adapters.

Providers send either newline-delimited JSON or Server-Sent-Events style
``data:`` lines. Both arrive as arbitrary byte chunks, so the first step
is always re-assembling complete lines.
"""

from typing import AsyncGenerator, AsyncIterable, Callable, Optional


SSE_DATA_PREFIX = "data:"
SSE_DONE = "[DONE]"


async def iter_lines(chunks: AsyncIterable[bytes]) -> AsyncGenerator[str, None]:
    """
    Re-assemble complete text lines from a byte-chunk stream.

    Incomplete trailing data is buffered until the next chunk; whatever
    remains when the stream ends is yielded as a final line.
    """
    buffer = b""
    async for chunk in chunks:
        if not chunk:
            continue
        buffer += chunk
        while b"\n" in buffer:
            line, buffer = buffer.split(b"\n", 1)
            yield line.decode("utf-8", errors="replace").rstrip("\r")
    if buffer.strip():
        yield buffer.decode("utf-8", errors="replace").rstrip("\r")


def parse_sse_data(line: str) -> Optional[str]:
    """Payload of an SSE ``data:`` line, or None for any other line."""
    if not line.startswith(SSE_DATA_PREFIX):
        return None
    return line[len(SSE_DATA_PREFIX):].strip()


class StreamAccumulator:
    """
    Collects deltas into a running total.

    The callback always receives the full text so far, never the bare
    delta, so the latest value a consumer saw is authoritative.
    """

    def __init__(self, on_stream: Optional[Callable[[str], None]] = None):
        self.on_stream = on_stream
        self.text = ""
        self.deltas = 0

    def feed(self, delta: str) -> str:
        self.text += delta
        self.deltas += 1
        if self.on_stream is not None:
            self.on_stream(self.text)
        return self.text
