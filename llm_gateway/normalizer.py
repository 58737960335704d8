"""Turn a provider's raw streamed body into plain text chunks."""
from __future__ import annotations

import codecs
from typing import AsyncIterator, List, Protocol


class FrameDecoder(Protocol):  # Per-format frame decoding implemented by wire adapters
    def is_terminal(self, line: str) -> bool: ...

    def decode_line(self, line: str) -> str | None: ...


class LineDecoder:
    """Split an incoming byte stream into complete text lines.

    Holds only the bytes of an incomplete UTF-8 sequence and the text of the
    current partial line between calls.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._pending = ""

    def feed(self, chunk: bytes) -> List[str]:
        text = self._pending + self._decoder.decode(chunk)
        parts = text.split("\n")
        self._pending = parts.pop()
        return [part.rstrip("\r") for part in parts]

    def flush(self) -> List[str]:
        text = self._pending + self._decoder.decode(b"", final=True)
        self._pending = ""
        if not text:
            return []
        return [text.rstrip("\r")]


async def normalize_stream(body: AsyncIterator[bytes], decoder: FrameDecoder) -> AsyncIterator[bytes]:
    """Yield UTF-8 encoded content for each decodable frame of ``body``, in order.

    Stops at the decoder's terminal frame or at the end of the body, whichever
    comes first. Undecodable frames are skipped.
    """

    lines = LineDecoder()
    async for chunk in body:
        for line in lines.feed(chunk):
            if not line.strip():
                continue
            if decoder.is_terminal(line):
                return
            content = decoder.decode_line(line)
            if content:
                yield content.encode("utf-8")
    for line in lines.flush():
        if not line.strip() or decoder.is_terminal(line):
            return
        content = decoder.decode_line(line)
        if content:
            yield content.encode("utf-8")


__all__ = ["FrameDecoder", "LineDecoder", "normalize_stream"]
