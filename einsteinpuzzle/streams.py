"""Character-by-character reading of UTF-8 encoded binary streams."""

from __future__ import annotations

from collections import deque
from typing import BinaryIO, Iterator


def _utf8_length(lead: int) -> int:
    if lead < 0x80:
        return 1
    if 0xC0 <= lead <= 0xDF:
        return 2
    if 0xE0 <= lead <= 0xEF:
        return 3
    if 0xF0 <= lead <= 0xF7:
        return 4
    return 1


class UtfStreamReader:
    """Reads a UTF-8 binary stream one unicode character at a time."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._back: deque[str] = deque()
        self._lookahead = b""

    def _read(self, size: int) -> bytes:
        data = self._lookahead[:size]
        self._lookahead = self._lookahead[size:]
        if len(data) < size:
            data += self._stream.read(size - len(data)) or b""
        return data

    def get_next_char(self) -> str:
        """Return the next character; pushed-back characters come first."""
        if self._back:
            return self._back.popleft()
        lead = self._read(1)
        if len(lead) != 1:
            raise EOFError("Error reading from stream")
        size = _utf8_length(lead[0])
        rest = self._read(size - 1) if size > 1 else b""
        if len(rest) != size - 1:
            raise EOFError("Error reading from stream")
        try:
            text = (lead + rest).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ValueError(
                "Error converting UTF-8 character to wide character"
            ) from exc
        if len(text) != 1:
            raise ValueError("Error converting UTF-8 character to wide character")
        return text

    def unget_char(self, ch: str) -> None:
        """Push a character back to be returned by a later read."""
        self._back.append(ch)

    def is_eof(self) -> bool:
        """Return True if the underlying stream has no more bytes."""
        if self._lookahead:
            return False
        chunk = self._stream.read(1)
        if not chunk:
            return True
        self._lookahead = chunk
        return False

    def __iter__(self) -> Iterator[str]:
        while self._back or not self.is_eof():
            yield self.get_next_char()