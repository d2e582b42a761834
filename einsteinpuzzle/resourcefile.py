"""Low-level access to packed resource files."""

from __future__ import annotations

import os
import zlib
from dataclasses import dataclass
from typing import BinaryIO

from einsteinpuzzle.possibilities import read_int, read_string

_SIGNATURE = b"CRF\x00"
_MAJOR_VERSION = 2


class ResourceError(Exception):
    """Raised when a resource file cannot be read."""


@dataclass(frozen=True)
class DirectoryEntry:
    """One entry of a resource file directory."""

    name: str
    offset: int
    packed_size: int
    unpacked_size: int
    group: str
    level: int


class ResourceStream:
    """Sequential reader over a region of a binary stream."""

    def __init__(self, stream: BinaryIO, offset: int, size: int) -> None:
        self._stream = stream
        self._offset = offset
        self.size = size
        self.pos = 0

    @classmethod
    def from_bytes(cls, data: bytes) -> "ResourceStream":
        """Create a stream over data held in memory."""
        import io

        return cls(io.BytesIO(data), 0, len(data))

    def read(self, size: int) -> bytes:
        """Read exactly ``size`` bytes."""
        if size < 0 or size + self.pos > self.size:
            raise ResourceError("Attempt of reading after resource end")
        self._stream.seek(self._offset + self.pos)
        data = self._stream.read(size)
        if len(data) != size:
            raise ResourceError("Attempt of reading after resource end")
        self.pos += size
        return data

    def is_eof(self) -> bool:
        return self.pos >= self.size

    def available(self) -> int:
        """Number of bytes left."""
        return self.size - self.pos


class ResourceFile:
    """An open resource file: header, directory and packed data."""

    def __init__(self, file_name: str | os.PathLike[str]) -> None:
        self.name = os.fspath(file_name)
        try:
            self.stream: BinaryIO = open(self.name, "rb")
        except OSError as exc:
            raise ResourceError(f"Error loading resource file '{self.name}'") from exc
        try:
            self._read_header()
        except BaseException:
            self.stream.close()
            raise

    def _read_header(self) -> None:
        if self.stream.read(4) != _SIGNATURE:
            raise ResourceError(f"Invalid resource file '{self.name}'")
        try:
            major = read_int(self.stream)
            minor = read_int(self.stream)
            self.priority = read_int(self.stream)
        except EOFError as exc:
            raise ResourceError(
                f"Incompatible version of resource file '{self.name}'"
            ) from exc
        if major != _MAJOR_VERSION or minor < 0:
            raise ResourceError(
                f"Incompatible version of resource file '{self.name}'"
            )

    def get_directory(self) -> list[DirectoryEntry]:
        """Read the list of resources stored in the file."""
        error = f"Error reading {self.name} directory"
        try:
            self.stream.seek(-8, os.SEEK_END)
            start = read_int(self.stream)
            count = read_int(self.stream)
            self.stream.seek(start)
            entries = []
            for _ in range(count):
                name = read_string(self.stream)
                unpacked_size = read_int(self.stream)
                offset = read_int(self.stream)
                packed_size = read_int(self.stream)
                level = read_int(self.stream)
                group = read_string(self.stream)
                entries.append(
                    DirectoryEntry(name, offset, packed_size, unpacked_size, group, level)
                )
        except (OSError, EOFError, ValueError) as exc:
            raise ResourceError(error) from exc
        return entries

    def load(self, offset: int, packed_size: int, unpacked_size: int, level: int) -> bytes:
        """Read a resource and unpack it if it is compressed."""
        try:
            self.stream.seek(offset)
            if not level:
                data = self.stream.read(unpacked_size)
                if len(data) != unpacked_size:
                    raise ResourceError(f"{self.name}: Error loading resource")
                return data
            packed = self.stream.read(packed_size)
        except OSError as exc:
            raise ResourceError(f"{self.name}: Error loading resource") from exc
        try:
            data = zlib.decompress(packed)
        except zlib.error as exc:
            raise ResourceError(f"{self.name}: Error decompresing element.") from exc
        if len(data) != unpacked_size:
            raise ResourceError(f"{self.name}: Error decompresing element.")
        return data

    def close(self) -> None:
        self.stream.close()

    def __enter__(self) -> "ResourceFile":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()