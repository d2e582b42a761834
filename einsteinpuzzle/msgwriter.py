"""Compilation of printf-style message strings into a binary catalogue.

Writing goes through a buffer object providing ``put_byte(value)``,
``put_integer(value)``, ``put_utf8(text)`` and ``put_data(data)``; each
method returns the number of bytes it wrote.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import ClassVar, Protocol, Union


class MessageBuffer(Protocol):
    def put_byte(self, value: int) -> int: ...

    def put_integer(self, value: int) -> int: ...

    def put_utf8(self, text: str) -> int: ...

    def put_data(self, data: bytes) -> int: ...


class MessageFormatError(ValueError):
    """Raised when a message format string is malformed."""


@dataclass(frozen=True)
class TextCommand:
    """Literal text inside a message."""

    text: str

    def __str__(self) -> str:
        return f"text: '{self.text}'"

    def write(self, buffer: MessageBuffer) -> int:
        return buffer.put_byte(1) + buffer.put_utf8(self.text)


@dataclass(frozen=True)
class _ArgCommand:
    arg_no: int

    code: ClassVar[int] = 0
    label: ClassVar[str] = ""

    def __str__(self) -> str:
        return f"{self.label} {self.arg_no}"

    def write(self, buffer: MessageBuffer) -> int:
        size = buffer.put_byte(self.code)
        size += buffer.put_integer(4)
        size += buffer.put_integer(self.arg_no)
        return size


@dataclass(frozen=True)
class IntArgCommand(_ArgCommand):
    """Integer argument placeholder."""

    code: ClassVar[int] = 2
    label: ClassVar[str] = "int_arg"


@dataclass(frozen=True)
class StrArgCommand(_ArgCommand):
    """String argument placeholder."""

    code: ClassVar[int] = 3
    label: ClassVar[str] = "str_arg"


@dataclass(frozen=True)
class FloatArgCommand(_ArgCommand):
    """Float argument placeholder."""

    code: ClassVar[int] = 4
    label: ClassVar[str] = "float_arg"


@dataclass(frozen=True)
class DoubleArgCommand(_ArgCommand):
    """Double argument placeholder."""

    code: ClassVar[int] = 5
    label: ClassVar[str] = "float_arg"


MsgCommand = Union[TextCommand, IntArgCommand, StrArgCommand, FloatArgCommand, DoubleArgCommand]

_ARG_TYPES = {
    "d": IntArgCommand,
    "i": IntArgCommand,
    "s": StrArgCommand,
    "f": FloatArgCommand,
    "e": DoubleArgCommand,
}


def _parse(msg: str) -> list[MsgCommand]:
    commands: list[MsgCommand] = []
    text: list[str] = []
    length = len(msg)
    numbers_used = False
    current_arg = 1

    def char_at(index: int) -> str:
        return msg[index] if index < length else ""

    i = 0
    while i < length:
        ch = msg[i]
        if ch == "%" and i != length - 1:
            i += 1
            ch = msg[i]
            if ch == "%":
                text.append(ch)
            else:
                if text:
                    commands.append(TextCommand("".join(text)))
                    text = []
                digits: list[str] = []
                while ch and "0" <= ch <= "9":
                    digits.append(ch)
                    i += 1
                    ch = char_at(i)
                if i == length:
                    raise MessageFormatError("Escape sequence is not finished")
                if ch == "$":
                    i += 1
                    ch = char_at(i)
                    if i == length:
                        raise MessageFormatError("Escape sequence is not finished")
                if digits:
                    arg_no = int("".join(digits))
                    numbers_used = True
                else:
                    if numbers_used:
                        raise MessageFormatError(
                            "Can't use unnumbered arguments"
                            " if numbered was used before"
                        )
                    arg_no = current_arg
                    current_arg += 1
                if arg_no <= 0:
                    raise MessageFormatError("Invalid argument number")
                command_type = _ARG_TYPES.get(ch)
                if command_type is None:
                    raise MessageFormatError(
                        f"Format string '%{ch}' is not supported"
                    )
                commands.append(command_type(arg_no))
        else:
            text.append(ch)
        i += 1

    if text:
        commands.append(TextCommand("".join(text)))
    return commands


class Message:
    """A parsed message: a sequence of text and argument commands."""

    def __init__(self, msg: str) -> None:
        self.commands: tuple[MsgCommand, ...] = tuple(_parse(msg))

    def save(self, buffer: MessageBuffer) -> int:
        """Write the message and return the number of bytes written."""
        size = buffer.put_integer(len(self.commands))
        for command in self.commands:
            size += command.write(buffer)
        return size


class MsgWriter:
    """Collects messages by key and writes them as a catalogue."""

    def __init__(self) -> None:
        self._messages: dict[str, Message] = {}

    def add(self, key: str, msg: str) -> None:
        """Parse and store a message, replacing any with the same key."""
        message = Message(msg)
        if key in self._messages:
            warnings.warn(f"message '{key}' already exists", stacklevel=2)
        self._messages[key] = message

    def save(self, buffer: MessageBuffer) -> None:
        """Write header, messages, directory and directory offset."""
        offset = buffer.put_data(b"CMF")
        offset += buffer.put_integer(1)
        offset += buffer.put_integer(0)

        keys = sorted(self._messages)
        offsets: dict[str, int] = {}
        for key in keys:
            offsets[key] = offset
            offset += self._messages[key].save(buffer)
        directory_start = offset

        buffer.put_integer(len(keys))
        for key in keys:
            buffer.put_utf8(key)
            buffer.put_integer(offsets[key])
        buffer.put_integer(directory_start)