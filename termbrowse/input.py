"""Low-level terminal input decoding.

Reads raw bytes from the terminal and resolves them into browser commands.
This is the only module that reads the input descriptor.
"""

from __future__ import annotations

import enum
import os

ESC = 27
ESC_SEQUENCE_LENGTH = 2


class Command(enum.Enum):
    """Closed set of logical commands the navigator understands."""

    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    OPEN = "open"
    BACK = "back"
    RENAME = "rename"
    MOVE = "move"
    QUIT = "quit"
    NOOP = "noop"


SINGLE_BYTE_COMMANDS: dict[int, Command] = {
    10: Command.OPEN,
    ord("b"): Command.BACK,
    ord("r"): Command.RENAME,
    ord("m"): Command.MOVE,
    ord("q"): Command.QUIT,
}

ESCAPE_SEQUENCE_COMMANDS: dict[bytes, Command] = {
    b"[A": Command.MOVE_UP,
    b"[B": Command.MOVE_DOWN,
}


def _read_exact(fd: int, count: int) -> bytes:
    """Block until ``count`` bytes arrive; returns fewer only at end of input."""
    chunks: list[bytes] = []
    remaining = count
    while remaining > 0:
        chunk = os.read(fd, remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def decode_key(first: int, sequence: bytes = b"") -> Command:
    """Map a first byte, plus an escape continuation when ``first`` is ESC."""
    if first == ESC:
        return ESCAPE_SEQUENCE_COMMANDS.get(sequence, Command.NOOP)
    return SINGLE_BYTE_COMMANDS.get(first, Command.NOOP)


def read_command(fd: int) -> Command:
    """Block for one keystroke on ``fd`` and return its command.

    An ESC byte always consumes exactly two more bytes; unknown sequences are
    swallowed as ``NOOP``. End of input yields ``QUIT`` so a closed stream
    ends the session instead of spinning.
    """
    ch = os.read(fd, 1)
    if not ch:
        return Command.QUIT
    first = ch[0]
    if first != ESC:
        return decode_key(first)

    sequence = _read_exact(fd, ESC_SEQUENCE_LENGTH)
    if len(sequence) < ESC_SEQUENCE_LENGTH:
        return Command.QUIT
    return decode_key(first, sequence)


def read_line(fd: int) -> str | None:
    """Read one line from ``fd`` in canonical mode, without the newline.

    Returns ``None`` at end of input. Undecodable bytes are kept as surrogate
    escapes so they round-trip to filesystem calls.
    """
    buf = bytearray()
    while True:
        ch = os.read(fd, 1)
        if not ch:
            if not buf:
                return None
            break
        if ch == b"\n":
            break
        buf.extend(ch)
    return os.fsdecode(bytes(buf.rstrip(b"\r")))
