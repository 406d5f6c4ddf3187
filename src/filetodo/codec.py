"""Binary encoding of a single todo file.

Layout::

    byte 0      completion flag, bit 0 set when completed
    bytes 1..   title as raw UTF-8, no length prefix or terminator

The id is not part of the record; it is the file name.
"""

from __future__ import annotations

from typing import BinaryIO, Tuple

from .todo import Todo

COMPLETED_FLAG = 0x01
DEFAULT_CHUNK_SIZE = 64
# Undecodable bytes survive a load/save cycle unchanged.
TITLE_ERRORS = "surrogateescape"


def encode(todo: Todo) -> bytes:
    flag = COMPLETED_FLAG if todo.completed else 0x00
    return bytes([flag]) + todo.title.encode("utf-8", TITLE_ERRORS)


def decode(data: bytes) -> Tuple[bool, str]:
    """Return ``(completed, title)`` for an encoded record.

    An empty record decodes as an uncompleted todo with an empty title.
    """
    if not data:
        return False, ""
    completed = bool(data[0] & COMPLETED_FLAG)
    return completed, data[1:].decode("utf-8", TITLE_ERRORS)


def read_record(stream: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Tuple[bool, str]:
    """Read a record from ``stream`` in chunks of at most ``chunk_size`` bytes."""
    if chunk_size < 1:
        raise ValueError("chunk_size must be positive")
    head = stream.read(1)
    chunks = [head]
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        chunks.append(chunk)
    # Join before decoding so multi-byte characters split across chunks stay intact.
    return decode(b"".join(chunks))
