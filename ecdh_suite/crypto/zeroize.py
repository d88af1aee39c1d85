"""
Best-effort wiping of shared secrets.

`bytes` objects are immutable and cannot be cleared in place, so secret
material that must be wiped is copied into a `bytearray` first and the copy
is cleared when the scope ends.
"""
from __future__ import annotations

from typing import Union


def wipe_bytearray(buf: bytearray) -> None:
    for i in range(len(buf)):
        buf[i] = 0


class SecretBox:
    """
    Wipeable holder for a secret byte string.
    Usable as a context manager; the buffer is cleared on every exit path.
    """
    __slots__ = ("_buf",)

    def __init__(self, data: Union[bytes, bytearray]) -> None:
        self._buf = bytearray(data)

    def bytes(self) -> bytes:
        return bytes(self._buf)

    def view(self) -> memoryview:
        return memoryview(self._buf)

    def wipe(self) -> None:
        wipe_bytearray(self._buf)

    def __len__(self) -> int:
        return len(self._buf)

    def __enter__(self) -> "SecretBox":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.wipe()
