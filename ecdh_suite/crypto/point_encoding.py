"""
Public-key encoding normalization.

Weierstrass public keys leave the curve library as SEC1 uncompressed points
(0x04 || x || y). Only x || y is stored and sent on the wire; the tag is
re-added before the point is parsed again. X25519 keys have no tag and pass
through unchanged.
"""
from __future__ import annotations

from ecdh_suite.security.errors import InvalidPublicKeyError

UNCOMPRESSED_POINT_TAG = 0x04


class UncompressedPointEncoding:
    """Strips / restores the SEC1 uncompressed-point tag."""

    def __init__(self, coordinate_size: int):
        self.coordinate_size = coordinate_size
        self.stored_size = 2 * coordinate_size
        self.native_size = self.stored_size + 1

    def normalize(self, native: bytes) -> bytes:
        if len(native) != self.native_size:
            raise InvalidPublicKeyError(
                f"native public key must be {self.native_size} bytes, got {len(native)}"
            )
        if native[0] != UNCOMPRESSED_POINT_TAG:
            raise InvalidPublicKeyError(
                f"native public key is not an uncompressed point (tag 0x{native[0]:02x})"
            )
        return bytes(native[1:])

    def denormalize(self, stored: bytes) -> bytes:
        if len(stored) != self.stored_size:
            raise InvalidPublicKeyError(
                f"public key must be {self.stored_size} bytes, got {len(stored)}"
            )
        return bytes([UNCOMPRESSED_POINT_TAG]) + bytes(stored)


class RawEncoding:
    """Identity encoding used by X25519."""

    def __init__(self, size: int):
        self.stored_size = size
        self.native_size = size

    def _check(self, data: bytes) -> bytes:
        if len(data) != self.stored_size:
            raise InvalidPublicKeyError(
                f"public key must be {self.stored_size} bytes, got {len(data)}"
            )
        return bytes(data)

    def normalize(self, native: bytes) -> bytes:
        return self._check(native)

    def denormalize(self, stored: bytes) -> bytes:
        return self._check(stored)
