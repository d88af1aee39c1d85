"""
Curve registry: maps a curve token to the concrete curve operations.

`resolve_curve` builds a new handle on every call. Nothing resolved here is
cached or kept at module level, so concurrent callers never share a handle.
"""
from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, List, Tuple

from cryptography.exceptions import InternalError
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.x25519 import X25519PrivateKey, X25519PublicKey

from ecdh_suite.crypto.point_encoding import RawEncoding, UncompressedPointEncoding
from ecdh_suite.security.errors import (
    DerivationFailedError,
    EmptyCurveNameError,
    InvalidPrivateKeyError,
    InvalidPublicKeyError,
    RandomSourceFailureError,
    UnsupportedCurveError,
)


class CurveName(str, Enum):
    P256 = "P-256"
    P384 = "P-384"
    P521 = "P-521"
    X25519 = "X25519"


# Group orders n of the NIST prime curves (FIPS 186-4, D.1.2).
_P256_ORDER = int(
    "FFFFFFFF00000000FFFFFFFFFFFFFFFF"
    "BCE6FAADA7179E84F3B9CAC2FC632551",
    16,
)
_P384_ORDER = int(
    "FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFF"
    "FFFFFFFFFFFFFFFFC7634D81F4372DDF"
    "581A0DB248B0A77AECEC196ACCC52973",
    16,
)
_P521_ORDER = int(
    "01FF"
    "FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFF"
    "FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFA"
    "51868783BF2F966B7FCC0148F709A5D0"
    "3BB5C9B8899C47AEBB6FB71E91386409",
    16,
)


class WeierstrassCurve:
    """
    NIST prime curve backed by `cryptography`'s EC primitives.
    Private keys are big-endian scalars padded to the field size.
    """

    def __init__(self, name: CurveName, curve_cls: Callable[[], ec.EllipticCurve], order: int):
        self.name = name
        self._curve = curve_cls()
        self._order = order
        self.private_key_size = (self._curve.key_size + 7) // 8
        self.shared_secret_size = self.private_key_size
        self.encoding = UncompressedPointEncoding(self.private_key_size)
        self.public_key_size = self.encoding.stored_size

    def generate_keypair(self) -> Tuple[bytes, bytes]:
        try:
            private_key = ec.generate_private_key(self._curve)
        except (OSError, InternalError) as exc:
            raise RandomSourceFailureError(f"{self.name.value} key generation failed: {exc}") from exc

        scalar = private_key.private_numbers().private_value
        public_bytes = private_key.public_key().public_bytes(
            encoding=serialization.Encoding.X962,
            format=serialization.PublicFormat.UncompressedPoint,
        )
        return scalar.to_bytes(self.private_key_size, "big"), public_bytes

    def private_key_from_bytes(self, data: bytes) -> ec.EllipticCurvePrivateKey:
        if len(data) != self.private_key_size:
            raise InvalidPrivateKeyError(
                f"{self.name.value} private key must be {self.private_key_size} bytes, got {len(data)}"
            )
        scalar = int.from_bytes(data, "big")
        if not 0 < scalar < self._order:
            raise InvalidPrivateKeyError(f"{self.name.value} private scalar is out of range")
        try:
            return ec.derive_private_key(scalar, self._curve)
        except ValueError as exc:
            raise InvalidPrivateKeyError(f"{self.name.value} private key rejected: {exc}") from exc

    def point_from_bytes(self, native: bytes) -> ec.EllipticCurvePublicKey:
        if len(native) != self.encoding.native_size:
            raise InvalidPublicKeyError(
                f"{self.name.value} public key must be {self.encoding.native_size} bytes "
                f"in uncompressed form, got {len(native)}"
            )
        try:
            return ec.EllipticCurvePublicKey.from_encoded_point(self._curve, native)
        except ValueError as exc:
            raise InvalidPublicKeyError(f"{self.name.value} public key rejected: {exc}") from exc

    def scalar_multiply(self, private_key: ec.EllipticCurvePrivateKey,
                        peer_point: ec.EllipticCurvePublicKey) -> bytes:
        try:
            return private_key.exchange(ec.ECDH(), peer_point)
        except ValueError as exc:
            raise DerivationFailedError(f"{self.name.value} key exchange failed: {exc}") from exc


class X25519Curve:
    """Montgomery curve X25519 (RFC 7748), raw 32-byte keys."""

    KEY_SIZE = 32

    def __init__(self):
        self.name = CurveName.X25519
        self.private_key_size = self.KEY_SIZE
        self.shared_secret_size = self.KEY_SIZE
        self.encoding = RawEncoding(self.KEY_SIZE)
        self.public_key_size = self.encoding.stored_size

    def generate_keypair(self) -> Tuple[bytes, bytes]:
        try:
            private_key = X25519PrivateKey.generate()
        except (OSError, InternalError) as exc:
            raise RandomSourceFailureError(f"X25519 key generation failed: {exc}") from exc

        private_bytes = private_key.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption(),
        )
        public_bytes = private_key.public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )
        return private_bytes, public_bytes

    def private_key_from_bytes(self, data: bytes) -> X25519PrivateKey:
        if len(data) != self.KEY_SIZE:
            raise InvalidPrivateKeyError(f"X25519 private key must be 32 bytes, got {len(data)}")
        try:
            return X25519PrivateKey.from_private_bytes(data)
        except ValueError as exc:
            raise InvalidPrivateKeyError(f"X25519 private key rejected: {exc}") from exc

    def point_from_bytes(self, native: bytes) -> X25519PublicKey:
        if len(native) != self.KEY_SIZE:
            raise InvalidPublicKeyError(f"X25519 public key must be 32 bytes, got {len(native)}")
        try:
            return X25519PublicKey.from_public_bytes(native)
        except ValueError as exc:
            raise InvalidPublicKeyError(f"X25519 public key rejected: {exc}") from exc

    def scalar_multiply(self, private_key: X25519PrivateKey, peer_point: X25519PublicKey) -> bytes:
        try:
            # Raises on an all-zero result, i.e. a low-order peer point.
            return private_key.exchange(peer_point)
        except ValueError as exc:
            raise DerivationFailedError(f"X25519 key exchange failed: {exc}") from exc


_CURVE_FACTORIES: Dict[str, Callable[[], object]] = {
    CurveName.P256.value: lambda: WeierstrassCurve(CurveName.P256, ec.SECP256R1, _P256_ORDER),
    CurveName.P384.value: lambda: WeierstrassCurve(CurveName.P384, ec.SECP384R1, _P384_ORDER),
    CurveName.P521.value: lambda: WeierstrassCurve(CurveName.P521, ec.SECP521R1, _P521_ORDER),
    CurveName.X25519.value: X25519Curve,
}


def resolve_curve(name: str):
    """
    Returns a fresh curve handle for `name`.
    Raises EmptyCurveNameError / UnsupportedCurveError.
    """
    if isinstance(name, CurveName):
        name = name.value
    if not name:
        raise EmptyCurveNameError()
    factory = _CURVE_FACTORIES.get(name)
    if factory is None:
        raise UnsupportedCurveError(name)
    return factory()


def supported_curves() -> List[str]:
    return [c.value for c in CurveName]
