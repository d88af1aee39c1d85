"""
Key-pair generation and shared-secret derivation for the supported curves.

Public keys leave and enter this module in normalized form (see
point_encoding). Private keys use the curve's native encoding: a big-endian
scalar for the NIST curves, the raw 32-byte string for X25519.
"""
import logging
import os
from pathlib import Path
from typing import Union

from ecdh_suite.crypto.curve_registry import resolve_curve
from ecdh_suite.security.log_setup import configure_logger, fingerprint
from ecdh_suite.security.models import ECDHKeyPair


LOGGER_NAME = "ecdh.crypto"
_DEFAULT_LOG_DIR = Path(__file__).resolve().parents[1] / "logs"


def get_crypto_logger(log_dir: Union[str, Path, None] = None) -> logging.Logger:
    log_dir = log_dir or os.getenv("ECDH_LOG_DIR") or _DEFAULT_LOG_DIR
    return configure_logger(LOGGER_NAME, log_dir, "crypto_audit.log")


def generate_keypair(curve_name: str) -> ECDHKeyPair:
    """
    Generates a fresh key pair on `curve_name`.

    The public key is returned normalized: x || y for P-256/P-384/P-521
    (uncompressed-point tag removed), the raw encoding for X25519.
    """
    curve = resolve_curve(curve_name)
    private_bytes, native_public = curve.generate_keypair()
    public_bytes = curve.encoding.normalize(native_public)

    get_crypto_logger().info(
        "ECDH keygen: curve=%s pub_fp=%s pub_len=%d priv_len=%d",
        curve.name.value, fingerprint(public_bytes), len(public_bytes), len(private_bytes),
    )
    return ECDHKeyPair(curve=curve.name.value, public_key=public_bytes, private_key=private_bytes)


def derive_shared_secret(curve_name: str, local_private_key: bytes, peer_public_key: bytes) -> bytes:
    """
    Computes the ECDH shared secret between our private key and the peer's
    normalized public key. Any validation failure raises; nothing is defaulted.
    """
    curve = resolve_curve(curve_name)

    private_key = curve.private_key_from_bytes(local_private_key)
    peer_point = curve.point_from_bytes(curve.encoding.denormalize(peer_public_key))
    shared = curve.scalar_multiply(private_key, peer_point)

    get_crypto_logger().info(
        "ECDH derive: curve=%s peer_fp=%s secret_len=%d",
        curve.name.value, fingerprint(peer_public_key), len(shared),
    )
    return shared
