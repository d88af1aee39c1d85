from .curve_registry import CurveName, resolve_curve, supported_curves
from .point_encoding import RawEncoding, UncompressedPointEncoding
from .primitive_ecdh import derive_shared_secret, generate_keypair
from .zeroize import SecretBox

__all__ = [
    "CurveName",
    "resolve_curve",
    "supported_curves",
    "RawEncoding",
    "UncompressedPointEncoding",
    "generate_keypair",
    "derive_shared_secret",
    "SecretBox",
]
