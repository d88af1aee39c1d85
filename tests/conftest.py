# Test configuration and shared fixtures

import os
import tempfile

import pytest

# Keep audit logs out of the source tree; must be set before any ecdh_* import.
os.environ.setdefault("ECDH_LOG_DIR", tempfile.mkdtemp(prefix="ecdh-test-logs-"))

from ecdh_suite.crypto import generate_keypair  # noqa: E402
from ecdh_suite.crypto.primitive_ecdh import get_crypto_logger  # noqa: E402

# Bind the console handler to the session-wide stream, not a per-test capsys one.
get_crypto_logger()

ALL_CURVES = ["P-256", "P-384", "P-521", "X25519"]

# curve -> (normalized public, private, shared secret)
KEY_SIZES = {
    "P-256": (64, 32, 32),
    "P-384": (96, 48, 48),
    "P-521": (132, 66, 66),
    "X25519": (32, 32, 32),
}


@pytest.fixture(params=ALL_CURVES)
def curve_name(request):
    """Parametrize a test over every supported curve."""
    return request.param


@pytest.fixture
def alice_and_bob(curve_name):
    """Two independently generated key pairs on the same curve."""
    return generate_keypair(curve_name), generate_keypair(curve_name)


@pytest.fixture
def expected_sizes(curve_name):
    """(public, private, shared secret) byte lengths for the current curve."""
    return KEY_SIZES[curve_name]
