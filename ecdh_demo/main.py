"""
Alice/Bob walkthrough of both entry points.

    python -m ecdh_demo.main --curve P-384
    python -m ecdh_demo.main --curve X25519 --server-url http://127.0.0.1:8080
"""
import argparse
import sys

import requests

from ecdh_server.core.config import config
from ecdh_server.core.ecdh_service import generate_key_pair, get_shared_key
from ecdh_suite.crypto import SecretBox
from ecdh_suite.security.models import DeriveRequest, DeriveResponse, GenerateRequest, GenerateResponse

SEPARATOR = "-" * 58


class InProcessTransport:
    def generate(self, data: bytes) -> bytes:
        return generate_key_pair(data)

    def shared_key(self, data: bytes) -> bytes:
        return get_shared_key(data)


class HttpTransport:
    """Talks to a running ecdh_server instance."""

    def __init__(self, server_url: str, timeout: float = 10.0):
        self.server_url = server_url.rstrip("/")
        self.timeout = timeout

    def _post(self, path: str, data: bytes) -> bytes:
        resp = requests.post(
            f"{self.server_url}{path}",
            data=data,
            headers={"Content-Type": "application/json"},
            timeout=self.timeout,
        )
        # 400 still carries a response envelope
        if resp.status_code not in (200, 400):
            resp.raise_for_status()
        return resp.content

    def generate(self, data: bytes) -> bytes:
        return self._post("/api/ecdh/keypair", data)

    def shared_key(self, data: bytes) -> bytes:
        return self._post("/api/ecdh/shared-key", data)


def _describe(label: str, data: bytes) -> str:
    return f"{label} : {data.hex()}, key length : {len(data)}"


def run_example(curve_name: str, transport) -> int:
    print("===================Generate KeyPair=======================")
    request = GenerateRequest(payload=curve_name).to_wire()

    alice = GenerateResponse.model_validate_json(transport.generate(request))
    if alice.error:
        print(f"Key pair generation failed: {alice.error}")
        return 1
    print("Curve for generate key pair is:", alice.payload.curve)
    print(SEPARATOR)
    print(_describe("Alice public key", alice.payload.public_key))
    print(SEPARATOR)
    print(_describe("Alice private key", alice.payload.private_key))

    bob = GenerateResponse.model_validate_json(transport.generate(request))
    if bob.error:
        print(f"Key pair generation failed: {bob.error}")
        return 1
    print(SEPARATOR)
    print(_describe("Bob public key", bob.payload.public_key))
    print(SEPARATOR)
    print(_describe("Bob private key", bob.payload.private_key))

    alice_request = DeriveRequest.build(curve_name, bob.payload.public_key, alice.payload.private_key)
    alice_shared = DeriveResponse.model_validate_json(transport.shared_key(alice_request.to_wire()))
    bob_request = DeriveRequest.build(curve_name, alice.payload.public_key, bob.payload.private_key)
    bob_shared = DeriveResponse.model_validate_json(transport.shared_key(bob_request.to_wire()))

    for resp in (alice_shared, bob_shared):
        if resp.error:
            print(f"Shared key derivation failed: {resp.error}")
            return 1

    with SecretBox(alice_shared.payload) as alice_secret, SecretBox(bob_shared.payload) as bob_secret:
        print(SEPARATOR)
        print(_describe("Alice shared key", alice_secret.bytes()))
        print(SEPARATOR)
        print(_describe("Bob shared key", bob_secret.bytes()))
        print(SEPARATOR)
        matched = alice_secret.bytes() == bob_secret.bytes()

    print("Shared keys match" if matched else "Shared keys DO NOT match")
    return 0 if matched else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="ECDH key agreement demo (Alice and Bob).")
    parser.add_argument(
        "--curve",
        default=config.default_curve,
        help="curve for generate keyPair and getSharedKey (P-256, P-384, P-521, X25519)",
    )
    parser.add_argument(
        "--server-url",
        default=None,
        help="run against a running ECDH server instead of in-process",
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    transport = HttpTransport(args.server_url) if args.server_url else InProcessTransport()
    try:
        return run_example(args.curve, transport)
    except requests.RequestException as e:
        print(f"Server request failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
