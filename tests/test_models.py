"""
Unit tests for the wire models and response envelopes.
"""

import base64
import json

import pytest
from pydantic import ValidationError

from ecdh_suite.crypto import generate_keypair
from ecdh_suite.security.models import (
    DeriveRequest,
    DeriveResponse,
    ECDHKeyPair,
    GenerateRequest,
    GenerateResponse,
)


class TestECDHKeyPair:

    def test_wire_roundtrip_is_lossless(self, curve_name):
        original = generate_keypair(curve_name)

        decoded = ECDHKeyPair.model_validate_json(original.to_wire())

        assert decoded.public_key == original.public_key
        assert decoded.private_key == original.private_key
        assert decoded == original

    def test_wire_field_names_and_base64(self):
        key_pair = ECDHKeyPair(curve="X25519", public_key=b"\x00\x01\xff", private_key=b"\x10")
        wire = json.loads(key_pair.to_wire())

        assert wire == {"curve": "X25519", "publicKey": "AAH/", "privateKey": "EA=="}

    def test_accepts_integer_arrays(self):
        decoded = ECDHKeyPair.model_validate_json('{"curve":"P-256","publicKey":[1,2,255],"privateKey":[0]}')

        assert decoded.public_key == b"\x01\x02\xff"
        assert decoded.private_key == b"\x00"

    def test_missing_fields_default_to_empty(self):
        decoded = ECDHKeyPair.model_validate_json("{}")

        assert decoded.curve == ""
        assert decoded.public_key == b""
        assert decoded.private_key == b""

    def test_null_bytes_field_is_empty(self):
        assert ECDHKeyPair.model_validate_json('{"publicKey":null}').public_key == b""

    def test_null_curve_is_empty(self):
        """JSON null decodes to the zero value, as a missing field does."""
        assert ECDHKeyPair.model_validate_json('{"curve": null}').curve == ""
        assert GenerateRequest.model_validate_json('{"payload": null}').payload == ""

    @pytest.mark.parametrize(
        "raw",
        [
            '{"curve": 5}',
            '{"publicKey": "not base64!"}',
            '{"publicKey": [1, 256]}',
            '{"publicKey": [true]}',
            '{"privateKey": {"a": 1}}',
        ],
    )
    def test_rejects_bad_fields(self, raw):
        with pytest.raises(ValidationError):
            ECDHKeyPair.model_validate_json(raw)


class TestEnvelopes:

    def test_generate_request_wire(self):
        assert json.loads(GenerateRequest(payload="P-384").to_wire()) == {"payload": "P-384"}

    def test_derive_request_field_meaning(self):
        request = DeriveRequest.build("X25519", peer_public_key=b"peer", local_private_key=b"mine")
        wire = json.loads(request.to_wire())

        assert request.peer_public_key == b"peer"
        assert request.local_private_key == b"mine"
        assert wire["payload"]["publicKey"] == base64.b64encode(b"peer").decode()
        assert wire["payload"]["privateKey"] == base64.b64encode(b"mine").decode()

    def test_derive_request_missing_payload(self):
        assert DeriveRequest.model_validate_json("{}").curve == ""
        assert DeriveRequest.model_validate_json('{"payload": null}').curve == ""

    def test_generate_success_wire(self):
        key_pair = generate_keypair("P-256")
        wire = json.loads(GenerateResponse.success(key_pair).to_wire())

        assert wire["error"] == ""
        assert wire["payload"]["curve"] == "P-256"
        assert base64.b64decode(wire["payload"]["publicKey"]) == key_pair.public_key

    def test_generate_failure_wire(self):
        wire = json.loads(GenerateResponse.failure("UnsupportedCurve: x").to_wire())

        assert wire == {"payload": "", "error": "UnsupportedCurve: x"}

    def test_generate_response_roundtrip(self):
        response = GenerateResponse.success(generate_keypair("X25519"))
        decoded = GenerateResponse.model_validate_json(response.to_wire())

        assert decoded.payload == response.payload
        assert GenerateResponse.model_validate_json(GenerateResponse.failure("boom").to_wire()).payload is None

    def test_generate_response_requires_exactly_one(self):
        with pytest.raises(ValidationError):
            GenerateResponse(payload=None, error="")
        with pytest.raises(ValidationError):
            GenerateResponse(payload=generate_keypair("X25519"), error="boom")

    def test_derive_response_wire(self):
        assert json.loads(DeriveResponse.success(b"\x01\x02").to_wire()) == {"payload": "AQI=", "error": ""}
        assert json.loads(DeriveResponse.failure("boom").to_wire()) == {"payload": "", "error": "boom"}

    def test_derive_response_requires_exactly_one(self):
        with pytest.raises(ValidationError):
            DeriveResponse(payload=b"", error="")
        with pytest.raises(ValidationError):
            DeriveResponse(payload=b"\x01", error="boom")
