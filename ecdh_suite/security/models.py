import base64
import binascii
from typing import Annotated, Any, Optional

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
    PlainValidator,
    StrictStr,
    ValidationInfo,
    field_serializer,
    field_validator,
    model_validator,
)


def _decode_b64(value: str, field_name: str) -> bytes:
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"{field_name} must be valid base64") from exc


def _coerce_wire_bytes(value: Any, info: ValidationInfo) -> bytes:
    field_name = info.field_name or "value"
    if value is None:
        return b""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        return _decode_b64(value, field_name)
    if isinstance(value, list):
        # Also accept the integer-array form some encoders emit for byte strings.
        if not all(type(v) is int and 0 <= v <= 255 for v in value):
            raise ValueError(f"{field_name} must be a list of byte values (0-255)")
        return bytes(value)
    raise ValueError(f"{field_name} must be base64 text or a list of byte values")


def _encode_b64(value: bytes) -> str:
    return base64.b64encode(value).decode()


# JSON null decodes to the empty string
NullableStr = Annotated[StrictStr, BeforeValidator(lambda value: "" if value is None else value)]


# bytes in Python, base64 text on the wire
WireBytes = Annotated[
    bytes,
    PlainValidator(_coerce_wire_bytes),
    PlainSerializer(_encode_b64, return_type=str, when_used="json"),
]


class ECDHKeyPair(BaseModel):
    """
    Key pair record exchanged with callers.

    `public_key` is always normalized (no uncompressed-point tag). In a
    derivation request the same record carries the PEER's public key and the
    caller's OWN private key.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    curve: NullableStr = ""
    public_key: WireBytes = Field(default=b"", alias="publicKey")
    private_key: WireBytes = Field(default=b"", alias="privateKey", repr=False)

    def to_wire(self) -> bytes:
        return self.model_dump_json(by_alias=True).encode("utf-8")


class GenerateRequest(BaseModel):
    payload: NullableStr = ""

    def to_wire(self) -> bytes:
        return self.model_dump_json().encode("utf-8")


class DeriveRequest(BaseModel):
    payload: ECDHKeyPair = Field(default_factory=ECDHKeyPair)

    @field_validator("payload", mode="before")
    @classmethod
    def _null_payload(cls, value):
        if value is None:
            return ECDHKeyPair()
        return value

    @classmethod
    def build(cls, curve: str, peer_public_key: bytes, local_private_key: bytes) -> "DeriveRequest":
        return cls(
            payload=ECDHKeyPair(curve=curve, public_key=peer_public_key, private_key=local_private_key)
        )

    @property
    def curve(self) -> str:
        return self.payload.curve

    @property
    def peer_public_key(self) -> bytes:
        return self.payload.public_key

    @property
    def local_private_key(self) -> bytes:
        return self.payload.private_key

    def to_wire(self) -> bytes:
        return self.model_dump_json(by_alias=True).encode("utf-8")


class GenerateResponse(BaseModel):
    """
    Exactly one of `payload` / `error` is populated.
    A failed generation is sent as `{"payload": "", "error": "..."}`.
    """
    payload: Optional[ECDHKeyPair] = None
    error: StrictStr = ""

    @field_validator("payload", mode="before")
    @classmethod
    def _empty_payload(cls, value):
        if value == "":
            return None
        return value

    @field_serializer("payload")
    def _serialize_payload(self, value: Optional[ECDHKeyPair], info):
        if value is None:
            return ""
        return value.model_dump(mode=info.mode, by_alias=bool(info.by_alias))

    @model_validator(mode="after")
    def _exactly_one(self):
        if self.error and self.payload is not None:
            raise ValueError("error response must not carry a key pair")
        if not self.error and self.payload is None:
            raise ValueError("success response must carry a key pair")
        return self

    @classmethod
    def success(cls, key_pair: ECDHKeyPair) -> "GenerateResponse":
        return cls(payload=key_pair)

    @classmethod
    def failure(cls, error: str) -> "GenerateResponse":
        return cls(payload=None, error=error)

    def to_wire(self) -> bytes:
        return self.model_dump_json(by_alias=True).encode("utf-8")


class DeriveResponse(BaseModel):
    """Shared secret on success, empty payload plus error text on failure."""
    payload: WireBytes = Field(default=b"", repr=False)
    error: StrictStr = ""

    @model_validator(mode="after")
    def _exactly_one(self):
        if self.error and self.payload:
            raise ValueError("error response must not carry a shared secret")
        if not self.error and not self.payload:
            raise ValueError("success response must carry a shared secret")
        return self

    @classmethod
    def success(cls, shared_secret: bytes) -> "DeriveResponse":
        return cls(payload=shared_secret)

    @classmethod
    def failure(cls, error: str) -> "DeriveResponse":
        return cls(payload=b"", error=error)

    def to_wire(self) -> bytes:
        return self.model_dump_json().encode("utf-8")
