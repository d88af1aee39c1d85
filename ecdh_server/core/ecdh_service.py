"""
Request/response entry points.

Both functions take an encoded request envelope and always return an encoded
response envelope. Every ECDHError raised by the pipeline is turned into an
error envelope here; nothing escapes to the caller.
"""
from typing import Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from ecdh_suite.crypto import derive_shared_secret, generate_keypair
from ecdh_suite.security.errors import ECDHError, EmptyPayloadError, MalformedRequestError
from ecdh_suite.security.models import (
    DeriveRequest,
    DeriveResponse,
    GenerateRequest,
    GenerateResponse,
)
from .audit_logger import get_audit_logger

audit = get_audit_logger()

RequestT = TypeVar("RequestT", bound=BaseModel)


def parse_request(model: Type[RequestT], data: Union[bytes, str]) -> RequestT:
    if not data:
        raise EmptyPayloadError()
    try:
        return model.model_validate_json(data)
    except ValidationError as exc:
        raise MalformedRequestError(
            f"cannot decode {model.__name__}: {exc.error_count()} validation error(s): "
            f"{exc.errors(include_url=False)[0]['msg']}"
        ) from exc


def generate_key_pair(data: Union[bytes, str]) -> bytes:
    try:
        request = parse_request(GenerateRequest, data)
        key_pair = generate_keypair(request.payload)
    except ECDHError as exc:
        audit.warning("GenerateKeyPair rejected: %s", exc)
        return GenerateResponse.failure(str(exc)).to_wire()

    audit.info("GenerateKeyPair completed: curve=%s", key_pair.curve)
    return GenerateResponse.success(key_pair).to_wire()


def get_shared_key(data: Union[bytes, str]) -> bytes:
    try:
        request = parse_request(DeriveRequest, data)
        shared = derive_shared_secret(request.curve, request.local_private_key, request.peer_public_key)
    except ECDHError as exc:
        audit.warning("GetSharedKey rejected: %s", exc)
        return DeriveResponse.failure(str(exc)).to_wire()

    audit.info("GetSharedKey completed: curve=%s secret_len=%d", request.curve, len(shared))
    return DeriveResponse.success(shared).to_wire()
