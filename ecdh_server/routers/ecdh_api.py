import json

from fastapi import APIRouter, Request, Response
from starlette.concurrency import run_in_threadpool

from ecdh_suite.crypto import resolve_curve, supported_curves
from ..core.audit_logger import get_audit_logger
from ..core.ecdh_service import generate_key_pair, get_shared_key

router = APIRouter(prefix="/api/ecdh", tags=["Key Agreement"])
audit = get_audit_logger()


def _envelope_response(body: bytes) -> Response:
    # The envelope always goes back as-is; status only mirrors its error field.
    failed = bool(json.loads(body).get("error"))
    return Response(content=body, media_type="application/json", status_code=400 if failed else 200)


@router.get("/curves")
def list_curves():
    curves = []
    for name in supported_curves():
        curve = resolve_curve(name)
        curves.append(
            {
                "curve": name,
                "publicKeySize": curve.public_key_size,
                "privateKeySize": curve.private_key_size,
                "sharedSecretSize": curve.shared_secret_size,
            }
        )
    return {"curves": curves}


@router.post("/keypair")
async def keypair(request: Request):
    body = await request.body()
    audit.info("Key pair request received (bytes=%d)", len(body))
    return _envelope_response(await run_in_threadpool(generate_key_pair, body))


@router.post("/shared-key")
async def shared_key(request: Request):
    body = await request.body()
    audit.info("Shared key request received (bytes=%d)", len(body))
    return _envelope_response(await run_in_threadpool(get_shared_key, body))
