import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .core.config import config
from .routers import ecdh_api

app = FastAPI(title="ECDH Key Agreement Server")
app.include_router(ecdh_api.router)


@app.middleware("http")
async def request_size_guard(request: Request, call_next):
    """
    Reject oversized key-agreement requests before the body is read.
    """
    if request.method == "POST":
        content_length = request.headers.get("content-length")
        if content_length is None:
            return JSONResponse(status_code=411, content={"detail": "Content-Length header required."})

        try:
            content_length_val = int(content_length)
        except ValueError:
            return JSONResponse(status_code=400, content={"detail": "Invalid Content-Length header."})

        if content_length_val < 0:
            return JSONResponse(status_code=400, content={"detail": "Invalid Content-Length header."})

        if content_length_val > config.max_request_bytes:
            return JSONResponse(
                status_code=413,
                content={"detail": f"Request too large. Max {config.max_request_bytes} bytes."},
            )

    return await call_next(request)


def start_server():
    """Starts the key-agreement API on the configured host and port."""
    print(f"Starting ECDH server on http://{config.host}:{config.port}")
    uvicorn.run(app, host=config.host, port=config.port)


if __name__ == "__main__":
    start_server()
