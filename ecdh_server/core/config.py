import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ecdh_suite.crypto import supported_curves


def _load_env_file() -> None:
    root_dir = Path(__file__).resolve().parents[2]
    env_path = root_dir / ".env"
    if not env_path.exists():
        return

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip().strip('"').strip("'"))


_load_env_file()
_ROOT = Path(__file__).resolve().parents[1]
_DEFAULT_LOG_DIR = _ROOT / "storage" / "logs"


class AppConfig(BaseModel):
    # Env values arrive as strings; validate_default coerces and checks them.
    model_config = ConfigDict(validate_default=True)

    host: str = Field(default_factory=lambda: os.getenv("ECDH_HOST", "127.0.0.1"))
    port: int = Field(default_factory=lambda: os.getenv("ECDH_PORT", "8080"))
    default_curve: str = Field(default_factory=lambda: os.getenv("ECDH_DEFAULT_CURVE", "X25519"))
    max_request_bytes: int = Field(default_factory=lambda: os.getenv("ECDH_MAX_REQUEST_BYTES", "65536"))
    log_dir: str = Field(default_factory=lambda: os.getenv("ECDH_LOG_DIR", str(_DEFAULT_LOG_DIR)))

    @field_validator("port")
    @classmethod
    def _validate_port(cls, value: int) -> int:
        if not (1 <= value <= 65535):
            raise ValueError(f"ECDH_PORT={value} is out of valid TCP port range (1-65535).")
        return value

    @field_validator("default_curve")
    @classmethod
    def _validate_curve(cls, value: str) -> str:
        if value not in supported_curves():
            raise ValueError(
                f"ECDH_DEFAULT_CURVE={value!r} is not supported. Expected one of {supported_curves()}."
            )
        return value

    @field_validator("max_request_bytes")
    @classmethod
    def _validate_max_request_bytes(cls, value: int) -> int:
        if value <= 0:
            raise ValueError(f"ECDH_MAX_REQUEST_BYTES={value} must be a positive byte limit.")
        return value


def load_config() -> AppConfig:
    return AppConfig()


config = load_config()
