import hashlib
import logging
from pathlib import Path
from typing import Union

_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logger(name: str, log_dir: Union[str, Path], filename: str) -> logging.Logger:
    """
    Returns logger `name` writing to `<log_dir>/<filename>` and the console.
    Handlers are attached once; later calls return the configured logger.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    logger.propagate = False

    log_dir = Path(log_dir)
    log_dir.mkdir(mode=0o700, parents=True, exist_ok=True)
    formatter = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)

    for handler in (logging.FileHandler(log_dir / filename, encoding="utf-8"), logging.StreamHandler()):
        handler.setLevel(logging.INFO)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def fingerprint(data: bytes) -> str:
    """Short SHA-256 prefix for audit lines. Raw key material is never logged."""
    if not data:
        return "none"
    return hashlib.sha256(data).hexdigest()[:24]
