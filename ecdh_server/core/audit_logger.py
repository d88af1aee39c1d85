import logging

from ecdh_suite.security.log_setup import configure_logger
from .config import config


LOGGER_NAME = "ecdh.server.audit"


def get_audit_logger() -> logging.Logger:
    return configure_logger(LOGGER_NAME, config.log_dir, "server_audit.log")
