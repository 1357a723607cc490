"""Async Python client for the TranslatePlus translation API."""

from translateplus.client import TranslatePlusClient
from translateplus.config.models import ClientConfig
from translateplus.config.settings import VERSION
from translateplus.errors import ErrorKind, TranslatePlusError
from translateplus.logging.audit import setup_logging

__version__ = VERSION

__all__ = [
    "ClientConfig",
    "ErrorKind",
    "TranslatePlusClient",
    "TranslatePlusError",
    "setup_logging",
    "__version__",
]
