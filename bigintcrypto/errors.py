# bigintcrypto/errors.py
from __future__ import annotations
from typing import Optional


class BigIntCryptoError(Exception):
    """Base class for everything this package raises on purpose."""


class InvalidArgument(BigIntCryptoError, ValueError):
    """A precondition failed; raised before any computation starts."""


class WorkerFailure(BigIntCryptoError, RuntimeError):
    """A concurrent primality worker died instead of returning a verdict."""

    def __init__(self, message: str, worker: Optional[int] = None):
        super().__init__(message)
        self.worker = worker
