"""Domain errors raised by services and translated to HTTP statuses in ``main``."""
from __future__ import annotations


class VottServerError(Exception):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(VottServerError):
    status_code = 404


class InvalidArgumentError(VottServerError):
    status_code = 400


class UnsafePathError(InvalidArgumentError):
    """Raised when a requested asset name could escape the asset root."""


class EmptyBodyError(InvalidArgumentError):
    status_code = 406


class BackendFailureError(VottServerError):
    status_code = 500


class AssetMissingError(VottServerError):
    status_code = 404
