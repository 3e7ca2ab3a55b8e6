"""Errors raised while solving DNS-01 challenges."""

from __future__ import annotations


class SolverError(Exception):
    """Base class for failures reported back to cert-manager."""


class ConfigError(SolverError):
    """The per-issuer solver config could not be decoded."""


class SecretResolutionError(SolverError):
    """Provider credentials could not be read from the referenced secret."""


class ProviderError(SolverError):
    """The bunny.net API call failed or returned a non-success status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotInitializedError(SolverError):
    def __init__(self) -> None:
        super().__init__("solver has not been initialized")
