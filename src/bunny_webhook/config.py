"""Configuration loading and validation from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass

from bunny_webhook.models import BUNNY_API_URL

_DEFAULT_SOLVER_NAME = "bunny"
_DEFAULT_TIMEOUT_SECONDS = 30.0
_DEFAULT_PORT = 443


@dataclass(frozen=True)
class AppConfig:
    """Webhook configuration loaded from environment variables."""

    group_name: str
    solver_name: str = _DEFAULT_SOLVER_NAME
    bunny_api_url: str = BUNNY_API_URL
    http_timeout_seconds: float = _DEFAULT_TIMEOUT_SECONDS
    port: int = _DEFAULT_PORT
    tls_cert_file: str | None = None
    tls_key_file: str | None = None
    log_level: str = "INFO"


def _require_env(name: str) -> str:
    value = os.environ.get(name)
    if not value:
        raise ValueError(f"Required environment variable {name} is not set")
    return value


def load_config() -> AppConfig:
    """Load and validate webhook configuration from environment variables."""
    group_name = _require_env("GROUP_NAME")
    solver_name = os.environ.get("SOLVER_NAME") or _DEFAULT_SOLVER_NAME
    bunny_api_url = (os.environ.get("BUNNY_API_URL") or BUNNY_API_URL).rstrip("/")

    raw_timeout = os.environ.get("HTTP_TIMEOUT_SECONDS", str(_DEFAULT_TIMEOUT_SECONDS))
    try:
        http_timeout_seconds = float(raw_timeout)
    except ValueError:
        raise ValueError(f"HTTP_TIMEOUT_SECONDS must be a number, got: {raw_timeout!r}")
    if http_timeout_seconds <= 0:
        raise ValueError(f"HTTP_TIMEOUT_SECONDS must be positive, got: {http_timeout_seconds}")

    raw_port = os.environ.get("PORT", str(_DEFAULT_PORT))
    try:
        port = int(raw_port)
    except ValueError:
        raise ValueError(f"PORT must be an integer, got: {raw_port!r}")
    if port < 1:
        raise ValueError(f"PORT must be a positive integer, got: {port}")

    tls_cert_file = os.environ.get("TLS_CERT_FILE") or None
    tls_key_file = os.environ.get("TLS_KEY_FILE") or None
    if bool(tls_cert_file) != bool(tls_key_file):
        raise ValueError("TLS_CERT_FILE and TLS_KEY_FILE must be set together")

    return AppConfig(
        group_name=group_name,
        solver_name=solver_name,
        bunny_api_url=bunny_api_url,
        http_timeout_seconds=http_timeout_seconds,
        port=port,
        tls_cert_file=tls_cert_file,
        tls_key_file=tls_key_file,
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    )
