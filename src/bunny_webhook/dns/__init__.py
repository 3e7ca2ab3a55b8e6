"""DNS-01 solver implementations."""

from __future__ import annotations

from bunny_webhook.config import AppConfig
from bunny_webhook.dns.base import Solver
from bunny_webhook.dns.bunny import BunnyDnsSolver


def get_solver(config: AppConfig) -> Solver:
    """Build the bunny.net solver from application configuration."""
    return BunnyDnsSolver(
        solver_name=config.solver_name,
        base_url=config.bunny_api_url,
        timeout=config.http_timeout_seconds,
    )
