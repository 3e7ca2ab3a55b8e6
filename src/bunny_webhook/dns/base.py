"""Abstract base class for cert-manager DNS-01 solvers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from bunny_webhook.models import ChallengeRequest


class Solver(ABC):
    """Interface cert-manager's webhook host drives for a single DNS provider."""

    @abstractmethod
    def name(self) -> str:
        """Solver name used in the Issuer's ``webhook.solverName`` field."""

    @abstractmethod
    def initialize(self, configuration: Any) -> None:
        """Prepare cluster access. Called once before any challenge is handled."""

    @abstractmethod
    def present(self, request: ChallengeRequest) -> Any:
        """Publish the TXT record for a DNS-01 challenge.

        Must be safe to call more than once for the same challenge.
        """

    @abstractmethod
    def cleanup(self, request: ChallengeRequest) -> None:
        """Remove the TXT record matching ``request.key``, leaving any others in place."""
