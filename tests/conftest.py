"""Shared test fixtures for bunny-dns-webhook."""

import pytest

from bunny_webhook.models import ChallengeRequest


class FakeSecretStore:
    """In-memory SecretStore keyed by (namespace, name)."""

    def __init__(self, secrets=None):
        self.secrets = dict(secrets or {})
        self.lookups = []

    def get_secret_data(self, namespace, name):
        from bunny_webhook.exceptions import SecretResolutionError

        self.lookups.append((namespace, name))
        try:
            return dict(self.secrets[(namespace, name)])
        except KeyError:
            raise SecretResolutionError(f"unable to get secret '{namespace}/{name}': 404 Not Found")


@pytest.fixture
def secret_store():
    return FakeSecretStore(
        {
            ("cert-manager", "bunny-credentials"): {"api-key": b"key-123", "zone-id": b"4242"},
        }
    )


@pytest.fixture
def challenge():
    return ChallengeRequest(
        uid="uid-1",
        action="Present",
        dns_name="example.com",
        key="token-abc",
        resource_namespace="cert-manager",
        resolved_fqdn="_acme-challenge.example.com.",
        resolved_zone="example.com.",
        config={"secretRef": "bunny-credentials"},
    )
