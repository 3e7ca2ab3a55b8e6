"""bunny.net DNS-01 solver: publish and remove challenge TXT records."""

from __future__ import annotations

import logging
import secrets
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from kubernetes import client as kube_client

from bunny_webhook.credentials import resolve_credentials
from bunny_webhook.dns.base import Solver
from bunny_webhook.dns.client import BunnyDnsClient
from bunny_webhook.exceptions import NotInitializedError
from bunny_webhook.models import BUNNY_API_URL, ChallengeRequest, DnsRecord, ProviderCredentials
from bunny_webhook.secret_store import KubernetesSecretStore, SecretStore

logger = logging.getLogger(__name__)

SOLVER_NAME = "bunny"
_MAX_RECORD_ID = 99_999_999_999


def _new_record_id() -> int:
    return secrets.randbelow(_MAX_RECORD_ID) + 1


class BunnyDnsSolver(Solver):
    """Solver that keeps challenge TXT records in a bunny.net DNS zone."""

    def __init__(
        self,
        solver_name: str = SOLVER_NAME,
        base_url: str = BUNNY_API_URL,
        timeout: float = 30,
        _secret_store: SecretStore | None = None,
        _client_factory: Callable[[str], BunnyDnsClient] | None = None,
    ) -> None:
        self._solver_name = solver_name
        self._store = _secret_store
        self._client_factory = _client_factory or (
            lambda api_key: BunnyDnsClient(api_key, base_url=base_url, timeout=timeout)
        )
        # (zone id, dns name, key) -> record created by present()
        self._records: dict[tuple[int, str, str], DnsRecord] = {}
        # per-challenge lock and the number of callers holding or waiting on it
        self._challenge_locks: dict[tuple[int, str, str], list] = {}
        self._lock = threading.Lock()

    def name(self) -> str:
        return self._solver_name

    def initialize(self, configuration: kube_client.Configuration) -> None:
        self._store = KubernetesSecretStore(configuration)

    def _credentials(self, request: ChallengeRequest) -> ProviderCredentials:
        if self._store is None:
            raise NotInitializedError()
        return resolve_credentials(self._store, request)

    @contextmanager
    def _challenge_lock(self, tracking_key: tuple[int, str, str]) -> Iterator[None]:
        """Serialize present/cleanup calls for one challenge."""
        with self._lock:
            entry = self._challenge_locks.setdefault(tracking_key, [threading.Lock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._lock:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._challenge_locks[tracking_key]

    def present(self, request: ChallengeRequest) -> DnsRecord:
        creds = self._credentials(request)
        tracking_key = (creds.zone_id, request.dns_name, request.key)
        with self._challenge_lock(tracking_key):
            with self._lock:
                existing = self._records.get(tracking_key)
            if existing is not None:
                logger.info("TXT record %s already present (id %s), nothing to do", request.dns_name, existing.id)
                return existing

            record = DnsRecord(id=_new_record_id(), name=request.dns_name, value=request.key)
            with self._client_factory(creds.api_key) as client:
                created = client.add_txt_record(creds.zone_id, record)

            with self._lock:
                self._records[tracking_key] = created
        logger.info("Created TXT record %s (id %s) in bunny.net zone %s", request.dns_name, created.id, creds.zone_id)
        return created

    def cleanup(self, request: ChallengeRequest) -> None:
        creds = self._credentials(request)
        tracking_key = (creds.zone_id, request.dns_name, request.key)
        with self._challenge_lock(tracking_key):
            with self._lock:
                tracked = self._records.pop(tracking_key, None)

            with self._client_factory(creds.api_key) as client:
                if tracked is not None:
                    record_ids = [tracked.id]
                else:
                    # Created by another replica or before a restart: find it by name and value
                    record_ids = [r.id for r in client.list_txt_records(creds.zone_id, request.dns_name, request.key)]

                deleted = sum(1 for rid in record_ids if client.delete_record(creds.zone_id, rid))

        if deleted == 0:
            logger.warning("TXT record %s not found in bunny.net zone %s, skipping delete", request.dns_name, creds.zone_id)
        else:
            logger.info("Deleted TXT record %s from bunny.net zone %s", request.dns_name, creds.zone_id)
