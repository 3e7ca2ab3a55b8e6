"""bunny.net DNS API client: add/list/delete TXT records in a DNS zone."""

from __future__ import annotations

import logging
from typing import Self

import httpx

from bunny_webhook.exceptions import ProviderError
from bunny_webhook.models import BUNNY_API_URL, RECORD_TYPE_TXT, DnsRecord

logger = logging.getLogger(__name__)


def _check(resp: httpx.Response, action: str) -> None:
    if resp.is_success:
        return
    raise ProviderError(f"can't {action}: HTTP {resp.status_code} {resp.text[:200]}", status_code=resp.status_code)


class BunnyDnsClient:
    """Thin wrapper over the bunny.net ``/dnszone`` endpoints."""

    def __init__(
        self,
        api_key: str,
        base_url: str = BUNNY_API_URL,
        timeout: float = 30,
        _http_client: httpx.Client | None = None,
    ) -> None:
        self._base = base_url.rstrip("/")
        self._client = _http_client or httpx.Client(
            headers={"AccessKey": api_key, "accept": "application/json"},
            timeout=timeout,
        )

    def add_txt_record(self, zone_id: int, record: DnsRecord) -> DnsRecord:
        """Create a record and return it with the id bunny.net assigned."""
        try:
            resp = self._client.put(
                f"{self._base}/dnszone/{zone_id}/records",
                json=record.to_dict(),
                headers={"content-type": "application/json"},
            )
        except httpx.HTTPError as exc:
            raise ProviderError(f"can't create DNS record in zone {zone_id}: {exc}") from exc
        _check(resp, f"create DNS record in zone {zone_id}")

        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("Id") is not None:
            try:
                return DnsRecord.from_dict({**record.to_dict(), **body})
            except (TypeError, ValueError) as exc:
                raise ProviderError(f"unexpected response creating DNS record in zone {zone_id}: {exc}") from exc
        return record

    def list_txt_records(self, zone_id: int, name: str, value: str | None = None) -> list[DnsRecord]:
        """Return TXT records in the zone named ``name``, optionally matching ``value``."""
        try:
            resp = self._client.get(f"{self._base}/dnszone/{zone_id}")
        except httpx.HTTPError as exc:
            raise ProviderError(f"can't read DNS zone {zone_id}: {exc}") from exc
        _check(resp, f"read DNS zone {zone_id}")

        try:
            records = [DnsRecord.from_dict(r) for r in resp.json().get("Records") or []]
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise ProviderError(f"unexpected response reading DNS zone {zone_id}: {exc}") from exc
        return [
            r
            for r in records
            if r.type == RECORD_TYPE_TXT and r.name == name and (value is None or r.value == value)
        ]

    def delete_record(self, zone_id: int, record_id: int) -> bool:
        """Delete a record. Returns False if it was already gone."""
        try:
            resp = self._client.delete(f"{self._base}/dnszone/{zone_id}/records/{record_id}")
        except httpx.HTTPError as exc:
            raise ProviderError(f"can't delete DNS record {record_id} in zone {zone_id}: {exc}") from exc
        if resp.status_code == 404:
            logger.debug("DNS record %s not found in zone %s", record_id, zone_id)
            return False
        _check(resp, f"delete DNS record {record_id} in zone {zone_id}")
        return True

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
