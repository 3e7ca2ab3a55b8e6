"""Data classes exchanged between the webhook, the secret store and bunny.net."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from bunny_webhook.exceptions import ConfigError

# bunny.net record type enum: 0=A, 1=AAAA, 2=CNAME, 3=TXT
RECORD_TYPE_TXT = 3

BUNNY_API_URL = "https://api.bunny.net"


@dataclass(frozen=True)
class ChallengeRequest:
    """A DNS-01 challenge as sent by cert-manager in a ChallengePayload."""

    dns_name: str
    key: str
    resource_namespace: str
    uid: str = ""
    action: str = ""
    resolved_fqdn: str = ""
    resolved_zone: str = ""
    allow_ambient_credentials: bool = False
    config: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: dict) -> ChallengeRequest:
        return cls(
            uid=data.get("uid", ""),
            action=data.get("action", ""),
            dns_name=data.get("dnsName", ""),
            key=data.get("key", ""),
            resource_namespace=data.get("resourceNamespace", ""),
            resolved_fqdn=data.get("resolvedFQDN", ""),
            resolved_zone=data.get("resolvedZone", ""),
            allow_ambient_credentials=bool(data.get("allowAmbientCredentials", False)),
            config=data.get("config"),
        )


@dataclass(frozen=True)
class ProviderConfig:
    """Solver config from the Issuer: which secret holds the bunny.net credentials."""

    secret_ref: str = ""
    secret_namespace: str = ""

    @classmethod
    def from_json(cls, raw: dict | str | bytes | None) -> ProviderConfig:
        """Decode the opaque solver config.

        ``None`` is the base case where the Issuer provides no config at all.
        Raw JSON text is accepted as well as an already decoded object.
        """
        if raw is None:
            return cls()
        if isinstance(raw, (str, bytes)):
            try:
                raw = json.loads(raw)
            except ValueError as exc:
                raise ConfigError(f"error decoding solver config: {exc}") from exc
        if not isinstance(raw, dict):
            raise ConfigError(f"error decoding solver config: expected an object, got {type(raw).__name__}")

        values = {}
        for attr, key in (("secret_ref", "secretRef"), ("secret_namespace", "secretNamespace")):
            value = raw.get(key)
            if value is None:
                continue
            if not isinstance(value, str):
                raise ConfigError(f"error decoding solver config: {key} must be a string")
            values[attr] = value
        return cls(**values)


@dataclass(frozen=True)
class ProviderCredentials:
    """bunny.net API key and the numeric id of the DNS zone to modify."""

    api_key: str = field(repr=False)
    zone_id: int


@dataclass(frozen=True)
class DnsRecord:
    """A bunny.net DNS record, as sent in the PUT body and returned by the API."""

    id: int
    name: str
    value: str
    type: int = RECORD_TYPE_TXT

    def to_dict(self) -> dict:
        return {
            "Id": self.id,
            "Type": self.type,
            "Value": self.value,
            "Name": self.name,
        }

    @classmethod
    def from_dict(cls, data: dict) -> DnsRecord:
        return cls(
            id=int(data["Id"]),
            type=int(data.get("Type", RECORD_TYPE_TXT)),
            name=data.get("Name", ""),
            value=data.get("Value", ""),
        )
