"""Resolve bunny.net credentials for a challenge from its referenced secret."""

from __future__ import annotations

import logging
import re

from bunny_webhook.exceptions import SecretResolutionError
from bunny_webhook.models import ChallengeRequest, ProviderConfig, ProviderCredentials
from bunny_webhook.secret_store import SecretStore

logger = logging.getLogger(__name__)

API_KEY_FIELD = "api-key"
ZONE_ID_FIELD = "zone-id"

_ZONE_ID_RE = re.compile(r"[+-]?[0-9]+")


def string_from_secret_data(data: dict[str, bytes], key: str) -> str:
    """Return a secret field as text. Raises KeyError if the field is absent."""
    if key not in data:
        raise KeyError(f"key {key!r} not found in secret data")
    return data[key].decode("utf-8").strip()


def _parse_zone_id(text: str) -> int:
    # int() would also take "4_2" and non-ASCII digits
    if not _ZONE_ID_RE.fullmatch(text):
        raise ValueError(f"invalid zone id {text!r}")
    return int(text)


def resolve_credentials(store: SecretStore, request: ChallengeRequest) -> ProviderCredentials:
    """Look up the API key and zone id for a challenge.

    The secret is read from ``secretNamespace`` when the solver config sets
    one, otherwise from the namespace the challenge came from.

    Args:
        store: Where to read the secret from.
        request: The challenge being presented or cleaned up.

    Returns:
        Credentials for the bunny.net API.
    """
    cfg = ProviderConfig.from_json(request.config)

    namespace = cfg.secret_namespace or request.resource_namespace
    secret_id = f"{namespace}/{cfg.secret_ref}"
    logger.debug("Reading bunny.net credentials from secret %s", secret_id)

    data = store.get_secret_data(namespace, cfg.secret_ref)

    try:
        api_key = string_from_secret_data(data, API_KEY_FIELD)
    except (KeyError, UnicodeDecodeError) as exc:
        raise SecretResolutionError(f"unable to get '{API_KEY_FIELD}' from secret '{secret_id}': {exc}") from exc

    try:
        zone_id = _parse_zone_id(string_from_secret_data(data, ZONE_ID_FIELD))
    except (KeyError, UnicodeDecodeError, ValueError) as exc:
        raise SecretResolutionError(f"unable to get '{ZONE_ID_FIELD}' from secret '{secret_id}': {exc}") from exc

    return ProviderCredentials(api_key=api_key, zone_id=zone_id)
