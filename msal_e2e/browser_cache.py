"""Inspect the token cache the auth library keeps in browser window storage."""

import json
from dataclasses import dataclass, field
from typing import Any

from playwright.sync_api import Page

TELEMETRY_KEY_PREFIX = "server-telemetry-"

# Storage locations the library can be configured with. In-memory caching
# writes nothing to window storage, so sessionStorage is read for it and is
# expected to stay empty.
WINDOW_STORAGE_FOR_LOCATION = {
    "sessionStorage": "sessionStorage",
    "localStorage": "localStorage",
    "memoryStorage": "sessionStorage",
}

CREDENTIAL_FIELDS = ("homeAccountId", "credentialType", "clientId", "environment", "secret")
ACCESS_TOKEN_FIELDS = CREDENTIAL_FIELDS + ("realm", "target")


@dataclass
class TokenStore:
    """Storage keys at one point in time, split by entry type."""

    id_tokens: list[str] = field(default_factory=list)
    access_tokens: list[str] = field(default_factory=list)
    refresh_tokens: list[str] = field(default_factory=list)
    telemetry_entries: list[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (
            self.id_tokens or self.access_tokens or self.refresh_tokens or self.telemetry_entries
        )

    def is_complete(self) -> bool:
        """True when every collection holds at least one entry."""
        return bool(
            self.id_tokens and self.access_tokens and self.refresh_tokens and self.telemetry_entries
        )


def parse_entry(value: str | None) -> dict[str, Any] | None:
    """Parse a stored JSON value, returning None for anything else."""
    if not value:
        return None
    try:
        parsed = json.loads(value)
    except (TypeError, ValueError):
        return None
    return parsed if isinstance(parsed, dict) else None


def validate_credential(value: str | None, credential_type: str) -> bool:
    """
    Check that a stored value is a credential entity of the given type.

    Access tokens may carry an auth scheme suffix
    (AccessToken_With_AuthScheme) and must also name their realm and scopes.
    """
    entity = parse_entry(value)
    if entity is None:
        return False

    stored_type = str(entity.get("credentialType", ""))
    if credential_type == "AccessToken":
        if not stored_type.startswith("AccessToken"):
            return False
        required = ACCESS_TOKEN_FIELDS
    else:
        if stored_type != credential_type:
            return False
        required = CREDENTIAL_FIELDS

    return all(entity.get(name) for name in required)


def classify_storage(storage: dict[str, str]) -> TokenStore:
    """Sort window storage entries into a TokenStore by key and value."""
    store = TokenStore()
    for key, value in storage.items():
        lowered = key.lower()
        if lowered.startswith(TELEMETRY_KEY_PREFIX):
            store.telemetry_entries.append(key)
        elif "idtoken" in lowered and validate_credential(value, "IdToken"):
            store.id_tokens.append(key)
        elif "accesstoken" in lowered and validate_credential(value, "AccessToken"):
            store.access_tokens.append(key)
        elif "refreshtoken" in lowered and validate_credential(value, "RefreshToken"):
            store.refresh_tokens.append(key)
    return store


class BrowserCacheUtils:
    """Reads and edits the library's cache through a live page."""

    def __init__(self, page: Page, cache_location: str):
        """
        Args:
            page: Page with the sample app loaded
            cache_location: The cacheLocation the library was configured with
        """
        if cache_location not in WINDOW_STORAGE_FOR_LOCATION:
            raise ValueError(f"Unknown cache location: {cache_location}")
        self.page = page
        self.cache_location = cache_location
        self.storage_name = WINDOW_STORAGE_FOR_LOCATION[cache_location]

    @property
    def is_window_storage(self) -> bool:
        """Whether the library persists its cache to window storage at all."""
        return self.cache_location != "memoryStorage"

    @staticmethod
    def get_telemetry_key(client_id: str) -> str:
        return f"{TELEMETRY_KEY_PREFIX}{client_id}"

    def get_window_storage(self) -> dict[str, str]:
        """Return a copy of every entry in the configured window storage."""
        return self.page.evaluate(
            "(name) => Object.assign({}, window[name])", self.storage_name
        )

    def get_tokens(self) -> TokenStore:
        return classify_storage(self.get_window_storage())

    def remove_tokens(self, keys: list[str]) -> None:
        """Delete the given keys from window storage."""
        if not keys:
            return
        self.page.evaluate(
            "([name, keys]) => keys.forEach((key) => window[name].removeItem(key))",
            [self.storage_name, list(keys)],
        )

    def clear_window_storage(self) -> None:
        self.page.evaluate("() => window.sessionStorage.clear()")
        self.page.evaluate("() => window.localStorage.clear()")

    def get_telemetry_cache_entry(self, client_id: str) -> dict[str, Any] | None:
        """
        Read the library's server telemetry entry for a client.

        Returns:
            Parsed entry (cacheHits, failedRequests, errors) or None if absent
        """
        storage = self.get_window_storage()
        return parse_entry(storage.get(self.get_telemetry_key(client_id)))

    def get_account_from_cache(self, id_token_key: str) -> dict[str, Any] | None:
        """Return the account entity that owns the given id token, if cached."""
        storage = self.get_window_storage()
        id_token = parse_entry(storage.get(id_token_key))
        if id_token is None:
            return None

        account_key = "-".join(
            [
                id_token.get("homeAccountId", ""),
                id_token.get("environment", ""),
                id_token.get("realm", ""),
            ]
        ).lower()
        return parse_entry(storage.get(account_key))

    def access_token_for_scopes_exists(
        self, access_token_keys: list[str], scopes: list[str]
    ) -> bool:
        """True if one of the access tokens was granted every requested scope."""
        storage = self.get_window_storage()
        wanted = {scope.lower() for scope in scopes}

        for key in access_token_keys:
            entity = parse_entry(storage.get(key))
            if entity is None:
                continue
            granted = {scope.lower() for scope in str(entity.get("target", "")).split()}
            if wanted <= granted:
                return True
        return False
