"""Stand-ins for a Playwright page and the storage the library writes."""

import json

CLIENT_ID = "b5c2e510-4a17-4feb-b219-e55aa5b74144"
HOME_ACCOUNT_ID = "uid.utid"
ENVIRONMENT = "login.windows-ppe.net"
REALM = "utid"
TELEMETRY_KEY = f"server-telemetry-{CLIENT_ID}"


class FakePage:
    """Page stand-in that keeps window storage in plain dicts."""

    def __init__(self, session=None, local=None, on_click=None):
        self.storages = {
            "sessionStorage": dict(session or {}),
            "localStorage": dict(local or {}),
        }
        self.on_click = on_click
        self.clicks = []

    def evaluate(self, script, arg=None):
        if "removeItem" in script:
            name, keys = arg
            for key in keys:
                self.storages[name].pop(key, None)
            return None
        if "sessionStorage.clear" in script:
            self.storages["sessionStorage"].clear()
            return None
        if "localStorage.clear" in script:
            self.storages["localStorage"].clear()
            return None
        return dict(self.storages[arg])

    def wait_for_selector(self, selector):
        return None

    def click(self, selector):
        self.clicks.append(selector)
        if self.on_click is not None:
            self.on_click(self, selector)


def credential(credential_type, **extra):
    entity = {
        "homeAccountId": HOME_ACCOUNT_ID,
        "environment": ENVIRONMENT,
        "credentialType": credential_type,
        "clientId": CLIENT_ID,
        "secret": "secret-value",
        "realm": REALM,
    }
    entity.update(extra)
    return json.dumps(entity)


def signed_in_entries():
    """Storage as the library leaves it after a successful sign-in."""
    prefix = f"{HOME_ACCOUNT_ID}-{ENVIRONMENT}"
    return {
        f"{prefix}-idtoken-{CLIENT_ID}-{REALM}-": credential("IdToken"),
        f"{prefix}-accesstoken-{CLIENT_ID}-{REALM}-user.read openid profile": credential(
            "AccessToken", target="User.Read openid profile"
        ),
        f"{prefix}-refreshtoken-{CLIENT_ID}--": credential("RefreshToken"),
        f"{prefix}-{REALM}": json.dumps(
            {"homeAccountId": HOME_ACCOUNT_ID, "environment": ENVIRONMENT, "realm": REALM}
        ),
        TELEMETRY_KEY: json.dumps({"failedRequests": [], "errors": [], "cacheHits": 1}),
        "msal.account.keys": "[]",
    }


def count_cache_hit(page, selector):
    """Click handler that bumps the telemetry cache-hit counter like the library does."""
    storage = page.storages["sessionStorage"]
    entry = json.loads(storage.get(TELEMETRY_KEY, '{"failedRequests": [], "errors": [], "cacheHits": 0}'))
    entry["cacheHits"] += 1
    storage[TELEMETRY_KEY] = json.dumps(entry)
