"""Settings for the browser storage e2e suite.

Every value can be overridden through an environment variable so the same
suite runs against a local sample app and in CI.
"""

import json
import os
from pathlib import Path
from typing import Any

AUTH_CONFIGS_DIR = Path(__file__).parent / "auth_configs"

SAMPLE_HOME_URL = os.environ.get("MSAL_E2E_SAMPLE_URL", "http://localhost:30662/")
SCREENSHOT_BASE_FOLDER = Path(
    os.environ.get("MSAL_E2E_SCREENSHOT_DIR", "screenshots")
)
TEST_CONFIG_PATH = Path(
    os.environ.get(
        "MSAL_E2E_TEST_CONFIG_PATH", "./app/customizable-e2e-test/testConfig.json"
    )
)
AUTH_CONFIG_NAME = os.environ.get("MSAL_E2E_AUTH_CONFIG", "sessionStorageAuthConfig")

LAB_API_BASE_URL = os.environ.get("LAB_API_BASE_URL", "https://msidlab.com/api")
LAB_TENANT = os.environ.get("LAB_TENANT", "microsoft.onmicrosoft.com")
LAB_SCOPE = "https://msidlab.com/.default"

# Milliseconds, as Playwright expects
SELECTOR_TIMEOUT = int(os.environ.get("MSAL_E2E_SELECTOR_TIMEOUT", "30000"))


def env_flag(name: str, default: bool) -> bool:
    """Read a boolean environment variable ("1", "true", "yes" are true)."""
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


HEADLESS = env_flag("MSAL_E2E_HEADLESS", True)


def lab_credentials() -> tuple[str, str] | None:
    """Return the lab app's (client_id, client_secret), or None if unset."""
    client_id = os.environ.get("LAB_CLIENT_ID")
    client_secret = os.environ.get("LAB_CLIENT_SECRET")
    if not client_id or not client_secret:
        return None
    return client_id, client_secret


def load_auth_config(name: str = AUTH_CONFIG_NAME) -> dict[str, Any]:
    """
    Load one of the bundled auth configurations.

    Args:
        name: File name in auth_configs/, with or without the .json suffix

    Returns:
        Dictionary with "msalConfig" and "request" keys
    """
    filename = name if name.endswith(".json") else f"{name}.json"
    filepath = AUTH_CONFIGS_DIR / filename

    if not filepath.exists():
        raise FileNotFoundError(f"Auth config not found: {filepath}")

    with open(filepath, "r", encoding="utf-8") as f:
        data = json.load(f)

    if "msalConfig" not in data or "request" not in data:
        raise ValueError(f"Auth config {filepath} must define msalConfig and request")
    return data


def write_test_config(
    filepath: str | Path,
    msal_config: dict[str, Any],
    request: dict[str, Any],
) -> Path:
    """
    Write the configuration file the sample app reads on startup.

    Args:
        filepath: Destination path
        msal_config: Library configuration (auth, cache, ...)
        request: Token request (scopes, ...)

    Returns:
        The path that was written
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, "w", encoding="utf-8") as f:
        json.dump({"msalConfig": msal_config, "request": request}, f)

    print(f"[OK] Test config written to {filepath}")
    return filepath
