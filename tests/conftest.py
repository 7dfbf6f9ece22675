"""Shared fixtures for the browser storage e2e suite."""

from typing import Any

import pytest
from playwright.sync_api import Browser, sync_playwright

from msal_e2e.browser import launch_browser
from msal_e2e.config import HEADLESS, TEST_CONFIG_PATH, lab_credentials, load_auth_config, write_test_config
from msal_e2e.lab_client import AppTypes, AzureEnvironments, LabClient, provision_test_user


@pytest.fixture(scope="session")
def auth_config() -> dict[str, Any]:
    """The auth configuration the sample app is started with."""
    return load_auth_config()


@pytest.fixture(scope="session")
def credentials(auth_config: dict[str, Any]) -> tuple[str, str]:
    """
    Provision one lab user for the whole run and write the app's test config.

    Any provisioning failure aborts every test that needs a signed-in user.
    """
    lab_creds = lab_credentials()
    if lab_creds is None:
        pytest.skip("LAB_CLIENT_ID / LAB_CLIENT_SECRET not set - cannot provision a test user")

    client_id, client_secret = lab_creds
    lab_client = LabClient(client_id=client_id, client_secret=client_secret)
    username, password = provision_test_user(
        lab_client,
        azure_environment=AzureEnvironments.PPE,
        app_type=AppTypes.CLOUD,
    )

    write_test_config(TEST_CONFIG_PATH, auth_config["msalConfig"], auth_config["request"])
    return username, password


@pytest.fixture(scope="session")
def browser() -> Browser:
    """One chromium process shared by every browser test."""
    with sync_playwright() as p:
        shared_browser = launch_browser(p, headless=HEADLESS)
        yield shared_browser
        shared_browser.close()
