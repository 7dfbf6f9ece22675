"""End-to-end storage tests for a browser authentication library's sample app."""

from msal_e2e.browser_cache import BrowserCacheUtils, TokenStore
from msal_e2e.config import load_auth_config, write_test_config
from msal_e2e.interactions import LoginFlow
from msal_e2e.lab_client import LabClient, provision_test_user, setup_credentials
from msal_e2e.screenshot import Screenshot

__all__ = [
    "BrowserCacheUtils",
    "TokenStore",
    "LabClient",
    "LoginFlow",
    "Screenshot",
    "load_auth_config",
    "provision_test_user",
    "setup_credentials",
    "write_test_config",
]
