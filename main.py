"""Example usage: sign in to the sample app once and show what got cached."""

from playwright.sync_api import sync_playwright

from msal_e2e import BrowserCacheUtils, LabClient, LoginFlow, Screenshot, provision_test_user
from msal_e2e.browser import close_app_page, launch_browser, open_app_page
from msal_e2e.config import (
    HEADLESS,
    SAMPLE_HOME_URL,
    SCREENSHOT_BASE_FOLDER,
    TEST_CONFIG_PATH,
    lab_credentials,
    load_auth_config,
    write_test_config,
)


def main():
    """Provision a user, write the app config, sign in by redirect, print the cache."""
    print("Browser storage e2e - Example Usage\n")

    lab_creds = lab_credentials()
    if lab_creds is None:
        print("[ERROR] Set LAB_CLIENT_ID and LAB_CLIENT_SECRET to provision a test user")
        return False

    auth_config = load_auth_config()
    client_id, client_secret = lab_creds
    username, password = provision_test_user(
        LabClient(client_id=client_id, client_secret=client_secret)
    )
    write_test_config(TEST_CONFIG_PATH, auth_config["msalConfig"], auth_config["request"])

    print(f"\nMake sure the sample app is running at {SAMPLE_HOME_URL}")

    with sync_playwright() as p:
        browser = launch_browser(p, headless=HEADLESS)
        context, page = open_app_page(browser, SAMPLE_HOME_URL)

        flow = LoginFlow(page, Screenshot(SCREENSHOT_BASE_FOLDER / "exampleRedirect"))
        flow.run(username, password)
        print(f"[OK] Login flow finished: {flow.state.value}")

        cache = BrowserCacheUtils(page, auth_config["msalConfig"]["cache"]["cacheLocation"])
        token_store = cache.get_tokens()

        print("\n" + "=" * 60)
        print(f"Token store ({cache.cache_location})")
        print("=" * 60)
        print(f"  ID tokens:      {len(token_store.id_tokens)}")
        print(f"  Access tokens:  {len(token_store.access_tokens)}")
        print(f"  Refresh tokens: {len(token_store.refresh_tokens)}")
        print(f"  Telemetry:      {len(token_store.telemetry_entries)}")

        close_app_page(page)
        context.close()
        browser.close()

    return True


if __name__ == "__main__":
    main()
