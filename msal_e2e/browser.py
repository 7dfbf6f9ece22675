"""Browser and page lifecycle for the e2e suite using Playwright."""

from playwright.sync_api import Browser, BrowserContext, Page, Playwright

from msal_e2e.config import SELECTOR_TIMEOUT

WELCOME_SELECTOR = "#WelcomeMessage"


def launch_browser(
    playwright: Playwright,
    headless: bool = True,
    slow_mo: int = 0,
) -> Browser:
    """
    Launch the single chromium process shared by the whole run.

    Args:
        playwright: Started Playwright instance
        headless: Whether to run browser in headless mode
        slow_mo: Delay in milliseconds added to every operation

    Returns:
        Browser instance
    """
    browser = playwright.chromium.launch(headless=headless, slow_mo=slow_mo)
    print(f"[OK] Launched chromium {browser.version}")
    return browser


def open_app_page(
    browser: Browser,
    url: str,
    timeout: int = SELECTOR_TIMEOUT,
) -> tuple[BrowserContext, Page]:
    """
    Open an isolated context, create a page in it and load the sample app.

    Contexts share no cookies or storage with each other.

    Args:
        browser: Shared browser
        url: Sample app URL
        timeout: Default wait timeout for the context, in milliseconds

    Returns:
        Tuple of (context, page)
    """
    context = browser.new_context(viewport={"width": 1280, "height": 720})
    context.set_default_timeout(timeout)
    page = context.new_page()
    page.goto(url)
    return context, page


def clear_storage(page: Page) -> None:
    """Clear session and local storage for the page's origin."""
    page.evaluate("() => window.sessionStorage.clear()")
    page.evaluate("() => window.localStorage.clear()")


def close_app_page(page: Page) -> None:
    clear_storage(page)
    page.close()


def reload_app(page: Page) -> None:
    """Reload the sample app and wait until it shows the signed-in user."""
    page.reload()
    page.wait_for_selector(WELCOME_SELECTOR)
