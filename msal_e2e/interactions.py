"""UI sequences for signing in to the sample app and acquiring tokens."""

from enum import Enum

from playwright.sync_api import Page

from msal_e2e.browser import WELCOME_SELECTOR
from msal_e2e.screenshot import Screenshot

SIGN_IN_SELECTOR = "#SignIn"
LOGIN_REDIRECT_SELECTOR = "#loginRedirect"
LOGIN_POPUP_SELECTOR = "#loginPopup"
ACQUIRE_TOKEN_REDIRECT_SELECTOR = "#acquireTokenRedirect"
ACQUIRE_TOKEN_POPUP_SELECTOR = "#acquireTokenPopup"
ACQUIRE_TOKEN_SILENT_SELECTOR = "#acquireTokenSilent"
SCOPES_ACQUIRED_SELECTOR = "#scopes-acquired"

# Identity provider sign-in page
USERNAME_INPUT = "#i0116"
PASSWORD_INPUT = "#i0118"
SUBMIT_BUTTON = "#idSIButton9"
FORGOT_PASSWORD_LINK = "#idA_PWD_ForgotPassword"


class FlowState(Enum):
    IDLE = "idle"
    CLICKED_LOGIN = "clicked_login"
    PROVIDER_CREDENTIAL_PAGE = "provider_credential_page"
    SUBMITTED_CREDENTIALS = "submitted_credentials"
    RETURNED_TO_APP = "returned_to_app"


class PopupWindow:
    """A popup page whose open/closed state is tracked apart from its opener."""

    def __init__(self, page: Page):
        self.page = page
        self.closed = page.is_closed()
        page.on("close", self._on_close)

    def _on_close(self, _page: Page) -> None:
        self.closed = True

    def wait_for_close(self) -> None:
        if not self.closed and not self.page.is_closed():
            self.page.wait_for_event("close")
        self.closed = True


def click_login_redirect(screenshot: Screenshot, page: Page) -> None:
    page.wait_for_selector(SIGN_IN_SELECTOR)
    screenshot.take_screenshot(page, "samplePageInit")
    page.click(SIGN_IN_SELECTOR)
    page.click(LOGIN_REDIRECT_SELECTOR)


def click_login_popup(screenshot: Screenshot, page: Page) -> PopupWindow:
    """Open the sign-in popup and return it for credential entry."""
    page.wait_for_selector(SIGN_IN_SELECTOR)
    screenshot.take_screenshot(page, "samplePageInit")
    page.click(SIGN_IN_SELECTOR)
    with page.expect_popup() as popup_info:
        page.click(LOGIN_POPUP_SELECTOR)
    return PopupWindow(popup_info.value)


def enter_credentials(page: Page, screenshot: Screenshot, username: str, password: str) -> None:
    """
    Fill the provider's two-step sign-in form.

    The page may be the app page (redirect flow) or the popup (popup flow).
    """
    page.wait_for_load_state("networkidle")
    page.wait_for_selector(USERNAME_INPUT)
    screenshot.take_screenshot(page, "loginPage")
    page.fill(USERNAME_INPUT, username)
    page.click(SUBMIT_BUTTON)
    page.wait_for_selector(FORGOT_PASSWORD_LINK)
    screenshot.take_screenshot(page, "pwdInputPage")
    page.fill(PASSWORD_INPUT, password)
    page.click(SUBMIT_BUTTON)


def wait_for_return_to_app(
    screenshot: Screenshot,
    page: Page,
    popup: PopupWindow | None = None,
) -> None:
    """Wait until the app shows the signed-in user, after the popup closes if any."""
    if popup is not None:
        popup.wait_for_close()
        assert popup.page.is_closed(), "Sign-in popup is still open"
    page.wait_for_selector(WELCOME_SELECTOR)
    screenshot.take_screenshot(page, "welcomeMessageShown")


def acquire_token(screenshot: Screenshot, page: Page, button: str, shot_name: str) -> None:
    """Click a token acquisition button and wait for the app to report scopes."""
    page.wait_for_selector(button)
    page.click(button)
    page.wait_for_selector(SCOPES_ACQUIRED_SELECTOR)
    screenshot.take_screenshot(page, shot_name)


class LoginFlow:
    """
    Runs a redirect or popup sign-in step by step and records where it is.

    Steps must be called in order: click_login, enter_credentials,
    wait_for_return. Calling one out of turn raises RuntimeError.
    """

    def __init__(self, page: Page, screenshot: Screenshot, use_popup: bool = False):
        self.page = page
        self.screenshot = screenshot
        self.use_popup = use_popup
        self.popup: PopupWindow | None = None
        self.state = FlowState.IDLE

    def _expect(self, state: FlowState) -> None:
        if self.state is not state:
            raise RuntimeError(f"Login flow is {self.state.value}, expected {state.value}")

    @property
    def credential_page(self) -> Page:
        """The page that shows the provider's sign-in form."""
        return self.popup.page if self.popup is not None else self.page

    def click_login(self) -> None:
        self._expect(FlowState.IDLE)
        if self.use_popup:
            self.popup = click_login_popup(self.screenshot, self.page)
        else:
            click_login_redirect(self.screenshot, self.page)
        self.state = FlowState.CLICKED_LOGIN

    def enter_credentials(self, username: str, password: str) -> None:
        self._expect(FlowState.CLICKED_LOGIN)
        self.state = FlowState.PROVIDER_CREDENTIAL_PAGE
        enter_credentials(self.credential_page, self.screenshot, username, password)
        self.state = FlowState.SUBMITTED_CREDENTIALS

    def wait_for_return(self) -> None:
        self._expect(FlowState.SUBMITTED_CREDENTIALS)
        wait_for_return_to_app(self.screenshot, self.page, self.popup)
        self.state = FlowState.RETURNED_TO_APP

    def run(self, username: str, password: str) -> None:
        """Run every remaining step of the flow."""
        self.click_login()
        self.enter_credentials(username, password)
        self.wait_for_return()
