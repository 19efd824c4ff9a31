import logging
from typing import List

from expense_qa import locators
from expense_qa.actions.action_handler import ActionHandler
from expense_qa.browser.dialogs import DialogProbe
from expense_qa.config import SuiteConfig
from expense_qa.data import AuthState, Credentials, InteractionMode
from expense_qa.errors import AuthenticationError
from expense_qa.locators import by_id


class AuthWorkflow:
    """Register, log in, and make sure a page is reached while logged in.

    Authentication in the application is asynchronous and redirect driven, so
    a login that just returned may not have propagated its cookie by the time
    the next page loads. ``ensure_authenticated_and_on_target`` absorbs that
    with exactly one recovery login; it never loops.
    """

    def __init__(self, actions: ActionHandler, config: SuiteConfig, unauthenticated_markers: List[str] = None):
        self.actions = actions
        self.config = config
        self.mode: InteractionMode = config.interaction_mode
        self.unauthenticated_markers = unauthenticated_markers or list(locators.UNAUTHENTICATED_MARKERS)

    def _fill(self, field_id: str, value: str):
        self.actions.type_text(by_id(field_id), value, mode=self.mode, clear_before_type=True)

    def _revalidate(self, field_ids: List[str]):
        # Values set programmatically do not reach the form's validation listeners.
        if self.mode == InteractionMode.FORCE:
            self.actions.dispatch_input_events(field_ids)

    def _submit(self, selector: str):
        if self.mode == InteractionMode.FORCE:
            self.actions.click_robust(selector)
        else:
            self.actions.click(selector, mode=InteractionMode.REAL)

    def fill_registration_form(self, credentials: Credentials, confirm_password: str = None):
        self._fill(locators.REGISTER_NAME, credentials.name)
        self._fill(locators.REGISTER_EMAIL, credentials.email)
        self._fill(locators.REGISTER_PASSWORD, credentials.password)
        self._fill(locators.REGISTER_CONFIRM_PASSWORD, confirm_password or credentials.password)
        self._revalidate(locators.REGISTER_VALIDATED_FIELDS)
        self.actions.check(by_id(locators.REGISTER_TERMS), mode=self.mode)
        self.actions.wait(1)

    def register(self, credentials: Credentials, navigate: bool = True) -> DialogProbe:
        """Anonymous -> Registered. Submits the form and consumes the
        confirmation dialog if one appears; success is judged by the caller.

        Returns:
            DialogProbe: the dialog raised by the submission, if any
        """
        logging.info(f"Registering user {credentials.email}")
        if navigate:
            self.actions.navigate(self.config.url(self.config.pages.registration))
            self.actions.wait(2)
        self.fill_registration_form(credentials)
        self._submit(by_id(locators.REGISTER_SUBMIT))
        self.actions.wait(3)
        probe = self.actions.probe_alert()
        self.actions.wait(2)
        return probe

    def login(self, credentials: Credentials) -> DialogProbe:
        """Registered -> Authenticated on success; failure is detected
        downstream.

        Returns:
            DialogProbe: the dialog raised by the submission, if any
        """
        logging.info(f"Logging in as {credentials.email}")
        self.actions.navigate(self.config.url(self.config.pages.login))
        self.actions.wait(2)
        self._fill(locators.LOGIN_EMAIL, credentials.email)
        self._fill(locators.LOGIN_PASSWORD, credentials.password)
        self._revalidate(locators.LOGIN_VALIDATED_FIELDS)
        self._submit(by_id(locators.LOGIN_SUBMIT))
        self.actions.wait(3)
        probe = self.actions.probe_alert()
        self.actions.wait(2)
        return probe

    def is_unauthenticated(self) -> bool:
        """Probe the current page for signs that the session is not logged
        in."""
        if self.config.pages.login.strip("/") and self.config.pages.login.strip("/") in self.actions.current_url():
            return True
        source = self.actions.page_source()
        return any(marker in source for marker in self.unauthenticated_markers)

    def probe_state(self) -> AuthState:
        """Derive the authentication state from the live page. A logged-out
        page still showing the registration success message counts as
        Registered."""
        if not self.is_unauthenticated():
            return AuthState.AUTHENTICATED
        source = self.actions.page_source()
        if any(marker in source for marker in locators.REGISTRATION_SUCCESS_MARKERS):
            return AuthState.REGISTERED
        return AuthState.ANONYMOUS

    def _open_target(self, target_path: str):
        self.actions.navigate(self.config.url(target_path))
        self.actions.wait(2)
        self.actions.probe_alert()

    def ensure_authenticated_and_on_target(self, target_path: str, credentials: Credentials) -> int:
        """Navigate to target_path; if the page says we are not logged in,
        log in once more and navigate again.

        Returns:
            int: number of recovery logins performed (0 or 1)

        Raises:
            AuthenticationError: still unauthenticated after the recovery login
        """
        self._open_target(target_path)
        if not self.is_unauthenticated():
            return 0

        logging.warning(f"Session not authenticated on {target_path}; re-logging in as {credentials.email}")
        self.login(credentials)
        self._open_target(target_path)
        if self.is_unauthenticated():
            raise AuthenticationError(
                f"Still unauthenticated on {target_path} after one recovery login as {credentials.email}"
            )
        return 1

    def register_and_login(self, credentials: Credentials, target_path: str = None) -> int:
        """Fresh user end to end: register, log in, land on the target page
        (the tracker by default)."""
        self.register(credentials)
        self.login(credentials)
        return self.ensure_authenticated_and_on_target(target_path or self.config.pages.tracker, credentials)
