import logging
import time
from typing import Iterable, Optional

from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from expense_qa.actions.control_finder import ControlFinder
from expense_qa.browser.dialogs import NO_DIALOG, DialogProbe, DialogSource
from expense_qa.data import InteractionMode
from expense_qa.errors import ElementNotFound, SessionClosedError

DISPATCH_INPUT_JS = """
(ids) => {
    let fired = 0;
    ids.forEach((id) => {
        const element = document.getElementById(id);
        if (element) {
            element.dispatchEvent(new Event('input', { bubbles: true }));
            fired++;
        }
    });
    return fired;
}
"""

SCROLL_INTO_VIEW_JS = "(el) => el.scrollIntoView(true)"
SYNTHETIC_CLICK_JS = "(el) => el.click()"

# Yield to Playwright's event loop so pending dialog events reach the listener.
EVENT_DISPATCH_YIELD_SECONDS = 0.05


class ActionHandler:
    """Interaction primitives over one page.

    Element lookups wait for the session's implicit-wait window and raise
    ElementNotFound when it expires. Optional lookups (``is_present``,
    ``count``, ``find_control``) and ``probe_alert`` never raise for absence.
    """

    def __init__(self, step_log=None, control_finder: ControlFinder = None, settle_seconds: float = 1):
        self.page = None
        self.dialogs: Optional[DialogSource] = None
        self.step_log = step_log
        self.control_finder = control_finder or ControlFinder()
        self.settle_seconds = settle_seconds

    def initialize(self, page=None, dialogs: DialogSource = None, session=None):
        """Bind to a page, either directly or through a BrowserSession."""
        if session is not None:
            page = session.get_page()
            dialogs = session.dialogs
        self.page = page
        self.dialogs = dialogs
        return self

    def _page(self):
        if self.page is None:
            raise SessionClosedError("ActionHandler is not bound to a page")
        return self.page

    def _record(self, message: str):
        if self.step_log is not None:
            self.step_log.info(message)

    def _require(self, selector: str):
        locator = self._page().locator(selector).first
        try:
            locator.wait_for(state="attached")
        except PlaywrightTimeoutError as e:
            raise ElementNotFound(selector, "implicit wait expired") from e
        return locator

    # ── navigation ──────────────────────────────────────────────────────────

    def navigate(self, url: str):
        """Load url and block until it finishes loading or the page-load
        timeout expires."""
        self._page().goto(url, wait_until="load")
        logging.info(f"Navigated to: {url}")
        self._record(f"Navigated to: {url}")

    def current_url(self) -> str:
        return self._page().url

    def page_source(self) -> str:
        return self._page().content()

    # ── lookups ─────────────────────────────────────────────────────────────

    def is_present(self, selector: str) -> bool:
        return self._page().locator(selector).count() > 0

    def count(self, selector: str) -> int:
        return self._page().locator(selector).count()

    def text_of(self, selector: str) -> str:
        return self._require(selector).inner_text()

    def get_attribute(self, selector: str, name: str) -> Optional[str]:
        return self._require(selector).get_attribute(name)

    def find_control(self, role: str) -> Optional[str]:
        """Selector of a control that performs ``role``, or None when the page
        has no such control."""
        return self.control_finder.find(self._page(), role)

    # ── input ───────────────────────────────────────────────────────────────

    def type_text(self, selector: str, text: str, mode: InteractionMode = InteractionMode.REAL, clear_before_type: bool = False):
        """Types text into the element.

        FORCE sets the value programmatically (pair it with
        ``dispatch_input_events``); REAL focuses the element and sends
        keystrokes.
        """
        locator = self._require(selector)
        logging.debug(f"Typing into {selector} (mode={mode.value}, clear_before_type={clear_before_type})")
        if mode == InteractionMode.FORCE:
            locator.fill(text, force=True)
            return
        if clear_before_type:
            locator.clear()
        locator.click()
        locator.press_sequentially(text)

    def select_option(self, selector: str, value: str, mode: InteractionMode = InteractionMode.REAL):
        self._require(selector).select_option(value, force=mode == InteractionMode.FORCE)

    def dispatch_input_events(self, field_ids: Iterable[str]) -> int:
        """Fire a bubbling ``input`` event on each field id so client-side
        validation recomputes. Ids missing from the page are skipped.

        Returns:
            int: number of fields that received the event
        """
        field_ids = list(field_ids)
        fired = self._page().evaluate(DISPATCH_INPUT_JS, field_ids)
        logging.debug(f"Dispatched input events on {fired}/{len(field_ids)} fields: {field_ids}")
        self.wait(self.settle_seconds)
        return fired

    # ── clicking ────────────────────────────────────────────────────────────

    def scroll_into_view(self, selector: str, mode: InteractionMode = InteractionMode.FORCE):
        locator = self._require(selector)
        if mode == InteractionMode.FORCE:
            locator.evaluate(SCROLL_INTO_VIEW_JS)
        else:
            locator.scroll_into_view_if_needed()
        self.wait(self.settle_seconds)
        return locator

    def click(self, selector: str, mode: InteractionMode = InteractionMode.REAL):
        """Click an element.

        REAL waits for Playwright's actionability checks (visible, enabled,
        not covered). FORCE scrolls the element into view and calls
        ``element.click()`` in the page, which treats the element as
        actionable even when it is obstructed; it therefore cannot detect a
        control that a user could not actually click.
        """
        if mode == InteractionMode.FORCE:
            locator = self.scroll_into_view(selector, mode=InteractionMode.FORCE)
            locator.evaluate(SYNTHETIC_CLICK_JS)
        else:
            self._require(selector).click()
        logging.debug(f"Clicked {selector} (mode={mode.value})")

    def click_robust(self, selector: str):
        """Force-mode click: scroll into view, then synthetic dispatch."""
        self.click(selector, mode=InteractionMode.FORCE)

    def check(self, selector: str, mode: InteractionMode = InteractionMode.REAL):
        """Tick a checkbox. FORCE toggles it with a synthetic click."""
        if mode == InteractionMode.FORCE:
            self.click_robust(selector)
        else:
            self._require(selector).check()

    # ── dialogs & timing ────────────────────────────────────────────────────

    def probe_alert(self) -> DialogProbe:
        """Consume a native dialog if one was raised.

        Returns:
            DialogProbe: truthy with the dialog text when one was present,
            falsy (NO_DIALOG) otherwise. Absence is never an error.
        """
        if self.dialogs is None:
            return NO_DIALOG
        self.wait(EVENT_DISPATCH_YIELD_SECONDS)
        probe = self.dialogs.take()
        if probe is None:
            return NO_DIALOG
        logging.info(f"Alert detected: {probe.text}")
        return probe

    def wait(self, seconds: float):
        """Fixed-delay yield point.

        Goes through the page when bound so Playwright keeps dispatching
        events (dialogs) while we wait.
        """
        if seconds <= 0:
            return
        logging.debug(f"wait for {seconds} seconds")
        if self.page is not None:
            self.page.wait_for_timeout(seconds * 1000)
        else:
            time.sleep(seconds)
