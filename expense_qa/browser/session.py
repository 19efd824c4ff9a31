import logging
import uuid
from typing import Any, Callable, Dict, Optional

from expense_qa.browser.config import DEFAULT_CONFIG, resolve_browser_kind
from expense_qa.browser.dialogs import PageDialogSource
from expense_qa.browser.driver import Driver
from expense_qa.data import BrowserKind
from expense_qa.errors import SessionClosedError


class BrowserSession:
    """One managed browser for the duration of a single test.

    Use it as a context manager so the browser is released even when the
    test body raises::

        with BrowserSession(browser_config=cfg) as session:
            session.navigate_to(url)
    """

    def __init__(
        self,
        session_id: str = None,
        browser_config: Dict[str, Any] = None,
        driver_factory: Callable[[Dict[str, Any]], Driver] = None,
    ):
        self.session_id = session_id or str(uuid.uuid4())
        self.browser_config = {**DEFAULT_CONFIG, **(browser_config or {})}
        # Resolved up front so an unknown browser fails before anything launches.
        self.browser_kind: BrowserKind = resolve_browser_kind(self.browser_config.get("browser"))
        self.browser_config["browser"] = self.browser_kind.value
        self.driver: Optional[Driver] = None
        self.dialogs: Optional[PageDialogSource] = None
        self._driver_factory = driver_factory or Driver.getInstance
        self._is_closed = False

    @property
    def implicit_wait_ms(self) -> int:
        return self.browser_config["implicit_wait_ms"]

    @property
    def page_load_timeout_ms(self) -> int:
        return self.browser_config["page_load_timeout_ms"]

    def initialize(self):
        """Launch the browser and attach the dialog listener."""
        if self._is_closed:
            raise SessionClosedError("Browser session is closed")

        logging.debug(f"Initializing browser session {self.session_id} with config: {self.browser_config}")
        try:
            self.driver = self._driver_factory(self.browser_config)
            self.dialogs = PageDialogSource(self.driver.get_page(), policy=self.browser_config["dialog_policy"])
            logging.debug(f"Browser session {self.session_id} initialized successfully via Driver")
        except Exception as e:
            logging.error(f"Failed to initialize browser session {self.session_id}: {e}")
            self._cleanup()
            raise
        return self

    def navigate_to(self, url: str, **kwargs):
        """Navigate to URL and block until load or the page-load timeout."""
        page = self.get_page()
        logging.info(f"Session {self.session_id} navigating to: {url}")
        kwargs.setdefault("wait_until", "load")
        page.goto(url, **kwargs)

    def get_page(self):
        if self._is_closed or not self.driver:
            raise SessionClosedError("Browser session not initialized or closed")
        return self.driver.get_page()

    def is_closed(self) -> bool:
        return self._is_closed

    def _cleanup(self):
        try:
            if self.dialogs is not None:
                self.dialogs.detach()
            if self.driver and not self.driver.is_closed():
                self.driver.close_browser()
        except Exception as e:
            logging.error(f"Error during cleanup: {e}")
        finally:
            self.driver = None
            self.dialogs = None

    def close(self):
        """Close browser session. Safe to call more than once."""
        if self._is_closed:
            return
        logging.info(f"Closing browser session {self.session_id}")
        self._is_closed = True
        self._cleanup()
        logging.info(f"Browser session {self.session_id} closed")

    def __enter__(self):
        return self.initialize()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
