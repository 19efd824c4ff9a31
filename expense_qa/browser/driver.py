import logging

from playwright.sync_api import sync_playwright

from expense_qa.browser.config import resolve_browser_kind
from expense_qa.data import BrowserKind


class Driver:
    """Owns one Playwright instance, one browser and one page."""

    @staticmethod
    def getInstance(browser_config, *args, **kwargs):
        """Creates a new Driver and launches its browser.

        Args:
            browser_config (dict): Browser configuration options.
        """
        logging.info(f"Driver.getInstance called with browser_config: {browser_config}")
        driver = Driver(browser_config=browser_config)
        driver.create_browser(browser_config=browser_config)
        return driver

    def __init__(self, browser_config=None, *args, **kwargs):
        self._is_closed = True
        self.page = None
        self.browser = None
        self.context = None
        self.playwright = None
        self.config = browser_config

    def is_closed(self):
        """Check if the browser instance is closed."""
        return getattr(self, "_is_closed", True)

    @staticmethod
    def launch_args(kind: BrowserKind, browser_config) -> list:
        viewport = browser_config["viewport"]
        if kind == BrowserKind.CHROMIUM:
            return [
                "--start-maximized",
                "--disable-notifications",
                "--disable-dev-shm-usage",  # Mitigate shared memory issues in Docker
                "--no-sandbox",
                f"--window-size={viewport['width']},{viewport['height']}",
            ]
        return [f"--width={viewport['width']}", f"--height={viewport['height']}"]

    def create_browser(self, browser_config):
        """Creates a new browser instance and sets up the page.

        Args:
            browser_config (dict): Browser configuration containing:
                - browser (str): chromium-like or gecko-like identifier
                - headless (bool): Whether to run browser in headless mode
                - viewport (dict): Browser viewport width/height
                - implicit_wait_ms (int): element lookup timeout
                - page_load_timeout_ms (int): navigation timeout

        Returns:
            Page
        """
        kind = resolve_browser_kind(browser_config.get("browser"))
        try:
            self.playwright = sync_playwright().start()
            launcher = self.playwright.chromium if kind == BrowserKind.CHROMIUM else self.playwright.firefox
            self.browser = launcher.launch(
                headless=browser_config["headless"],
                args=self.launch_args(kind, browser_config),
            )
            self.context = self.browser.new_context(
                viewport={"width": browser_config["viewport"]["width"], "height": browser_config["viewport"]["height"]},
                locale=browser_config.get("language", "en-US"),
            )
            # Session-level timeouts bound every wait; primitives define none of their own.
            self.context.set_default_timeout(browser_config["implicit_wait_ms"])
            self.context.set_default_navigation_timeout(browser_config["page_load_timeout_ms"])
            self.page = self.context.new_page()
            self._is_closed = False
            self.config = {**browser_config, "browser": kind.value}

            logging.info(f"✓ {kind.value} driver initialized successfully")
            return self.page

        except Exception:
            logging.error("Failed to create browser instance.", exc_info=True)
            try:
                self.close_browser()
            except Exception as cleanup_error:
                logging.warning(f"Cleanup after failed launch also failed: {cleanup_error}")
            raise

    def get_page(self):
        """Returns the current page instance."""
        return self.page

    def close_browser(self):
        """Closes the browser instance and stops Playwright."""
        try:
            try:
                if self.browser is not None:
                    self.browser.close()
            finally:
                # The Playwright driver process must stop even if the browser is already gone.
                if self.playwright is not None:
                    self.playwright.stop()
            if not self._is_closed:
                logging.info("✓ Browser closed successfully")
        except Exception:
            logging.error("Failed to close browser instance.", exc_info=True)
            raise
        finally:
            self._is_closed = True
            self.browser = None
            self.context = None
            self.page = None
            self.playwright = None
