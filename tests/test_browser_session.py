import pytest

from expense_qa.browser import BrowserSession, Driver, resolve_browser_kind
from expense_qa.data import BrowserKind
from expense_qa.errors import SessionClosedError, UnsupportedBrowser
from tests.fakes import FakePage


class FakeDriver:
    def __init__(self, browser_config):
        self.config = browser_config
        self.page = FakePage()
        self.closed = False

    def get_page(self):
        return self.page

    def is_closed(self):
        return self.closed

    def close_browser(self):
        self.closed = True


@pytest.mark.parametrize(
    'name, expected',
    [
        (None, BrowserKind.CHROMIUM),
        ('chrome', BrowserKind.CHROMIUM),
        ('Chromium', BrowserKind.CHROMIUM),
        ('firefox', BrowserKind.FIREFOX),
        (BrowserKind.FIREFOX, BrowserKind.FIREFOX),
    ],
)
def test_resolve_browser_kind(name, expected):
    assert resolve_browser_kind(name) == expected


def test_unknown_browser_fails_before_launch():
    launched = []
    with pytest.raises(UnsupportedBrowser):
        BrowserSession(browser_config={'browser': 'netscape'}, driver_factory=launched.append)
    assert launched == []


def test_session_releases_driver_when_body_raises():
    drivers = []

    def factory(cfg):
        drivers.append(FakeDriver(cfg))
        return drivers[-1]

    session = BrowserSession(browser_config={'browser': 'chrome'}, driver_factory=factory)
    with pytest.raises(RuntimeError):
        with session:
            session.navigate_to('http://app.test/')
            raise RuntimeError('boom')

    assert drivers[0].closed
    assert drivers[0].config['browser'] == 'chromium'
    assert drivers[0].page.visits == ['http://app.test/']
    assert session.is_closed()
    with pytest.raises(SessionClosedError):
        session.get_page()


def test_session_attaches_dialog_listener():
    driver = FakeDriver({})
    with BrowserSession(driver_factory=lambda cfg: driver) as session:
        assert session.dialogs is not None
        assert len(driver.page.listeners['dialog']) == 1
    assert driver.page.listeners['dialog'] == []


def test_close_is_idempotent():
    driver = FakeDriver({})
    session = BrowserSession(driver_factory=lambda cfg: driver).initialize()
    session.close()
    session.close()
    assert driver.closed


def test_timeouts_come_from_config():
    session = BrowserSession(browser_config={'implicit_wait_ms': 5000}, driver_factory=FakeDriver)
    assert session.implicit_wait_ms == 5000
    assert session.page_load_timeout_ms == 30000


def test_chromium_launch_args_carry_window_options():
    args = Driver.launch_args(BrowserKind.CHROMIUM, {'viewport': {'width': 1920, 'height': 1080}})
    assert '--start-maximized' in args
    assert '--disable-notifications' in args
    assert Driver.launch_args(BrowserKind.FIREFOX, {'viewport': {'width': 1920, 'height': 1080}}) == [
        '--width=1920',
        '--height=1080',
    ]


class CrashedBrowser:
    def close(self):
        raise RuntimeError('Target page, context or browser has been closed')


class StoppablePlaywright:
    def __init__(self):
        self.stopped = False

    def stop(self):
        self.stopped = True


def test_playwright_stops_when_browser_close_fails():
    driver = Driver(browser_config={})
    playwright = StoppablePlaywright()
    driver.browser, driver.playwright, driver._is_closed = CrashedBrowser(), playwright, False

    with pytest.raises(RuntimeError):
        driver.close_browser()

    assert playwright.stopped
    assert driver.is_closed()
    assert driver.playwright is None
