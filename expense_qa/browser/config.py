from typing import Union

from expense_qa.data import BrowserKind
from expense_qa.errors import UnsupportedBrowser

DEFAULT_CONFIG = {
    "browser": BrowserKind.CHROMIUM.value,
    "headless": True,
    "viewport": {"width": 1920, "height": 1080},
    "language": "en-US",
    "implicit_wait_ms": 10000,
    "page_load_timeout_ms": 30000,
    "dialog_policy": "accept",
}

BROWSER_ALIASES = {
    "chrome": BrowserKind.CHROMIUM,
    "chromium": BrowserKind.CHROMIUM,
    "edge": BrowserKind.CHROMIUM,
    "firefox": BrowserKind.FIREFOX,
    "gecko": BrowserKind.FIREFOX,
}


def resolve_browser_kind(name: Union[str, BrowserKind, None]) -> BrowserKind:
    """Map a user supplied browser identifier to a BrowserKind.

    Args:
        name: identifier such as ``chrome`` or ``firefox``; None means the default

    Returns:
        BrowserKind

    Raises:
        UnsupportedBrowser: the identifier is not recognised
    """
    if name is None or name == "":
        return BrowserKind(DEFAULT_CONFIG["browser"])
    if isinstance(name, BrowserKind):
        return name
    kind = BROWSER_ALIASES.get(str(name).strip().lower())
    if kind is None:
        raise UnsupportedBrowser(name)
    return kind
