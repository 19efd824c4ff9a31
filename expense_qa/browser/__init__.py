from .config import DEFAULT_CONFIG, resolve_browser_kind
from .dialogs import NO_DIALOG, DialogProbe, DialogSource, PageDialogSource
from .driver import Driver
from .session import BrowserSession

__all__ = [
    "DEFAULT_CONFIG",
    "BrowserSession",
    "DialogProbe",
    "DialogSource",
    "Driver",
    "NO_DIALOG",
    "PageDialogSource",
    "resolve_browser_kind",
]
