import logging
import threading
from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional, Protocol


@dataclass(frozen=True)
class DialogProbe:
    """Result of probing for a native dialog. Truthy when one was present."""

    present: bool
    text: str = ""
    dialog_type: str = ""

    def __bool__(self) -> bool:
        return self.present


NO_DIALOG = DialogProbe(present=False)


class DialogSource(Protocol):
    """Where ``probe_alert`` looks for native dialogs."""

    def take(self) -> Optional[DialogProbe]:
        """Return and consume the oldest pending dialog, or None."""
        ...


class PageDialogSource:
    """Captures native dialogs raised by a Playwright page.

    A dialog blocks the page's JavaScript until it is answered, so the
    listener answers it immediately (accept by default) and queues what it
    saw. ``take`` then hands the queued dialogs out one at a time.
    """

    def __init__(self, page, policy: str = "accept"):
        if policy not in ("accept", "dismiss"):
            raise ValueError(f"Invalid dialog policy '{policy}'. Allowed: ['accept', 'dismiss']")
        self.policy = policy
        self._pending: Deque[DialogProbe] = deque()
        self._lock = threading.Lock()
        self._page = page
        page.on("dialog", self._on_dialog)

    def _on_dialog(self, dialog):
        message = dialog.message
        dialog_type = dialog.type
        try:
            if self.policy == "accept":
                dialog.accept()
            else:
                dialog.dismiss()
        except Exception as e:
            # The page may have navigated away and closed the dialog already.
            logging.warning(f"Failed to {self.policy} {dialog_type} dialog '{message}': {e}")
        with self._lock:
            self._pending.append(DialogProbe(present=True, text=message, dialog_type=dialog_type))
        logging.debug(f"Captured {dialog_type} dialog: {message}")

    def take(self) -> Optional[DialogProbe]:
        with self._lock:
            if self._pending:
                return self._pending.popleft()
        return None

    def pending_count(self) -> int:
        with self._lock:
            return len(self._pending)

    def detach(self):
        try:
            self._page.remove_listener("dialog", self._on_dialog)
        except Exception as e:
            logging.debug(f"Dialog listener already gone: {e}")
