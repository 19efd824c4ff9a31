"""In-memory stand-ins for the Playwright page and friends."""

from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from expense_qa.browser.dialogs import DialogProbe


class FakeDialog:
    def __init__(self, message, dialog_type="alert"):
        self.message = message
        self.type = dialog_type
        self.accepted = False
        self.dismissed = False

    def accept(self):
        self.accepted = True

    def dismiss(self):
        self.dismissed = True


class FakeLocator:
    def __init__(self, page, selector):
        self.page = page
        self.selector = selector

    @property
    def first(self):
        return self

    def _element(self):
        return self.page.elements.get(self.selector, {})

    def wait_for(self, state="visible"):
        if self.selector not in self.page.elements:
            raise PlaywrightTimeoutError(f"Timeout waiting for {self.selector}")

    def count(self):
        if self.selector in self.page.counts:
            return self.page.counts[self.selector]
        return 1 if self.selector in self.page.elements else 0

    def inner_text(self):
        return self._element().get("text", "")

    def get_attribute(self, name):
        return self._element().get("attrs", {}).get(name)

    def _do(self, action, value=None, **kwargs):
        self.page.actions.append((action, self.selector, value, kwargs))
        handler = self.page.handlers.get((action, self.selector))
        if handler:
            handler(self.page)

    def fill(self, text, force=False):
        self._do("fill", text, force=force)

    def clear(self):
        self._do("clear")

    def click(self):
        self._do("click")

    def press_sequentially(self, text):
        self._do("type", text)

    def check(self):
        self._do("check")

    def select_option(self, value, force=False):
        self._do("select", value, force=force)

    def scroll_into_view_if_needed(self):
        self._do("scroll")

    def evaluate(self, script, arg=None):
        if "click()" in script:
            self._do("js_click")
        else:
            self._do("js_scroll")


class FakePage:
    """Minimal sync Page: selectors map to element dicts with ``text`` and
    ``attrs``; ``handlers`` map (action, selector) to side effects."""

    def __init__(self, elements=None, url="about:blank", html=""):
        self.elements = dict(elements or {})
        self.counts = {}
        self.handlers = {}
        self.actions = []
        self.waits = []
        self.visits = []
        self.url = url
        self.html = html
        self.listeners = {}
        self.evaluated = []

    def locator(self, selector):
        return FakeLocator(self, selector)

    def goto(self, url, wait_until="load"):
        self.visits.append(url)
        self.url = url
        handler = self.handlers.get(("goto", url))
        if handler:
            handler(self)

    def content(self):
        return self.html

    def evaluate(self, script, arg=None):
        self.evaluated.append((script, arg))
        return len([a for a in (arg or []) if f"#{a}" in self.elements])

    def wait_for_timeout(self, ms):
        self.waits.append(ms)

    def on(self, event, callback):
        self.listeners.setdefault(event, []).append(callback)

    def remove_listener(self, event, callback):
        self.listeners.get(event, []).remove(callback)

    def raise_dialog(self, dialog):
        for callback in self.listeners.get("dialog", []):
            callback(dialog)

    def clicked(self, selector):
        return any(a[0] in ("click", "js_click") and a[1] == selector for a in self.actions)


class StubDialogSource:
    def __init__(self, *messages):
        self.pending = [DialogProbe(present=True, text=m, dialog_type="alert") for m in messages]

    def take(self):
        return self.pending.pop(0) if self.pending else None


class RecordingLog:
    """ScenarioLog look-alike that keeps (status, message) pairs."""

    def __init__(self):
        self.events = []

    def info(self, message):
        self.events.append(("INFO", message))

    def passed(self, message):
        self.events.append(("PASS", message))

    def failed(self, message):
        self.events.append(("FAIL", message))

    def warning(self, message):
        self.events.append(("WARNING", message))

    def inconclusive(self, message):
        self.events.append(("INCONCLUSIVE", message))


class FakeSession:
    """Context-managed session over a FakePage."""

    instances = []

    def __init__(self, page=None, dialogs=None, fail_on_enter=None):
        self.page = page or FakePage()
        self.dialogs = dialogs
        self.fail_on_enter = fail_on_enter
        self.closed = False
        FakeSession.instances.append(self)

    def get_page(self):
        return self.page

    def __enter__(self):
        if self.fail_on_enter is not None:
            raise self.fail_on_enter
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.closed = True
