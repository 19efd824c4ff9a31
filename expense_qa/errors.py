"""Exceptions raised by the harness.

Two outcomes of the error taxonomy are deliberately not exceptions: an absent
dialog is the falsy ``DialogProbe`` returned by ``ActionHandler.probe_alert``,
and content that could not be confirmed is the ``UNCONFIRMED`` scenario
outcome, which the runner maps through the soft-variance policy.
"""


class QAError(Exception):
    """Base exception for all harness failures."""

    pass


class ElementNotFound(QAError):
    """A required control did not appear within the implicit-wait window."""

    def __init__(self, selector: str, detail: str = ""):
        self.selector = selector
        message = f"Element not found: {selector}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class UnsupportedBrowser(QAError):
    """The requested browser identifier is not recognised."""

    def __init__(self, name):
        self.name = name
        super().__init__(f"Browser not supported: {name}")


class AssertionViolation(QAError):
    """A scenario's expected end state did not hold."""

    pass


class AuthenticationError(AssertionViolation):
    """The session is still unauthenticated after the single recovery
    login."""

    pass


class SessionClosedError(QAError):
    """A primitive was used on a session that is not open."""

    pass
