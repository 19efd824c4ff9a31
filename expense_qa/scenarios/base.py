from abc import ABC, abstractmethod
from typing import List
from urllib.parse import urlparse

from expense_qa.actions.action_handler import ActionHandler
from expense_qa.config import SuiteConfig
from expense_qa.data import ScenarioOutcome
from expense_qa.errors import AssertionViolation
from expense_qa.workflows.auth import AuthWorkflow
from expense_qa.workflows.expenses import ExpenseWorkflow


class ScenarioContext:
    """Everything a scenario body needs, bound to one live session."""

    def __init__(
        self,
        config: SuiteConfig,
        actions: ActionHandler,
        auth: AuthWorkflow,
        expenses: ExpenseWorkflow,
        log,
        notes: List[str] = None,
    ):
        self.config = config
        self.actions = actions
        self.auth = auth
        self.expenses = expenses
        self.log = log
        self.notes = notes if notes is not None else []

    def activate(self, selector: str):
        """Click a control the way the suite's interaction mode says to."""
        self.actions.click(selector, mode=self.config.interaction_mode)

    def note(self, message: str):
        self.notes.append(message)
        self.log.info(message)

    def on_page(self, path: str) -> bool:
        """Whether the browser is on exactly this page path."""
        return urlparse(self.actions.current_url()).path == path

    def tracker_url_fragment(self) -> str:
        return self.config.pages.tracker.strip("/").split(".")[0]


class Scenario(ABC):
    """One independently pass/fail business test case.

    ``run`` returns an outcome for expected UI variance and raises
    AssertionViolation (or lets a primitive error through) for a failure.
    """

    scenario_id = ""
    description = ""
    module = ""
    priority = 0

    @abstractmethod
    def run(self, ctx: ScenarioContext) -> ScenarioOutcome:
        pass

    def __repr__(self):
        return f"<{type(self).__name__} {self.scenario_id}>"


def expect(condition: bool, message: str):
    if not condition:
        raise AssertionViolation(message)
