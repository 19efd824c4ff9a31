import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional

from expense_qa import locators
from expense_qa.actions.action_handler import ActionHandler
from expense_qa.browser.dialogs import DialogProbe
from expense_qa.data import Expense, InteractionMode
from expense_qa.locators import by_id

_NUMBER = re.compile(r"-?\d[\d,]*(?:\.\d+)?")


def parse_amount(text: str) -> Optional[Decimal]:
    """First number in a display string such as ``₹1,250.00``; None when
    there is none."""
    match = _NUMBER.search(text or "")
    if not match:
        return None
    try:
        return Decimal(match.group(0).replace(",", ""))
    except InvalidOperation:
        return None


class ExpenseWorkflow:
    """Operations on the expense tracker page. The page must already be open
    and authenticated."""

    def __init__(self, actions: ActionHandler, mode: InteractionMode = InteractionMode.FORCE):
        self.actions = actions
        self.mode = mode

    def fill_form(self, expense: Expense):
        self.actions.type_text(by_id(locators.EXPENSE_NAME), expense.name, mode=self.mode, clear_before_type=True)
        self.actions.type_text(by_id(locators.EXPENSE_AMOUNT), expense.amount_text, mode=self.mode, clear_before_type=True)
        self.actions.select_option(by_id(locators.EXPENSE_CATEGORY), expense.category.value, mode=self.mode)
        # Date inputs take ISO values regardless of the browser's display locale.
        self.actions.type_text(by_id(locators.EXPENSE_DATE), expense.date.isoformat(), mode=InteractionMode.FORCE)

    def submit(self) -> DialogProbe:
        if self.mode == InteractionMode.FORCE:
            self.actions.click_robust(locators.EXPENSE_SUBMIT)
        else:
            self.actions.click(locators.EXPENSE_SUBMIT, mode=InteractionMode.REAL)
        self.actions.wait(2)
        probe = self.actions.probe_alert()
        if probe:
            self.actions.wait(1)
        return probe

    def add_expense(self, expense: Expense) -> DialogProbe:
        logging.info(f"Adding expense: {expense.name}, {expense.amount_text}, {expense.category.value}")
        self.fill_form(expense)
        return self.submit()

    def add_expenses(self, expenses: Iterable[Expense]):
        for expense in expenses:
            self.add_expense(expense)

    def update_fields(self, name: str, amount: str) -> DialogProbe:
        """Overwrite name and amount of the expense currently loaded into the
        form (after an edit control was clicked) and submit."""
        self.actions.type_text(by_id(locators.EXPENSE_NAME), name, mode=self.mode, clear_before_type=True)
        self.actions.type_text(by_id(locators.EXPENSE_AMOUNT), amount, mode=self.mode, clear_before_type=True)
        probe = self.submit()
        self.actions.wait(1)
        return probe

    def list_text(self) -> str:
        return self.actions.text_of(by_id(locators.EXPENSE_LIST))

    def row_count(self) -> int:
        self.actions.text_of(by_id(locators.EXPENSE_LIST))  # the list itself is required
        return self.actions.count(locators.EXPENSE_ROWS)

    def list_contains_any(self, *needles: str) -> bool:
        content = self.list_text()
        return any(needle in content for needle in needles)

    def total_text(self) -> str:
        return self.actions.text_of(by_id(locators.TOTAL_AMOUNT)).strip()

    def total_value(self) -> Optional[Decimal]:
        return parse_amount(self.total_text())

    def filter_by(self, category: str):
        selector = by_id(locators.FILTER_CATEGORY)
        self.actions.scroll_into_view(selector)
        self.actions.select_option(selector, category, mode=self.mode)
        self.actions.wait(2)

    def required_fields(self) -> dict:
        """Which expense form fields carry the HTML ``required`` attribute."""
        fields = {
            "name": locators.EXPENSE_NAME,
            "amount": locators.EXPENSE_AMOUNT,
            "date": locators.EXPENSE_DATE,
        }
        return {key: self.actions.get_attribute(by_id(field_id), "required") is not None for key, field_id in fields.items()}

    def has_budget_controls(self) -> bool:
        return self.actions.is_present(by_id(locators.BUDGET_INPUT)) and self.actions.is_present(by_id(locators.BUDGET_SUBMIT))

    def set_budget(self, amount: str) -> DialogProbe:
        logging.info(f"Setting monthly budget: {amount}")
        self.actions.type_text(by_id(locators.BUDGET_INPUT), amount, mode=self.mode, clear_before_type=True)
        if self.mode == InteractionMode.FORCE:
            self.actions.dispatch_input_events([locators.BUDGET_INPUT])
            self.actions.click_robust(by_id(locators.BUDGET_SUBMIT))
        else:
            self.actions.click(by_id(locators.BUDGET_SUBMIT), mode=InteractionMode.REAL)
        self.actions.wait(2)
        return self.actions.probe_alert()

    def budget_value(self) -> Optional[Decimal]:
        if not self.actions.is_present(by_id(locators.BUDGET_DISPLAY)):
            return None
        return parse_amount(self.actions.text_of(by_id(locators.BUDGET_DISPLAY)))
