from decimal import Decimal

from expense_qa import locators
from expense_qa.data import Credentials, Expense, ExpenseCategory, ScenarioOutcome, generate_credentials
from expense_qa.scenarios.base import Scenario, ScenarioContext, expect


def logged_in_user(ctx: ScenarioContext, prefix: str = "expenseuser") -> Credentials:
    """Register a fresh user and land on the tracker page as that user."""
    credentials = generate_credentials(prefix, "ExpensePass123", "Expense Test User")
    relogins = ctx.auth.register_and_login(credentials)
    if relogins:
        ctx.log.info("Session recovered with one additional login")
    ctx.log.passed("User logged in and on expense tracker page")
    return credentials


class CreateExpense(Scenario):
    scenario_id = "TC-EXP-01"
    description = "Create new expense with all valid details"
    module = "expense"
    priority = 7

    def run(self, ctx: ScenarioContext) -> ScenarioOutcome:
        logged_in_user(ctx)
        expense = Expense(name="Test Lunch", amount=Decimal("250"), category=ExpenseCategory.FOOD)
        probe = ctx.expenses.add_expense(expense)
        ctx.log.info(f"Entered expense: {expense.name}, amount {expense.amount_text}, category {expense.category.value}")
        if probe:
            ctx.log.info(f"Alert: {probe.text}")

        expect(
            ctx.expenses.list_contains_any(expense.name, expense.amount_text),
            "New expense does not appear in the expense list",
        )
        ctx.log.passed("Expense appears in the list")

        total_text = ctx.expenses.total_text()
        total = ctx.expenses.total_value()
        expect(total is not None and total != 0, f"Total was not updated: '{total_text}'")
        ctx.log.passed(f"Total amount updated: {total_text}")
        return ScenarioOutcome.PASSED


class ViewExpenses(Scenario):
    scenario_id = "TC-EXP-02"
    description = "View all expenses in the list"
    module = "expense"
    priority = 8

    def run(self, ctx: ScenarioContext) -> ScenarioOutcome:
        logged_in_user(ctx)
        ctx.expenses.add_expenses(
            [
                Expense(name="Coffee", amount=Decimal("50"), category=ExpenseCategory.FOOD),
                Expense(name="Bus Ticket", amount=Decimal("30"), category=ExpenseCategory.TRANSPORT),
                Expense(name="Movie", amount=Decimal("200"), category=ExpenseCategory.ENTERTAINMENT),
            ]
        )
        ctx.log.info("Added 3 test expenses")

        rows = ctx.expenses.row_count()
        expect(rows >= 3, f"Expected at least 3 expenses in the list, found {rows}")
        ctx.log.passed(f"All expenses are visible: {rows} rows")
        ctx.log.info(f"Total: {ctx.expenses.total_text()}")
        return ScenarioOutcome.PASSED


class UpdateExpense(Scenario):
    scenario_id = "TC-EXP-03"
    description = "Update existing expense"
    module = "expense"
    priority = 9

    def run(self, ctx: ScenarioContext) -> ScenarioOutcome:
        credentials = logged_in_user(ctx)
        ctx.expenses.add_expense(Expense(name="Grocery", amount=Decimal("500"), category=ExpenseCategory.FOOD))
        ctx.log.info("Added expense: Grocery, 500")

        edit = ctx.actions.find_control("edit")
        if edit is None:
            ctx.note("Edit control not found - update is not available in this build")
            return ScenarioOutcome.FEATURE_ABSENT
        ctx.activate(edit)
        ctx.actions.wait(2)
        ctx.log.passed("Clicked Edit control")

        ctx.expenses.update_fields("Grocery Updated", "600")
        ctx.log.info("Updated expense to: Grocery Updated, 600")

        if self._updated(ctx):
            ctx.log.passed("Expense updated successfully")
            return ScenarioOutcome.PASSED

        ctx.actions.wait(2)
        if self._updated(ctx):
            ctx.log.passed("Expense updated successfully after refresh delay")
            return ScenarioOutcome.PASSED

        ctx.auth.ensure_authenticated_and_on_target(ctx.config.pages.tracker, credentials)
        ctx.actions.wait(2)
        if self._updated(ctx):
            ctx.log.passed("Expense updated successfully (verified after page reload)")
            return ScenarioOutcome.PASSED

        ctx.note("Updated values not found in the list after reload; the UI may render them differently")
        return ScenarioOutcome.UNCONFIRMED

    @staticmethod
    def _updated(ctx: ScenarioContext) -> bool:
        return ctx.expenses.list_contains_any("Grocery Updated", "600")


class DeleteExpense(Scenario):
    scenario_id = "TC-EXP-04"
    description = "Delete an expense"
    module = "expense"
    priority = 10

    def run(self, ctx: ScenarioContext) -> ScenarioOutcome:
        logged_in_user(ctx)
        name = "To Be Deleted"
        ctx.expenses.add_expense(Expense(name=name, amount=Decimal("100"), category=ExpenseCategory.OTHER))
        ctx.log.info(f"Added expense to delete: {name}")

        rows_before = ctx.expenses.row_count()
        ctx.log.info(f"Expenses before deletion: {rows_before}")

        delete = ctx.actions.find_control("delete")
        if delete is None:
            ctx.note("Delete control not found - deletion is not available in this build")
            return ScenarioOutcome.FEATURE_ABSENT
        ctx.activate(delete)
        ctx.actions.wait(2)
        ctx.log.passed("Clicked Delete control")

        confirmation = ctx.actions.probe_alert()
        if confirmation:
            ctx.log.info(f"Confirmation accepted: {confirmation.text}")
            ctx.actions.wait(3)
            follow_up = ctx.actions.probe_alert()
            if follow_up:
                ctx.log.info(f"Deletion alert: {follow_up.text}")
        else:
            ctx.log.info("No confirmation dialog shown")
            ctx.actions.wait(3)

        rows_after = ctx.expenses.row_count()
        ctx.log.info(f"Expenses after deletion: {rows_after}")
        if rows_after < rows_before:
            ctx.log.passed("Expense deleted successfully")
            return ScenarioOutcome.PASSED
        expect(
            not ctx.expenses.list_contains_any(name),
            f"Expense not deleted: row count unchanged ({rows_before}) and '{name}' is still listed",
        )
        ctx.log.passed("Expense deleted successfully (verified by content)")
        return ScenarioOutcome.PASSED


class FilterByCategory(Scenario):
    scenario_id = "TC-EXP-05"
    description = "Filter expenses by category"
    module = "expense"
    priority = 11

    def run(self, ctx: ScenarioContext) -> ScenarioOutcome:
        logged_in_user(ctx)
        ctx.expenses.add_expenses(
            [
                Expense(name="Breakfast", amount=Decimal("100"), category=ExpenseCategory.FOOD),
                Expense(name="Taxi", amount=Decimal("150"), category=ExpenseCategory.TRANSPORT),
                Expense(name="Concert", amount=Decimal("500"), category=ExpenseCategory.ENTERTAINMENT),
            ]
        )
        ctx.log.info("Added expenses in multiple categories")
        rows_all = ctx.expenses.row_count()

        ctx.expenses.filter_by(ExpenseCategory.FOOD.value)
        ctx.log.info("Applied Food filter")

        rows_filtered = ctx.expenses.row_count()
        content = ctx.expenses.list_text()
        try:
            expect("Breakfast" in content, "Food expense missing after applying the Food filter")
            expect(
                "Taxi" not in content and "Concert" not in content,
                f"Food filter left {rows_filtered} of {rows_all} rows with other categories visible",
            )
            ctx.log.passed(f"Filter shows only Food expenses ({rows_filtered} of {rows_all} rows)")
        finally:
            ctx.expenses.filter_by("All")
            ctx.log.info("Reset filter to All categories")
        return ScenarioOutcome.PASSED


class MissingExpenseFields(Scenario):
    scenario_id = "TC-EXP-06"
    description = "Create expense with missing required fields"
    module = "expense"
    priority = 12

    def run(self, ctx: ScenarioContext) -> ScenarioOutcome:
        logged_in_user(ctx)
        rows = ctx.expenses.row_count()
        ctx.log.info(f"Initial expense count: {rows}")
        ctx.actions.scroll_into_view(locators.EXPENSE_SUBMIT)

        required = ctx.expenses.required_fields()
        expect(any(required.values()), f"No expense form field is marked required: {required}")
        ctx.log.passed("Form validation present")
        return ScenarioOutcome.PASSED
