"""Field ids, selectors and page markers of the Expense Tracker UI.

These identifiers are a contract with the application under test. A renamed id
is fixed here, not in the workflows.
"""

# ── Registration form ────────────────────────────────────────────────────────

REGISTER_NAME = "name"
REGISTER_EMAIL = "registerEmail"
REGISTER_PASSWORD = "registerPassword"
REGISTER_CONFIRM_PASSWORD = "confirmPassword"
REGISTER_TERMS = "terms"
REGISTER_SUBMIT = "registerBtn"

REGISTER_VALIDATED_FIELDS = [REGISTER_NAME, REGISTER_EMAIL, REGISTER_PASSWORD, REGISTER_CONFIRM_PASSWORD]

# ── Login form ───────────────────────────────────────────────────────────────

LOGIN_EMAIL = "email"
LOGIN_PASSWORD = "password"
LOGIN_SUBMIT = "loginBtn"

LOGIN_VALIDATED_FIELDS = [LOGIN_EMAIL, LOGIN_PASSWORD]

# ── Expense tracker ──────────────────────────────────────────────────────────

EXPENSE_NAME = "expense-name"
EXPENSE_AMOUNT = "expense-amount"
EXPENSE_CATEGORY = "expense-category"
EXPENSE_DATE = "expense-date"
EXPENSE_SUBMIT = "#expense-form button[type='submit']"
EXPENSE_LIST = "expense-list"
EXPENSE_ROWS = "#expense-list tr"
TOTAL_AMOUNT = "total-amount"
FILTER_CATEGORY = "filter-category"

BUDGET_INPUT = "budget-input"
BUDGET_SUBMIT = "set-budget-btn"
BUDGET_DISPLAY = "budget-display"

# ── Page content markers ─────────────────────────────────────────────────────

HOME_REGISTER_LINK = "text=Register"

UNAUTHENTICATED_MARKERS = ["Unauthorized access", "Please log in"]
DUPLICATE_EMAIL_MARKERS = ["already registered", "already exists", "duplicate"]
LOGIN_ERROR_MARKERS = ["Invalid", "incorrect", "not found"]
REGISTRATION_SUCCESS_MARKERS = ["successfully", "Welcome"]


def by_id(element_id: str) -> str:
    """CSS selector for an element id."""
    return f"#{element_id}"
