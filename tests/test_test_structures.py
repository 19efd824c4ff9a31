from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

from expense_qa.data import Expense, ExpenseCategory, generate_credentials, unique_token


def test_credentials_unique_within_same_millisecond():
    emails = {generate_credentials('expenseuser', 'ExpensePass123').email for _ in range(500)}
    assert len(emails) == 500


def test_credentials_unique_across_threads():
    with ThreadPoolExecutor(max_workers=8) as pool:
        tokens = list(pool.map(lambda _: unique_token(), range(400)))
    assert len(set(tokens)) == 400


def test_credentials_shape():
    credentials = generate_credentials('loginuser', 'ValidPass123', 'Login Test User')
    assert credentials.email.startswith('loginuser')
    assert credentials.email.endswith('@example.com')
    assert credentials.name == 'Login Test User'


def test_amount_text():
    assert Expense(name='Test Lunch', amount=Decimal('250.00')).amount_text == '250'
    assert Expense(name='Snack', amount=Decimal('12.50')).amount_text == '12.5'


def test_expense_defaults():
    expense = Expense(name='Taxi', amount=Decimal('150'), category=ExpenseCategory.TRANSPORT)
    assert expense.date.isoformat() == '2026-01-01'
    assert expense.category.value == 'Transport'
