from decimal import Decimal

import pytest

from expense_qa.actions import ActionHandler
from expense_qa.data import Expense, ExpenseCategory, InteractionMode
from expense_qa.errors import ElementNotFound
from expense_qa.workflows import ExpenseWorkflow, parse_amount
from tests.fakes import FakePage, StubDialogSource

FORM = {
    '#expense-name': {'attrs': {'required': ''}},
    '#expense-amount': {'attrs': {'required': ''}},
    '#expense-category': {},
    '#expense-date': {},
    "#expense-form button[type='submit']": {},
    '#expense-list': {'text': 'Test Lunch Food 250.00 2026-01-01'},
    '#total-amount': {'text': '₹1,250.00'},
    '#filter-category': {},
}


def workflow(elements=None, dialogs=None, mode=InteractionMode.FORCE):
    page = FakePage(elements if elements is not None else FORM)
    actions = ActionHandler(settle_seconds=0).initialize(page=page, dialogs=dialogs or StubDialogSource())
    return ExpenseWorkflow(actions, mode), page


@pytest.mark.parametrize(
    'text, expected',
    [
        ('₹250.00', Decimal('250.00')),
        ('Total: ₹1,250.50', Decimal('1250.50')),
        ('₹0.00', Decimal('0.00')),
        ('-', None),
        ('', None),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


def test_add_expense_fills_and_submits():
    expenses, page = workflow(dialogs=StubDialogSource('Expense added successfully!'))
    probe = expenses.add_expense(Expense(name='Test Lunch', amount=Decimal('250'), category=ExpenseCategory.FOOD))
    assert probe.text == 'Expense added successfully!'
    recorded = [(a[0], a[1], a[2]) for a in page.actions]
    assert ('fill', '#expense-name', 'Test Lunch') in recorded
    assert ('fill', '#expense-amount', '250') in recorded
    assert ('select', '#expense-category', 'Food') in recorded
    assert ('fill', '#expense-date', '2026-01-01') in recorded
    assert page.clicked("#expense-form button[type='submit']")


def test_date_always_set_programmatically():
    expenses, page = workflow(mode=InteractionMode.REAL)
    expenses.fill_form(Expense(name='Bus Ticket', amount=Decimal('30')))
    date_actions = [a for a in page.actions if a[1] == '#expense-date']
    assert [a[0] for a in date_actions] == ['fill']


def test_list_and_total():
    expenses, page = workflow()
    page.counts['#expense-list tr'] = 4
    assert expenses.row_count() == 4
    assert expenses.list_contains_any('Nope', '250')
    assert expenses.total_value() == Decimal('1250.00')


def test_row_count_requires_list():
    expenses, page = workflow(elements={})
    with pytest.raises(ElementNotFound):
        expenses.row_count()


def test_required_fields():
    expenses, page = workflow()
    assert expenses.required_fields() == {'name': True, 'amount': True, 'date': False}


def test_filter_selects_category():
    expenses, page = workflow()
    expenses.filter_by('Food')
    assert ('select', '#filter-category', 'Food') in [(a[0], a[1], a[2]) for a in page.actions]


def test_budget_controls():
    expenses, page = workflow()
    assert not expenses.has_budget_controls()
    assert expenses.budget_value() is None

    elements = dict(FORM)
    elements.update({'#budget-input': {}, '#set-budget-btn': {}, '#budget-display': {'text': 'Budget: ₹5,000.00'}})
    expenses, page = workflow(elements=elements, dialogs=StubDialogSource('Budget set successfully'))
    assert expenses.has_budget_controls()
    assert expenses.set_budget('5000').text == 'Budget set successfully'
    assert page.clicked('#set-budget-btn')
    assert expenses.budget_value() == Decimal('5000.00')
