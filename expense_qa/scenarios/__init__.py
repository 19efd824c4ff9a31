from typing import Iterable, List

from expense_qa.config import MODULE_ORDER

from .base import Scenario, ScenarioContext, expect
from .budget import SetMonthlyBudget
from .expense import (
    CreateExpense,
    DeleteExpense,
    FilterByCategory,
    MissingExpenseFields,
    UpdateExpense,
    ViewExpenses,
)
from .login import EmptyLoginFields, InvalidLogin, SuccessfulLogin
from .registration import DuplicateEmailRegistration, EmptyRegistrationFields, SuccessfulRegistration

SCENARIO_CLASSES = [
    SuccessfulRegistration,
    DuplicateEmailRegistration,
    EmptyRegistrationFields,
    SuccessfulLogin,
    InvalidLogin,
    EmptyLoginFields,
    CreateExpense,
    ViewExpenses,
    UpdateExpense,
    DeleteExpense,
    FilterByCategory,
    MissingExpenseFields,
    SetMonthlyBudget,
]


def scenarios_for(modules: Iterable[str] = None) -> List[Scenario]:
    """Scenario instances for the given modules, in execution order."""
    selected = set(modules) if modules is not None else set(MODULE_ORDER)
    scenarios = [cls() for cls in SCENARIO_CLASSES if cls.module in selected]
    return sorted(scenarios, key=lambda s: (MODULE_ORDER.index(s.module), s.priority))


__all__ = [
    "SCENARIO_CLASSES",
    "Scenario",
    "ScenarioContext",
    "expect",
    "scenarios_for",
]
