from .test_structures import (
    AuthState,
    BrowserKind,
    Credentials,
    Expense,
    ExpenseCategory,
    InteractionMode,
    ScenarioOutcome,
    ScenarioResult,
    SoftVariancePolicy,
    StepEvent,
    StepStatus,
    SuiteSession,
    RunStatus,
    generate_credentials,
    unique_token,
)

__all__ = [
    "AuthState",
    "BrowserKind",
    "Credentials",
    "Expense",
    "ExpenseCategory",
    "InteractionMode",
    "ScenarioOutcome",
    "ScenarioResult",
    "SoftVariancePolicy",
    "StepEvent",
    "StepStatus",
    "SuiteSession",
    "RunStatus",
    "generate_credentials",
    "unique_token",
]
