from .auth import AuthWorkflow
from .expenses import ExpenseWorkflow, parse_amount

__all__ = ["AuthWorkflow", "ExpenseWorkflow", "parse_amount"]
