from .action_handler import ActionHandler
from .control_finder import (
    AttributeMatchStrategy,
    ControlFinder,
    ControlStrategy,
    DataTestIdStrategy,
    TextMatchStrategy,
)

__all__ = [
    "ActionHandler",
    "AttributeMatchStrategy",
    "ControlFinder",
    "ControlStrategy",
    "DataTestIdStrategy",
    "TextMatchStrategy",
]
