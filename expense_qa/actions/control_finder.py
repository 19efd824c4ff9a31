import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional


class ControlStrategy(ABC):
    """Turns a semantic role (``edit``, ``delete``...) into a selector."""

    name = "strategy"

    @abstractmethod
    def selector_for(self, role: str) -> str:
        pass


class DataTestIdStrategy(ControlStrategy):
    name = "test-id"

    def __init__(self, attribute: str = "data-testid"):
        self.attribute = attribute

    def selector_for(self, role: str) -> str:
        return f"[{self.attribute}*='{role.lower()}' i]"


class TextMatchStrategy(ControlStrategy):
    """Button whose visible text contains the role label."""

    name = "text"

    def __init__(self, labels: Dict[str, str] = None, tag: str = "button"):
        self.labels = labels or {}
        self.tag = tag

    def selector_for(self, role: str) -> str:
        label = self.labels.get(role, role.capitalize())
        return f"{self.tag}:has-text('{label}')"


class AttributeMatchStrategy(ControlStrategy):
    """Button whose inline handler mentions the role, e.g.
    ``onclick="deleteExpense(0)"``."""

    name = "attribute"

    def __init__(self, attribute: str = "onclick", tag: str = "button"):
        self.attribute = attribute
        self.tag = tag

    def selector_for(self, role: str) -> str:
        return f"{self.tag}[{self.attribute}*='{role.lower()}']"


DEFAULT_STRATEGIES = [DataTestIdStrategy(), TextMatchStrategy(), AttributeMatchStrategy()]


class ControlFinder:
    """Capability lookup: find a control by what it does, not by its
    markup.

    Strategies are tried in order; the first one that matches anything on the
    page wins.
    """

    def __init__(self, strategies: List[ControlStrategy] = None):
        self.strategies = list(strategies) if strategies is not None else list(DEFAULT_STRATEGIES)

    def find(self, page, role: str) -> Optional[str]:
        for strategy in self.strategies:
            selector = strategy.selector_for(role)
            matches = page.locator(selector).count()
            if matches > 0:
                logging.debug(f"Control '{role}' found by {strategy.name} strategy: {selector} ({matches} matches)")
                return selector
        logging.debug(f"No control found for role '{role}'")
        return None
