from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol, Union, runtime_checkable

from .models import DEFAULT_RULE_PRIORITY, ActionResult


@runtime_checkable
class Rule(Protocol):
    name: str
    priority: int

    def evaluate_conditions(self) -> bool:
        ...

    def perform_actions(self) -> Optional[ActionResult]:
        ...


def sort_key(rule: Rule) -> tuple[int, str]:
    return rule.priority, rule.name


class BasicRule:
    """Base class for rules written as subclasses.

    Override ``evaluate_conditions`` and ``perform_actions``. Two rules are
    equal when they share a name; ordering is priority first, then name.
    """

    def __init__(
        self,
        name: str = "rule",
        description: str = "description",
        priority: int = DEFAULT_RULE_PRIORITY,
    ):
        self.name = name
        self.description = description
        self.priority = priority

    def evaluate_conditions(self) -> bool:
        return False

    def perform_actions(self) -> Optional[ActionResult]:
        return None

    def __eq__(self, other) -> bool:
        if not isinstance(other, BasicRule):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __lt__(self, other: "BasicRule") -> bool:
        return sort_key(self) < sort_key(other)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, priority={self.priority})"


@dataclass
class FunctionRule:
    name: str
    condition: Callable[[], bool]
    action: Callable[[], Union[ActionResult, None]]
    priority: int = DEFAULT_RULE_PRIORITY
    description: str = ""
    metadata: dict = field(default_factory=dict)

    def evaluate_conditions(self) -> bool:
        return bool(self.condition())

    def perform_actions(self) -> Optional[ActionResult]:
        return self.action()
