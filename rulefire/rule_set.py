from bisect import insort
from typing import Iterator, Optional, Union

from .rules import Rule, sort_key


class RuleSet:
    """Rules kept sorted by (priority, name); names are unique."""

    def __init__(self):
        self._rules: list[Rule] = []
        self._by_name: dict[str, Rule] = {}

    def add(self, rule: Rule) -> None:
        self.remove(rule.name)
        insort(self._rules, rule, key=sort_key)
        self._by_name[rule.name] = rule

    def remove(self, rule: Union[Rule, str]) -> bool:
        name = rule if isinstance(rule, str) else rule.name
        existing = self._by_name.pop(name, None)
        if existing is None:
            return False
        self._rules = [r for r in self._rules if r is not existing]
        return True

    def get(self, name: str) -> Optional[Rule]:
        return self._by_name.get(name)

    def clear(self) -> None:
        self._rules.clear()
        self._by_name.clear()

    def snapshot(self) -> tuple[Rule, ...]:
        return tuple(self._rules)

    def __contains__(self, rule: Union[Rule, str]) -> bool:
        name = rule if isinstance(rule, str) else rule.name
        return name in self._by_name

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self._rules)

    def __bool__(self) -> bool:
        return bool(self._rules)
