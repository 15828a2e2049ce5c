import logging
from typing import Iterable, Optional, Union

from .config import EngineSettings, get_settings
from .listeners import LoggingRuleListener, RuleListener
from .models import (
    DEFAULT_RULE_PRIORITY_THRESHOLD,
    ActionResult,
    EngineConfig,
    PassOutcome,
    RuleActionError,
)
from .rule_set import RuleSet
from .rules import Rule

logger = logging.getLogger(__name__)


class RuleFiringEngine:
    """Fires registered rules in ascending priority order.

    Rules whose priority is above ``rule_priority_threshold`` end the pass,
    since every rule after them is at least as high. With
    ``skip_on_first_applied_rule`` the pass also ends after the first rule
    whose actions complete successfully.

    Failures raised by ``perform_actions`` are reported to the listeners and
    the pass moves on. Failures raised by ``evaluate_conditions`` propagate
    out of ``fire()`` unchanged.
    """

    def __init__(
        self,
        skip_on_first_applied_rule: bool = False,
        rule_priority_threshold: int = DEFAULT_RULE_PRIORITY_THRESHOLD,
        listeners: Optional[Iterable[RuleListener]] = None,
    ):
        self.config = EngineConfig(
            skip_on_first_applied_rule=skip_on_first_applied_rule,
            rule_priority_threshold=rule_priority_threshold,
        )
        self.rules = RuleSet()
        self.listeners: list[RuleListener] = [LoggingRuleListener()]
        for listener in listeners or ():
            self.add_listener(listener)

    @classmethod
    def from_config(cls, config: EngineConfig, listeners: Optional[Iterable[RuleListener]] = None) -> "RuleFiringEngine":
        return cls(
            skip_on_first_applied_rule=config.skip_on_first_applied_rule,
            rule_priority_threshold=config.rule_priority_threshold,
            listeners=listeners,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Optional[EngineSettings] = None,
        listeners: Optional[Iterable[RuleListener]] = None,
    ) -> "RuleFiringEngine":
        if settings is None:
            settings = get_settings()
        return cls.from_config(settings.to_engine_config(), listeners=listeners)

    @property
    def skip_on_first_applied_rule(self) -> bool:
        return self.config.skip_on_first_applied_rule

    @property
    def rule_priority_threshold(self) -> int:
        return self.config.rule_priority_threshold

    def add_listener(self, listener: RuleListener) -> None:
        self.listeners.append(listener)

    def register_rule(self, rule: Rule) -> None:
        if rule.name in self.rules:
            logger.debug("Replacing rule '%s'", rule.name)
        self.rules.add(rule)

    def unregister_rule(self, rule: Union[Rule, str]) -> bool:
        return self.rules.remove(rule)

    def clear_rules(self) -> None:
        self.rules.clear()

    def get_rule(self, name: str) -> Optional[Rule]:
        return self.rules.get(name)

    def get_rules(self) -> tuple[Rule, ...]:
        return self.rules.snapshot()

    def fire(self) -> None:
        if not self.rules:
            self._notify("on_no_rules")
            self._notify("on_pass_finished", PassOutcome.NO_RULES)
            return

        self._notify("on_engine_parameters", self.config)
        outcome = self.apply_rules()
        self._notify("on_pass_finished", outcome)

    def apply_rules(self) -> PassOutcome:
        threshold = self.config.rule_priority_threshold

        for rule in self.rules.snapshot():
            if rule.priority > threshold:
                self._notify("on_threshold_exceeded", rule, threshold)
                return PassOutcome.THRESHOLD_STOPPED

            if not rule.evaluate_conditions():
                logger.debug("Rule '%s' conditions not met", rule.name)
                continue

            self._notify("on_rule_triggered", rule)
            result = self._perform(rule)
            if not result.succeeded:
                self._notify("on_rule_failed", rule, result.cause)
                continue

            self._notify("on_rule_applied", rule)
            if self.config.skip_on_first_applied_rule:
                self._notify("on_skip_remaining", rule)
                return PassOutcome.SKIP_STOPPED

        return PassOutcome.EXHAUSTED

    def check_rules(self) -> dict[str, bool]:
        results: dict[str, bool] = {}
        for rule in self.rules.snapshot():
            if rule.priority > self.config.rule_priority_threshold:
                break
            results[rule.name] = bool(rule.evaluate_conditions())
        return results

    def _perform(self, rule: Rule) -> ActionResult:
        try:
            result = rule.perform_actions()
        except Exception as e:
            return ActionResult.failed(e)
        if not isinstance(result, ActionResult):
            return ActionResult.ok()
        if not result.succeeded and result.cause is None:
            return ActionResult.failed(RuleActionError(f"Rule '{rule.name}' reported a failed action"))
        return result

    def _notify(self, hook: str, *args) -> None:
        for listener in self.listeners:
            getattr(listener, hook)(*args)
