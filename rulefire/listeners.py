"""
Observers notified by the engine while it fires rules.

The engine never formats log lines itself; it emits events to every
registered listener. ``LoggingRuleListener`` turns those events into log
records, ``FiringReport`` keeps a summary of the latest pass.
"""

import logging
from typing import Optional

from .models import EngineConfig, FiringEvent, PassOutcome
from .rules import Rule

logger = logging.getLogger(__name__)


class RuleListener:
    def on_no_rules(self) -> None:
        pass

    def on_engine_parameters(self, config: EngineConfig) -> None:
        pass

    def on_threshold_exceeded(self, rule: Rule, threshold: int) -> None:
        pass

    def on_rule_triggered(self, rule: Rule) -> None:
        pass

    def on_rule_applied(self, rule: Rule) -> None:
        pass

    def on_rule_failed(self, rule: Rule, cause: BaseException) -> None:
        pass

    def on_skip_remaining(self, rule: Rule) -> None:
        pass

    def on_pass_finished(self, outcome: PassOutcome) -> None:
        pass


class LoggingRuleListener(RuleListener):
    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = log or logger

    def on_no_rules(self) -> None:
        self.log.warning("No rules registered! Nothing to apply.")

    def on_engine_parameters(self, config: EngineConfig) -> None:
        self.log.info(
            "Rule priority threshold: %d, skip on first applied rule: %s",
            config.rule_priority_threshold,
            config.skip_on_first_applied_rule,
        )

    def on_threshold_exceeded(self, rule: Rule, threshold: int) -> None:
        self.log.info(
            "Rule priority threshold %d exceeded at rule '%s' (priority=%d), "
            "next applicable rules will be skipped.",
            threshold, rule.name, rule.priority,
        )

    def on_rule_triggered(self, rule: Rule) -> None:
        self.log.info("Rule '%s' triggered.", rule.name)

    def on_rule_applied(self, rule: Rule) -> None:
        self.log.info("Rule '%s' performed successfully.", rule.name)

    def on_rule_failed(self, rule: Rule, cause: BaseException) -> None:
        self.log.error(
            "Rule '%s' performed with error: %s", rule.name, cause,
            exc_info=(type(cause), cause, cause.__traceback__),
        )

    def on_skip_remaining(self, rule: Rule) -> None:
        self.log.info("Next rules will be skipped according to parameter skip_on_first_applied_rule.")


class FiringReport(RuleListener):
    """Summary of the most recent firing pass."""

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self.events: list[tuple[FiringEvent, Optional[str]]] = []
        self.triggered: list[str] = []
        self.applied: list[str] = []
        self.failed: dict[str, BaseException] = {}
        self.threshold_rule: Optional[str] = None
        self.outcome: Optional[PassOutcome] = None

    def on_no_rules(self) -> None:
        self.reset()
        self.events.append((FiringEvent.NO_RULES, None))

    def on_engine_parameters(self, config: EngineConfig) -> None:
        self.reset()
        self.events.append((FiringEvent.ENGINE_PARAMETERS, None))

    def on_threshold_exceeded(self, rule: Rule, threshold: int) -> None:
        self.threshold_rule = rule.name
        self.events.append((FiringEvent.THRESHOLD_EXCEEDED, rule.name))

    def on_rule_triggered(self, rule: Rule) -> None:
        self.triggered.append(rule.name)
        self.events.append((FiringEvent.RULE_TRIGGERED, rule.name))

    def on_rule_applied(self, rule: Rule) -> None:
        self.applied.append(rule.name)
        self.events.append((FiringEvent.RULE_APPLIED, rule.name))

    def on_rule_failed(self, rule: Rule, cause: BaseException) -> None:
        self.failed[rule.name] = cause
        self.events.append((FiringEvent.RULE_FAILED, rule.name))

    def on_skip_remaining(self, rule: Rule) -> None:
        self.events.append((FiringEvent.SKIP_REMAINING, rule.name))

    def on_pass_finished(self, outcome: PassOutcome) -> None:
        self.outcome = outcome

    def to_dict(self) -> dict:
        return {
            "outcome": self.outcome.value if self.outcome else None,
            "triggered": list(self.triggered),
            "applied": list(self.applied),
            "failed": {name: str(cause) for name, cause in self.failed.items()},
            "threshold_rule": self.threshold_rule,
        }
