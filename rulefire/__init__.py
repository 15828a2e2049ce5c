"""
Rule Firing Engine Package

Provides the rule capability, an ordered rule set, and an engine that
fires rules by priority with a threshold cut-off, optional
skip-after-first-applied mode, and per-rule action failure isolation.
"""

from .engine import RuleFiringEngine
from .listeners import FiringReport, LoggingRuleListener, RuleListener
from .models import (
    DEFAULT_RULE_PRIORITY,
    DEFAULT_RULE_PRIORITY_THRESHOLD,
    ActionResult,
    ActionStatus,
    EngineConfig,
    FiringEvent,
    PassOutcome,
    RuleActionError,
    RuleFiringError,
)
from .rule_set import RuleSet
from .rules import BasicRule, FunctionRule, Rule

__all__ = [
    "RuleFiringEngine",
    "RuleListener",
    "LoggingRuleListener",
    "FiringReport",
    "ActionResult",
    "ActionStatus",
    "EngineConfig",
    "FiringEvent",
    "PassOutcome",
    "RuleActionError",
    "RuleFiringError",
    "RuleSet",
    "Rule",
    "BasicRule",
    "FunctionRule",
    "DEFAULT_RULE_PRIORITY",
    "DEFAULT_RULE_PRIORITY_THRESHOLD",
]
