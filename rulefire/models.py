from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_RULE_PRIORITY_THRESHOLD = 2147483647
DEFAULT_RULE_PRIORITY = DEFAULT_RULE_PRIORITY_THRESHOLD - 1


class RuleFiringError(Exception):
    pass


class RuleActionError(RuleFiringError):
    pass


class ActionStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"


class FiringEvent(str, Enum):
    NO_RULES = "no_rules"
    ENGINE_PARAMETERS = "engine_parameters"
    THRESHOLD_EXCEEDED = "threshold_exceeded"
    RULE_TRIGGERED = "rule_triggered"
    RULE_APPLIED = "rule_applied"
    RULE_FAILED = "rule_failed"
    SKIP_REMAINING = "skip_remaining"


class PassOutcome(str, Enum):
    NO_RULES = "no_rules"
    EXHAUSTED = "exhausted"
    THRESHOLD_STOPPED = "threshold_stopped"
    SKIP_STOPPED = "skip_stopped"


@dataclass(frozen=True)
class ActionResult:
    status: ActionStatus
    cause: Optional[BaseException] = None

    @property
    def succeeded(self) -> bool:
        return self.status == ActionStatus.SUCCESS

    @classmethod
    def ok(cls) -> "ActionResult":
        return cls(status=ActionStatus.SUCCESS)

    @classmethod
    def failed(cls, cause) -> "ActionResult":
        if not isinstance(cause, BaseException):
            cause = RuleActionError(str(cause))
        return cls(status=ActionStatus.FAILED, cause=cause)


class EngineConfig(BaseModel):
    skip_on_first_applied_rule: bool = False
    rule_priority_threshold: int = Field(default=DEFAULT_RULE_PRIORITY_THRESHOLD)

    model_config = ConfigDict(frozen=True)
