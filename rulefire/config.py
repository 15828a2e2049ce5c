"""Engine settings read from the environment using pydantic-settings."""

import logging
import sys

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import DEFAULT_RULE_PRIORITY_THRESHOLD, EngineConfig


class EngineSettings(BaseSettings):
    """Settings for the rule firing engine."""

    model_config = SettingsConfigDict(
        env_prefix="RULEFIRE_",
    )

    skip_on_first_applied_rule: bool = Field(
        default=False,
        description="Stop the pass after the first rule whose actions succeed",
    )

    rule_priority_threshold: int = Field(
        default=DEFAULT_RULE_PRIORITY_THRESHOLD,
        description="Highest rule priority still considered during a pass",
    )

    log_level: str = Field(
        default="INFO",
        description="Level for the rulefire loggers",
    )

    def to_engine_config(self) -> EngineConfig:
        return EngineConfig(
            skip_on_first_applied_rule=self.skip_on_first_applied_rule,
            rule_priority_threshold=self.rule_priority_threshold,
        )


_settings: EngineSettings | None = None


def get_settings() -> EngineSettings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = EngineSettings()
    return _settings


def set_settings(settings: EngineSettings | None) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def configure_logging(level: str | None = None) -> None:
    level = (level or get_settings().log_level).upper()
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
        level=getattr(logging, level, logging.INFO),
    )
    logging.getLogger("rulefire").setLevel(getattr(logging, level, logging.INFO))
