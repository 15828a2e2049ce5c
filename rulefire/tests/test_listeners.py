"""
Unit Tests for Engine Listeners

Tests cover:
1. Log severities emitted by the logging listener
2. Event sequence recorded by the firing report
3. Sample rules
"""

import logging

import pytest

from rulefire.engine import RuleFiringEngine
from rulefire.listeners import FiringReport
from rulefire.models import FiringEvent, PassOutcome
from rulefire.rules import FunctionRule
from rulefire.samples import create_sample_rules


def fail():
    raise RuntimeError("action exploded")


class TestLoggingListener:
    """Tests for the default logging listener."""

    def test_warns_when_no_rules(self, caplog):
        """Test that an empty engine logs a warning."""
        caplog.set_level(logging.INFO, logger="rulefire")
        RuleFiringEngine().fire()

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "No rules registered" in warnings[0].getMessage()

    def test_logs_parameters_and_success(self, caplog):
        """Test that parameters, triggers and successes are logged at INFO."""
        caplog.set_level(logging.INFO, logger="rulefire")
        engine = RuleFiringEngine(rule_priority_threshold=10)
        engine.register_rule(FunctionRule(name="greet", condition=lambda: True, action=lambda: None, priority=1))

        engine.fire()

        messages = [r.getMessage() for r in caplog.records if r.levelno == logging.INFO]
        assert any("threshold: 10" in m for m in messages)
        assert "Rule 'greet' triggered." in messages
        assert "Rule 'greet' performed successfully." in messages

    def test_logs_failure_at_error(self, caplog):
        """Test that an action failure is logged at ERROR with the rule name and cause."""
        caplog.set_level(logging.INFO, logger="rulefire")
        engine = RuleFiringEngine()
        engine.register_rule(FunctionRule(name="broken", condition=lambda: True, action=fail, priority=1))

        engine.fire()

        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert "broken" in errors[0].getMessage()
        assert "action exploded" in errors[0].getMessage()
        assert errors[0].exc_info is not None

    def test_logs_threshold_exceeded(self, caplog):
        """Test that the threshold stop is logged with the offending rule."""
        caplog.set_level(logging.INFO, logger="rulefire")
        engine = RuleFiringEngine(rule_priority_threshold=1)
        engine.register_rule(FunctionRule(name="late", condition=lambda: True, action=lambda: None, priority=7))

        engine.fire()

        assert any("exceeded at rule 'late' (priority=7)" in r.getMessage() for r in caplog.records)


class TestFiringReport:
    """Tests for the firing report listener."""

    def test_records_event_sequence(self):
        """Test that events are recorded in the order they happen."""
        report = FiringReport()
        engine = RuleFiringEngine(skip_on_first_applied_rule=True, listeners=[report])
        engine.register_rule(FunctionRule(name="bad", condition=lambda: True, action=fail, priority=1))
        engine.register_rule(FunctionRule(name="good", condition=lambda: True, action=lambda: None, priority=2))

        engine.fire()

        assert report.events == [
            (FiringEvent.ENGINE_PARAMETERS, None),
            (FiringEvent.RULE_TRIGGERED, "bad"),
            (FiringEvent.RULE_FAILED, "bad"),
            (FiringEvent.RULE_TRIGGERED, "good"),
            (FiringEvent.RULE_APPLIED, "good"),
            (FiringEvent.SKIP_REMAINING, "good"),
        ]
        assert report.to_dict()["outcome"] == "skip_stopped"
        assert report.to_dict()["failed"] == {"bad": "action exploded"}


class TestSampleRules:
    """Tests for the bundled sample rules."""

    def test_sample_rules_fire(self):
        """Test the sample referral rules end to end."""
        context = {
            "referrer": {"id": "user-123", "is_paid_user": True},
            "referred": {"subscription_plan": "premium", "signup_completed": True},
        }
        ledger = []
        report = FiringReport()
        engine = RuleFiringEngine(listeners=[report])
        for rule in create_sample_rules(context, ledger):
            engine.register_rule(rule)

        engine.fire()

        assert report.applied == ["premium-referral", "signup-bonus"]
        assert list(report.failed) == ["notify-referrer"]
        assert report.outcome == PassOutcome.EXHAUSTED
        assert [entry["amount"] for entry in ledger] == [500, 100]

    def test_sample_rules_with_email(self):
        """Test that the notification rule applies when an email is present."""
        context = {
            "referrer": {"id": "user-9", "is_paid_user": False, "email": "ref@example.com"},
            "referred": {"signup_completed": True},
        }
        ledger = []
        engine = RuleFiringEngine(skip_on_first_applied_rule=False)
        for rule in create_sample_rules(context, ledger):
            engine.register_rule(rule)

        engine.fire()

        assert ledger == [
            {"user_id": "user-9", "amount": 100, "currency": "INR"},
            {"notification": "ref@example.com"},
        ]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
