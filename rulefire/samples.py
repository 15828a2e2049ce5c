import json
import logging
from typing import Optional

from .config import configure_logging
from .engine import RuleFiringEngine
from .listeners import FiringReport
from .models import ActionResult
from .rules import BasicRule, FunctionRule


class PremiumReferralRule(BasicRule):
    def __init__(self, context: dict, ledger: list):
        super().__init__(
            name="premium-referral",
            description="Reward paid referrers whose referral subscribes to premium",
            priority=1,
        )
        self.context = context
        self.ledger = ledger

    def evaluate_conditions(self) -> bool:
        referrer = self.context.get("referrer", {})
        referred = self.context.get("referred", {})
        return bool(referrer.get("is_paid_user")) and referred.get("subscription_plan") == "premium"

    def perform_actions(self) -> Optional[ActionResult]:
        self.ledger.append({"user_id": self.context["referrer"]["id"], "amount": 500, "currency": "INR"})
        return ActionResult.ok()


class SignupBonusRule(BasicRule):
    def __init__(self, context: dict, ledger: list):
        super().__init__(
            name="signup-bonus",
            description="Reward any completed signup",
            priority=5,
        )
        self.context = context
        self.ledger = ledger

    def evaluate_conditions(self) -> bool:
        return bool(self.context.get("referred", {}).get("signup_completed"))

    def perform_actions(self) -> None:
        self.ledger.append({"user_id": self.context["referrer"]["id"], "amount": 100, "currency": "INR"})


def create_sample_rules(context: dict, ledger: list) -> list:
    def notify() -> None:
        if "email" not in context.get("referrer", {}):
            raise ValueError("referrer has no email address")
        ledger.append({"notification": context["referrer"]["email"]})

    return [
        PremiumReferralRule(context, ledger),
        SignupBonusRule(context, ledger),
        FunctionRule(
            name="notify-referrer",
            condition=lambda: bool(ledger),
            action=notify,
            priority=10,
        ),
    ]


if __name__ == "__main__":
    configure_logging()
    logging.getLogger(__name__).info("Running sample rules")

    context = {
        "referrer": {"id": "user-123", "is_paid_user": True},
        "referred": {"subscription_plan": "premium", "signup_completed": True},
    }
    ledger: list = []
    report = FiringReport()
    engine = RuleFiringEngine(listeners=[report])
    for rule in create_sample_rules(context, ledger):
        engine.register_rule(rule)

    engine.fire()
    print("Report:", json.dumps(report.to_dict(), indent=2))
    print("Ledger:", json.dumps(ledger, indent=2))
