"""Billing strategies.

A strategy turns the computed base bill into the amount the patient pays.
Each member of ``BillingStrategy`` carries its reporting name and payable
rate, and is itself the pure function ``strategy(base_bill) -> final_bill``:

    strategy = select_strategy("5")          # SENIOR_CITIZEN
    final = strategy(Decimal("1000.00"))     # Decimal("700.00")
    strategy.display_name                    # "Senior Citizen Billing"
"""

import logging
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from hpms.core.entities import normalise_name
from hpms.core.money import MoneyLike, quantize_money, to_money

logger = logging.getLogger(__name__)


class BillingStrategy(Enum):
    """Catalogue of billing policies.

    Value is (display name, payable rate, summary). Menu order is the
    definition order.
    """

    INSURANCE = ("Insurance Billing", Decimal("0.30"), "70% covered, 30% patient")
    DISCOUNT = ("Discount Billing", Decimal("0.80"), "20% discount")
    STANDARD = ("Standard Billing", Decimal("1.00"), "Full payment")
    EMERGENCY = ("Emergency Billing", Decimal("0.90"), "10% discount")
    SENIOR_CITIZEN = ("Senior Citizen Billing", Decimal("0.70"), "30% discount")
    GOVERNMENT_SCHEME = ("Government Scheme", Decimal("0.50"), "50% subsidized")
    CORPORATE = ("Corporate Billing", Decimal("0.85"), "15% discount")

    def __init__(self, display_name: str, rate: Decimal, summary: str):
        self.display_name = display_name
        self.rate = rate
        self.summary = summary

    @property
    def index(self) -> int:
        """1-based menu position."""
        return list(BillingStrategy).index(self) + 1

    @property
    def discount_rate(self) -> Decimal:
        """Fraction of the base bill waived."""
        return Decimal("1") - self.rate

    def apply(self, base_bill: MoneyLike) -> Decimal:
        """Final payable amount for a base bill, rounded to cents."""
        return quantize_money(to_money(base_bill) * self.rate)

    def __call__(self, base_bill: MoneyLike) -> Decimal:
        return self.apply(base_bill)


def select_strategy(
    choice: Union[BillingStrategy, int, str, None],
) -> BillingStrategy:
    """Resolve a caller's selection to a strategy.

    Accepts a member, a 1-based menu index (int or numeric string), a
    member name ("SENIOR_CITIZEN", "senior citizen") or a display name
    ("Senior Citizen Billing").

    Unrecognized selections fall back to STANDARD.
    """
    if isinstance(choice, BillingStrategy):
        return choice

    members = list(BillingStrategy)

    if isinstance(choice, str):
        text = choice.strip()
        if text.isdigit():
            choice = int(text)
        else:
            wanted = normalise_name(text)
            for member in members:
                if wanted in (normalise_name(member.name), normalise_name(member.display_name)):
                    return member

    if isinstance(choice, int) and not isinstance(choice, bool):
        if 1 <= choice <= len(members):
            return members[choice - 1]

    logger.warning(f"Unrecognized billing strategy {choice!r}, using Standard Billing")
    return BillingStrategy.STANDARD


def recommend_strategy(age: int, senior_age: int = 60) -> Optional[BillingStrategy]:
    """Advisory recommendation based on patient age.

    Returns:
        SENIOR_CITIZEN when age >= senior_age, otherwise None.
    """
    if age >= senior_age:
        return BillingStrategy.SENIOR_CITIZEN
    return None


def strategy_catalog() -> List[Dict[str, Any]]:
    """Describe every strategy for a selection menu or report."""
    return [
        {
            "index": member.index,
            "name": member.name,
            "display_name": member.display_name,
            "rate": member.rate,
            "payable_pct": int(member.rate * 100),
            "discount_pct": int(member.discount_rate * 100),
            "summary": member.summary,
        }
        for member in BillingStrategy
    ]
