"""Billing layer: named strategies applied to computed patient bills."""

from hpms.billing.strategies import (
    BillingStrategy,
    select_strategy,
    recommend_strategy,
    strategy_catalog,
)
from hpms.core.money import to_money, quantize_money, format_currency

__all__ = [
    "BillingStrategy",
    "select_strategy",
    "recommend_strategy",
    "strategy_catalog",
    "to_money",
    "quantize_money",
    "format_currency",
]
