"""Results layer: bill ledger and tabulation."""

from hpms.results.ledger import BillingLedger, StrategyTotals, LEDGER_COLUMNS

__all__ = [
    "BillingLedger",
    "StrategyTotals",
    "LEDGER_COLUMNS",
]
