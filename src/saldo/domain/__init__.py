"""Domain layer for saldo application.

Only the pure computation core is re-exported here; services that talk to the
record store are imported from their own modules.
"""

from saldo.domain.aggregation import aggregate, aggregate_lifetime, summarize_account
from saldo.domain.classifier import classify, contribution_amount
from saldo.domain.projection import remaining_months
from saldo.domain.window import is_active_in_month, normalize_date_config

__all__ = [
    "aggregate",
    "aggregate_lifetime",
    "summarize_account",
    "classify",
    "contribution_amount",
    "remaining_months",
    "is_active_in_month",
    "normalize_date_config",
]
