"""Utility functions for saldo."""

from saldo.utils.date_parser import parse_date, parse_month, parse_date_config
from saldo.utils.amount_parser import parse_amount
from saldo.utils.account_resolver import resolve_account

__all__ = ["parse_date", "parse_month", "parse_date_config", "parse_amount", "resolve_account"]
