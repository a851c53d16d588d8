"""Saldo: personal finance tracking with monthly and lifetime balance sheets."""

__version__ = "0.1.0"
