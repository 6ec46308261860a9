"""Finproj: financial projection engine for loans, savings, taxes and portfolios."""

__version__ = "0.1.0"
