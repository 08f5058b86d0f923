"""Mock token-trading sandbox — synthetic prices, order ledger, portfolio valuation."""

__version__ = "0.1.0"
