"""Portfolio valuation — balances, positions and cost basis from the ledger."""

from token_sandbox.portfolio.running import RunningPortfolio
from token_sandbox.portfolio.valuator import EXACT_CONTEXT, INITIAL_BALANCE, allocation, valuate

__all__ = ["EXACT_CONTEXT", "INITIAL_BALANCE", "RunningPortfolio", "allocation", "valuate"]
