"""
Account liquidity waterfall.

A year's shortfall is absorbed by cash first, then by the taxable account.
Retirement savings are never drawn; they only grow and receive contributions.
Depletion is one-directional: once a bucket reaches zero it stays at zero.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class LiquidityState(str, Enum):
    """Which account currently absorbs shortfalls."""

    CASH_ACTIVE = "cash_active"
    CASH_DEPLETED_TAXABLE_ACTIVE = "cash_depleted_taxable_active"
    BOTH_DEPLETED = "both_depleted"


class AccountBalances(BaseModel):
    """Balances of the three accounts plus the waterfall state."""

    model_config = ConfigDict(frozen=True)

    cash: float = Field(..., description="Cash balance")
    taxable: float = Field(..., description="Taxable brokerage balance")
    retirement: float = Field(..., description="Retirement account balance")
    state: LiquidityState = Field(default=LiquidityState.CASH_ACTIVE)

    @property
    def total_net_worth(self) -> float:
        return self.cash + self.taxable + self.retirement

    @property
    def cash_depleted(self) -> bool:
        return self.state != LiquidityState.CASH_ACTIVE

    @property
    def taxable_depleted(self) -> bool:
        return self.state == LiquidityState.BOTH_DEPLETED


class LiquidityEngine(BaseModel):
    """Applies a year's shortfall or surplus to account balances."""

    model_config = ConfigDict(frozen=True)

    cash_return_rate: float = Field(..., description="Annual cash return (0.04 = 4%)")
    investment_return_rate: float = Field(
        ..., description="Annual return on taxable and retirement accounts"
    )

    def apply_year(
        self,
        balances: AccountBalances,
        shortfall: float,
        retirement_contribution: float = 0.0,
    ) -> AccountBalances:
        """
        Advance balances through one year.

        Args:
            balances: Balances and state at the start of the year
            shortfall: Expenses minus household income; negative is a surplus
            retirement_contribution: Amount added to retirement after growth

        Returns:
            New balances and state at the end of the year
        """
        cash = balances.cash
        taxable = balances.taxable
        state = balances.state

        if state == LiquidityState.CASH_ACTIVE:
            cash = cash * (1 + self.cash_return_rate)
            taxable = taxable * (1 + self.investment_return_rate)
            if shortfall > 0:
                if cash >= shortfall:
                    cash -= shortfall
                else:
                    # The uncovered remainder is not drawn from taxable this year.
                    cash = 0.0
                    state = LiquidityState.CASH_DEPLETED_TAXABLE_ACTIVE
            else:
                cash += abs(shortfall)

        elif state == LiquidityState.CASH_DEPLETED_TAXABLE_ACTIVE:
            taxable = taxable * (1 + self.investment_return_rate)
            if shortfall > 0:
                if taxable >= shortfall:
                    taxable -= shortfall
                else:
                    taxable = 0.0
                    state = LiquidityState.BOTH_DEPLETED
            # Surpluses are not banked once cash is depleted.

        retirement = (
            balances.retirement * (1 + self.investment_return_rate)
            + retirement_contribution
        )

        return AccountBalances(
            cash=cash, taxable=taxable, retirement=retirement, state=state
        )
