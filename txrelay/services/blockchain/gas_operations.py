"""
Gas operations for blockchain transactions.

This module handles:
- Priority fee and max fee derivation from the base fee
- Worst-case transaction cost
"""

from loguru import logger

from .core_constants import (
    DEFAULT_GAS_LIMIT,
    MAX_FEE_BUFFER_DIVISOR,
    MIN_PRIORITY_FEE_WEI,
    PRIORITY_FEE_BASE_FEE_DIVISOR,
)
from .models import FeePlan


def derive_fee_plan(base_fee: int) -> FeePlan:
    """
    Derive EIP-1559 fee fields from the base fee.

    priority = max(base_fee // 10, 2 Gwei)
    max_fee  = base_fee + priority + base_fee // 4

    Args:
        base_fee: Latest block base fee in wei

    Returns:
        FeePlan with max_priority_fee_per_gas and max_fee_per_gas

    Raises:
        TypeError: If base_fee is not an integer
        ValueError: If base_fee is negative
    """
    if isinstance(base_fee, bool) or not isinstance(base_fee, int):
        raise TypeError(f"base_fee must be int wei, got {type(base_fee).__name__}")
    if base_fee < 0:
        raise ValueError(f"base_fee must be non-negative, got {base_fee}")

    priority_fee = max(base_fee // PRIORITY_FEE_BASE_FEE_DIVISOR, MIN_PRIORITY_FEE_WEI)
    max_fee = base_fee + priority_fee + base_fee // MAX_FEE_BUFFER_DIVISOR

    return FeePlan(
        max_priority_fee_per_gas=priority_fee,
        max_fee_per_gas=max_fee,
    )


def max_transaction_cost(plan: FeePlan, gas_limit: int = DEFAULT_GAS_LIMIT, value: int = 0) -> int:
    """Upper bound of what the transaction can cost the sender, in wei."""
    return plan.max_fee_per_gas * gas_limit + value


class GasManager:
    """
    Manages fee-related decisions for a transaction.
    """

    def __init__(self, gas_limit: int = DEFAULT_GAS_LIMIT) -> None:
        """
        Initialize gas manager.

        Args:
            gas_limit: Gas limit used for cost estimates
        """
        self.gas_limit = gas_limit

    def plan_fees(self, base_fee: int) -> FeePlan:
        """
        Derive fee plan and log it.

        Args:
            base_fee: Latest block base fee in wei

        Returns:
            FeePlan
        """
        plan = derive_fee_plan(base_fee)

        if plan.max_priority_fee_per_gas == MIN_PRIORITY_FEE_WEI:
            logger.debug(
                f"Priority fee floored at {MIN_PRIORITY_FEE_WEI / 1e9:.2f} Gwei "
                f"(base fee {base_fee / 1e9:.4f} Gwei)"
            )

        logger.info(
            f"Fee plan: base={base_fee / 1e9:.4f} Gwei, "
            f"tip={plan.max_priority_fee_per_gas / 1e9:.4f} Gwei, "
            f"max={plan.max_fee_per_gas / 1e9:.4f} Gwei"
        )
        return plan

    def check_affordable(self, plan: FeePlan, balance: int, value: int = 0) -> bool:
        """
        Compare balance with the worst-case cost of the transaction.

        Reports only. The zero-balance check is the sole abort condition.

        Args:
            plan: Fee plan for the transaction
            balance: Sender balance in wei
            value: Value transferred in wei

        Returns:
            True if balance covers max_fee_per_gas * gas_limit + value
        """
        cost = max_transaction_cost(plan, self.gas_limit, value)
        if balance < cost:
            logger.warning(
                f"Balance {balance / 1e18:.6f} ETH is below worst-case cost "
                f"{cost / 1e18:.6f} ETH; the transaction may be rejected"
            )
            return False
        return True
