# =============================================================================
# REVENUE & BONUS POLICIES
# =============================================================================
# - Pluggable formulas injected into the analysis at call time
# - Reference revenue policy: sale price net of the percentage discount
# - Reference bonus policy: tiered by the seller's profit rank


from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Protocol, Union

if TYPE_CHECKING:
    from .sales_records import Item, SellerStat


# ------------------------------------------------------------
# CONFIGURATIONS
# ------------------------------------------------------------

FIRST_PLACE_RATE = 0.15
PODIUM_RATE = 0.10
DEFAULT_RATE = 0.05


# ------------------------------------------------------------
# POLICY INTERFACES
# ------------------------------------------------------------

class RevenuePolicy(Protocol):

    def compute(self, item: Item, quantity: int) -> float:
        ...


class BonusPolicy(Protocol):

    def assign(self, seller: SellerStat, rank: int, total: int) -> float:
        ...


RevenueCallable = Callable[[Any, int], float]
BonusCallable = Callable[[Any, int, int], float]


@dataclass(frozen=True)
class AnalysisOptions:
    """
    Policies used by a single analysis run.

    Each policy is either a plain callable or an object exposing the
    matching single method (`compute` for revenue, `assign` for bonus).
    """

    calculate_revenue: Union[RevenueCallable, RevenuePolicy]
    calculate_bonus: Union[BonusCallable, BonusPolicy]


# ------------------------------------------------------------
# REFERENCE REVENUE POLICY
# ------------------------------------------------------------

def calculate_simple_revenue(item: Item, quantity: int) -> float:
    discount = 1 - (item.discount / 100)

    return item.sale_price * quantity * discount


class SimpleRevenuePolicy:

    def compute(self, item: Item, quantity: int) -> float:
        return calculate_simple_revenue(item, quantity)


# ------------------------------------------------------------
# REFERENCE BONUS POLICY
# ------------------------------------------------------------

class ProfitRankBonusPolicy:
    """
    Bonus as a share of profit, tiered by position in the profit ranking.

    Rank 0 takes `first_rate`, ranks 1-2 take `podium_rate`, the last rank
    takes nothing and every other rank takes `default_rate`. Rank 0 is
    checked first, so a lone seller still gets `first_rate`.
    """

    def __init__(self,
                 first_rate: float = FIRST_PLACE_RATE,
                 podium_rate: float = PODIUM_RATE,
                 default_rate: float = DEFAULT_RATE):
        self.first_rate = first_rate
        self.podium_rate = podium_rate
        self.default_rate = default_rate

    def rate_for(self, rank: int, total: int) -> float:
        if rank == 0:
            return self.first_rate
        elif rank in (1, 2):
            return self.podium_rate
        elif rank == total - 1:
            return 0.0
        else:
            return self.default_rate

    def assign(self, seller: SellerStat, rank: int, total: int) -> float:
        return seller.profit * self.rate_for(rank, total)


def calculate_bonus_by_profit(seller: SellerStat, index: int, total: int) -> float:
    return ProfitRankBonusPolicy().assign(seller, index, total)


def default_options() -> AnalysisOptions:

    return AnalysisOptions(
        calculate_revenue=calculate_simple_revenue,
        calculate_bonus=calculate_bonus_by_profit,
    )


# =============================================================================
# END OF SCRIPT
# =============================================================================
