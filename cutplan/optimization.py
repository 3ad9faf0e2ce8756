import logging
from typing import List, Sequence

from cutplan.models import StockUsage, CuttingResult

logger = logging.getLogger(__name__)


def build_result(usages: List[StockUsage], unplaced_cuttings: List[float], cutting_count: int) -> CuttingResult:
    """
    Turns the per-run stock arena into the returned result.
    Only stocks with at least one cut become plans; the rest are reported as unplaced stocks.
    """
    plans = [u.to_plan() for u in usages if u.is_used]
    unplaced_stocks = [u.original for u in usages if not u.is_used]

    used_length = sum(p.stock for p in plans)
    placed_length = sum(p.used for p in plans)
    usage_rate = placed_length / used_length if used_length > 0 else 0.0

    placed_count = sum(len(p.cutting) for p in plans)
    assert placed_count + len(unplaced_cuttings) == cutting_count, "cutting lost or duplicated"
    assert all(p.remaining >= 0 for p in plans), "stock over-allocated"

    return CuttingResult(
        cutting_plans=plans,
        unplaced_cuttings=unplaced_cuttings,
        unplaced_stocks=unplaced_stocks,
        usage_rate=usage_rate,
    )


class CuttingAlgorithm:
    """Common interface of all cutting heuristics: run(stocks, cuttings) -> CuttingResult."""
    name = "base"

    def run(self, stocks: Sequence[float], cuttings: Sequence[float]) -> CuttingResult:
        raise NotImplementedError


class DecreasingFit(CuttingAlgorithm):
    """
    Shared skeleton of the *-Fit-Decreasing heuristics.
    Subclasses only decide which stock receives a cut.
    """

    def select_stock(self, usages: List[StockUsage], cutting: float) -> int:
        raise NotImplementedError

    def run(self, stocks: Sequence[float], cuttings: Sequence[float]) -> CuttingResult:
        # 1. Sort stocks and cuts descending (sorted() is stable, ties keep input order)
        sorted_stocks = sorted(stocks, reverse=True)
        sorted_cuts = sorted(cuttings, reverse=True)

        usages = [StockUsage(original=length) for length in sorted_stocks]
        unplaced: List[float] = []

        # 2. Place every cut once, no backtracking
        for cut in sorted_cuts:
            idx = self.select_stock(usages, cut)
            if idx < 0:
                unplaced.append(cut)
            else:
                usages[idx].assign(cut)

        result = build_result(usages, unplaced, len(sorted_cuts))
        logger.debug("%s: %d plans, %d unplaced, usage %.4f", self.name, result.stock_count,
                     len(result.unplaced_cuttings), result.usage_rate)
        return result


class FirstFitDecreasing(DecreasingFit):
    name = "FFD"

    def select_stock(self, usages: List[StockUsage], cutting: float) -> int:
        for idx, usage in enumerate(usages):
            if usage.fits(cutting):
                return idx
        return -1


class BestFitDecreasing(DecreasingFit):
    name = "BFD"

    def select_stock(self, usages: List[StockUsage], cutting: float) -> int:
        # Tightest fit wins; strict comparison keeps the earliest stock on ties
        best_idx = -1
        best_left = None
        for idx, usage in enumerate(usages):
            if not usage.fits(cutting):
                continue
            left = usage.remaining - cutting
            if best_left is None or left < best_left:
                best_idx, best_left = idx, left
        return best_idx


def ffd(stocks: Sequence[float], cuttings: Sequence[float]) -> CuttingResult:
    return FirstFitDecreasing().run(stocks, cuttings)


def bfd(stocks: Sequence[float], cuttings: Sequence[float]) -> CuttingResult:
    return BestFitDecreasing().run(stocks, cuttings)
