from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional


@dataclass
class LengthRow:
    length: float
    quantity: int = 1


@dataclass
class CuttingPlan:
    stock: float
    cutting: List[float]
    remaining: float

    @property
    def used(self) -> float:
        return sum(self.cutting)

    def to_dict(self) -> Dict[str, Any]:
        return {"stock": self.stock, "cutting": list(self.cutting), "remaining": self.remaining}


@dataclass
class StockUsage:
    """Working state of one stock piece during a single algorithm run."""
    original: float
    remaining: Optional[float] = None
    cuts: List[float] = field(default_factory=list)

    def __post_init__(self):
        if self.remaining is None:
            self.remaining = self.original

    @property
    def is_used(self) -> bool:
        return len(self.cuts) > 0

    def fits(self, length: float) -> bool:
        return self.remaining >= length

    def assign(self, length: float):
        if not self.fits(length):
            raise ValueError(f"Cut {length} does not fit into stock {self.original} (remaining {self.remaining})")
        self.cuts.append(length)
        self.remaining -= length

    def to_plan(self) -> CuttingPlan:
        return CuttingPlan(stock=self.original, cutting=list(self.cuts), remaining=self.remaining)


@dataclass
class CuttingResult:
    cutting_plans: List[CuttingPlan] = field(default_factory=list)
    unplaced_cuttings: List[float] = field(default_factory=list)
    unplaced_stocks: List[float] = field(default_factory=list)
    usage_rate: float = 0.0

    @property
    def used_stock_length(self) -> float:
        return sum(p.stock for p in self.cutting_plans)

    @property
    def placed_length(self) -> float:
        return sum(p.used for p in self.cutting_plans)

    @property
    def total_waste(self) -> float:
        return sum(p.remaining for p in self.cutting_plans)

    @property
    def stock_count(self) -> int:
        return len(self.cutting_plans)

    def placed_cuttings(self) -> List[float]:
        return [c for p in self.cutting_plans for c in p.cutting]

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data form with the key names used by the calling application."""
        return {
            "cuttingPlans": [p.to_dict() for p in self.cutting_plans],
            "unplacedCuttings": list(self.unplaced_cuttings),
            "unplacedStocks": list(self.unplaced_stocks),
            "usageRate": self.usage_rate,
        }


@dataclass
class AlgorithmScore:
    name: str
    score: float
    result: CuttingResult


@dataclass
class OptimizationReport:
    best: CuttingResult
    selected: str
    winners: List[str]
    scores: List[AlgorithmScore] = field(default_factory=list)

    def score_of(self, name: str) -> Optional[float]:
        for s in self.scores:
            if s.name == name:
                return s.score
        return None
