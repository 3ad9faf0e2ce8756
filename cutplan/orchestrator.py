import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

import numpy as np

from cutplan.config import GeneticConfig
from cutplan.genetic import GeneticSearch
from cutplan.models import CuttingResult, AlgorithmScore, OptimizationReport
from cutplan.optimization import CuttingAlgorithm, FirstFitDecreasing, BestFitDecreasing

logger = logging.getLogger(__name__)

WEIGHT_UNPLACED = 0.5
WEIGHT_USAGE = 0.3
WEIGHT_STOCKS = 0.2

# Tie-break order, highest priority first
PRIORITY = ("Genetic", "BFD", "FFD")


def score_result(result: CuttingResult) -> float:
    """
    Weighted score, higher is better:
    fewer unplaced cuts (inverted so zero unplaced gives the full 0.5),
    higher usage rate, fewer stocks used.
    """
    unplaced_score = WEIGHT_UNPLACED * (1.0 / (1 + len(result.unplaced_cuttings)))
    usage_score = WEIGHT_USAGE * result.usage_rate
    stocks_penalty = WEIGHT_STOCKS * len(result.cutting_plans)
    return unplaced_score + usage_score - stocks_penalty


def default_algorithms(config: Optional[GeneticConfig] = None, rng: Optional[np.random.Generator] = None) -> List[CuttingAlgorithm]:
    return [FirstFitDecreasing(), BestFitDecreasing(), GeneticSearch(config, rng=rng)]


def _priority(name: str) -> int:
    return PRIORITY.index(name) if name in PRIORITY else len(PRIORITY)


def select_best(scores: List[AlgorithmScore]) -> OptimizationReport:
    max_score = max(s.score for s in scores)
    winners = [s.name for s in scores if s.score == max_score]
    chosen = min((s for s in scores if s.score == max_score), key=lambda s: _priority(s.name))
    return OptimizationReport(best=chosen.result, selected=chosen.name, winners=winners, scores=scores)


def optimize_with_report(stocks: Sequence[float], cuttings: Sequence[float],
                         algorithms: Optional[List[CuttingAlgorithm]] = None, config: Optional[GeneticConfig] = None,
                         rng: Optional[np.random.Generator] = None, parallel: bool = False) -> OptimizationReport:
    """Runs every algorithm on its own copy of the inputs and picks the best scored result."""
    if algorithms is None:
        algorithms = default_algorithms(config, rng)
    if not algorithms:
        raise ValueError("At least one cutting algorithm is required")

    if parallel:
        with ThreadPoolExecutor(max_workers=len(algorithms)) as pool:
            futures = [pool.submit(algo.run, list(stocks), list(cuttings)) for algo in algorithms]
            results = [f.result() for f in futures]
    else:
        results = [algo.run(list(stocks), list(cuttings)) for algo in algorithms]

    scores = [AlgorithmScore(name=algo.name, score=score_result(res), result=res)
              for algo, res in zip(algorithms, results)]
    report = select_best(scores)

    logger.info("Best algorithm%s: %s", "s" if len(report.winners) > 1 else "", ", ".join(report.winners))
    logger.info("Scores - %s", ", ".join(f"{s.name}: {s.score:.4f}" for s in scores))
    return report


def optimize(stocks: Sequence[float], cuttings: Sequence[float], config: Optional[GeneticConfig] = None,
             rng: Optional[np.random.Generator] = None, parallel: bool = False) -> CuttingResult:
    return optimize_with_report(stocks, cuttings, config=config, rng=rng, parallel=parallel).best
