import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Sequence, Tuple, Optional

import numpy as np

from cutplan.config import GeneticConfig
from cutplan.models import StockUsage, CuttingResult
from cutplan.optimization import CuttingAlgorithm, build_result

logger = logging.getLogger(__name__)

SURVIVOR_FRACTION = 0.2

# Fitness weights: placed cuts dominate, usage rate second, stock count a light penalty
PLACED_WEIGHT = 1000
USAGE_WEIGHT = 100
STOCK_PENALTY = 5


def replay_assignment(individual: Sequence[int], stocks: Sequence[float],
                      cuttings: Sequence[float]) -> Tuple[List[StockUsage], List[float]]:
    """
    Applies an assignment vector to a fresh stock arena.
    Cut i goes to stock individual[i] if it still fits there, otherwise it stays unplaced.
    """
    usages = [StockUsage(original=length) for length in stocks]
    unplaced = []
    for stock_idx, cut in zip(individual, cuttings):
        usage = usages[int(stock_idx)]
        if usage.fits(cut):
            usage.assign(cut)
        else:
            unplaced.append(cut)
    return usages, unplaced


def fitness(individual: Sequence[int], stocks: Sequence[float], cuttings: Sequence[float]) -> float:
    usages, unplaced = replay_assignment(individual, stocks, cuttings)
    used = [u for u in usages if u.is_used]
    used_length = sum(u.original for u in used)
    placed_length = sum(sum(u.cuts) for u in used)
    usage_rate = placed_length / used_length if used_length > 0 else 0.0
    placed = len(cuttings) - len(unplaced)
    return PLACED_WEIGHT * placed + USAGE_WEIGHT * usage_rate - STOCK_PENALTY * len(used)


class GeneticSearch(CuttingAlgorithm):
    """
    Evolves stock assignment vectors (one gene per cut, gene = stock index).

    Each generation keeps the top 20% as survivors and refills the population with
    single-point crossover children of random survivor pairs, mutated gene by gene.
    The best individual ever seen is kept aside and decoded at the end.
    """
    name = "Genetic"

    def __init__(self, config: Optional[GeneticConfig] = None, rng: Optional[np.random.Generator] = None, workers: int = 1):
        self.config = (config or GeneticConfig()).validate()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.workers = max(1, workers)

    def _evaluate(self, population: np.ndarray, stocks: List[float], cuttings: List[float]) -> np.ndarray:
        # Every evaluation builds its own stock arena, so individuals can be scored concurrently
        if self.workers > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                scores = list(pool.map(lambda ind: fitness(ind, stocks, cuttings), population))
        else:
            scores = [fitness(ind, stocks, cuttings) for ind in population]
        return np.asarray(scores, dtype=float)

    def _random_population(self, n_stocks: int, n_cuts: int) -> np.ndarray:
        return self.rng.integers(0, n_stocks, size=(self.config.population_size, n_cuts))

    def _crossover(self, parent1: np.ndarray, parent2: np.ndarray) -> np.ndarray:
        point = int(self.rng.integers(0, len(parent1)))
        return np.concatenate([parent1[:point], parent2[point:]])

    def _mutate(self, child: np.ndarray, n_stocks: int):
        mask = self.rng.random(len(child)) < self.config.mutation_rate
        if mask.any():
            child[mask] = self.rng.integers(0, n_stocks, size=int(mask.sum()))

    def run(self, stocks: Sequence[float], cuttings: Sequence[float]) -> CuttingResult:
        stocks = list(stocks)
        cuttings = list(cuttings)

        # Nothing to assign to, or nothing to assign
        if not stocks or not cuttings:
            usages = [StockUsage(original=length) for length in stocks]
            return build_result(usages, list(cuttings), len(cuttings))

        pop_size = self.config.population_size
        n_survivors = max(1, int(pop_size * SURVIVOR_FRACTION))
        population = self._random_population(len(stocks), len(cuttings))

        best_individual: Optional[np.ndarray] = None
        best_fitness = -np.inf

        for gen in range(self.config.generations):
            scores = self._evaluate(population, stocks, cuttings)
            order = np.argsort(-scores, kind="stable")

            if scores[order[0]] > best_fitness:
                best_fitness = scores[order[0]]
                best_individual = population[order[0]].copy()
                logger.debug("Generation %d: new best fitness %.4f", gen, best_fitness)

            # Survivors pass on unchanged, so the best of this generation is never lost
            survivors = population[order[:n_survivors]].copy()

            children = []
            while len(survivors) + len(children) < pop_size:
                parent1 = survivors[self.rng.integers(0, len(survivors))]
                parent2 = survivors[self.rng.integers(0, len(survivors))]
                child = self._crossover(parent1, parent2)
                self._mutate(child, len(stocks))
                children.append(child)

            population = np.vstack([survivors] + children) if children else survivors

        # The last bred population has not been scored yet
        scores = self._evaluate(population, stocks, cuttings)
        top = int(np.argmax(scores))
        if scores[top] > best_fitness:
            best_fitness = scores[top]
            best_individual = population[top].copy()

        # Decode by replaying once more; this replay alone decides what is unplaced
        usages, unplaced = replay_assignment(best_individual, stocks, cuttings)
        result = build_result(usages, unplaced, len(cuttings))
        logger.debug("Genetic: best fitness %.4f, %d plans, %d unplaced", best_fitness,
                     result.stock_count, len(result.unplaced_cuttings))
        return result


def genetic_search(stocks: Sequence[float], cuttings: Sequence[float], config: Optional[GeneticConfig] = None,
                   rng: Optional[np.random.Generator] = None) -> CuttingResult:
    return GeneticSearch(config, rng=rng).run(stocks, cuttings)
