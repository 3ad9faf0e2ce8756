from collections import Counter


class ResultAssertions:
    """Mixin with the invariant checks every algorithm's output must satisfy."""

    def assertConservation(self, result, stocks, cuttings):
        placed = [c for p in result.cutting_plans for c in p.cutting]
        self.assertEqual(Counter(placed + list(result.unplaced_cuttings)), Counter(cuttings))
        used = [p.stock for p in result.cutting_plans]
        self.assertEqual(Counter(used + list(result.unplaced_stocks)), Counter(stocks))

    def assertPlansConsistent(self, result):
        for plan in result.cutting_plans:
            self.assertTrue(plan.cutting, "plan without cuts")
            self.assertGreaterEqual(plan.remaining, 0)
            self.assertAlmostEqual(sum(plan.cutting) + plan.remaining, plan.stock)

    def assertUsageBounds(self, result):
        self.assertGreaterEqual(result.usage_rate, 0.0)
        self.assertLessEqual(result.usage_rate, 1.0)
        if not result.cutting_plans:
            self.assertEqual(result.usage_rate, 0)

    def assertValidResult(self, result, stocks, cuttings):
        self.assertConservation(result, stocks, cuttings)
        self.assertPlansConsistent(result)
        self.assertUsageBounds(result)
