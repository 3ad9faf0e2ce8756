import unittest
import sys
import os

# Add parent directory to path to import modules
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cutplan.models import CuttingResult
from cutplan.optimization import ffd
from cutplan.utils import PlanExporter, PLAN_COLUMNS, fmt_length


class TestFormatting(unittest.TestCase):
    def test_fmt_length(self):
        self.assertEqual(fmt_length(10.0), "10")
        self.assertEqual(fmt_length(2.5), "2.5")
        self.assertEqual(fmt_length(3), "3")


class TestPlanExporter(unittest.TestCase):
    def setUp(self):
        self.result = ffd([10, 8, 3], [5, 4, 3, 2, 9])

    def test_summary_lines(self):
        lines = PlanExporter.summary_lines(ffd([10, 8], [5, 4, 3, 2]))
        self.assertEqual(lines, [
            "Stock: 10, Cuttings: [5, 4], Remaining: 1",
            "Stock: 8, Cuttings: [3, 2], Remaining: 3",
            "Stock Usage Rate: 77.78%",
        ])

    def test_summary_mentions_leftovers(self):
        lines = PlanExporter.summary_lines(ffd([5, 3, 1], [4, 4, 2]))
        self.assertIn("Unplaced Cuttings: [4]", lines)
        self.assertIn("Unused Stocks: [1]", lines)

    def test_dataframe(self):
        # 9 -> 10, 5 -> 8, 4 / 3 / 2: 4 no (8 has 3 left), 3 -> 8, 2 -> 3
        df = PlanExporter.to_dataframe(self.result)
        self.assertEqual(list(df.columns), PLAN_COLUMNS)
        self.assertEqual(len(df), len(self.result.cutting_plans))
        first = df.iloc[0]
        self.assertEqual(first["Stock"], 10)
        self.assertEqual(first["Cuttings"], "9")
        self.assertEqual(first["Remaining"], 1)
        self.assertAlmostEqual(first["Usage %"], 90.0)

    def test_empty_dataframe(self):
        df = PlanExporter.to_dataframe(CuttingResult())
        self.assertTrue(df.empty)
        self.assertEqual(list(df.columns), PLAN_COLUMNS)

    def test_excel_bytes(self):
        data = PlanExporter.to_excel(self.result)
        self.assertTrue(data.startswith(b"PK"))


if __name__ == '__main__':
    unittest.main()
