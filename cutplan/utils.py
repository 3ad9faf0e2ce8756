from io import BytesIO
from typing import List

import pandas as pd

from cutplan.models import CuttingResult

PLAN_COLUMNS = ["Stock", "Cuttings", "Cut Count", "Used", "Remaining", "Usage %"]


def fmt_length(value: float) -> str:
    """10.0 -> '10', 2.5 -> '2.5'"""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return f"{value:g}"


def fmt_lengths(values) -> str:
    return ", ".join(fmt_length(v) for v in values)


class PlanExporter:
    @staticmethod
    def to_dataframe(result: CuttingResult) -> pd.DataFrame:
        rows = []
        for plan in result.cutting_plans:
            rows.append({
                "Stock": plan.stock,
                "Cuttings": fmt_lengths(plan.cutting),
                "Cut Count": len(plan.cutting),
                "Used": plan.used,
                "Remaining": plan.remaining,
                "Usage %": round(plan.used / plan.stock * 100, 2) if plan.stock > 0 else 0.0,
            })
        return pd.DataFrame(rows, columns=PLAN_COLUMNS)

    @staticmethod
    def summary_lines(result: CuttingResult) -> List[str]:
        lines = [
            f"Stock: {fmt_length(p.stock)}, Cuttings: [{fmt_lengths(p.cutting)}], Remaining: {fmt_length(p.remaining)}"
            for p in result.cutting_plans
        ]
        if result.unplaced_cuttings:
            lines.append(f"Unplaced Cuttings: [{fmt_lengths(result.unplaced_cuttings)}]")
        if result.unplaced_stocks:
            lines.append(f"Unused Stocks: [{fmt_lengths(result.unplaced_stocks)}]")
        lines.append(f"Stock Usage Rate: {result.usage_rate * 100:.2f}%")
        return lines

    @staticmethod
    def to_excel(result: CuttingResult) -> bytes:
        output = BytesIO()
        with pd.ExcelWriter(output, engine='openpyxl') as writer:
            PlanExporter.to_dataframe(result).to_excel(writer, index=False, sheet_name='Plan')
        return output.getvalue()
