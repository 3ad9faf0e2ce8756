import logging
from typing import Iterable, List, Optional, Tuple, Union

import numpy as np
import pandas as pd

from cutplan.config import UNLIMITED_STOCK_QUANTITY, MAX_ROW_QUANTITY, GeneticConfig
from cutplan.models import LengthRow, CuttingResult
from cutplan.orchestrator import optimize

logger = logging.getLogger(__name__)

Rows = Union[pd.DataFrame, Iterable]


def rows_to_frame(rows: Rows) -> pd.DataFrame:
    """Accepts a DataFrame, LengthRow objects, dicts or (length, quantity) pairs."""
    if isinstance(rows, pd.DataFrame):
        df = rows.copy()
    else:
        records = []
        for row in rows:
            if isinstance(row, LengthRow):
                records.append({'length': row.length, 'quantity': row.quantity})
            elif isinstance(row, dict):
                records.append({'length': row.get('length'), 'quantity': row.get('quantity', 1)})
            else:
                length, quantity = row
                records.append({'length': length, 'quantity': quantity})
        df = pd.DataFrame(records, columns=['length', 'quantity'])
    if 'quantity' not in df.columns:
        df['quantity'] = 1
    return df


def _coerce(series: pd.Series) -> pd.Series:
    # Unparseable and non-finite values both become NaN
    return pd.to_numeric(series, errors='coerce').replace([np.inf, -np.inf], np.nan)


def expand_rows(rows: Rows, quantity_override: Optional[int] = None) -> List[float]:
    """
    Expands (length, quantity) rows into one entry per unit.
    Unparseable or negative lengths become 0. Blank, zero or unparseable quantities become 1,
    negative quantities expand to nothing and huge ones are capped at MAX_ROW_QUANTITY.
    """
    df = rows_to_frame(rows)
    if df.empty:
        return []
    lengths = _coerce(df['length']).fillna(0).clip(lower=0).astype(float)
    if quantity_override is not None:
        quantities = pd.Series(quantity_override, index=df.index)
    else:
        quantities = np.trunc(_coerce(df['quantity'])).replace(0, np.nan).fillna(1)
        quantities = quantities.clip(lower=0, upper=MAX_ROW_QUANTITY).astype(int)

    expanded = []
    for length, qty in zip(lengths, quantities):
        expanded.extend([float(length)] * int(qty))
    return expanded


def prepare_request(stock_rows: Rows, cutting_rows: Rows, unlimited_stock: bool = False) -> Tuple[List[float], List[float]]:
    stocks = expand_rows(stock_rows, UNLIMITED_STOCK_QUANTITY if unlimited_stock else None)
    cuttings = expand_rows(cutting_rows)
    logger.debug("Expanded request: %d stocks, %d cuttings (unlimited=%s)", len(stocks), len(cuttings), unlimited_stock)
    return stocks, cuttings


def optimize_rows(stock_rows: Rows, cutting_rows: Rows, unlimited_stock: bool = False,
                  config: Optional[GeneticConfig] = None, rng=None) -> CuttingResult:
    stocks, cuttings = prepare_request(stock_rows, cutting_rows, unlimited_stock)
    result = optimize(stocks, cuttings, config=config, rng=rng)
    if unlimited_stock:
        # The synthetic stock pool is not meaningful to report back
        result.unplaced_stocks = []
    return result
