from __future__ import annotations
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from ..data_processing.normalization_utils import select_columns
from ..exceptions import EmptyDataset
from .validate import as_table

logger = logging.getLogger(__name__)

# Substituted for fields that cannot be parsed as numbers.
MISSING_VALUE_DEFAULT = 0.0


def load_table(
    path: str | Path,
    delimiter: str = ";",
    columns: Optional[Sequence[int]] = None,
    fill_value: float = MISSING_VALUE_DEFAULT,
) -> Tuple[np.ndarray, List[str]]:
    """Read a delimited text file with a header row into a float64 table.

    Non-numeric fields are replaced by ``fill_value`` (a warning reports how
    many). ``columns`` optionally projects the table by position.
    """
    path = Path(path)
    try:
        df = pd.read_csv(path, sep=delimiter)
    except pd.errors.EmptyDataError as e:
        raise EmptyDataset(f"No data in {path}") from e
    if df.empty:
        raise EmptyDataset(f"No data rows in {path}")
    df.columns = [str(c).strip().strip('"') for c in df.columns]

    numeric = df.apply(pd.to_numeric, errors="coerce")
    replaced = int(numeric.isna().sum().sum())
    if replaced:
        logger.warning("Replaced %d unparseable field(s) in %s with %s", replaced, path, fill_value)
        numeric = numeric.fillna(fill_value)

    names = list(numeric.columns)
    if columns is not None:
        table = select_columns(as_table(numeric), columns)
        names = [names[i] for i in columns]
    else:
        table = as_table(numeric)
    logger.info("Loaded %d samples x %d features from %s", table.shape[0], table.shape[1], path)
    return table, names
