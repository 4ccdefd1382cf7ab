# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (C) 2024 Jonathan Lee
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License version 3
# as published by the Free Software Foundation.
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.
# See the GNU Affero General Public License for more details.
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see https://www.gnu.org/licenses/.


"""Column extraction: turns a dataframe and two column names into a series description."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Tuple

import numpy as np
import pandas as pd

from .errors import ColumnNotFoundError, TypeCoercionError

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "fluent-plots chart"

# Placeholder strings that read as "missing" once coerced to numbers.
MISSING_VALUE_STRINGS = ['na', 'Na', 'NA', 'n/a', 'N/A', '', 'null', 'None']

_NESTED_TYPES = (list, tuple, dict, set, frozenset)


class ChartType(Enum):
    BAR = "bar"
    LINE = "line"
    SCATTER = "scatter"


@dataclass(frozen=True)
class Series:
    """A y-value sequence tagged with the chart kind that draws it."""
    kind: ChartType
    data: Tuple[float, ...]


@dataclass(frozen=True)
class SeriesDescription:
    """Renderer-agnostic chart data: a title, categorical labels and one tagged series."""
    title: str
    x_labels: Tuple[str, ...]
    series: Series
    x_name: str = ""
    y_name: str = ""

    def __len__(self) -> int:
        return len(self.x_labels)


# --- Helper Functions ---

def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, _NESTED_TYPES):
        return False
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _has_nested_values(series: pd.Series) -> bool:
    """Check whether an object column holds lists, dicts or similar containers."""
    if series.dtype != 'object':
        return False
    return any(isinstance(value, _NESTED_TYPES) for value in series)


def _get_column(df: pd.DataFrame, column: str, axis: str) -> pd.Series:
    if not column or column not in df.columns:
        raise ColumnNotFoundError(column, axis, df.columns)
    data = df[column]
    if isinstance(data, pd.DataFrame):
        raise ColumnNotFoundError(column, axis, df.columns,
                                  reason=f"is ambiguous, the frame has {data.shape[1]} columns with that name")
    return data


def _extract_labels(series: pd.Series) -> List[str]:
    """Convert a column to display labels, missing cells become empty strings."""
    if _has_nested_values(series):
        raise TypeCoercionError(f"Column '{series.name}' holds nested values and cannot be used as text labels.")
    return ["" if _is_missing(value) else str(value) for value in series.tolist()]


def _extract_values(series: pd.Series) -> List[float]:
    """Convert a column to float64, missing or unparseable cells become 0.0."""
    if _has_nested_values(series):
        raise TypeCoercionError(f"Column '{series.name}' holds nested values and cannot be cast to numbers.")
    if isinstance(series.dtype, pd.CategoricalDtype):
        series = series.astype(object)
    try:
        numeric = pd.to_numeric(series, errors='coerce')
        values = numeric.to_numpy(dtype='float64', na_value=np.nan)
    except (TypeError, ValueError) as e:
        raise TypeCoercionError(f"Column '{series.name}' cannot be cast to numbers: {e}") from e
    values = np.where(np.isnan(values), 0.0, values)
    return [float(v) for v in values]


# --- Public API ---

def extract_series(df: pd.DataFrame, chart_type: ChartType, x_column: str, y_column: str,
                   title: str = DEFAULT_TITLE) -> SeriesDescription:
    """Extract the x labels and y values of two columns, row for row."""
    logger.debug("Extracting %s series x=%r y=%r from frame of shape %s",
                 chart_type.value, x_column, y_column, df.shape)

    # Both lookups happen before any conversion so a bad name yields no partial output
    x_data = _get_column(df, x_column, 'x')
    y_data = _get_column(df, y_column, 'y')

    labels = _extract_labels(x_data)
    values = _extract_values(y_data)

    return SeriesDescription(
        title=title,
        x_labels=tuple(labels),
        series=Series(kind=chart_type, data=tuple(values)),
        x_name=x_column,
        y_name=y_column,
    )


def validate_mappings(df: pd.DataFrame, x_column: str, y_column: str) -> Dict[str, Any]:
    """Validates that the selected columns are usable for the given data."""
    errors = []
    warnings = []

    for axis, col in (('x', x_column), ('y', y_column)):
        if not col:
            errors.append(f"No column selected for '{axis}'")
        elif col not in df.columns:
            errors.append(f"Column '{col}' not found in data")

    for axis, col in (('x', x_column), ('y', y_column)):
        if not col or col not in df.columns:
            continue
        col_data = df[col]

        if isinstance(col_data, pd.DataFrame):
            errors.append(f"Column '{col}' is ambiguous, the frame has {col_data.shape[1]} columns with that name")
            continue

        if _has_nested_values(col_data):
            errors.append(f"Column '{col}' holds nested values")
            continue

        if len(col_data):
            null_pct = col_data.isnull().sum() / len(col_data) * 100
            if null_pct > 50:
                warnings.append(f"Column '{col}' has {null_pct:.1f}% missing values")

        if axis == 'y' and col_data.dtype == 'object':
            na_count = col_data.isin(MISSING_VALUE_STRINGS).sum()
            if na_count > 0:
                warnings.append(f"Column '{col}' has {na_count} 'na' string values that will be read as 0")

    return {
        'valid': len(errors) == 0,
        'errors': errors,
        'warnings': warnings
    }
