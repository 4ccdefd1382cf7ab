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


"""Fluent chart builder: pick a chart kind, select two columns, then render."""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List

import pandas as pd

from .errors import ColumnNotFoundError, TypeCoercionError
from .series import DEFAULT_TITLE, ChartType, SeriesDescription, extract_series, validate_mappings
from .static import DEFAULT_HEIGHT, DEFAULT_WIDTH, render_static

logger = logging.getLogger(__name__)


def _as_dataframe(data: Any) -> pd.DataFrame:
    # DataFrames are shared, never copied
    if isinstance(data, pd.DataFrame):
        return data
    return pd.DataFrame(data)


@dataclass(frozen=True)
class Chart:
    """An immutable chart configuration over a borrowed dataframe.

    Builder methods return a new Chart and leave the receiver untouched, so a
    partially configured chart can be shared and branched freely.
    """
    chart_type: ChartType
    dataframe: pd.DataFrame = field(repr=False, compare=False)
    x_column: str = ""
    y_column: str = ""
    chart_title: str = DEFAULT_TITLE

    # --- Builder ---

    def x(self, column_name: str) -> "Chart":
        return replace(self, x_column=column_name)

    def y(self, column_name: str) -> "Chart":
        return replace(self, y_column=column_name)

    with_x = x
    with_y = y

    def title(self, text: str) -> "Chart":
        return replace(self, chart_title=text)

    # --- Terminal operations ---

    def describe(self) -> SeriesDescription:
        """Extracts the configured columns into a kind-tagged series description."""
        return extract_series(self.dataframe, self.chart_type, self.x_column, self.y_column, self.chart_title)

    def validate(self) -> Dict[str, Any]:
        return validate_mappings(self.dataframe, self.x_column, self.y_column)

    def draw(self, path: str, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT) -> str:
        """Writes a raster image of the chart to path.

        A chart whose columns are unset or cannot be extracted is drawn as a
        blank canvas, so drawing never depends on the column configuration.
        """
        logger.info("Drawing static chart with x='%s' and y='%s'", self.x_column, self.y_column)
        description = None
        if self.x_column and self.y_column:
            try:
                description = self.describe()
            except (ColumnNotFoundError, TypeCoercionError) as e:
                logger.warning("Drawing blank canvas to %s: %s", path, e)
        return render_static(description, path, width=width, height=height)

    def to_echarts_option(self) -> Dict[str, Any]:
        from . import interactive
        return interactive.to_echarts_option(self.describe())

    def to_json(self) -> str:
        from . import interactive
        return interactive.to_json(self.describe())

    def to_interactive_html(self) -> str:
        from . import interactive
        return interactive.to_html(self.describe())

    def open_in_browser(self) -> str:
        from . import interactive
        return interactive.open_in_browser(self.describe())

    def to_plotly_figure(self):
        from . import interactive
        return interactive.to_plotly_figure(self.describe())

    def save_html(self, path: str) -> str:
        from . import interactive
        return interactive.save_plotly_html(self.describe(), path)


# --- Factories ---

def barchart(data: Any) -> Chart:
    return Chart(ChartType.BAR, _as_dataframe(data))


def linechart(data: Any) -> Chart:
    return Chart(ChartType.LINE, _as_dataframe(data))


def scatterplot(data: Any) -> Chart:
    return Chart(ChartType.SCATTER, _as_dataframe(data))


def available_chart_types() -> List[str]:
    """Returns the tags of all supported chart kinds."""
    return sorted(kind.value for kind in ChartType)
