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


"""Fluent builders for bar, line and scatter charts over pandas dataframes."""

from .chart import Chart, available_chart_types, barchart, linechart, scatterplot
from .errors import (
    ColumnNotFoundError,
    FluentPlotsError,
    RenderError,
    SerializationError,
    TypeCoercionError,
)
from .series import ChartType, Series, SeriesDescription

__all__ = [
    "Chart",
    "ChartType",
    "Series",
    "SeriesDescription",
    "available_chart_types",
    "barchart",
    "linechart",
    "scatterplot",
    "ColumnNotFoundError",
    "FluentPlotsError",
    "RenderError",
    "SerializationError",
    "TypeCoercionError",
]
