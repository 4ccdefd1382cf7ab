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


"""Interactive output: ECharts option JSON embedded in an HTML page, plus plotly figures.

Nothing in the static drawing path imports this module.
"""

import json
import logging
import os
import tempfile
import webbrowser
from typing import Any, Dict

import plotly.graph_objects as go

from .errors import SerializationError
from .series import ChartType, SeriesDescription

logger = logging.getLogger(__name__)

ECHARTS_CDN_URL = "https://cdn.jsdelivr.net/npm/echarts@5.5.0/dist/echarts.min.js"
HTML_PAGE_TITLE = "Fluent-Plots Chart"
CONTAINER_WIDTH = "800px"
CONTAINER_HEIGHT = "600px"
PLOTLY_WIDTH = 1000
PLOTLY_HEIGHT = 600

HTML_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8" />
    <title>{page_title}</title>
    <script src="{cdn_url}"></script>
</head>
<body>
    <div id="main" style="width: {width};height:{height};"></div>
    <script type="text/javascript">
        var myChart = echarts.init(document.getElementById('main'));
        var option = {json_config};
        myChart.setOption(option);
    </script>
</body>
</html>
"""


# --- ECharts ---

def to_echarts_option(description: SeriesDescription) -> Dict[str, Any]:
    """Builds the ECharts option object; key order matches what echarts expects."""
    return {
        "title": {"text": description.title},
        "xAxis": {"type": "category", "data": list(description.x_labels)},
        "yAxis": {"type": "value"},
        "series": [
            {"type": description.series.kind.value, "data": list(description.series.data)},
        ],
    }


def to_json(description: SeriesDescription) -> str:
    try:
        return json.dumps(to_echarts_option(description), allow_nan=False, ensure_ascii=False)
    except ValueError as e:
        logger.error("Cannot serialize chart '%s': %s", description.title, e)
        raise SerializationError(f"Chart data cannot be serialized: {e}") from e


def to_html(description: SeriesDescription) -> str:
    """Returns a self-contained HTML page that renders the chart with ECharts."""
    json_config = to_json(description)
    # Keep a label like "</script>" from closing the inline script early
    json_config = json_config.replace("</", "<\\/")
    return HTML_TEMPLATE.format(
        page_title=HTML_PAGE_TITLE,
        cdn_url=ECHARTS_CDN_URL,
        width=CONTAINER_WIDTH,
        height=CONTAINER_HEIGHT,
        json_config=json_config,
    )


def open_in_browser(description: SeriesDescription) -> str:
    """Writes the chart page to a temporary file and opens it in the default browser."""
    page = to_html(description)
    fd, temp_path = tempfile.mkstemp(suffix=f"_{description.series.kind.value}.html")
    with os.fdopen(fd, 'w', encoding='utf-8') as fh:
        fh.write(page)
    webbrowser.open(f'file://{os.path.abspath(temp_path)}')
    return temp_path


# --- Plotly ---

def _get_base_layout(description: SeriesDescription) -> go.Layout:
    """Returns a consistent base layout for all charts."""
    return go.Layout(
        title=dict(
            text=description.title,
            font=dict(size=20),
            x=0.5,
            xanchor='center'
        ),
        template="plotly_white",
        font=dict(size=12),
        showlegend=False,
        margin=dict(l=50, r=50, t=80, b=50),
        hovermode='closest',
        xaxis=dict(type='category', title=description.x_name),
        yaxis=dict(title=description.y_name),
    )


def to_plotly_figure(description: SeriesDescription) -> go.Figure:
    x = list(description.x_labels)
    y = list(description.series.data)
    kind = description.series.kind

    if kind is ChartType.BAR:
        trace = go.Bar(x=x, y=y, name=description.y_name)
    elif kind is ChartType.LINE:
        trace = go.Scatter(x=x, y=y, mode='lines', name=description.y_name)
    else:
        trace = go.Scatter(x=x, y=y, mode='markers', name=description.y_name)

    fig = go.Figure(data=[trace], layout=_get_base_layout(description))
    fig.update_layout(width=PLOTLY_WIDTH, height=PLOTLY_HEIGHT)
    return fig


def save_plotly_html(description: SeriesDescription, output_path: str) -> str:
    """Renders the chart to a plotly HTML file that loads plotly.js from its CDN."""
    fig = to_plotly_figure(description)
    config = {'displayModeBar': True, 'displaylogo': False, 'modeBarButtonsToRemove': ['select2d', 'lasso2d']}
    fig.write_html(output_path, config=config, include_plotlyjs='cdn')
    logger.info("Wrote plotly chart to %s", output_path)
    return output_path
