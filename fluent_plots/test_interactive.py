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


"""
Tests for ECharts and plotly output.
"""

import json
import math
import os

import pandas as pd
import plotly.graph_objects as go
import pytest

from fluent_plots import SerializationError, barchart, linechart, scatterplot
from fluent_plots import interactive


@pytest.fixture
def sales():
    return pd.DataFrame({"product": ["A", "B", "C"], "sales": [10, None, 30]})


def test_echarts_option_shape(sales):
    option = barchart(sales).x("product").y("sales").to_echarts_option()
    assert list(option) == ["title", "xAxis", "yAxis", "series"]
    assert option == {
        "title": {"text": "fluent-plots chart"},
        "xAxis": {"type": "category", "data": ["A", "B", "C"]},
        "yAxis": {"type": "value"},
        "series": [{"type": "bar", "data": [10.0, 0.0, 30.0]}],
    }


@pytest.mark.parametrize("factory, tag", [(barchart, "bar"), (linechart, "line"), (scatterplot, "scatter")])
def test_json_series_type(sales, factory, tag):
    payload = json.loads(factory(sales).x("product").y("sales").to_json())
    assert payload["series"][0]["type"] == tag


def test_non_finite_values_cannot_be_serialized():
    df = pd.DataFrame({"name": ["a", "b"], "value": [1.0, math.inf]})
    chart = linechart(df).x("name").y("value")
    # Extraction keeps the value, serialization rejects it
    assert chart.describe().series.data[1] == math.inf
    with pytest.raises(SerializationError):
        chart.to_json()
    with pytest.raises(SerializationError):
        chart.to_interactive_html()


def test_html_page(sales):
    html = barchart(sales).x("product").y("sales").to_interactive_html()
    assert html.startswith("<!DOCTYPE html>")
    assert f'<script src="{interactive.ECHARTS_CDN_URL}"></script>' in html
    assert '<div id="main" style="width: 800px;height:600px;"></div>' in html
    assert "echarts.init(document.getElementById('main'))" in html
    assert "myChart.setOption(option);" in html
    start = html.index("var option = ") + len("var option = ")
    end = html.index(";\n", start)
    assert json.loads(html[start:end])["xAxis"]["data"] == ["A", "B", "C"]


def test_html_escapes_closing_tags():
    df = pd.DataFrame({"name": ["</script><b>"], "value": [1]})
    html = barchart(df).x("name").y("value").to_interactive_html()
    assert "</script><b>" not in html
    assert "<\\/script><b>" in html


def test_html_is_idempotent(sales):
    chart = scatterplot(sales).x("product").y("sales")
    assert chart.to_interactive_html() == chart.to_interactive_html()


@pytest.mark.parametrize("factory, trace_type, mode", [
    (barchart, go.Bar, None),
    (linechart, go.Scatter, "lines"),
    (scatterplot, go.Scatter, "markers"),
])
def test_plotly_figure(sales, factory, trace_type, mode):
    fig = factory(sales).x("product").y("sales").to_plotly_figure()
    assert len(fig.data) == 1
    trace = fig.data[0]
    assert isinstance(trace, trace_type)
    if mode:
        assert trace.mode == mode
    assert list(trace.x) == ["A", "B", "C"]
    assert list(trace.y) == [10.0, 0.0, 30.0]
    assert fig.layout.title.text == "fluent-plots chart"


def test_save_plotly_html(tmp_path, sales):
    out = tmp_path / "chart.html"
    result = barchart(sales).x("product").y("sales").save_html(str(out))
    assert result == str(out)
    content = out.read_text(encoding="utf-8")
    assert "cdn.plot.ly" in content


def test_open_in_browser(monkeypatch, sales):
    opened = []
    monkeypatch.setattr(interactive.webbrowser, "open", opened.append)
    path = barchart(sales).x("product").y("sales").open_in_browser()
    try:
        assert path.endswith("_bar.html")
        assert opened == [f"file://{path}"]
        with open(path, encoding="utf-8") as fh:
            assert interactive.ECHARTS_CDN_URL in fh.read()
    finally:
        os.remove(path)
