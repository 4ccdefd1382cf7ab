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


"""Static raster output drawn with matplotlib."""

import logging
import os
import stat
import uuid
from typing import Optional

from matplotlib.figure import Figure

from .errors import RenderError
from .series import ChartType, SeriesDescription

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 640
DEFAULT_HEIGHT = 480
DEFAULT_DPI = 80
BACKGROUND_COLOR = "white"


def _output_format(path: str) -> str:
    suffix = os.path.splitext(path)[1].lstrip('.').lower()
    return suffix or 'png'


def _plot_series(fig: Figure, description: SeriesDescription) -> None:
    """Draws the tagged series on a single axes of the figure."""
    ax = fig.add_subplot()
    ax.set_facecolor(BACKGROUND_COLOR)
    positions = list(range(len(description)))
    values = list(description.series.data)
    kind = description.series.kind

    if kind is ChartType.BAR:
        ax.bar(positions, values)
    elif kind is ChartType.LINE:
        ax.plot(positions, values, marker='o')
    else:
        ax.scatter(positions, values)

    ax.set_xticks(positions)
    ax.set_xticklabels(description.x_labels)
    ax.set_title(description.title)
    ax.set_xlabel(description.x_name)
    ax.set_ylabel(description.y_name)
    ax.grid(True, axis='y', alpha=0.3)


def render_static(description: Optional[SeriesDescription], path: str,
                  width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT,
                  dpi: int = DEFAULT_DPI) -> str:
    """Writes a width x height image to path, plotting the series when one is given.

    With no description the canvas is only filled with the background color.
    The image is rendered to a temporary file next to path and moved into place,
    so a failed render never leaves a partial file behind.
    """
    if width <= 0 or height <= 0:
        raise RenderError(f"Canvas size must be positive, got {width}x{height}")

    fig = Figure(figsize=(width / dpi, height / dpi), dpi=dpi, facecolor=BACKGROUND_COLOR)
    if description is not None:
        try:
            _plot_series(fig, description)
            fig.tight_layout()
        except (ValueError, RuntimeError) as e:
            logger.error("Failed to plot %s: %s", path, e)
            raise RenderError(f"Failed to plot '{path}': {e}") from e

    fmt = _output_format(path)
    directory = os.path.dirname(os.path.abspath(path))
    temp_path = os.path.join(directory, f".{os.path.basename(path)}.{uuid.uuid4().hex}.tmp")
    try:
        # 0o666 lets the process umask decide the final permissions
        fd = os.open(temp_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o666)
    except OSError as e:
        logger.error("Cannot open %s for writing: %s", path, e)
        raise RenderError(f"Cannot open '{path}' for writing: {e}") from e

    try:
        with os.fdopen(fd, 'wb') as fh:
            fig.savefig(fh, format=fmt, dpi=dpi, facecolor=BACKGROUND_COLOR)
        if os.path.isfile(path):
            os.chmod(temp_path, stat.S_IMODE(os.stat(path).st_mode))
        os.replace(temp_path, path)
    except (OSError, ValueError, RuntimeError) as e:
        logger.error("Failed to render %s: %s", path, e)
        if os.path.exists(temp_path):
            os.remove(temp_path)
        raise RenderError(f"Failed to render '{path}': {e}") from e

    logger.info("Wrote %dx%d %s image to %s", width, height, fmt, path)
    return path
