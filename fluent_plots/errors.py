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


"""Exceptions raised by fluent_plots."""


class FluentPlotsError(Exception):
    """Base class for every error raised by this package."""


class ColumnNotFoundError(FluentPlotsError, ValueError):
    """A selected column is unset, absent from the dataset, or ambiguous."""

    def __init__(self, column: str, axis: str, available=None, reason: str = "not found"):
        self.column = column
        self.axis = axis
        self.available = list(available) if available is not None else []
        self.reason = reason
        if not column:
            message = f"No column selected for '{axis}'. Call .{axis}(name) before rendering."
        else:
            message = f"Column '{column}' for '{axis}' {reason}. Available: {self.available}"
        super().__init__(message)


class TypeCoercionError(FluentPlotsError, ValueError):
    """A column as a whole cannot be coerced to the type its axis needs."""


class RenderError(FluentPlotsError):
    """The static output could not be written or finalized."""


class SerializationError(FluentPlotsError):
    """A description could not be turned into JSON."""
