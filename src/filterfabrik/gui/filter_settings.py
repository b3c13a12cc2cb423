# Copyright (C) 2026 Linuxfabrik <info@linuxfabrik.ch>
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.
#
# On Debian systems, the complete text of the GNU General Public License
# version 2 can be found in /usr/share/common-licenses/GPL-2.
#
# SPDX-License-Identifier: GPL-2.0-or-later

"""QSettings helpers for the filter list."""

from PySide6.QtCore import QSettings

from filterfabrik.editor import COLUMNS, SortDirection

# Columns hidden until the user turns them on.
DEFAULT_HIDDEN_COLUMNS = ('lasthit',)


def get_accel_key():
    """Return the configured accelerator key name, or '' for the platform default."""
    return QSettings().value('Filters/AccelKey', '', type=str)


def get_hidden_columns():
    """Return the ids of the columns the user has hidden."""
    value = QSettings().value('Filters/HiddenColumns', None)
    if value is None:
        return set(DEFAULT_HIDDEN_COLUMNS)
    if isinstance(value, str):
        value = [value] if value else []
    return {c for c in value if c in COLUMNS}


def set_column_hidden(column, hidden):
    """Persist the visibility of *column*."""
    hidden_columns = get_hidden_columns()
    if hidden:
        hidden_columns.add(column)
    else:
        hidden_columns.discard(column)
    QSettings().setValue('Filters/HiddenColumns', sorted(hidden_columns))


def get_sort_state():
    """Return the stored ``(column, SortDirection)``; column is None if unsorted."""
    column = QSettings().value('Filters/SortColumn', '', type=str)
    direction = QSettings().value(
        'Filters/SortDirection',
        SortDirection.NATURAL.value,
        type=str,
    )
    if column not in COLUMNS:
        return None, SortDirection.NATURAL
    try:
        return column, SortDirection(direction)
    except ValueError:
        return None, SortDirection.NATURAL


def set_sort_state(column, direction):
    QSettings().setValue('Filters/SortColumn', column or '')
    QSettings().setValue('Filters/SortDirection', SortDirection(direction).value)
