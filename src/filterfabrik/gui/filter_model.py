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

"""Flat Qt item model over the filter list's ordered view."""

import datetime

from PySide6.QtCore import QAbstractItemModel, QModelIndex, Qt
from PySide6.QtGui import QColor

from filterfabrik.editor import COL_ENABLED, COL_FILTER, COL_HITCOUNT, COL_LASTHIT

_INVALID_INDEX = QModelIndex()

HEADERS = [
    'Filter rule',
    'Enabled',
    'Hits',
    'Last hit',
]

# Column ids in header order.
COLUMN_IDS = (COL_FILTER, COL_ENABLED, COL_HITCOUNT, COL_LASTHIT)

_COL_ENABLED = 1
_COL_FILTER = 0
_COL_HITCOUNT = 2
_COL_LASTHIT = 3

_DISABLED_FG = QColor('gray')


def column_section(column_id):
    """Return the header section of *column_id*."""
    return COLUMN_IDS.index(column_id)


class FilterTreeModel(QAbstractItemModel):
    """Presents a :class:`FilterListController`'s view to Qt.

    The model holds no data of its own.  It resets whenever the ordered
    view changes; inside an update batch the reset is deferred until the
    outermost batch ends.
    """

    def __init__(self, controller, parent=None):
        super().__init__(parent)
        self._controller = controller
        self._view = controller.view
        self._batch_depth = 0
        self._reset_pending = False
        self._view.add_listener(self._on_view_changed)

    def detach(self):
        self._view.remove_listener(self._on_view_changed)

    # ------------------------------------------------------------------
    # Batch updates
    # ------------------------------------------------------------------

    def begin_update_batch(self):
        self._batch_depth += 1

    def end_update_batch(self):
        if self._batch_depth == 0:
            return
        self._batch_depth -= 1
        if self._batch_depth == 0 and self._reset_pending:
            self._reset_pending = False
            self._reset()

    def _on_view_changed(self):
        if self._batch_depth:
            self._reset_pending = True
            return
        self._reset()

    def _reset(self):
        self.beginResetModel()
        self.endResetModel()

    # ------------------------------------------------------------------
    # Qt model interface (QAbstractItemModel overrides)
    # ------------------------------------------------------------------

    def index(self, row, column, parent=_INVALID_INDEX):
        if parent.isValid() or not self.hasIndex(row, column, parent):
            return QModelIndex()
        return self.createIndex(row, column)

    def parent(self, index):
        return QModelIndex()

    def rowCount(self, parent=_INVALID_INDEX):
        if parent.isValid():
            return 0
        return len(self._view)

    def columnCount(self, parent=_INVALID_INDEX):
        return len(HEADERS)

    def hasChildren(self, parent=_INVALID_INDEX):
        return not parent.isValid() and len(self._view) > 0

    def flags(self, index):
        if not index.isValid():
            return Qt.ItemFlag.NoItemFlags
        entry = self._view.entry_at(index.row())
        base = Qt.ItemFlag.ItemIsEnabled | Qt.ItemFlag.ItemIsSelectable
        if entry is None:
            return base
        col = index.column()
        if col == _COL_FILTER and self._view.editable:
            return base | Qt.ItemFlag.ItemIsEditable
        if col == _COL_ENABLED and not entry.is_placeholder:
            return base | Qt.ItemFlag.ItemIsUserCheckable
        return base

    def data(self, index, role=Qt.ItemDataRole.DisplayRole):
        if not index.isValid():
            return None
        entry = self._view.entry_at(index.row())
        if entry is None:
            return None
        col = index.column()
        if role in (Qt.ItemDataRole.DisplayRole, Qt.ItemDataRole.EditRole):
            return self._display_value(entry, col)
        if role == Qt.ItemDataRole.CheckStateRole:
            if col == _COL_ENABLED and not entry.is_placeholder:
                if entry.disabled:
                    return Qt.CheckState.Unchecked
                return Qt.CheckState.Checked
            return None
        if role == Qt.ItemDataRole.ForegroundRole:
            if entry.disabled:
                return _DISABLED_FG
            return None
        if role == Qt.ItemDataRole.ToolTipRole:
            if col == _COL_FILTER and entry.text:
                return entry.text
            return None
        if role == Qt.ItemDataRole.TextAlignmentRole:
            if col == _COL_HITCOUNT:
                return Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter
            return None
        return None

    def setData(self, index, value, role=Qt.ItemDataRole.EditRole):
        if not index.isValid():
            return False
        row = index.row()
        col = index.column()
        if col == _COL_FILTER and role == Qt.ItemDataRole.EditRole:
            return self._controller.commit_edit(row, value or '')
        if col == _COL_ENABLED and role == Qt.ItemDataRole.CheckStateRole:
            checked = Qt.CheckState(value) == Qt.CheckState.Checked
            return self._controller.set_disabled(row, not checked)
        return False

    def headerData(self, section, orientation, role=Qt.ItemDataRole.DisplayRole):
        if (
            role == Qt.ItemDataRole.DisplayRole
            and orientation == Qt.Orientation.Horizontal
        ):
            return HEADERS[section]
        return None

    # ------------------------------------------------------------------
    # Display helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _display_value(entry, col):
        if entry.is_placeholder:
            return ''
        if col == _COL_FILTER:
            return entry.text
        if col == _COL_HITCOUNT:
            return entry.hit_count
        if col == _COL_LASTHIT:
            return _format_last_hit(entry.last_hit)
        return None


def _format_last_hit(timestamp):
    """Format a hit timestamp for display, or '' if the filter never matched."""
    if not timestamp:
        return ''
    return datetime.datetime.fromtimestamp(timestamp).strftime('%Y-%m-%d %H:%M:%S')
