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

"""QTreeView for the filter list: rendering surface and key routing."""

import logging
import sys

from PySide6.QtCore import QItemSelection, QItemSelectionModel, Qt
from PySide6.QtWidgets import (
    QAbstractItemView,
    QHeaderView,
    QMenu,
    QMessageBox,
    QTreeView,
)

from filterfabrik.editor import COLUMNS, Key, KeyInput, SortDirection
from filterfabrik.gui import filter_settings
from filterfabrik.gui.filter_model import (
    COLUMN_IDS,
    HEADERS,
    FilterTreeModel,
    column_section,
)

logger = logging.getLogger(__name__)


def confirm(parent, message):
    """Ask a yes/no question; return True if the user answered yes."""
    answer = QMessageBox.question(
        parent,
        'FilterFabrik',
        message,
        QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        QMessageBox.StandardButton.No,
    )
    return answer == QMessageBox.StandardButton.Yes


def run_command(parent, command):
    """Call *command* and return its result.

    A ``ValueError`` raised by the filter storage is logged and shown to
    the user in a warning box; *None* is returned in that case.
    """
    try:
        return command()
    except ValueError as exc:
        logger.exception('Filter command failed')
        QMessageBox.warning(parent, 'FilterFabrik', str(exc))
        return None


def key_input_from_qt(event, platform=None):
    """Convert a :class:`QKeyEvent` into a :class:`KeyInput`.

    On macOS Qt reports Command as ``ControlModifier`` and the Control
    key as ``MetaModifier``; swap them back so the result describes the
    physical keys.
    """
    if platform is None:
        platform = sys.platform
    key = event.key()
    if key == Qt.Key.Key_Space:
        name = Key.SPACE
    elif key == Qt.Key.Key_Up:
        name = Key.UP
    elif key == Qt.Key.Key_Down:
        name = Key.DOWN
    else:
        name = Key.OTHER

    modifiers = event.modifiers()
    ctrl = bool(modifiers & Qt.KeyboardModifier.ControlModifier)
    meta = bool(modifiers & Qt.KeyboardModifier.MetaModifier)
    if platform == 'darwin':
        ctrl, meta = meta, ctrl
    return KeyInput(
        key=name,
        alt=bool(modifiers & Qt.KeyboardModifier.AltModifier),
        ctrl=ctrl,
        meta=meta,
    )


class FilterTreeView(QTreeView):
    """Tree view that renders a :class:`FilterListController`.

    Besides displaying rows it serves as the controller's surface:
    batch-update hints, inline editing, and column visibility.  The
    controller's :class:`Selection` is authoritative; selections made
    with the mouse are mirrored into it and vice versa.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self._controller = None
        self._edit_finished = None
        self._syncing = False
        self.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.setSelectionMode(QAbstractItemView.SelectionMode.ExtendedSelection)
        self.setRootIsDecorated(False)
        self.setUniformRowHeights(True)
        self.setAllColumnsShowFocus(True)
        self.setEditTriggers(
            QAbstractItemView.EditTrigger.DoubleClicked
            | QAbstractItemView.EditTrigger.EditKeyPressed,
        )

        header = self.header()
        header.setStretchLastSection(False)
        header.setSectionsClickable(True)
        header.setSortIndicatorShown(False)
        header.sectionClicked.connect(self._on_header_clicked)
        header.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        header.customContextMenuRequested.connect(self._show_column_menu)

    # ------------------------------------------------------------------
    # Controller setup
    # ------------------------------------------------------------------

    def attach(self, controller):
        """Render *controller*; it must have been built with this view as surface."""
        self._controller = controller
        model = FilterTreeModel(controller, self)
        self.setModel(model)
        model.modelReset.connect(self._on_model_reset)
        self.selectionModel().selectionChanged.connect(self._push_selection)
        self.selectionModel().currentChanged.connect(self._push_selection)
        controller.selection.add_listener(self._pull_selection)

        self.header().setSectionResizeMode(
            column_section(COLUMNS[0]),
            QHeaderView.ResizeMode.Stretch,
        )
        hidden = filter_settings.get_hidden_columns()
        for column in COLUMNS:
            self.setColumnHidden(column_section(column), column in hidden)
        self._update_sort_indicator()

    def _on_model_reset(self):
        # A reset drops any open editor without closing it.
        if self._edit_finished is not None and not self.is_editing():
            self._finish_edit()
        self._pull_selection()

    # ------------------------------------------------------------------
    # Selection mirroring
    # ------------------------------------------------------------------

    def _push_selection(self, *_args):
        """Copy the widget's selection into the controller."""
        if self._syncing or self._controller is None:
            return
        rows = sorted({idx.row() for idx in self.selectionModel().selectedRows()})
        current = self.currentIndex()
        self._syncing = True
        try:
            self._controller.selection.replace(
                rows,
                current.row() if current.isValid() else -1,
            )
        finally:
            self._syncing = False

    def _pull_selection(self):
        """Copy the controller's selection into the widget."""
        if self._syncing or self._controller is None:
            return
        model = self.model()
        if model is None:
            return
        last_col = model.columnCount() - 1
        selection = QItemSelection()
        for row in self._controller.selection.selected_rows():
            selection.select(model.index(row, 0), model.index(row, last_col))
        self._syncing = True
        try:
            sel_model = self.selectionModel()
            sel_model.select(
                selection,
                QItemSelectionModel.SelectionFlag.ClearAndSelect
                | QItemSelectionModel.SelectionFlag.Rows,
            )
            current = self._controller.selection.current_index
            if current >= 0:
                idx = model.index(current, 0)
                sel_model.setCurrentIndex(
                    idx,
                    QItemSelectionModel.SelectionFlag.NoUpdate,
                )
                self.scrollTo(idx)
        finally:
            self._syncing = False

    # ------------------------------------------------------------------
    # Surface interface
    # ------------------------------------------------------------------

    def begin_update_batch(self):
        model = self.model()
        if model is not None:
            model.begin_update_batch()

    def end_update_batch(self):
        model = self.model()
        if model is not None:
            model.end_update_batch()

    def is_editing(self):
        return self.state() == QAbstractItemView.State.EditingState

    def start_inline_edit(self, row, column, on_finished=None):
        """Open the inline editor at *row*/*column*.

        *on_finished* is called once the editor closes, or right away if
        no editor could be opened.
        """
        model = self.model()
        self._edit_finished = on_finished
        idx = model.index(row, column_section(column))
        if idx.isValid():
            self.scrollTo(idx)
            self.selectionModel().setCurrentIndex(
                idx,
                QItemSelectionModel.SelectionFlag.NoUpdate,
            )
            self.edit(idx)
        if not self.is_editing():
            logger.debug('Could not start editing row %d', row)
            self._finish_edit()

    def closeEditor(self, editor, hint):
        super().closeEditor(editor, hint)
        self._finish_edit()
        self.setFocus()

    def _finish_edit(self):
        callback = self._edit_finished
        self._edit_finished = None
        if callback is not None:
            callback()

    def is_column_visible(self, column):
        return not self.isColumnHidden(column_section(column))

    def set_column_visible(self, column, visible):
        self.setColumnHidden(column_section(column), not visible)
        filter_settings.set_column_hidden(column, not visible)

    # ------------------------------------------------------------------
    # Sorting and column menu
    # ------------------------------------------------------------------

    def sort_by(self, column, direction):
        """Sort through the controller and remember the choice."""
        if self._controller is None:
            return
        self._controller.sort_by(column, direction)
        view = self._controller.view
        filter_settings.set_sort_state(view.sort_key, view.sort_direction)
        self._update_sort_indicator()

    def set_sort_order(self, direction):
        if self._controller is None:
            return
        self._controller.set_sort_order(direction)
        view = self._controller.view
        filter_settings.set_sort_state(view.sort_key, view.sort_direction)
        self._update_sort_indicator()

    def _on_header_clicked(self, section):
        """Cycle the clicked column through ascending, descending and unsorted."""
        if self._controller is None:
            return
        column = COLUMN_IDS[section]
        view = self._controller.view
        if view.sort_key != column:
            self.sort_by(column, SortDirection.ASCENDING)
        elif view.sort_direction == SortDirection.ASCENDING:
            self.sort_by(column, SortDirection.DESCENDING)
        else:
            self.sort_by(None, SortDirection.NATURAL)

    def _update_sort_indicator(self):
        header = self.header()
        view = self._controller.view if self._controller is not None else None
        if view is None or not view.is_sorted():
            header.setSortIndicatorShown(False)
            return
        order = (
            Qt.SortOrder.AscendingOrder
            if view.sort_direction == SortDirection.ASCENDING
            else Qt.SortOrder.DescendingOrder
        )
        header.setSortIndicator(column_section(view.sort_key), order)
        header.setSortIndicatorShown(True)

    def _show_column_menu(self, pos):
        if self._controller is None:
            return
        menu = QMenu(self)
        self.fill_column_menu(menu)
        menu.exec(self.header().mapToGlobal(pos))

    def fill_column_menu(self, menu):
        """Populate *menu* with column visibility and sort entries."""
        state = self._controller.column_menu_state()
        for column in COLUMNS:
            action = menu.addAction(HEADERS[column_section(column)])
            action.setCheckable(True)
            action.setChecked(state.visible[column])
            action.triggered.connect(
                lambda _checked=False, c=column: self._controller.toggle_column(c),
            )

        sort_menu = menu.addMenu('Sort By')
        unsorted = sort_menu.addAction('Unsorted')
        unsorted.setCheckable(True)
        unsorted.setChecked(state.sort_column is None)
        unsorted.triggered.connect(
            lambda _checked=False: self.sort_by(None, SortDirection.NATURAL),
        )
        for column in COLUMNS:
            action = sort_menu.addAction(HEADERS[column_section(column)])
            action.setCheckable(True)
            action.setChecked(state.sort_column == column)
            action.triggered.connect(
                lambda _checked=False, c=column: self.sort_by(
                    c,
                    SortDirection.ASCENDING,
                ),
            )
        sort_menu.addSeparator()
        for label, direction in (
            ('Ascending', SortDirection.ASCENDING),
            ('Descending', SortDirection.DESCENDING),
        ):
            action = sort_menu.addAction(label)
            action.setCheckable(True)
            action.setChecked(state.sort_direction == direction)
            action.triggered.connect(
                lambda _checked=False, d=direction: self.set_sort_order(d),
            )

    # ------------------------------------------------------------------
    # Keyboard shortcuts
    # ------------------------------------------------------------------

    def keyPressEvent(self, event):
        if self._controller is None:
            super().keyPressEvent(event)
            return

        key_input = key_input_from_qt(event)
        if run_command(self.window(), lambda: self._controller.key_press(key_input)):
            event.accept()
            return

        if event.modifiers() == Qt.KeyboardModifier.NoModifier and not self.is_editing():
            key = event.key()
            if key == Qt.Key.Key_Delete:
                run_command(self.window(), self._controller.delete_selected)
                return
            if key == Qt.Key.Key_Insert:
                run_command(self.window(), self._controller.insert_filter)
                return

        super().keyPressEvent(event)
