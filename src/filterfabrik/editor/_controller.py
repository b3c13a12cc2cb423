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

"""Per-view composition of the filter list editing components."""

import dataclasses
import logging

from filterfabrik.editor._command_router import CommandRouter, accel_mask
from filterfabrik.editor._edit_lifecycle import EditLifecycle
from filterfabrik.editor._mutation_engine import REMOVE_WARNING, MutationEngine
from filterfabrik.editor._ordered_view import (
    COL_FILTER,
    COLUMNS,
    OrderedView,
    SortDirection,
)
from filterfabrik.editor._selection import Selection

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class ColumnMenuState:
    """What the column context menu should show as checked."""

    visible: dict
    sort_column: str | None
    sort_direction: SortDirection


class FilterListController:
    """Command handlers for one filter list view.

    Built once per view instance; menu actions and key bindings of the
    surrounding application call the public methods below.

    The *surface* must provide ``begin_update_batch()``,
    ``end_update_batch()``, ``start_inline_edit(row, column,
    on_finished=None)``, ``is_editing()``, ``is_column_visible(column)``
    and ``set_column_visible(column, visible)``.
    """

    def __init__(
        self,
        storage,
        surface,
        confirm,
        *,
        subscription_id=None,
        parent=None,
        accel_key=None,
        platform=None,
        remove_warning=REMOVE_WARNING,
    ):
        self._storage = storage
        self._surface = surface
        self.view = OrderedView(storage, subscription_id)
        self.selection = Selection(self.view, edit_guard=self._is_editing)
        self.edit = EditLifecycle(self.view, self.selection, storage, surface)
        self.engine = MutationEngine(
            self.view,
            self.selection,
            self.edit,
            storage,
            surface,
            confirm,
            parent=parent,
            remove_warning=remove_warning,
        )
        self.router = CommandRouter(
            self,
            surface.is_column_visible,
            accel_mask(accel_key, platform),
        )

    def _is_editing(self):
        return self.edit.in_progress()

    def close(self):
        self.view.close()

    def set_subscription(self, subscription_id):
        """Switch the view to another subscription."""
        if self._is_editing():
            return False
        self.selection.clear()
        self.view.set_subscription(subscription_id)
        if len(self.view):
            self.selection.select_row(0)
        return True

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def move_up(self):
        return self.engine.move_up()

    def move_down(self):
        return self.engine.move_down()

    def delete_selected(self):
        return self.engine.delete_selected()

    def select_all(self):
        self.engine.select_all()

    def toggle_disabled(self):
        return self.engine.toggle_disabled()

    def start_editing(self):
        return self.edit.start_editing()

    def insert_filter(self):
        return self.edit.start_insert_editing()

    def commit_edit(self, row, text):
        """Accept *text* typed into the editor at *row*."""
        entry = self.view.entry_at(row)
        if entry is None:
            return False
        if entry.is_placeholder:
            return self.edit.commit(text) is not None
        return self.edit.commit_existing(row, text)

    def set_disabled(self, row, disabled):
        """Enable or disable the single filter displayed at *row*."""
        entry = self.view.entry_at(row)
        if entry is None or entry.is_placeholder:
            return False
        self._storage.set_disabled(entry.handle, disabled)
        return True

    def key_press(self, event):
        return self.router.key_press(event)

    # ------------------------------------------------------------------
    # Sorting and columns
    # ------------------------------------------------------------------

    def sort_by(self, column, direction=SortDirection.ASCENDING):
        if self._is_editing():
            return
        self.view.sort_by(column, direction)

    def set_sort_order(self, direction):
        """Change the sort direction, sorting by the filter column if unsorted."""
        column = self.view.sort_key or COL_FILTER
        self.sort_by(column, SortDirection(direction))

    def toggle_column(self, column):
        if column not in COLUMNS:
            raise ValueError(f'Unknown column {column!r}')
        visible = self._surface.is_column_visible(column)
        self._surface.set_column_visible(column, not visible)

    def column_menu_state(self):
        return ColumnMenuState(
            visible={c: self._surface.is_column_visible(c) for c in COLUMNS},
            sort_column=self.view.sort_key,
            sort_direction=self.view.sort_direction,
        )
