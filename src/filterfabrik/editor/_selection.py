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

"""Row selection tracked by entry handle."""

import logging

logger = logging.getLogger(__name__)


class Selection:
    """Selected entries of an :class:`OrderedView` plus the keyboard anchor.

    Members are stored by handle, so they follow their entries through
    moves.  Every time the view re-derives its rows, handles that no
    longer exist are evicted and the current index is clamped.
    """

    def __init__(self, view, *, edit_guard=None):
        """Initialise the selection.

        Args:
            view: The :class:`OrderedView` whose rows are selected.
            edit_guard: Optional callable returning True while an edit
                is in progress; :meth:`select_all` does nothing then.
        """
        self._view = view
        self._edit_guard = edit_guard
        self._handles = set()
        self._current_index = -1
        self._listeners = []
        view.add_listener(self._on_view_changed)

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, callback):
        """Register *callback()*, fired whenever membership or anchor change."""
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback):
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify(self):
        for callback in list(self._listeners):
            callback()

    def _on_view_changed(self):
        live = {e.handle for e in self._view}
        stale = self._handles - live
        if stale:
            logger.debug('Evicting %d stale selection member(s)', len(stale))
            self._handles &= live
        current = min(self._current_index, len(self._view) - 1)
        self._current_index = current
        self._notify()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def current_index(self):
        """Keyboard anchor row, or -1 when there is none."""
        return self._current_index

    def is_empty(self):
        return not self._handles

    def __len__(self):
        return len(self._handles)

    def selected_entries(self):
        """Return the selected entries, ordered by ascending index."""
        entries = [e for e in self._view if e.handle in self._handles]
        entries.sort(key=lambda e: e.index)
        return entries

    def selected_rows(self):
        """Return the selected display rows in ascending order."""
        return [row for row, e in enumerate(self._view) if e.handle in self._handles]

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def select_all(self):
        if self._edit_guard is not None and self._edit_guard():
            return
        self._handles = {e.handle for e in self._view}
        if self._current_index < 0 and self._handles:
            self._current_index = 0
        self._notify()

    def ranged_select(self, low, high):
        """Replace the selection with the inclusive row range [*low*, *high*]."""
        low = max(low, 0)
        high = min(high, len(self._view) - 1)
        self._handles = {self._view.entry_at(row).handle for row in range(low, high + 1)}
        if self._handles:
            self._current_index = high
        self._notify()

    def select_row(self, row):
        """Select the single row nearest to *row*; clears on an empty view."""
        if len(self._view) == 0:
            self.clear()
            return
        row = min(max(row, 0), len(self._view) - 1)
        self._handles = {self._view.entry_at(row).handle}
        self._current_index = row
        self._notify()

    def replace(self, rows, current):
        """Mirror a selection the user made in the widget."""
        handles = set()
        for row in rows:
            entry = self._view.entry_at(row)
            if entry is not None:
                handles.add(entry.handle)
        current = current if 0 <= current < len(self._view) else -1
        if handles == self._handles and current == self._current_index:
            return
        self._handles = handles
        self._current_index = current
        self._notify()

    def clear(self):
        self._handles = set()
        self._current_index = -1
        self._notify()
