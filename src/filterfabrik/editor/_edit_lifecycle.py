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

"""Inline-edit lifecycle: placeholder insert, edit, commit or abandon."""

import enum
import logging

from filterfabrik.editor._ordered_view import COL_FILTER

logger = logging.getLogger(__name__)


class EditState(enum.Enum):
    IDLE = 'idle'
    PLACEHOLDER_SHOWN = 'placeholder-shown'
    COMMITTED = 'committed'
    ABANDONED = 'abandoned'


class _EditTicket:
    """One-shot completion callback handed to the edit surface."""

    __slots__ = ('_callback', 'resolved')

    def __init__(self, callback):
        self._callback = callback
        self.resolved = False

    def __call__(self):
        if self.resolved:
            return
        self.resolved = True
        self._callback(self)


class EditLifecycle:
    """Drives inline editing of existing filters and of new ones.

    Inserting shows a placeholder row and starts editing it.  The surface
    calls the registered ticket once editing ends; if :meth:`commit` has
    not turned the placeholder into a real filter by then, the
    placeholder is removed again.
    """

    def __init__(self, view, selection, storage, surface):
        self._view = view
        self._selection = selection
        self._storage = storage
        self._surface = surface
        self._state = EditState.IDLE
        self._ticket = None

    @property
    def state(self):
        return self._state

    def in_progress(self):
        """True while a placeholder is shown or the surface has an open editor."""
        return self._state != EditState.IDLE or self._surface.is_editing()

    def start_editing(self):
        """Start editing the filter at the selection's current index."""
        if self.in_progress():
            return False
        row = self._selection.current_index
        entry = self._view.entry_at(row)
        if entry is None:
            return False
        self._surface.start_inline_edit(row, COL_FILTER)
        return True

    def start_insert_editing(self):
        """Show a placeholder at the current row and start editing it."""
        if not self._view.editable or self.in_progress():
            return False

        row = self._selection.current_index
        if len(self._view) == 0:
            row = 0
        else:
            row = min(max(row, 0), len(self._view) - 1)
        row = self._view.show_placeholder(row)
        self._selection.select_row(row)
        self._state = EditState.PLACEHOLDER_SHOWN
        logger.debug('Placeholder shown at row %d', row)

        ticket = _EditTicket(self._on_edit_finished)
        self._ticket = ticket
        self._surface.start_inline_edit(row, COL_FILTER, on_finished=ticket)
        return True

    def commit(self, text):
        """Turn the placeholder into a new filter with *text*.

        Blank text is ignored; the placeholder then goes away when the
        surface reports that editing ended.  Returns the new filter id,
        or *None*.
        """
        if self._state != EditState.PLACEHOLDER_SHOWN:
            return None
        text = str(text).strip()
        if not text:
            return None

        position = self._view.placeholder.index
        self._state = EditState.COMMITTED
        try:
            self._view.hide_placeholder()
            filter_id = self._storage.add_filter(
                text,
                self._view.subscription_id,
                position,
            )
        finally:
            self._state = EditState.IDLE
        logger.debug('Placeholder committed as filter %s', filter_id)

        row = self._view.row_of(filter_id)
        if row is not None:
            self._selection.select_row(row)
        return filter_id

    def commit_existing(self, row, text):
        """Store new *text* for the real filter displayed at *row*."""
        entry = self._view.entry_at(row)
        if entry is None or entry.is_placeholder:
            return False
        text = str(text).strip()
        if not text or text == entry.text:
            return False
        self._storage.set_filter_text(entry.handle, text)
        return True

    def _on_edit_finished(self, ticket):
        if ticket is not self._ticket:
            return
        self._ticket = None
        if self._state != EditState.PLACEHOLDER_SHOWN:
            return
        row = self._view.row_of(None)
        self._state = EditState.ABANDONED
        try:
            self._view.hide_placeholder()
        finally:
            self._state = EditState.IDLE
        logger.debug('Placeholder abandoned')

        # The row the placeholder occupied now shows the filter it displaced.
        if row is not None:
            self._selection.select_row(row)
