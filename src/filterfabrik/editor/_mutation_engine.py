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

"""Selection-aware move, delete and toggle operations.

Unmet preconditions (an edit in progress, a sorted or read-only view,
nothing selected, a block already at the boundary) make the commands
do nothing.  Store failures are not caught here; they abort the
operation and propagate to the caller.
"""

import contextlib
import logging

logger = logging.getLogger(__name__)

REMOVE_WARNING = 'Do you really want to remove all selected filters?'


class MutationEngine:
    """Applies commands for one view to the Store, one Store call per entry."""

    def __init__(
        self,
        view,
        selection,
        edit,
        storage,
        surface,
        confirm,
        *,
        parent=None,
        remove_warning=REMOVE_WARNING,
    ):
        """Initialise the engine.

        Args:
            view: :class:`OrderedView` being edited.
            selection: :class:`Selection` of *view*.
            edit: :class:`EditLifecycle` consulted for "edit in progress".
            storage: Store receiving ``move_filter`` / ``remove_filter``.
            surface: Rendering surface providing the batch-update hints.
            confirm: Callable ``confirm(parent, message) -> bool`` asked
                before removing two or more filters.
            parent: Opaque context handed through to *confirm*.
            remove_warning: Message shown by *confirm*.
        """
        self._view = view
        self._selection = selection
        self._edit = edit
        self._storage = storage
        self._surface = surface
        self._confirm = confirm
        self._parent = parent
        self._remove_warning = remove_warning

    @contextlib.contextmanager
    def _batch(self):
        self._surface.begin_update_batch()
        try:
            yield
        finally:
            self._surface.end_update_batch()

    def _can_reorder(self):
        return (
            self._view.editable
            and not self._view.is_empty
            and not self._view.is_sorted()
            and not self._edit.in_progress()
        )

    # ------------------------------------------------------------------
    # Reordering
    # ------------------------------------------------------------------

    def move_up(self):
        """Move the selected filters one line up.

        The selected entries slide up as one block: each is moved to the
        slot right after the previously moved one, which closes any gaps
        between them.  Returns True if the Store was asked to move.
        """
        if not self._can_reorder():
            return False
        items = self._selection.selected_entries()
        if not items:
            return False
        items.sort(key=lambda e: e.index)

        new_pos = items[0].index - 1
        if new_pos < 0:
            return False

        subscription_id = self._view.subscription_id
        logger.debug('Moving %d filter(s) up to %d', len(items), new_pos)
        with self._batch():
            # Later entries keep their index while earlier ones move up.
            for entry in items:
                self._storage.move_filter(
                    entry.handle,
                    subscription_id,
                    entry.index,
                    new_pos,
                )
                new_pos += 1
        self._selection.ranged_select(new_pos - len(items), new_pos - 1)
        return True

    def move_down(self):
        """Move the selected filters one line down (mirror of :meth:`move_up`)."""
        if not self._can_reorder():
            return False
        items = self._selection.selected_entries()
        if not items:
            return False
        items.sort(key=lambda e: e.index)

        new_pos = items[-1].index + 1
        if new_pos >= len(self._view):
            return False

        subscription_id = self._view.subscription_id
        logger.debug('Moving %d filter(s) down to %d', len(items), new_pos)
        with self._batch():
            for entry in reversed(items):
                self._storage.move_filter(
                    entry.handle,
                    subscription_id,
                    entry.index,
                    new_pos,
                )
                new_pos -= 1
        self._selection.ranged_select(new_pos + 1, new_pos + len(items))
        return True

    # ------------------------------------------------------------------
    # Removal and state toggles
    # ------------------------------------------------------------------

    def delete_selected(self):
        """Remove the selected filters, asking first if there are several.

        Filters are removed highest index first so that each removal
        leaves the indices of the remaining targets intact.
        """
        if not self._view.editable or self._edit.in_progress():
            return False

        old_index = self._selection.current_index
        items = [e for e in self._selection.selected_entries() if not e.is_placeholder]
        items.sort(key=lambda e: e.index, reverse=True)

        if not items:
            return False
        if len(items) >= 2 and not self._confirm(self._parent, self._remove_warning):
            logger.debug('Removal of %d filters declined', len(items))
            return False

        subscription_id = self._view.subscription_id
        logger.debug('Removing %d filter(s)', len(items))
        with self._batch():
            for entry in items:
                self._storage.remove_filter(entry.handle, subscription_id, entry.index)
        self._selection.select_row(old_index)
        return True

    def select_all(self):
        self._selection.select_all()

    def toggle_disabled(self):
        """Enable or disable all selected filters.

        The new state is the opposite of the first selected filter's, so a
        mixed selection ends up uniform.
        """
        if self._edit.in_progress():
            return False
        items = [e for e in self._selection.selected_entries() if not e.is_placeholder]
        if not items:
            return False
        new_value = not items[0].disabled
        with self._batch():
            for entry in items:
                self._storage.set_disabled(entry.handle, new_value)
        return True
