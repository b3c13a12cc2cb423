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

"""Display-ordered read view over one subscription's filters."""

import dataclasses
import enum
import logging
import uuid

logger = logging.getLogger(__name__)

COL_FILTER = 'filter'
COL_ENABLED = 'enabled'
COL_HITCOUNT = 'hitcount'
COL_LASTHIT = 'lasthit'

COLUMNS = (COL_FILTER, COL_ENABLED, COL_HITCOUNT, COL_LASTHIT)


class SortDirection(enum.Enum):
    ASCENDING = 'ascending'
    DESCENDING = 'descending'
    NATURAL = 'natural'


@dataclasses.dataclass(frozen=True, slots=True)
class Entry:
    """One displayed row.

    ``handle`` is the filter id, or *None* for the edit placeholder.
    ``index`` is the position in the Store's sequence, which is also the
    display row while the view is unsorted.
    """

    handle: uuid.UUID | None
    index: int
    text: str = ''
    disabled: bool = False
    hit_count: int = 0
    last_hit: float = 0.0

    @property
    def is_placeholder(self):
        return self.handle is None


_SORT_KEYS = {
    COL_ENABLED: lambda e: not e.disabled,
    COL_FILTER: lambda e: e.text.lower(),
    COL_HITCOUNT: lambda e: e.hit_count,
    COL_LASTHIT: lambda e: e.last_hit,
}


class OrderedView:
    """Ordered sequence of :class:`Entry` for the attached subscription.

    The view never mutates filters.  It re-reads the Store whenever the
    Store reports a change to the attached subscription, so rows and
    indices are always derived fresh.
    """

    def __init__(self, storage, subscription_id=None):
        self._storage = storage
        self._subscription_id = None
        self._editable = False
        self._entries: list[Entry] = []
        self._rows: list[Entry] = []
        self._placeholder_row = None
        self._listeners = []
        self.sort_key = None
        self.sort_direction = SortDirection.NATURAL
        storage.add_listener(self._on_storage_changed)
        self.set_subscription(subscription_id)

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, callback):
        """Register *callback()*, fired after every re-derivation."""
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback):
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify(self):
        for callback in list(self._listeners):
            callback()

    def close(self):
        """Detach from the Store."""
        self._storage.remove_listener(self._on_storage_changed)

    def _on_storage_changed(self, action, subscription_id, filter_id):
        if subscription_id == self._subscription_id:
            logger.debug('Store reported %s for %s, refreshing', action, filter_id)
            self.refresh()

    # ------------------------------------------------------------------
    # Subscription and derivation
    # ------------------------------------------------------------------

    @property
    def subscription_id(self):
        return self._subscription_id

    @property
    def editable(self):
        """True if a user-maintained subscription is attached."""
        return self._editable

    def set_subscription(self, subscription_id):
        """Show the filters of *subscription_id* (or nothing for *None*)."""
        self._subscription_id = subscription_id
        self._placeholder_row = None
        if subscription_id is None:
            self._editable = False
        else:
            self._editable = self._storage.subscription(subscription_id).special
        self.refresh()

    def refresh(self):
        """Re-read the Store and rebuild the display order."""
        if self._subscription_id is None:
            records = []
        else:
            records = self._storage.filters(self._subscription_id)
        self._entries = [
            Entry(
                handle=r.id,
                index=i,
                text=r.text,
                disabled=r.disabled,
                hit_count=r.hit_count,
                last_hit=r.last_hit,
            )
            for i, r in enumerate(records)
        ]
        self._rebuild_rows()
        self._notify()

    def _rebuild_rows(self):
        rows = list(self._entries)
        if self.sort_key is not None:
            rows.sort(
                key=_SORT_KEYS[self.sort_key],
                reverse=self.sort_direction == SortDirection.DESCENDING,
            )
        if self._placeholder_row is not None:
            row = min(max(self._placeholder_row, 0), len(rows))
            self._placeholder_row = row
            # The placeholder takes over the Store position of the entry it
            # displaces, or appends when shown below the last row.
            index = rows[row].index if row < len(rows) else len(self._entries)
            rows.insert(row, Entry(handle=None, index=index))
        self._rows = rows

    # ------------------------------------------------------------------
    # Sorting
    # ------------------------------------------------------------------

    def is_sorted(self):
        return self.sort_key is not None

    def sort_by(self, key, direction=SortDirection.ASCENDING):
        """Sort by column *key*; *None* or NATURAL restores Store order."""
        if key is None or direction == SortDirection.NATURAL:
            self.sort_key = None
            self.sort_direction = SortDirection.NATURAL
        else:
            if key not in _SORT_KEYS:
                raise ValueError(f'Cannot sort by unknown column {key!r}')
            self.sort_key = key
            self.sort_direction = SortDirection(direction)
        logger.debug('Sorting by %s (%s)', self.sort_key, self.sort_direction.value)
        self._rebuild_rows()
        self._notify()

    # ------------------------------------------------------------------
    # Placeholder
    # ------------------------------------------------------------------

    @property
    def placeholder(self):
        """The placeholder :class:`Entry`, or *None*."""
        if self._placeholder_row is None:
            return None
        return self._rows[self._placeholder_row]

    def show_placeholder(self, row):
        """Insert the placeholder at *row* (clamped) and return its row."""
        if self._placeholder_row is not None:
            raise ValueError('A placeholder is already shown')
        self._placeholder_row = row
        self._rebuild_rows()
        self._notify()
        return self._placeholder_row

    def hide_placeholder(self):
        if self._placeholder_row is None:
            return
        self._placeholder_row = None
        self._rebuild_rows()
        self._notify()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def __len__(self):
        return len(self._rows)

    def __iter__(self):
        return iter(self._rows)

    def length(self):
        return len(self._rows)

    @property
    def is_empty(self):
        """True if the subscription has no filters (the placeholder does not count)."""
        return not self._entries

    def entry_at(self, row):
        """Return the entry displayed at *row*, or *None*."""
        if 0 <= row < len(self._rows):
            return self._rows[row]
        return None

    def row_of(self, handle):
        """Return the display row of *handle*, or *None* if it is gone."""
        for row, entry in enumerate(self._rows):
            if entry.handle == handle:
                return row
        return None
