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

"""Unit tests for OrderedView."""

import pytest

from filterfabrik.editor import (
    COL_ENABLED,
    COL_FILTER,
    COL_HITCOUNT,
    OrderedView,
    SortDirection,
)


def _texts(view):
    return [e.text for e in view]


@pytest.fixture
def make_view(storage):
    views = []

    def factory(subscription_id):
        view = OrderedView(storage, subscription_id)
        views.append(view)
        return view

    yield factory
    for view in views:
        view.close()


class TestDerivation:
    def test_entries_follow_store_order(self, make_view, make_subscription):
        view = make_view(make_subscription(['A', 'B', 'C']))
        assert _texts(view) == ['A', 'B', 'C']
        assert [e.index for e in view] == [0, 1, 2]
        assert len(view) == view.length() == 3

    def test_no_subscription(self, make_view):
        view = make_view(None)
        assert len(view) == 0
        assert view.is_empty
        assert view.editable is False

    def test_editable_follows_special_flag(self, make_view, make_subscription):
        assert make_view(make_subscription(['A'])).editable is True
        assert make_view(make_subscription(['A'], special=False)).editable is False

    def test_refreshes_on_store_change(self, make_view, make_subscription, storage):
        sid = make_subscription(['A'])
        view = make_view(sid)
        notified = []
        view.add_listener(lambda: notified.append(True))
        storage.add_filter('B', sid)
        assert _texts(view) == ['A', 'B']
        assert notified == [True]

    def test_ignores_other_subscriptions(self, make_view, make_subscription, storage):
        view = make_view(make_subscription(['A']))
        other = make_subscription(['X'])
        notified = []
        view.add_listener(lambda: notified.append(True))
        storage.add_filter('Y', other)
        assert notified == []

    def test_close_detaches_from_store(self, make_view, make_subscription, storage):
        sid = make_subscription(['A'])
        view = make_view(sid)
        view.close()
        storage.add_filter('B', sid)
        assert _texts(view) == ['A']

    def test_entry_at_and_row_of(self, make_view, make_subscription):
        view = make_view(make_subscription(['A', 'B']))
        entry = view.entry_at(1)
        assert entry.text == 'B'
        assert view.row_of(entry.handle) == 1
        assert view.entry_at(2) is None
        assert view.entry_at(-1) is None


class TestSorting:
    def test_sort_by_text_is_case_insensitive(self, make_view, make_subscription):
        view = make_view(make_subscription(['b', 'C', 'a']))
        view.sort_by(COL_FILTER)
        assert view.is_sorted()
        assert _texts(view) == ['a', 'b', 'C']
        assert [e.index for e in view] == [2, 0, 1]

    def test_descending(self, make_view, make_subscription):
        view = make_view(make_subscription(['b', 'c', 'a']))
        view.sort_by(COL_FILTER, SortDirection.DESCENDING)
        assert _texts(view) == ['c', 'b', 'a']

    def test_enabled_sort_is_stable(self, make_view, make_subscription):
        view = make_view(make_subscription(['A', 'B', 'C', 'D'], disabled=('B', 'D')))
        view.sort_by(COL_ENABLED)
        assert _texts(view) == ['B', 'D', 'A', 'C']

    def test_natural_restores_store_order(self, make_view, make_subscription):
        view = make_view(make_subscription(['b', 'a']))
        view.sort_by(COL_FILTER)
        view.sort_by(COL_HITCOUNT, SortDirection.NATURAL)
        assert not view.is_sorted()
        assert view.sort_key is None
        assert _texts(view) == ['b', 'a']

    def test_unknown_column_raises(self, make_view, make_subscription):
        view = make_view(make_subscription(['A']))
        with pytest.raises(ValueError):
            view.sort_by('slow')


class TestPlaceholder:
    def test_show_in_middle(self, make_view, make_subscription):
        view = make_view(make_subscription(['A', 'B', 'C']))
        row = view.show_placeholder(1)
        assert row == 1
        assert _texts(view) == ['A', '', 'B', 'C']
        assert view.placeholder.is_placeholder
        assert view.placeholder.index == 1
        assert not view.is_empty

    def test_show_clamped_past_end(self, make_view, make_subscription):
        view = make_view(make_subscription(['A', 'B']))
        row = view.show_placeholder(10)
        assert row == 2
        assert view.placeholder.index == 2

    def test_empty_view_placeholder_is_not_an_entry(self, make_view, make_subscription):
        view = make_view(make_subscription([]))
        view.show_placeholder(0)
        assert len(view) == 1
        assert view.is_empty

    def test_second_placeholder_raises(self, make_view, make_subscription):
        view = make_view(make_subscription(['A']))
        view.show_placeholder(0)
        with pytest.raises(ValueError):
            view.show_placeholder(0)

    def test_hide(self, make_view, make_subscription):
        view = make_view(make_subscription(['A', 'B']))
        view.show_placeholder(1)
        view.hide_placeholder()
        assert view.placeholder is None
        assert _texts(view) == ['A', 'B']

    def test_placeholder_survives_refresh(self, make_view, make_subscription, storage):
        sid = make_subscription(['A', 'B'])
        view = make_view(sid)
        view.show_placeholder(1)
        storage.set_disabled(view.entry_at(0).handle, True)
        assert view.entry_at(1).is_placeholder

    def test_sorted_placeholder_takes_displaced_index(self, make_view, make_subscription):
        view = make_view(make_subscription(['b', 'c', 'a']))
        view.sort_by(COL_FILTER)
        view.show_placeholder(1)
        # Row 1 showed 'b', which sits at Store position 0.
        assert view.placeholder.index == 0
