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

"""Unit tests for the move, delete and toggle commands."""

import pytest

from filterfabrik.core.objects import Filter
from filterfabrik.editor import COL_FILTER, REMOVE_WARNING, SortDirection


def _texts(view):
    return [e.text for e in view]


def _selected_texts(controller):
    return [e.text for e in controller.selection.selected_entries()]


def _handle(controller, text):
    for entry in controller.view:
        if entry.text == text:
            return entry.handle
    raise LookupError(text)


def _make_selected(make_controller, make_subscription, texts, rows, **kwargs):
    controller = make_controller(make_subscription(texts, **kwargs))
    controller.selection.replace(rows, rows[-1] if rows else -1)
    return controller


class TestMoveUp:
    def test_golden_trace(self, make_controller, make_subscription, storage):
        controller = _make_selected(
            make_controller, make_subscription, ['A', 'B', 'C', 'D'], [1, 3],
        )
        b = _handle(controller, 'B')
        d = _handle(controller, 'D')

        assert controller.move_up() is True

        assert storage.calls == [('move', b, 1, 0), ('move', d, 3, 1)]
        assert _texts(controller.view) == ['B', 'D', 'A', 'C']
        assert controller.selection.selected_rows() == [0, 1]
        assert _selected_texts(controller) == ['B', 'D']

    def test_contiguous_block(self, make_controller, make_subscription):
        controller = _make_selected(
            make_controller, make_subscription, ['A', 'B', 'C', 'D'], [2, 3],
        )
        controller.move_up()
        assert _texts(controller.view) == ['A', 'C', 'D', 'B']
        assert controller.selection.selected_rows() == [1, 2]
        assert controller.selection.current_index == 2

    def test_at_top_is_noop(self, make_controller, make_subscription, storage, surface):
        controller = _make_selected(
            make_controller, make_subscription, ['A', 'B', 'C'], [0, 1],
        )
        assert controller.move_up() is False
        assert storage.calls == []
        assert surface.calls == []
        assert controller.selection.selected_rows() == [0, 1]

    def test_batch_hints_wrap_the_moves(self, make_controller, make_subscription, surface):
        controller = _make_selected(
            make_controller, make_subscription, ['A', 'B', 'C'], [1, 2],
        )
        controller.move_up()
        assert surface.calls == [('begin',), ('end',)]


class TestMoveDown:
    def test_scattered_selection(self, make_controller, make_subscription, storage):
        controller = _make_selected(
            make_controller, make_subscription, ['A', 'B', 'C', 'D'], [0, 2],
        )
        a = _handle(controller, 'A')
        c = _handle(controller, 'C')

        assert controller.move_down() is True

        assert storage.calls == [('move', c, 2, 3), ('move', a, 0, 2)]
        assert _texts(controller.view) == ['B', 'D', 'A', 'C']
        assert controller.selection.selected_rows() == [2, 3]
        assert _selected_texts(controller) == ['A', 'C']

    def test_at_bottom_is_noop(self, make_controller, make_subscription, storage):
        controller = _make_selected(
            make_controller, make_subscription, ['A', 'B', 'C'], [2],
        )
        assert controller.move_down() is False
        assert storage.calls == []
        assert controller.selection.selected_rows() == [2]


class TestMoveRoundTrip:
    @pytest.mark.parametrize(
        'rows',
        [[1], [1, 2], [2, 3, 4]],
    )
    def test_contiguous_up_then_down_restores(self, make_controller, make_subscription, rows):
        controller = _make_selected(
            make_controller, make_subscription, ['A', 'B', 'C', 'D', 'E', 'F'], rows,
        )
        before = _texts(controller.view)
        selected = _selected_texts(controller)

        assert controller.move_up() is True
        assert controller.move_down() is True

        assert _texts(controller.view) == before
        assert _selected_texts(controller) == selected
        assert controller.selection.selected_rows() == rows

    def test_scattered_selection_closes_gaps(self, make_controller, make_subscription):
        controller = _make_selected(
            make_controller, make_subscription, ['A', 'B', 'C', 'D', 'E', 'F'], [1, 3, 5],
        )
        controller.move_up()
        order = _texts(controller.view)
        assert [t for t in order if t in 'BDF'] == ['B', 'D', 'F']
        assert [t for t in order if t in 'ACE'] == ['A', 'C', 'E']
        rows = controller.selection.selected_rows()
        assert rows == list(range(rows[0], rows[0] + 3))


class TestMovePreconditions:
    def test_sorted_view_is_locked(self, make_controller, make_subscription, storage):
        controller = _make_selected(
            make_controller, make_subscription, ['A', 'B', 'C'], [1],
        )
        controller.sort_by(COL_FILTER, SortDirection.ASCENDING)
        assert controller.move_up() is False
        assert controller.move_down() is False
        assert storage.calls == []

    def test_empty_selection(self, make_controller, make_subscription, storage):
        controller = _make_selected(
            make_controller, make_subscription, ['A', 'B', 'C'], [],
        )
        assert controller.move_up() is False
        assert controller.move_down() is False
        assert storage.calls == []

    def test_editing(self, make_controller, make_subscription, storage, surface):
        controller = _make_selected(
            make_controller, make_subscription, ['A', 'B', 'C'], [1],
        )
        surface.editing = True
        assert controller.move_up() is False
        assert controller.move_down() is False
        assert storage.calls == []

    def test_read_only_subscription(self, make_controller, make_subscription, storage):
        controller = _make_selected(
            make_controller, make_subscription, ['A', 'B', 'C'], [1], special=False,
        )
        assert controller.move_up() is False
        assert storage.calls == []

    def test_placeholder_shown(self, make_controller, make_subscription, storage):
        controller = _make_selected(
            make_controller, make_subscription, ['A', 'B', 'C'], [1],
        )
        controller.insert_filter()
        assert controller.move_up() is False
        assert controller.move_down() is False
        assert storage.calls == []
        assert _texts(controller.view) == ['A', '', 'B', 'C']


class TestDeleteSelected:
    def test_removes_highest_index_first(
        self, make_controller, make_subscription, storage, confirm_answers,
    ):
        controller = _make_selected(
            make_controller, make_subscription, ['A', 'B', 'C', 'D', 'E', 'F'], [1, 3, 4],
        )
        assert controller.delete_selected() is True
        assert [c[2] for c in storage.calls] == [4, 3, 1]
        assert _texts(controller.view) == ['A', 'C', 'F']
        assert len(confirm_answers['prompts']) == 1
        assert confirm_answers['prompts'][0][1] == REMOVE_WARNING

    def test_selection_clamped_after_delete(self, make_controller, make_subscription):
        controller = _make_selected(
            make_controller, make_subscription, ['A', 'B', 'C', 'D', 'E', 'F'], [1, 3, 4],
        )
        controller.delete_selected()
        # The anchor was row 4; only three rows are left.
        assert controller.selection.selected_rows() == [2]
        assert controller.selection.current_index == 2

    def test_single_delete_does_not_prompt(
        self, make_controller, make_subscription, confirm_answers,
    ):
        controller = _make_selected(
            make_controller, make_subscription, ['A', 'B', 'C'], [1],
        )
        assert controller.delete_selected() is True
        assert confirm_answers['prompts'] == []
        assert _texts(controller.view) == ['A', 'C']
        assert controller.selection.selected_rows() == [1]

    def test_declined_prompt_removes_nothing(
        self, make_controller, make_subscription, storage, confirm_answers,
    ):
        confirm_answers['answer'] = False
        controller = _make_selected(
            make_controller, make_subscription, ['A', 'B', 'C'], [0, 2],
        )
        assert controller.delete_selected() is False
        assert storage.calls == []
        assert _texts(controller.view) == ['A', 'B', 'C']

    def test_parent_is_handed_to_confirm(
        self, make_controller, make_subscription, confirm_answers,
    ):
        parent = object()
        controller = make_controller(make_subscription(['A', 'B']), parent=parent)
        controller.select_all()
        controller.delete_selected()
        assert confirm_answers['prompts'][0][0] is parent

    def test_delete_everything_clears_selection(self, make_controller, make_subscription):
        controller = make_controller(make_subscription(['A', 'B']))
        controller.select_all()
        controller.delete_selected()
        assert len(controller.view) == 0
        assert controller.selection.is_empty()
        assert controller.selection.current_index == -1

    def test_read_only_subscription(self, make_controller, make_subscription, storage):
        controller = _make_selected(
            make_controller, make_subscription, ['A', 'B'], [0], special=False,
        )
        assert controller.delete_selected() is False
        assert storage.calls == []

    def test_editing(self, make_controller, make_subscription, storage, surface):
        controller = _make_selected(
            make_controller, make_subscription, ['A', 'B', 'C'], [0, 1],
        )
        surface.editing = True
        assert controller.delete_selected() is False
        assert storage.calls == []
        assert _texts(controller.view) == ['A', 'B', 'C']

    def test_placeholder_shown(
        self, make_controller, make_subscription, storage, confirm_answers,
    ):
        controller = _make_selected(
            make_controller, make_subscription, ['A', 'B', 'C'], [1],
        )
        controller.insert_filter()
        assert controller.delete_selected() is False
        assert storage.calls == []
        assert confirm_answers['prompts'] == []

    def test_sorted_view_removes_in_store_order(
        self, make_controller, make_subscription, storage,
    ):
        controller = make_controller(make_subscription(['d', 'a', 'c', 'b', 'e']))
        controller.sort_by(COL_FILTER, SortDirection.ASCENDING)
        assert _texts(controller.view) == ['a', 'b', 'c', 'd', 'e']
        # Rows 0, 1 and 3 show 'a', 'b' and 'd' at Store positions 1, 3 and 0.
        controller.selection.replace([0, 1, 3], 3)

        assert controller.delete_selected() is True

        assert [c[2] for c in storage.calls] == [3, 1, 0]
        assert _texts(controller.view) == ['c', 'e']
        texts = [f.text for f in storage.filters(controller.view.subscription_id)]
        assert texts == ['c', 'e']
        assert controller.selection.selected_rows() == [1]
        assert controller.selection.current_index == 1

    def test_store_failure_propagates(self, make_controller, make_subscription, db):
        controller = _make_selected(
            make_controller, make_subscription, ['A', 'B'], [1],
        )
        # Pull the filter out from under the view without notifying it.
        handle = controller.view.entry_at(1).handle
        with db.session() as session:
            session.delete(session.get(Filter, handle))
        with pytest.raises(ValueError):
            controller.delete_selected()


class TestToggleDisabled:
    def test_follows_first_selected(self, make_controller, make_subscription):
        controller = _make_selected(
            make_controller, make_subscription, ['A', 'B', 'C'], [0, 1, 2], disabled=('B',),
        )
        assert controller.toggle_disabled() is True
        assert [e.disabled for e in controller.view] == [True, True, True]
        controller.toggle_disabled()
        assert [e.disabled for e in controller.view] == [False, False, False]

    def test_allowed_on_read_only_subscription(self, make_controller, make_subscription):
        controller = _make_selected(
            make_controller, make_subscription, ['A'], [0], special=False,
        )
        assert controller.toggle_disabled() is True
        assert controller.view.entry_at(0).disabled is True

    def test_nothing_selected(self, make_controller, make_subscription, storage):
        controller = make_controller(make_subscription(['A']))
        assert controller.toggle_disabled() is False
        assert storage.calls == []
