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

"""Shared pytest fixtures for the filter list editor tests."""

import uuid

import pytest

import filterfabrik.core
from filterfabrik.core.objects import Filter, Subscription
from filterfabrik.editor import COLUMNS, FilterListController


class FakeSurface:
    """Rendering surface that records what the editor asked it to do."""

    def __init__(self):
        self.calls = []
        self.editing = False
        self.on_finished = None
        self.visible = {c: True for c in COLUMNS}

    def begin_update_batch(self):
        self.calls.append(('begin',))

    def end_update_batch(self):
        self.calls.append(('end',))

    def start_inline_edit(self, row, column, on_finished=None):
        self.calls.append(('edit', row, column))
        self.on_finished = on_finished

    def finish_edit(self):
        """Simulate the inline editor closing."""
        callback = self.on_finished
        self.on_finished = None
        if callback is not None:
            callback()

    def is_editing(self):
        return self.editing

    def is_column_visible(self, column):
        return self.visible[column]

    def set_column_visible(self, column, visible):
        self.visible[column] = visible


class RecordingStorage:
    """Wraps a FilterStorage and records every mutating call."""

    def __init__(self, storage):
        self._storage = storage
        self.calls = []

    def __getattr__(self, name):
        return getattr(self._storage, name)

    def move_filter(self, filter_id, subscription_id, old_position, new_position):
        self.calls.append(('move', filter_id, old_position, new_position))
        self._storage.move_filter(filter_id, subscription_id, old_position, new_position)

    def remove_filter(self, filter_id, subscription_id, position):
        self.calls.append(('remove', filter_id, position))
        self._storage.remove_filter(filter_id, subscription_id, position)

    def add_filter(self, text, subscription_id, position=None):
        self.calls.append(('add', text, position))
        return self._storage.add_filter(text, subscription_id, position)

    def set_disabled(self, filter_id, disabled):
        self.calls.append(('disable', filter_id, disabled))
        self._storage.set_disabled(filter_id, disabled)


def _make_subscription(db, texts, *, special=True, title='My filters', disabled=()):
    """Insert a subscription with one filter per entry of *texts*."""
    subscription_id = uuid.uuid4()
    with db.session() as session:
        subscription = Subscription(
            id=subscription_id,
            title=title,
            url='',
            special=special,
            disabled=False,
        )
        for position, text in enumerate(texts):
            subscription.filters.append(
                Filter(
                    id=uuid.uuid4(),
                    position=position,
                    text=text,
                    disabled=text in disabled,
                ),
            )
        session.add(subscription)
    return subscription_id


@pytest.fixture
def db():
    return filterfabrik.core.DatabaseManager()


@pytest.fixture
def storage(db):
    return RecordingStorage(filterfabrik.core.FilterStorage(db))


@pytest.fixture
def make_subscription(db):
    def factory(texts, **kwargs):
        return _make_subscription(db, texts, **kwargs)

    return factory


@pytest.fixture
def surface():
    return FakeSurface()


@pytest.fixture
def confirm_answers():
    """Answers handed out by the confirm callback, plus the prompts it saw."""
    return {'answer': True, 'prompts': []}


@pytest.fixture
def make_controller(storage, surface, confirm_answers):
    def confirm(parent, message):
        confirm_answers['prompts'].append((parent, message))
        return confirm_answers['answer']

    controllers = []

    def factory(subscription_id, **kwargs):
        kwargs.setdefault('platform', 'linux')
        controller = FilterListController(
            storage,
            surface,
            confirm,
            subscription_id=subscription_id,
            **kwargs,
        )
        controllers.append(controller)
        return controller

    yield factory
    for controller in controllers:
        controller.close()

