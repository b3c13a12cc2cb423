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

"""Canonical owner of the ordered filter lists.

Every mutation runs in its own database session, renumbers the
positions of the affected subscription so they stay sequential
(0, 1, 2, ...), and notifies the registered listeners once the
session has been committed.
"""

import dataclasses
import logging
import uuid

import sqlalchemy

from . import objects

logger = logging.getLogger(__name__)

FILTER_ADDED = 'filter.added'
FILTER_DISABLED = 'filter.disabled'
FILTER_MOVED = 'filter.moved'
FILTER_REMOVED = 'filter.removed'
FILTER_TEXT = 'filter.text'


@dataclasses.dataclass(frozen=True, slots=True)
class FilterRecord:
    """Read-only snapshot of one filter row."""

    id: uuid.UUID
    position: int
    text: str
    disabled: bool
    hit_count: int
    last_hit: float


@dataclasses.dataclass(frozen=True, slots=True)
class SubscriptionRecord:
    """Read-only snapshot of one subscription."""

    id: uuid.UUID
    title: str
    url: str
    special: bool
    disabled: bool


class FilterStorage:
    """Store for subscriptions and their filters, backed by a DatabaseManager."""

    def __init__(self, db_manager):
        self._db_manager = db_manager
        self._listeners = []

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, callback):
        """Register *callback(action, subscription_id, filter_id)*."""
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback):
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify(self, action, subscription_id, filter_id):
        for callback in list(self._listeners):
            callback(action, subscription_id, filter_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def subscriptions(self):
        """Return all subscriptions in display order."""
        with self._db_manager.session() as session:
            rows = session.scalars(
                sqlalchemy.select(objects.Subscription).order_by(
                    objects.Subscription.position,
                ),
            ).all()
            return [_subscription_record(s) for s in rows]

    def subscription(self, subscription_id):
        """Return the :class:`SubscriptionRecord` for *subscription_id*."""
        with self._db_manager.session() as session:
            return _subscription_record(_get_subscription(session, subscription_id))

    def filters(self, subscription_id):
        """Return the filters of *subscription_id* in Store order."""
        with self._db_manager.session() as session:
            _get_subscription(session, subscription_id)
            return [
                _filter_record(f) for f in _ordered_filters(session, subscription_id)
            ]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_filter(self, text, subscription_id, position=None):
        """Insert a new filter with *text* at *position* (default: append).

        Returns the id of the new filter.
        """
        text = str(text).strip()
        if not text:
            raise ValueError('Cannot add a filter without text')
        with self._db_manager.session() as session:
            _get_editable_subscription(session, subscription_id)
            existing = _ordered_filters(session, subscription_id)
            if position is None:
                position = len(existing)
            position = min(max(position, 0), len(existing))
            new_filter = objects.Filter(
                id=uuid.uuid4(),
                subscription_id=subscription_id,
                text=text,
            )
            existing.insert(position, new_filter)
            session.add(new_filter)
            _renumber(existing)
            filter_id = new_filter.id
        logger.debug('Added filter %r at position %d', text, position)
        self._notify(FILTER_ADDED, subscription_id, filter_id)
        return filter_id

    def remove_filter(self, filter_id, subscription_id, position):
        """Remove the filter *filter_id* found at *position*.

        Raises :class:`ValueError` if the subscription is read-only or
        the filter is not at *position*.
        """
        with self._db_manager.session() as session:
            _get_editable_subscription(session, subscription_id)
            existing = _ordered_filters(session, subscription_id)
            target = _filter_at(existing, filter_id, position)
            existing.remove(target)
            session.delete(target)
            _renumber(existing)
        logger.debug('Removed filter %s from position %d', filter_id, position)
        self._notify(FILTER_REMOVED, subscription_id, filter_id)

    def move_filter(self, filter_id, subscription_id, old_position, new_position):
        """Move the filter at *old_position* to *new_position*.

        *new_position* is clamped to the list bounds; moving a filter
        onto its own position does nothing.
        """
        with self._db_manager.session() as session:
            _get_editable_subscription(session, subscription_id)
            existing = _ordered_filters(session, subscription_id)
            target = _filter_at(existing, filter_id, old_position)
            new_position = min(max(new_position, 0), len(existing) - 1)
            if new_position == old_position:
                return
            existing.pop(old_position)
            existing.insert(new_position, target)
            _renumber(existing)
        logger.debug(
            'Moved filter %s from position %d to %d',
            filter_id,
            old_position,
            new_position,
        )
        self._notify(FILTER_MOVED, subscription_id, filter_id)

    def set_disabled(self, filter_id, disabled):
        """Enable or disable a single filter."""
        disabled = bool(disabled)
        with self._db_manager.session() as session:
            target = _get_filter(session, filter_id)
            if target.disabled == disabled:
                return
            target.disabled = disabled
            subscription_id = target.subscription_id
        logger.debug('Set filter %s disabled=%s', filter_id, disabled)
        self._notify(FILTER_DISABLED, subscription_id, filter_id)

    def set_filter_text(self, filter_id, text):
        """Replace the rule text of a filter in an editable subscription."""
        text = str(text).strip()
        if not text:
            raise ValueError('Cannot set an empty filter text')
        with self._db_manager.session() as session:
            target = _get_filter(session, filter_id)
            _get_editable_subscription(session, target.subscription_id)
            if target.text == text:
                return
            target.text = text
            subscription_id = target.subscription_id
        logger.debug('Changed text of filter %s to %r', filter_id, text)
        self._notify(FILTER_TEXT, subscription_id, filter_id)


def _subscription_record(subscription):
    return SubscriptionRecord(
        id=subscription.id,
        title=subscription.title or '',
        url=subscription.url or '',
        special=bool(subscription.special),
        disabled=bool(subscription.disabled),
    )


def _filter_record(f):
    return FilterRecord(
        id=f.id,
        position=f.position,
        text=f.text or '',
        disabled=bool(f.disabled),
        hit_count=f.hit_count or 0,
        last_hit=f.last_hit or 0.0,
    )


def _get_subscription(session, subscription_id):
    subscription = session.get(objects.Subscription, subscription_id)
    if subscription is None:
        raise ValueError(f'Subscription {subscription_id} not found')
    return subscription


def _get_editable_subscription(session, subscription_id):
    subscription = _get_subscription(session, subscription_id)
    if not subscription.special:
        raise ValueError(f'Subscription {subscription.title!r} is read-only')
    return subscription


def _get_filter(session, filter_id):
    target = session.get(objects.Filter, filter_id)
    if target is None:
        raise ValueError(f'Filter {filter_id} not found')
    return target


def _ordered_filters(session, subscription_id):
    return list(
        session.scalars(
            sqlalchemy.select(objects.Filter)
            .where(objects.Filter.subscription_id == subscription_id)
            .order_by(objects.Filter.position, objects.Filter.id),
        ).all()
    )


def _filter_at(existing, filter_id, position):
    """Return the filter at *position*, which must be *filter_id*."""
    if not 0 <= position < len(existing) or existing[position].id != filter_id:
        raise ValueError(f'Filter {filter_id} not found at position {position}')
    return existing[position]


def _renumber(filters):
    """Keep positions sequential (0, 1, 2, ...)."""
    for i, f in enumerate(filters):
        f.position = i
