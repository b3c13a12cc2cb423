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

"""YAML reader for loading filter subscriptions into the database model.

The expected layout is::

    subscriptions:
      - title: My filters
        special: true
        filters:
          - '||ads.example.com^'
          - text: '@@||example.com/allowed^'
            disabled: true
            hit_count: 3
            last_hit: 1767225600.0
"""

import logging
import pathlib
import uuid

import yaml

from . import objects

logger = logging.getLogger(__name__)

_SUBSCRIPTION_KEYS = frozenset({'disabled', 'filters', 'special', 'title', 'url'})
_FILTER_KEYS = frozenset({'disabled', 'hit_count', 'last_hit', 'text'})


def _coerce_bool(value):
    """Return *value* as a bool, accepting quoted ``'true'``/``'false'``."""
    if isinstance(value, str):
        return value.lower() == 'true'
    return bool(value)


class YamlReader:
    """Parses a single YAML file into unsaved :class:`Subscription` objects."""

    def parse(self, input_path):
        input_path = pathlib.Path(input_path)

        with pathlib.Path.open(input_path, encoding='utf-8') as f:
            data = yaml.safe_load(f)

        if data is None:
            return []
        if not isinstance(data, dict):
            raise ValueError(f'{input_path}: top level must be a mapping')

        subscriptions = []
        for i, sub_data in enumerate(data.get('subscriptions') or []):
            if not isinstance(sub_data, dict):
                raise ValueError(f'{input_path}: subscription #{i} must be a mapping')
            subscriptions.append(self._parse_subscription(sub_data))
        return subscriptions

    def _parse_subscription(self, data):
        for key in sorted(set(data) - _SUBSCRIPTION_KEYS):
            logger.warning('Ignoring unknown subscription key: %s', key)

        subscription = objects.Subscription(
            id=uuid.uuid4(),
            title=str(data.get('title', '')),
            url=str(data.get('url', '')),
            special=_coerce_bool(data.get('special', False)),
            disabled=_coerce_bool(data.get('disabled', False)),
        )
        for position, filter_data in enumerate(data.get('filters') or []):
            subscription.filters.append(self._parse_filter(filter_data, position))
        logger.debug(
            'Parsed subscription %r with %d filters',
            subscription.title,
            len(subscription.filters),
        )
        return subscription

    @staticmethod
    def _parse_filter(data, position):
        # Plain strings are the common case: one rule per list item.
        if not isinstance(data, dict):
            data = {'text': data}
        for key in sorted(set(data) - _FILTER_KEYS):
            logger.warning('Ignoring unknown filter key: %s', key)
        text = str(data.get('text', '')).strip()
        if not text:
            raise ValueError(f'Filter #{position} has no text')
        return objects.Filter(
            id=uuid.uuid4(),
            position=position,
            text=text,
            disabled=_coerce_bool(data.get('disabled', False)),
            hit_count=int(data.get('hit_count', 0) or 0),
            last_hit=float(data.get('last_hit', 0.0) or 0.0),
        )
