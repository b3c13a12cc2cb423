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

"""Toolkit-independent editing logic for filter lists."""

from ._command_router import (
    CommandRouter,
    Key,
    KeyInput,
    Modifier,
    accel_mask,
)
from ._controller import ColumnMenuState, FilterListController
from ._edit_lifecycle import EditLifecycle, EditState
from ._mutation_engine import REMOVE_WARNING, MutationEngine
from ._ordered_view import (
    COL_ENABLED,
    COL_FILTER,
    COL_HITCOUNT,
    COL_LASTHIT,
    COLUMNS,
    Entry,
    OrderedView,
    SortDirection,
)
from ._selection import Selection

__all__ = [
    'COLUMNS',
    'COL_ENABLED',
    'COL_FILTER',
    'COL_HITCOUNT',
    'COL_LASTHIT',
    'REMOVE_WARNING',
    'ColumnMenuState',
    'CommandRouter',
    'EditLifecycle',
    'EditState',
    'Entry',
    'FilterListController',
    'Key',
    'KeyInput',
    'Modifier',
    'MutationEngine',
    'OrderedView',
    'Selection',
    'SortDirection',
    'accel_mask',
]
