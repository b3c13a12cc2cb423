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

"""Keyboard routing for the filter list.

Key events are reduced to a :class:`KeyInput` carrying the physical
Alt/Control/Meta state.  The router folds those into a
:class:`Modifier` mask and compares it against the accelerator
modifier, which is Command (Meta) on macOS and Control elsewhere unless
configured otherwise.
"""

import dataclasses
import enum
import logging
import sys

from filterfabrik.editor._ordered_view import COL_ENABLED

logger = logging.getLogger(__name__)


class Modifier(enum.IntFlag):
    NONE = 0
    ALT = 1
    CONTROL = 2
    META = 4


class Key(enum.Enum):
    DOWN = 'down'
    OTHER = 'other'
    SPACE = 'space'
    UP = 'up'


_ACCEL_NAMES = {
    'alt': Modifier.ALT,
    'control': Modifier.CONTROL,
    'ctrl': Modifier.CONTROL,
    'meta': Modifier.META,
}


def accel_mask(name=None, platform=None):
    """Return the accelerator :class:`Modifier` for *name* on *platform*.

    *name* is one of ``'control'``, ``'alt'`` or ``'meta'``; an empty or
    unknown name selects the platform default.
    """
    if platform is None:
        platform = sys.platform
    if name:
        mask = _ACCEL_NAMES.get(str(name).lower())
        if mask is not None:
            return mask
        logger.warning('Unknown accelerator key %r, using platform default', name)
    return Modifier.META if platform == 'darwin' else Modifier.CONTROL


@dataclasses.dataclass
class KeyInput:
    """Toolkit-neutral key press."""

    key: Key
    alt: bool = False
    ctrl: bool = False
    meta: bool = False
    default_prevented: bool = False
    propagation_stopped: bool = False

    def prevent_default(self):
        self.default_prevented = True

    def stop_propagation(self):
        self.propagation_stopped = True


class CommandRouter:
    """Maps key presses on the filter list to commands.

    Args:
        commands: Object providing ``toggle_disabled()``, ``move_up()``
            and ``move_down()``.
        column_visible: Callable ``column_visible(column) -> bool``.
        accel: The accelerator :class:`Modifier`.
    """

    def __init__(self, commands, column_visible, accel=None):
        self._commands = commands
        self._column_visible = column_visible
        self.accel = accel if accel is not None else accel_mask()

    @staticmethod
    def modifiers(event):
        """Fold the modifier state of *event* into a :class:`Modifier` mask."""
        mask = Modifier.NONE
        if event.alt:
            mask |= Modifier.ALT
        if event.ctrl:
            mask |= Modifier.CONTROL
        if event.meta:
            mask |= Modifier.META
        return mask

    def key_press(self, event):
        """Dispatch *event*; return True if it was fully handled."""
        modifiers = self.modifiers(event)

        if (
            event.key == Key.SPACE
            and modifiers == Modifier.NONE
            and self._column_visible(COL_ENABLED)
        ):
            self._commands.toggle_disabled()
        elif event.key == Key.UP and modifiers == self.accel:
            self._commands.move_up()
            event.prevent_default()
            event.stop_propagation()
            return True
        elif event.key == Key.DOWN and modifiers == self.accel:
            self._commands.move_down()
            event.prevent_default()
            event.stop_propagation()
            return True
        return False
