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

import logging
import uuid
from pathlib import Path

import yaml
from PySide6.QtCore import Slot
from PySide6.QtGui import QKeySequence
from PySide6.QtWidgets import (
    QComboBox,
    QFileDialog,
    QLabel,
    QMainWindow,
    QMessageBox,
    QVBoxLayout,
    QWidget,
)

from filterfabrik import __version__
from filterfabrik.core import DatabaseManager, FilterStorage
from filterfabrik.editor import FilterListController
from filterfabrik.gui import filter_settings
from filterfabrik.gui.filter_view import FilterTreeView, confirm, run_command

FILE_FILTERS = 'YAML Files (*.yml *.yaml);;All Files (*)'

logger = logging.getLogger(__name__)


class FilterListWindow(QMainWindow):
    """Main window: a subscription chooser above the filter list."""

    def __init__(self, db_manager=None):
        super().__init__()
        self._db_manager = db_manager or DatabaseManager()
        self._storage = FilterStorage(self._db_manager)
        self._current_file = None

        central = QWidget(self)
        layout = QVBoxLayout(central)
        self._subscription_combo = QComboBox(central)
        self._subscription_combo.currentIndexChanged.connect(
            self._on_subscription_changed,
        )
        self._read_only_label = QLabel(self.tr('This subscription is read-only.'))
        self._read_only_label.hide()
        self.tree = FilterTreeView(central)
        layout.addWidget(self._subscription_combo)
        layout.addWidget(self._read_only_label)
        layout.addWidget(self.tree)
        self.setCentralWidget(central)

        self.controller = FilterListController(
            self._storage,
            self.tree,
            confirm,
            parent=self,
            accel_key=filter_settings.get_accel_key(),
        )
        self.tree.attach(self.controller)
        column, direction = filter_settings.get_sort_state()
        if column is not None:
            self.tree.sort_by(column, direction)

        self._build_menus()
        self._update_title()
        self.resize(800, 600)

    # ------------------------------------------------------------------
    # Menus
    # ------------------------------------------------------------------

    def _build_menus(self):
        file_menu = self.menuBar().addMenu(self.tr('&File'))
        action = file_menu.addAction(self.tr('&Open...'))
        action.setShortcut(QKeySequence.StandardKey.Open)
        action.triggered.connect(self.fileOpen)
        file_menu.addSeparator()
        action = file_menu.addAction(self.tr('&Quit'))
        action.setShortcut(QKeySequence.StandardKey.Quit)
        action.triggered.connect(self.close)

        filter_menu = self.menuBar().addMenu(self.tr('F&ilters'))
        for label, command in (
            (self.tr('&Add filter'), self.controller.insert_filter),
            (self.tr('&Edit filter'), self.controller.start_editing),
            (self.tr('&Delete selected'), self.controller.delete_selected),
            (self.tr('Select &all'), self.controller.select_all),
            (self.tr('E&nable/disable selected'), self.controller.toggle_disabled),
            (self.tr('Move &up'), self.controller.move_up),
            (self.tr('Move d&own'), self.controller.move_down),
        ):
            action = filter_menu.addAction(label)
            action.triggered.connect(
                lambda _checked=False, c=command: run_command(self, c),
            )

        view_menu = self.menuBar().addMenu(self.tr('&View'))
        view_menu.aboutToShow.connect(lambda: self._fill_view_menu(view_menu))

    def _fill_view_menu(self, menu):
        menu.clear()
        self.tree.fill_column_menu(menu)

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def _populate_subscriptions(self, select_id=None):
        combo = self._subscription_combo
        combo.blockSignals(True)
        try:
            combo.clear()
            for record in self._storage.subscriptions():
                combo.addItem(record.title or record.url or str(record.id), str(record.id))
            idx = combo.findData(str(select_id)) if select_id is not None else -1
            combo.setCurrentIndex(idx if idx >= 0 else 0)
        finally:
            combo.blockSignals(False)
        self._on_subscription_changed(combo.currentIndex())

    @Slot(int)
    def _on_subscription_changed(self, index):
        data = self._subscription_combo.itemData(index) if index >= 0 else None
        subscription_id = uuid.UUID(data) if data else None
        if not self.controller.set_subscription(subscription_id):
            # Still editing; keep showing the subscription being edited.
            current = self.controller.view.subscription_id
            combo = self._subscription_combo
            combo.blockSignals(True)
            combo.setCurrentIndex(combo.findData(str(current)) if current else -1)
            combo.blockSignals(False)
            return
        record = (
            self._storage.subscription(subscription_id)
            if subscription_id is not None
            else None
        )
        self._read_only_label.setVisible(record is not None and not record.special)

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    def _update_title(self):
        if self._current_file:
            self.setWindowTitle(
                f'{self._current_file.name} - FilterFabrik {__version__}',
            )
        else:
            self.setWindowTitle(f'FilterFabrik {__version__}')

    def load_file(self, file_path):
        """Load the subscriptions in *file_path*; return True on success."""
        file_path = Path(file_path).resolve()
        if not file_path.is_file():
            QMessageBox.warning(
                self,
                'FilterFabrik',
                self.tr(f"File '{file_path}' does not exist or is not readable"),
            )
            return False
        try:
            ids = self._db_manager.load(file_path)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            logger.exception('Failed to load %s', file_path)
            QMessageBox.warning(
                self,
                'FilterFabrik',
                self.tr(f"Failed to load '{file_path}':\n{exc}"),
            )
            return False

        self._current_file = file_path
        self._update_title()
        first_special = None
        for subscription_id in ids:
            record = self._storage.subscription(subscription_id)
            if record is not None and record.special:
                first_special = subscription_id
                break
        self._populate_subscriptions(first_special or (ids[0] if ids else None))
        return True

    @Slot()
    def fileOpen(self):
        file_name, _ = QFileDialog.getOpenFileName(
            self,
            self.tr('Open File'),
            '',
            FILE_FILTERS,
        )
        if not file_name:
            return
        self.load_file(file_name)

    def closeEvent(self, event):
        self.controller.close()
        super().closeEvent(event)


