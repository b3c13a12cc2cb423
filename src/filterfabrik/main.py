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

"""Entry point for the FilterFabrik filter list editor."""

import argparse
import logging
import sys

from PySide6.QtCore import QLibraryInfo, QLocale, QTranslator
from PySide6.QtWidgets import QApplication

import filterfabrik

__author__ = 'Linuxfabrik GmbH, Zurich/Switzerland'

DESCRIPTION = """FilterFabrik filter list editor. Loads filter subscriptions from a YAML
file and lets you reorder, edit, enable/disable and delete their filters."""


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog='filterfabrik',
        description=DESCRIPTION,
    )

    parser.add_argument(
        'file',
        nargs='?',
        default='',
        help='path to a .yml / .yaml subscription file',
    )

    parser.add_argument(
        '-f',
        '--file',
        default='',
        dest='FILE',
        help='path to a .yml / .yaml subscription file (same as the positional argument)',
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        dest='DEBUG',
        help='enable debug logging',
    )

    parser.add_argument(
        '-V',
        '--version',
        action='version',
        version=f'%(prog)s: v{filterfabrik.__version__} by {__author__}',
    )

    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.DEBUG else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    # Imported late so --help and --version work without a display.
    from filterfabrik.gui.main_window import FilterListWindow

    app = QApplication(sys.argv[:1])
    app.setOrganizationName('Linuxfabrik')
    app.setApplicationName('FilterFabrik')

    # Load Qt's own translations for the current locale
    locale = QLocale.system().name()
    qt_translator = QTranslator()
    qt_translations_path = QLibraryInfo.path(QLibraryInfo.LibraryPath.TranslationsPath)
    if qt_translator.load(f'qt_{locale}', qt_translations_path):
        app.installTranslator(qt_translator)

    mw = FilterListWindow()
    file_name = args.FILE or args.file
    if file_name:
        mw.load_file(file_name)
    mw.show()

    return app.exec()


if __name__ == '__main__':
    sys.exit(main())
