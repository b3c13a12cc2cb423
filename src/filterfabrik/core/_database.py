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

import contextlib
import logging
import pathlib

import sqlalchemy
import sqlalchemy.orm

from . import objects
from ._yaml_reader import YamlReader

logger = logging.getLogger(__name__)


class DatabaseManager:
    def __init__(self, connection_string='sqlite:///:memory:'):
        self.engine = sqlalchemy.create_engine(connection_string, echo=False)
        self._session_factory = sqlalchemy.orm.sessionmaker(self.engine)
        objects.enable_sqlite_fks(self.engine)
        self._reset_db(True)

    @contextlib.contextmanager
    def session(self):
        """Create a new database session. The transaction is committed when the contextmanager exits and rolled back if the block raises."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def load(self, path):
        """Load the subscriptions stored in *path* into the database.

        Returns the ids of the subscriptions that were added, in file
        order.
        """
        path = pathlib.Path(path)
        logger.debug('Loading subscriptions from %s', path)
        match path.suffix:
            case '.yml' | '.yaml':
                subscriptions = YamlReader().parse(path)
            case _:
                raise ValueError(f'Unsupported file extension: {path}')
        ids = [s.id for s in subscriptions]
        with self.session() as session:
            offset = session.scalar(
                sqlalchemy.select(sqlalchemy.func.count(objects.Subscription.id)),
            )
            for i, subscription in enumerate(subscriptions):
                subscription.position = offset + i
                session.add(subscription)
        return ids

    def _reset_db(self, recreate_schema):
        logger.debug('Resetting database')
        objects.Base.metadata.drop_all(self.engine)
        if recreate_schema:
            logger.debug('Recreating database schema')
            objects.Base.metadata.create_all(self.engine)
