"""
Settings Store
==============

Namespaced configuration records stored as JSON in SQLite.
Each namespace holds one flat record. Reads go through ImmutableConfig,
writes through EditableConfig, which saves the whole record in one transaction.
"""

import copy
import json
import logging
import sqlite3
from datetime import datetime

from ethereum_signup.core.database import Database

logger = logging.getLogger(__name__)

# Install defaults keyed by namespace, see register_defaults()
_DEFAULTS = {}


class SettingsStoreError(RuntimeError):
    """Raised when a settings record cannot be read or persisted"""


def register_defaults(namespace, defaults):
    """Register the record a namespace is created with on first access"""
    _DEFAULTS[namespace] = copy.deepcopy(dict(defaults))


def get_defaults(namespace):
    return copy.deepcopy(_DEFAULTS.get(namespace, {}))


class ImmutableConfig:
    """Read-only view of a settings record"""

    def __init__(self, namespace, data):
        self.namespace = namespace
        self._data = data

    def get(self, key, default=None):
        return self._data.get(key, default)

    def __getitem__(self, key):
        return self._data[key]

    def __contains__(self, key):
        return key in self._data

    def as_dict(self):
        return copy.deepcopy(self._data)

    def __repr__(self):
        return f"<{type(self).__name__} {self.namespace!r}>"


class EditableConfig(ImmutableConfig):
    """Mutable handle on a settings record. Nothing is written until save()"""

    def __init__(self, store, namespace, data):
        super().__init__(namespace, data)
        self._store = store

    def set(self, key, value):
        self._data[key] = value
        return self

    def save(self):
        self._store._write(self.namespace, self._data)
        return self


class SettingsStore:
    """SQLite-backed store of namespaced settings records"""

    def __init__(self, db_path):
        self.db_path = db_path

    def init_db(self):
        """Initialize settings database"""
        conn = Database.connect(self.db_path)
        try:
            cursor = conn.cursor()
            cursor.execute('''
                CREATE TABLE IF NOT EXISTS config (
                    namespace TEXT PRIMARY KEY,
                    data TEXT NOT NULL,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            ''')
            conn.commit()
        finally:
            conn.close()

        logger.info("Settings database initialized at %s", self.db_path)
        return self.db_path

    def get(self, namespace):
        """Get a read-only settings record, creating it from defaults on first access"""
        return ImmutableConfig(namespace, self._load(namespace))

    def get_editable(self, namespace):
        """Get an editable settings record"""
        return EditableConfig(self, namespace, self._load(namespace))

    def delete(self, namespace):
        """Delete a settings record. Returns True if a record was removed"""
        try:
            conn = Database.connect(self.db_path)
            try:
                cursor = conn.cursor()
                cursor.execute('DELETE FROM config WHERE namespace = ?', (namespace,))
                conn.commit()
                return cursor.rowcount > 0
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise SettingsStoreError(f"Error deleting settings {namespace}: {e}") from e

    def _load(self, namespace):
        try:
            conn = Database.connect(self.db_path)
            try:
                cursor = conn.cursor()
                cursor.execute('SELECT data FROM config WHERE namespace = ?', (namespace,))
                row = cursor.fetchone()
                if row:
                    return json.loads(row['data'])

                # First access: persist the install defaults
                data = get_defaults(namespace)
                cursor.execute(
                    'INSERT OR IGNORE INTO config (namespace, data, updated_at) VALUES (?, ?, ?)',
                    (namespace, json.dumps(data), datetime.now().isoformat())
                )
                conn.commit()
                logger.info("Created settings %s from defaults", namespace)
                return data
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise SettingsStoreError(f"Error loading settings {namespace}: {e}") from e

    def _write(self, namespace, data):
        try:
            conn = Database.connect(self.db_path)
            try:
                # Connection as context manager: commit on success, rollback on error
                with conn:
                    conn.execute('''
                        INSERT INTO config (namespace, data, updated_at)
                        VALUES (?, ?, ?)
                        ON CONFLICT(namespace) DO UPDATE SET
                            data = excluded.data,
                            updated_at = excluded.updated_at
                    ''', (namespace, json.dumps(data), datetime.now().isoformat()))
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise SettingsStoreError(f"Error saving settings {namespace}: {e}") from e

        logger.info("Saved settings %s", namespace)
