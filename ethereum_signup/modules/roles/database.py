import logging
import sqlite3

from ethereum_signup.core.database import Database

logger = logging.getLogger(__name__)

ANONYMOUS_ROLE = 'anonymous'
AUTHENTICATED_ROLE = 'authenticated'
ADMINISTRATOR_ROLE = 'administrator'

# Built-in roles cannot be deleted
LOCKED_ROLES = (ANONYMOUS_ROLE, AUTHENTICATED_ROLE)

DEFAULT_ROLES = [
    (ANONYMOUS_ROLE, 'Anonymous user', 0),
    (AUTHENTICATED_ROLE, 'Authenticated user', 1),
    (ADMINISTRATOR_ROLE, 'Administrator', 2),
]


class RoleProvider:
    """Roles known to the host site"""

    def __init__(self, db_path):
        self.db_path = db_path

    def _get_connection(self):
        return Database.connect(self.db_path)

    def init_db(self):
        """Create the roles table and seed the built-in roles"""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute('''
                CREATE TABLE IF NOT EXISTS roles (
                    id TEXT PRIMARY KEY,
                    label TEXT NOT NULL,
                    weight INTEGER DEFAULT 0
                )
            ''')
            cursor.executemany(
                'INSERT OR IGNORE INTO roles (id, label, weight) VALUES (?, ?, ?)',
                DEFAULT_ROLES
            )
            conn.commit()
        finally:
            conn.close()

        logger.info("Roles table created/verified at %s", self.db_path)

    def list_roles(self, exclude_anonymous=True):
        """
        Get role names keyed by role id, ordered by weight.

        The anonymous role is left out by default since it can never be
        assigned to an account.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            if exclude_anonymous:
                cursor.execute(
                    'SELECT id, label FROM roles WHERE id != ? ORDER BY weight, label',
                    (ANONYMOUS_ROLE,)
                )
            else:
                cursor.execute('SELECT id, label FROM roles ORDER BY weight, label')
            return {row['id']: row['label'] for row in cursor.fetchall()}
        finally:
            conn.close()

    def add_role(self, role_id, label, weight=0):
        """Add a role. Returns False if the id is already taken"""
        conn = self._get_connection()
        try:
            conn.execute(
                'INSERT INTO roles (id, label, weight) VALUES (?, ?, ?)',
                (role_id, label, weight)
            )
            conn.commit()
            return True
        except sqlite3.IntegrityError:
            return False  # Role already exists
        finally:
            conn.close()

    def delete_role(self, role_id):
        """Delete a role. Built-in roles are refused"""
        if role_id in LOCKED_ROLES:
            raise ValueError(f"Role '{role_id}' is built in and cannot be deleted")

        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute('DELETE FROM roles WHERE id = ?', (role_id,))
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()
