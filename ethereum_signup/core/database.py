import os
import sqlite3


class Database:

    @staticmethod
    def connect(path):
        """Open a SQLite connection, creating the parent directory if needed"""
        db_dir = os.path.dirname(path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)
        conn = sqlite3.connect(path)
        conn.row_factory = sqlite3.Row
        return conn

