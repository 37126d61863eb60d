import os
import sqlite3


class Database:
    """Thin SQLite helper shared by the settings store and the persistent logger."""

    @staticmethod
    def connect(path):
        db_dir = os.path.dirname(path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)
        return sqlite3.connect(path)

    @staticmethod
    def rows_to_dicts(cursor):
        """Zip the rows of an executed cursor with its column names"""
        columns = [col[0] for col in cursor.description]
        return [dict(zip(columns, row)) for row in cursor.fetchall()]
