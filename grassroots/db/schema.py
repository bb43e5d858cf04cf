# grassroots/db/schema.py
import os
import sqlite3

from grassroots import config


def connect(db_path=None):
    db_path = db_path or config.DB_PATH
    folder = os.path.dirname(db_path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    return sqlite3.connect(db_path)


def init_db(db_path=None):
    """Create the save and log tables if they are missing. Existing rows are kept."""
    conn = connect(db_path)
    cur = conn.cursor()
    cur.executescript("""
    CREATE TABLE IF NOT EXISTS saves (
        slot TEXT PRIMARY KEY,
        schema_version INTEGER NOT NULL,
        saved_at TEXT NOT NULL,
        game_date TEXT NOT NULL,
        blob TEXT NOT NULL
    );

    CREATE TABLE IF NOT EXISTS gen_logs (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        real_date TEXT NOT NULL,
        game_date TEXT NOT NULL,
        season INTEGER NOT NULL,
        week INTEGER NOT NULL,
        log_type TEXT NOT NULL,
        log_desc TEXT NOT NULL
    );
    """)
    conn.commit()
    conn.close()
