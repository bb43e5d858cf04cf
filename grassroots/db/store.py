# grassroots/db/store.py
# Save slot and news log on top of sqlite3. Game state is stored as one JSON
# blob per slot; failures are logged and never touch the in-memory state.

import json
import sqlite3
from datetime import datetime

from loguru import logger

from grassroots import calendar_utils, config
from grassroots.db.schema import connect, init_db
from grassroots.models import GameState


def save_game(state, db_path=None, slot=config.SAVE_SLOT):
    """Write `state` to the save slot. Returns True on success."""
    try:
        blob = json.dumps(state.to_dict())
    except (TypeError, ValueError) as e:
        logger.error(f"Could not serialise game state: {e}")
        return False

    game_date = calendar_utils.game_date(state.current_season, state.current_week)
    try:
        init_db(db_path)
        conn = connect(db_path)
        cur = conn.cursor()
        cur.execute(
            """
            INSERT OR REPLACE INTO saves (slot, schema_version, saved_at, game_date, blob)
            VALUES (?, ?, ?, ?, ?)
            """,
            (slot, config.SCHEMA_VERSION, datetime.now().isoformat(timespec="seconds"),
             game_date.isoformat(), blob),
        )
        conn.commit()
        conn.close()
    except (sqlite3.Error, OSError) as e:
        logger.error(f"Save failed: {e}")
        return False

    logger.info(f"Game saved (season {state.current_season}, week {state.current_week})")
    return True


def load_game(db_path=None, slot=config.SAVE_SLOT):
    """The saved GameState, or None when there is no usable save."""
    try:
        init_db(db_path)
        conn = connect(db_path)
        cur = conn.cursor()
        cur.execute("SELECT schema_version, blob FROM saves WHERE slot = ?", (slot,))
        row = cur.fetchone()
        conn.close()
    except (sqlite3.Error, OSError) as e:
        logger.error(f"Load failed: {e}")
        return None

    if row is None:
        logger.info("No saved game found")
        return None

    schema_version, blob = row
    if schema_version != config.SCHEMA_VERSION:
        logger.warning(f"Save uses schema {schema_version}, expected {config.SCHEMA_VERSION}")
        return None

    try:
        state = GameState.from_dict(json.loads(blob))
    except (TypeError, ValueError, KeyError) as e:
        logger.error(f"Saved game is corrupt: {e}")
        return None
    return state


def clear_save(db_path=None, slot=config.SAVE_SLOT):
    try:
        init_db(db_path)
        conn = connect(db_path)
        conn.execute("DELETE FROM saves WHERE slot = ?", (slot,))
        conn.commit()
        conn.close()
    except (sqlite3.Error, OSError) as e:
        logger.error(f"Could not clear save: {e}")
        return False
    return True


def gen_logs_insert(db_path, season, week, log_type, log_desc):
    game_date = calendar_utils.game_date(season, week)
    conn = connect(db_path)
    cur = conn.cursor()
    cur.execute(
        """
        INSERT INTO gen_logs (real_date, game_date, season, week, log_type, log_desc)
        VALUES (?, ?, ?, ?, ?, ?)
        """,
        (datetime.now().isoformat(timespec="seconds"), game_date.isoformat(), season, week, log_type, log_desc),
    )
    conn.commit()
    conn.close()


def read_logs(db_path=None, limit=20):
    """Newest news lines first, as (game_date, log_type, log_desc) tuples."""
    conn = connect(db_path)
    cur = conn.cursor()
    cur.execute(
        "SELECT game_date, log_type, log_desc FROM gen_logs ORDER BY id DESC LIMIT ?",
        (limit,),
    )
    rows = cur.fetchall()
    conn.close()
    return rows
