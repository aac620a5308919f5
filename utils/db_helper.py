import sqlite3, os
from app.errors import DatabaseError

DB_PATH = "data/quickcheck.db"

def _ensure_schema(conn):
    conn.execute("""
    CREATE TABLE IF NOT EXISTS drafts(
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        label TEXT NOT NULL DEFAULT '',
        tab_timings_json TEXT NOT NULL DEFAULT '{}',
        created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
        updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
    );
    """)
    conn.execute("""
    CREATE TABLE IF NOT EXISTS submissions(
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        draft_id INTEGER,
        label TEXT NOT NULL DEFAULT '',
        tab_timings_json TEXT NOT NULL,
        total_seconds INTEGER NOT NULL,
        created_at DATETIME,
        submitted_at DATETIME DEFAULT CURRENT_TIMESTAMP
    );
    """)

def get_conn():
    folder = os.path.dirname(DB_PATH)
    if folder:
        os.makedirs(folder, exist_ok=True)
    conn = sqlite3.connect(DB_PATH)
    _ensure_schema(conn)
    return conn

def create_draft(label: str) -> int:
    conn = None
    try:
        conn = get_conn()
        cur = conn.cursor()
        cur.execute("INSERT INTO drafts(label) VALUES (?)", (label,))
        conn.commit()
        return cur.lastrowid
    except sqlite3.Error as e:
        raise DatabaseError(str(e))
    finally:
        if conn is not None:
            conn.close()

def update_draft_timings(draft_id: int, tab_timings_json: str):
    conn = None
    try:
        conn = get_conn()
        conn.execute(
            "UPDATE drafts SET tab_timings_json=?, updated_at=CURRENT_TIMESTAMP WHERE id=?",
            (tab_timings_json, draft_id)
        )
        conn.commit()
    except sqlite3.Error as e:
        raise DatabaseError(str(e))
    finally:
        if conn is not None:
            conn.close()

def load_draft(draft_id: int):
    """Returns (id, label, tab_timings_json, created_at) or None."""
    conn = None
    try:
        conn = get_conn()
        cur = conn.cursor()
        cur.execute(
            "SELECT id, label, tab_timings_json, created_at FROM drafts WHERE id=?",
            (draft_id,)
        )
        return cur.fetchone()
    except sqlite3.Error as e:
        raise DatabaseError(str(e))
    finally:
        if conn is not None:
            conn.close()

def latest_draft_id():
    conn = None
    try:
        conn = get_conn()
        cur = conn.cursor()
        cur.execute("SELECT id FROM drafts ORDER BY updated_at DESC, id DESC LIMIT 1")
        row = cur.fetchone()
        return row[0] if row else None
    except sqlite3.Error as e:
        raise DatabaseError(str(e))
    finally:
        if conn is not None:
            conn.close()

def submit_draft(draft_id: int, label: str, tab_timings_json: str, total_seconds: int, created_at) -> int:
    """Stores the submission and removes the draft in one transaction."""
    conn = None
    try:
        conn = get_conn()
        with conn:
            cur = conn.execute(
                "INSERT INTO submissions(draft_id, label, tab_timings_json, total_seconds, created_at) VALUES (?,?,?,?,?)",
                (draft_id, label, tab_timings_json, total_seconds, created_at)
            )
            conn.execute("DELETE FROM drafts WHERE id=?", (draft_id,))
        return cur.lastrowid
    except sqlite3.Error as e:
        raise DatabaseError(str(e))
    finally:
        if conn is not None:
            conn.close()
