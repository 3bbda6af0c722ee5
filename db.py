"""SQLite database holding the per-job icon property."""
import os
import sqlite3
from contextlib import contextmanager

DB_PATH = os.environ.get("JOBICON_DB", os.path.join(os.path.dirname(__file__), "jobicon.db"))


def get_db() -> sqlite3.Connection:
    conn = sqlite3.connect(DB_PATH, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    return conn


@contextmanager
def get_db_ctx():
    """Context manager for manual use: with get_db_ctx() as db: ..."""
    conn = get_db()
    try:
        yield conn
    finally:
        conn.close()


def get_db_dep():
    """FastAPI Depends generator: db = Depends(get_db_dep)"""
    conn = get_db()
    try:
        yield conn
    finally:
        conn.close()


def init_db():
    conn = get_db()
    conn.executescript("""
        CREATE TABLE IF NOT EXISTS jobs (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL UNIQUE,
            icon TEXT DEFAULT '',
            icon_mode TEXT NOT NULL DEFAULT 'shared',
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
    """)
    # ── Migrations ──
    cur = conn.execute("PRAGMA table_info(jobs)")
    job_cols = [r[1] for r in cur.fetchall()]
    if "icon_mode" not in job_cols:
        # Jobs from before the shared store kept their icon in the job directory
        conn.execute("ALTER TABLE jobs ADD COLUMN icon_mode TEXT NOT NULL DEFAULT 'shared'")
        conn.execute("UPDATE jobs SET icon_mode='legacy' WHERE icon IS NOT NULL AND icon!=''")
    conn.commit()
    conn.close()


def rename_job_icons(renames: dict) -> int:
    """Point shared-mode jobs at migrated identifiers. Returns rows changed."""
    if not renames:
        return 0
    changed = 0
    with get_db_ctx() as conn:
        for old, new in renames.items():
            cur = conn.execute(
                "UPDATE jobs SET icon=?, updated_at=CURRENT_TIMESTAMP WHERE icon=? AND icon_mode='shared'",
                (new, old),
            )
            changed += cur.rowcount
        conn.commit()
    return changed
