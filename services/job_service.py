"""Job service — job rows and the icon URLs shown for them."""
import sqlite3
from typing import List, Optional

from config import get_icon_config
from errors import NotFoundError
from models import JobOut
from services.serving import SharedIconResolver


def get_job(db: sqlite3.Connection, name: str) -> sqlite3.Row:
    row = db.execute("SELECT * FROM jobs WHERE name=?", (name,)).fetchone()
    if not row:
        raise NotFoundError(f"Job {name} not found")
    return row


def list_jobs(db: sqlite3.Connection) -> List[sqlite3.Row]:
    return db.execute("SELECT * FROM jobs ORDER BY name").fetchall()


def job_icon_url(row, resolver: SharedIconResolver, size_token: Optional[str] = None) -> Optional[str]:
    """Where the UI should load this job's icon from, None if it has none."""
    if not row["icon"]:
        return None
    if row["icon_mode"] == "shared":
        return resolver.url(row["icon"], size_token)
    url = f"{get_icon_config().base_url}/job/{row['name']}/customIcon"
    if size_token:
        url += f"?size={size_token}"
    return url


def build_job_out(row, resolver: SharedIconResolver) -> JobOut:
    return JobOut(
        id=row["id"], name=row["name"],
        icon=row["icon"] or "", icon_mode=row["icon_mode"],
        icon_url=job_icon_url(row, resolver),
    )


def set_job_icon(db: sqlite3.Connection, name: str, icon: str, mode: str) -> None:
    get_job(db, name)
    db.execute(
        "UPDATE jobs SET icon=?, icon_mode=?, updated_at=CURRENT_TIMESTAMP WHERE name=?",
        (icon, mode, name),
    )
    db.commit()
