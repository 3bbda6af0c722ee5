"""List view column and dashboard portlet routes."""
import sqlite3
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from db import get_db_dep
from errors import IconValidationError
from extensions import get_extension
from models import ColumnEntry, PortletIn, PortletOut
from services.job_service import job_icon_url, list_jobs
from services.serving import SharedIconResolver, get_shared_resolver

router = APIRouter(prefix="/api/views", tags=["views"])


def _entries(db, resolver: SharedIconResolver, size: str) -> List[ColumnEntry]:
    return [ColumnEntry(job=r["name"], icon_url=job_icon_url(r, resolver, size)) for r in list_jobs(db)]


@router.get("/column", response_model=List[ColumnEntry])
def icon_column(
    size: Optional[str] = None,
    db: sqlite3.Connection = Depends(get_db_dep),
    resolver: SharedIconResolver = Depends(get_shared_resolver),
):
    try:
        column = get_extension("custom-icon-column").new_instance({"iconSize": size})
    except IconValidationError as e:
        raise HTTPException(400, str(e))
    return _entries(db, resolver, column.icon_size)


@router.post("/portlet", response_model=PortletOut)
def jobs_portlet(
    body: PortletIn,
    db: sqlite3.Connection = Depends(get_db_dep),
    resolver: SharedIconResolver = Depends(get_shared_resolver),
):
    try:
        portlet = get_extension("custom-icon-jobs-portlet").new_instance(body.model_dump())
    except IconValidationError as e:
        raise HTTPException(400, str(e))
    entries = _entries(db, resolver, portlet.size)
    return PortletOut(
        name=portlet.name,
        icon_size=portlet.size,
        column_count=portlet.columns,
        row_count=portlet.row_count(len(entries)),
        grid=portlet.grid(entries),
    )
