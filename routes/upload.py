"""Icon upload routes."""
import logging
import sqlite3
from pathlib import PureWindowsPath
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from db import get_db_dep
from errors import DecodeError, DuplicateError, IconValidationError, NotFoundError
from models import UploadOut
from routes.jobs import get_icon_actions
from services.icon_store import IconStore, get_icon_store
from services.job_service import get_job, set_job_icon
from services.serving import JobIconActions

router = APIRouter(prefix="/api", tags=["upload"])

logger = logging.getLogger(__name__)

MAX_SIZE = 2 * 1024 * 1024  # 2MB


async def _read_upload(file: Optional[UploadFile]) -> bytes:
    if file is None or not file.filename:
        raise HTTPException(400, "No file selected")
    data = await file.read()
    if not data:
        raise HTTPException(400, "Uploaded file is empty")
    if len(data) > MAX_SIZE:
        raise HTTPException(400, "File too large (max 2MB)")
    return data


def _client_basename(name: str) -> str:
    """Browsers may send a full client path, e.g. C:\\fakepath\\logo.png."""
    return PureWindowsPath(name).name


@router.post("/upload/icon", response_model=UploadOut)
async def upload_icon(file: Optional[UploadFile] = File(None), store: IconStore = Depends(get_icon_store)):
    data = await _read_upload(file)
    try:
        icon = store.upload(data)
    except DuplicateError as e:
        raise HTTPException(409, f"Icon already uploaded: {e.identifier}")
    except DecodeError:
        logger.exception("Rejected upload %s", file.filename)
        raise
    return UploadOut(icon=icon, message="Upload done")


@router.post("/jobs/{name}/icon/upload", response_model=UploadOut)
async def upload_job_icon(
    name: str,
    file: Optional[UploadFile] = File(None),
    filename: str = Form(""),
    store: IconStore = Depends(get_icon_store),
    db: sqlite3.Connection = Depends(get_db_dep),
    actions: JobIconActions = Depends(get_icon_actions),
):
    """Legacy mode: keep the file in the job's own directory under its name."""
    try:
        get_job(db, name)
    except NotFoundError as e:
        raise HTTPException(404, str(e))
    data = await _read_upload(file)
    try:
        ident = store.upload_legacy(name, filename or _client_basename(file.filename), data)
    except IconValidationError as e:
        raise HTTPException(400, str(e))
    set_job_icon(db, name, ident.relative_path, "legacy")
    actions.discard(name)
    return UploadOut(icon=ident.relative_path, message="Upload done")
