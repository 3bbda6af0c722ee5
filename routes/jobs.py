"""Job icon property routes and the per-job icon endpoint."""
import sqlite3
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import RedirectResponse, Response

from db import get_db_dep
from errors import IconValidationError, NotFoundError
from extensions import get_extension
from models import JobCreate, JobIconUpdate, JobOut
from services.job_service import build_job_out, get_job, list_jobs, set_job_icon
from services.serving import JobIconActions, SharedIconResolver, get_shared_resolver
from utils import validate_component

router = APIRouter(tags=["jobs"])


def get_icon_actions(request: Request) -> JobIconActions:
    return request.app.state.icon_actions


def _job_or_404(db, name: str):
    try:
        return get_job(db, name)
    except NotFoundError as e:
        raise HTTPException(404, str(e))


@router.get("/api/jobs", response_model=List[JobOut])
def list_all_jobs(db: sqlite3.Connection = Depends(get_db_dep), resolver: SharedIconResolver = Depends(get_shared_resolver)):
    return [build_job_out(r, resolver) for r in list_jobs(db)]


@router.post("/api/jobs", response_model=JobOut)
def create_job(job: JobCreate, db: sqlite3.Connection = Depends(get_db_dep), resolver: SharedIconResolver = Depends(get_shared_resolver)):
    try:
        name = validate_component(job.name)
    except IconValidationError as e:
        raise HTTPException(400, str(e))
    try:
        db.execute("INSERT INTO jobs (name, icon, icon_mode) VALUES (?,?,?)", (name, "", "shared"))
        db.commit()
    except sqlite3.IntegrityError:
        raise HTTPException(409, f"Job {name} already exists")
    return build_job_out(get_job(db, name), resolver)


@router.get("/api/jobs/{name}", response_model=JobOut)
def read_job(name: str, db: sqlite3.Connection = Depends(get_db_dep), resolver: SharedIconResolver = Depends(get_shared_resolver)):
    return build_job_out(_job_or_404(db, name), resolver)


@router.put("/api/jobs/{name}/icon", response_model=JobOut)
def update_job_icon(
    name: str,
    body: JobIconUpdate,
    db: sqlite3.Connection = Depends(get_db_dep),
    resolver: SharedIconResolver = Depends(get_shared_resolver),
    actions: JobIconActions = Depends(get_icon_actions),
):
    _job_or_404(db, name)
    try:
        prop = get_extension("custom-icon-property").new_instance(body.model_dump())
    except IconValidationError as e:
        raise HTTPException(400, str(e))
    if prop is None:
        set_job_icon(db, name, "", "shared")
    else:
        if prop.mode == "shared" and not resolver.store.exists(prop.iconfile):
            raise HTTPException(404, f"Icon {prop.iconfile} not found")
        set_job_icon(db, name, prop.iconfile, prop.mode)
    actions.discard(name)
    return build_job_out(get_job(db, name), resolver)


@router.delete("/api/jobs/{name}/icon", response_model=JobOut)
def clear_job_icon(
    name: str,
    db: sqlite3.Connection = Depends(get_db_dep),
    resolver: SharedIconResolver = Depends(get_shared_resolver),
    actions: JobIconActions = Depends(get_icon_actions),
):
    _job_or_404(db, name)
    set_job_icon(db, name, "", "shared")
    actions.discard(name)
    return build_job_out(get_job(db, name), resolver)


@router.get("/job/{name}/customIcon")
def serve_job_icon(
    name: str,
    size: Optional[str] = None,
    db: sqlite3.Connection = Depends(get_db_dep),
    resolver: SharedIconResolver = Depends(get_shared_resolver),
    actions: JobIconActions = Depends(get_icon_actions),
):
    row = _job_or_404(db, name)
    if not row["icon"]:
        raise HTTPException(404, f"Job {name} has no custom icon")
    try:
        if row["icon_mode"] == "shared":
            resolver.resolve(row["icon"], size)
            return RedirectResponse(resolver.url(row["icon"], size))
        payload = actions.for_job(name, row["icon"]).serve(size)
    except NotFoundError as e:
        raise HTTPException(404, str(e))
    headers = {"Content-Disposition": f'inline; filename="{payload.filename}"'}
    return Response(content=payload.data, media_type=payload.media_type, headers=headers)
