"""Shared icon store routes — listing, raw variants, delete."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from errors import IconValidationError, NotFoundError
from models import IconListOut
from services.icon_store import IconStore, get_icon_store
from services.serving import SharedIconResolver, get_shared_resolver

router = APIRouter(prefix="/api/icons", tags=["icons"])


def _listing(store: IconStore, columns: Optional[int]) -> IconListOut:
    icons = store.list_identifiers()
    rows = store.list_rows(columns) if columns else None
    return IconListOut(icons=icons, rows=rows)


@router.get("", response_model=IconListOut)
def list_icons(columns: Optional[int] = Query(None, ge=1), store: IconStore = Depends(get_icon_store)):
    return _listing(store, columns)


@router.delete("/{icon}", response_model=IconListOut)
def delete_icon(icon: str, columns: Optional[int] = Query(None, ge=1), store: IconStore = Depends(get_icon_store)):
    try:
        store.delete(icon)
    except IconValidationError as e:
        raise HTTPException(400, str(e))
    return _listing(store, columns)


@router.get("/{icon}/raw")
def get_icon_raw(icon: str, size: Optional[str] = None, resolver: SharedIconResolver = Depends(get_shared_resolver)):
    try:
        payload = resolver.read(icon, size)
    except IconValidationError as e:
        raise HTTPException(400, str(e))
    except NotFoundError as e:
        raise HTTPException(404, str(e))
    return Response(content=payload.data, media_type=payload.media_type)
