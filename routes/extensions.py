"""Extension catalog routes."""
from typing import List

from fastapi import APIRouter

from extensions import all_extensions, get_extension
from models import ExtensionOut

router = APIRouter(prefix="/api/extensions", tags=["extensions"])


@router.get("", response_model=List[ExtensionOut])
def list_extensions():
    return [ExtensionOut(id=eid, label=e.label, kind=e.kind) for eid, e in all_extensions().items()]


@router.get("/portlet/icon-sizes", response_model=List[str])
def portlet_icon_sizes():
    return get_extension("custom-icon-jobs-portlet").icon_size_items()
