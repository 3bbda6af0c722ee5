"""Size classes and pydantic models for API request/response."""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel

# ── Size classes ──

class IconSize(Enum):
    ORIGIN = ("origin", 0)
    SIZE_16 = ("16x16", 16)
    SIZE_24 = ("24x24", 24)
    SIZE_32 = ("32x32", 32)

    def __init__(self, directory: str, pixels: int):
        self.directory = directory
        self.pixels = pixels

    @classmethod
    def resized(cls) -> List["IconSize"]:
        return [s for s in cls if s is not cls.ORIGIN]

    @classmethod
    def is_valid(cls, token: Optional[str]) -> bool:
        """Only the resized tokens (16x16, 24x24, 32x32) are request tokens."""
        return any(s.directory == token for s in cls.resized())

    @classmethod
    def from_token(cls, token: Optional[str]) -> "IconSize":
        """Unknown or missing tokens fall back to the original."""
        for s in cls.resized():
            if s.directory == token:
                return s
        return cls.ORIGIN

# ── Icons ──

class UploadOut(BaseModel):
    ok: bool = True
    icon: str
    message: str = ""

class IconListOut(BaseModel):
    icons: List[str] = []
    rows: Optional[List[List[str]]] = None

# ── Jobs ──

class JobCreate(BaseModel):
    name: str

class JobOut(BaseModel):
    id: int
    name: str
    icon: str = ""
    icon_mode: str = "shared"
    icon_url: Optional[str] = None

class JobIconUpdate(BaseModel):
    jobicon: Optional[dict] = None

# ── Views ──

class ColumnEntry(BaseModel):
    job: str
    icon_url: Optional[str] = None

class PortletIn(BaseModel):
    name: str = ""
    iconSize: str = ""
    columnCount: int = 0
    fillColumnFirst: bool = False

class PortletOut(BaseModel):
    name: str
    icon_size: str
    column_count: int
    row_count: int
    grid: List[List[Optional[ColumnEntry]]] = []

# ── Extensions ──

class ExtensionOut(BaseModel):
    id: str
    label: str
    kind: str
