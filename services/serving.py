"""Serving resolution — map (scope, size token) to a file, bytes or URL."""
import logging
from collections import OrderedDict
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from config import ICON_DIR_NAME, get_icon_config
from errors import NotFoundError
from models import IconSize
from services.icon_store import ContentHashed, IconStore, LegacyPath, build_icon_store
from services.resizer import IconResizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IconPayload:
    data: bytes
    filename: str
    media_type: str = "image/png"


class ResizeCache:
    """Bounded size -> bytes mapping, least recently used entry evicted first."""

    def __init__(self, max_entries: int = 8):
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self.max_entries = max_entries
        self._data: "OrderedDict[int, bytes]" = OrderedDict()

    def get(self, size: int) -> Optional[bytes]:
        try:
            self._data.move_to_end(size)
            return self._data[size]
        except KeyError:
            return None

    def put(self, size: int, data: bytes) -> None:
        self._data[size] = data
        self._data.move_to_end(size)
        while len(self._data) > self.max_entries:
            self._data.popitem(last=False)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, size: int) -> bool:
        return size in self._data


# ── Shared store ──

class SharedIconResolver:
    def __init__(self, store: IconStore, base_url: str = ""):
        self.store = store
        self.base_url = base_url.rstrip("/")

    def resolve(self, identifier: str, size_token: Optional[str] = None) -> Path:
        path = self.store.locate(ContentHashed.parse(identifier), IconSize.from_token(size_token))
        if not path.is_file():
            raise NotFoundError(f"Icon {identifier} not found")
        return path

    def read(self, identifier: str, size_token: Optional[str] = None) -> IconPayload:
        path = self.resolve(identifier, size_token)
        try:
            data = path.read_bytes()
        except FileNotFoundError as e:
            # Deleted between resolve and read
            raise NotFoundError(f"Icon {identifier} not found") from e
        return IconPayload(data=data, filename=path.name)

    def url(self, identifier: str, size_token: Optional[str] = None) -> str:
        size = IconSize.from_token(size_token)
        name = ContentHashed.parse(identifier).filename
        return f"{self.base_url}/userContent/{ICON_DIR_NAME}/{size.directory}/{name}"


# ── Legacy per-job files ──

class JobIconAction:
    """Serves one job's legacy icon file, resizing on demand.

    Resized bytes are kept in the action's own cache; the cache lives as long
    as the action does.
    """

    def __init__(self, store: IconStore, ident: LegacyPath, resizer: IconResizer, cache: ResizeCache):
        self.ident = ident
        self.path = store.locate(ident)
        self.resizer = resizer
        self.cache = cache

    def _read_original(self) -> bytes:
        try:
            return self.path.read_bytes()
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as e:
            raise NotFoundError(f"Icon {self.ident.relative_path} not found") from e

    def serve(self, size_token: Optional[str] = None) -> IconPayload:
        filename = self.path.name
        size = IconSize.from_token(size_token)
        if size is IconSize.ORIGIN:
            return IconPayload(data=self._read_original(), filename=filename, media_type=_guess_media_type(filename))
        data = self.cache.get(size.pixels)
        if data is None:
            data = self.resizer.resize(self._read_original(), size.pixels)
            self.cache.put(size.pixels, data)
        return IconPayload(data=data, filename=filename)


class JobIconActions:
    """One JobIconAction per job, replaced when the job's icon file changes."""

    def __init__(self, store: IconStore, resizer: Optional[IconResizer] = None, cache_entries: int = 8):
        self.store = store
        self.resizer = resizer or store.resizer
        self.cache_entries = cache_entries
        self._actions: Dict[str, JobIconAction] = {}

    def for_job(self, job: str, iconfile: str) -> JobIconAction:
        ident = LegacyPath(job, iconfile)
        current = self._actions.get(job)
        if current and current.ident == ident:
            return current
        action = JobIconAction(self.store, ident, self.resizer, ResizeCache(self.cache_entries))
        self._actions[job] = action
        logger.debug("New icon action for job %s (%s)", job, iconfile)
        return action

    def discard(self, job: str) -> None:
        self._actions.pop(job, None)


_MEDIA_TYPES = {
    ".png": "image/png",
    ".gif": "image/gif",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".webp": "image/webp",
    ".bmp": "image/bmp",
    ".ico": "image/x-icon",
}


def _guess_media_type(filename: str) -> str:
    ext = Path(filename).suffix.lower()
    return _MEDIA_TYPES.get(ext, "application/octet-stream")


def get_shared_resolver() -> SharedIconResolver:
    """FastAPI Depends provider: resolver = Depends(get_shared_resolver)"""
    cfg = get_icon_config()
    return SharedIconResolver(build_icon_store(cfg), cfg.base_url)
