"""Icon store — shared hash-keyed icons plus legacy per-job files.

Layout of the shared store::

    <root>/origin/<sha1>.png
    <root>/16x16/<sha1>.png
    <root>/24x24/<sha1>.png
    <root>/32x32/<sha1>.png

Legacy icons live in the job directory, ``<jobs_root>/<job>/customIcon/<path>``,
and are resized when served.
"""
import hashlib
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Union

from config import ICON_DIR_NAME, IconConfig, get_icon_config
from errors import DecodeError, DuplicateError
from models import IconSize
from services.resizer import IconResizer
from utils import chunk, validate_component, validate_relative_path

logger = logging.getLogger(__name__)

ICON_EXT = ".png"


@dataclass(frozen=True)
class ContentHashed:
    digest: str

    @classmethod
    def parse(cls, identifier: str) -> "ContentHashed":
        return cls(normalize_identifier(identifier)[:-len(ICON_EXT)])

    @property
    def filename(self) -> str:
        return self.digest + ICON_EXT


@dataclass(frozen=True)
class LegacyPath:
    job: str
    relative_path: str


IconIdentifier = Union[ContentHashed, LegacyPath]


def content_identifier(data: bytes) -> ContentHashed:
    return ContentHashed(hashlib.sha1(data).hexdigest())


def normalize_identifier(identifier: str) -> str:
    """Validate a shared-store identifier; add the extension if it was left off."""
    name = validate_component(identifier)
    if not name.endswith(ICON_EXT):
        name += ICON_EXT
    return name


def _write(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    os.chmod(path, 0o644)


class IconStore:
    def __init__(self, root: Path, jobs_root: Path, resizer: Optional[IconResizer] = None):
        self.root = Path(root)
        self.jobs_root = Path(jobs_root)
        self.resizer = resizer or IconResizer()

    # ── Shared store ──

    def path_for(self, identifier: str, size: IconSize = IconSize.ORIGIN) -> Path:
        return self.root / size.directory / normalize_identifier(identifier)

    def exists(self, identifier: str) -> bool:
        return self.path_for(identifier).is_file()

    def upload(self, data: bytes) -> str:
        """Store `data` and its resized variants. Returns the identifier.

        Every variant is rendered before anything is written, so undecodable
        input leaves the store untouched. The original is written first; a
        failure after that leaves a partial set and is not rolled back.
        """
        name = content_identifier(data).filename
        if self.exists(name):
            raise DuplicateError(name)
        variants = [(size, self.resizer.resize(data, size.pixels)) for size in IconSize.resized()]
        _write(self.path_for(name, IconSize.ORIGIN), data)
        for size, body in variants:
            _write(self.path_for(name, size), body)
        logger.info("Stored icon %s (%d bytes)", name, len(data))
        return name

    def delete(self, identifier: str) -> None:
        name = normalize_identifier(identifier)
        for size in IconSize:
            try:
                self.path_for(name, size).unlink()
            except FileNotFoundError:
                pass
        logger.info("Deleted icon %s", name)

    def list_identifiers(self) -> List[str]:
        origin = self.root / IconSize.ORIGIN.directory
        if not origin.is_dir():
            return []
        return sorted(p.name for p in origin.iterdir() if p.is_file())

    def list_rows(self, columns: int) -> List[List[str]]:
        return chunk(self.list_identifiers(), columns)

    def locate(self, ident: IconIdentifier, size: IconSize = IconSize.ORIGIN) -> Path:
        """Storage path of either kind of identifier. Legacy files have no variants."""
        if isinstance(ident, ContentHashed):
            return self.path_for(ident.filename, size)
        return self.legacy_path(ident)

    # ── Legacy per-job files ──

    def legacy_dir(self, job: str) -> Path:
        return self.jobs_root / validate_component(job) / ICON_DIR_NAME

    def legacy_path(self, ident: LegacyPath) -> Path:
        return self.legacy_dir(ident.job) / validate_relative_path(ident.relative_path)

    def upload_legacy(self, job: str, relative_path: str, data: bytes) -> LegacyPath:
        ident = LegacyPath(validate_component(job), validate_relative_path(relative_path))
        path = self.legacy_path(ident)
        _write(path, data)
        logger.info("Stored legacy icon %s for job %s", ident.relative_path, ident.job)
        return ident

    # ── Migration ──

    def migrate_legacy_icon(self, source: Path) -> str:
        """Fold one old flat-layout file into the shared store, then remove it."""
        source = Path(source)
        data = source.read_bytes()
        try:
            name = self.upload(data)
        except DuplicateError as e:
            name = e.identifier
        source.unlink()
        logger.info("Migrated legacy icon %s -> %s", source.name, name)
        return name


def migrate_legacy_dir(store: IconStore, legacy_dir: Path) -> Dict[str, str]:
    """Migrate every *.png directly inside `legacy_dir`. Returns {old_name: new_id}."""
    legacy_dir = Path(legacy_dir)
    if not legacy_dir.is_dir():
        return {}
    renames: Dict[str, str] = {}
    for icon in sorted(legacy_dir.glob("*" + ICON_EXT)):
        if not icon.is_file():
            continue
        try:
            renames[icon.name] = store.migrate_legacy_icon(icon)
        except DecodeError:
            logger.exception("Skipping unreadable legacy icon %s", icon)
    return renames


def build_icon_store(cfg: IconConfig) -> IconStore:
    return IconStore(cfg.icon_root, cfg.jobs_root)


def get_icon_store() -> IconStore:
    """FastAPI Depends provider: store = Depends(get_icon_store)"""
    return build_icon_store(get_icon_config())
