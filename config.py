"""Runtime configuration read from the environment."""
import os
from dataclasses import dataclass
from pathlib import Path

_BASE_DIR = os.path.dirname(__file__)

ICON_DIR_NAME = "customIcon"


@dataclass(frozen=True)
class IconConfig:
    user_content: Path
    jobs_root: Path
    base_url: str
    cache_entries: int

    @property
    def icon_root(self) -> Path:
        """Shared, hash-keyed store: <user_content>/customIcon."""
        return self.user_content / ICON_DIR_NAME


def get_icon_config() -> IconConfig:
    user_content = os.environ.get("JOBICON_USER_CONTENT", "").strip() or os.path.join(_BASE_DIR, "userContent")
    jobs_root = os.environ.get("JOBICON_JOBS_ROOT", "").strip() or os.path.join(_BASE_DIR, "jobs")
    base_url = os.environ.get("JOBICON_BASE_URL", "").strip().rstrip("/")
    cache_entries = int(os.environ.get("JOBICON_CACHE_ENTRIES", "8"))
    if cache_entries <= 0:
        raise RuntimeError("JOBICON_CACHE_ENTRIES must be positive")
    return IconConfig(
        user_content=Path(user_content),
        jobs_root=Path(jobs_root),
        base_url=base_url,
        cache_entries=cache_entries,
    )
