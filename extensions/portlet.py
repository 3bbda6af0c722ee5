"""Dashboard portlet: a grid of jobs with their icons."""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, TypeVar

from errors import IconValidationError
from models import IconSize
from .base import BaseExtension

T = TypeVar("T")

DEFAULT_COLUMN_COUNT = 3
DEFAULT_ICON_SIZE = IconSize.SIZE_24.directory


@dataclass(frozen=True)
class CustomIconJobsPortlet:
    name: str = ""
    icon_size: str = DEFAULT_ICON_SIZE
    column_count: int = DEFAULT_COLUMN_COUNT
    fill_column_first: bool = False

    @property
    def columns(self) -> int:
        return self.column_count if self.column_count > 0 else DEFAULT_COLUMN_COUNT

    @property
    def size(self) -> str:
        return self.icon_size or DEFAULT_ICON_SIZE

    def row_count(self, job_count: int) -> int:
        rows, rest = divmod(job_count, self.columns)
        return rows + (1 if rest else 0)

    def index(self, row: int, column: int, job_count: int) -> Optional[int]:
        """Position in the job list of cell (row, column), None past the end."""
        if self.fill_column_first:
            idx = row + column * self.row_count(job_count)
        else:
            idx = column + row * self.columns
        return idx if idx < job_count else None

    def grid(self, jobs: Sequence[T]) -> List[List[Optional[T]]]:
        rows = []
        for r in range(self.row_count(len(jobs))):
            row = []
            for c in range(self.columns):
                idx = self.index(r, c, len(jobs))
                row.append(jobs[idx] if idx is not None else None)
            rows.append(row)
        return rows


class CustomIconJobsPortletExtension(BaseExtension):
    id = "custom-icon-jobs-portlet"
    label = "Jobs grid with icons"
    kind = "dashboard-portlet"

    def icon_size_items(self) -> List[str]:
        return [s.directory for s in IconSize.resized()]

    def new_instance(self, form: Dict[str, Any]) -> CustomIconJobsPortlet:
        icon_size = form.get("iconSize") or ""
        if icon_size and icon_size not in self.icon_size_items():
            raise IconValidationError(f"Unsupported icon size: {icon_size}")
        try:
            column_count = int(form.get("columnCount") or 0)
        except (TypeError, ValueError) as e:
            raise IconValidationError("Column count must be a number") from e
        return CustomIconJobsPortlet(
            name=str(form.get("name") or ""),
            icon_size=icon_size or DEFAULT_ICON_SIZE,
            column_count=column_count,
            fill_column_first=bool(form.get("fillColumnFirst")),
        )
