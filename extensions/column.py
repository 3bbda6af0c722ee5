"""List view column showing each job's custom icon."""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from errors import IconValidationError
from models import IconSize
from .base import BaseExtension


@dataclass(frozen=True)
class CustomIconColumn:
    icon_size: str = IconSize.SIZE_16.directory


class CustomIconColumnExtension(BaseExtension):
    id = "custom-icon-column"
    label = "Custom Icon"
    kind = "list-view-column"

    def new_instance(self, form: Dict[str, Any]) -> Optional[CustomIconColumn]:
        size = form.get("iconSize") or IconSize.SIZE_16.directory
        if not IconSize.is_valid(size):
            raise IconValidationError(f"Unsupported icon size: {size}")
        return CustomIconColumn(icon_size=size)
