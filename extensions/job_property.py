"""Custom icon job property — which icon a job displays."""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from errors import IconValidationError
from utils import validate_component, validate_relative_path
from .base import BaseExtension

MODES = ("shared", "legacy")


@dataclass(frozen=True)
class CustomIconProperty:
    iconfile: str
    mode: str = "shared"


class CustomIconPropertyExtension(BaseExtension):
    id = "custom-icon-property"
    label = "Custom icon"
    kind = "job-property"

    def new_instance(self, form: Dict[str, Any]) -> Optional[CustomIconProperty]:
        section = form.get("jobicon")
        if section is None:
            return None
        if not isinstance(section, dict) or not section.get("iconfile"):
            raise IconValidationError("Please select an icon")
        mode = section.get("mode") or "shared"
        if mode not in MODES:
            raise IconValidationError(f"Unknown icon mode: {mode}")
        iconfile = str(section["iconfile"])
        if mode == "shared":
            iconfile = validate_component(iconfile)
        else:
            iconfile = validate_relative_path(iconfile)
        return CustomIconProperty(iconfile=iconfile, mode=mode)
