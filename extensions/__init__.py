"""Extension registry — plain lookup table of the icon descriptors."""
from typing import Dict
from .base import BaseExtension
from .job_property import CustomIconPropertyExtension
from .column import CustomIconColumnExtension
from .portlet import CustomIconJobsPortletExtension

# Register all extensions here. To add a new one:
# 1. Create extensions/myextension.py inheriting BaseExtension
# 2. Import and add to _BUILTIN below
_BUILTIN = [
    CustomIconPropertyExtension(),
    CustomIconColumnExtension(),
    CustomIconJobsPortletExtension(),
]

_registry: Dict[str, BaseExtension] = {}

def _init():
    for e in _BUILTIN:
        _registry[e.id] = e

_init()

def get_extension(extension_id: str) -> BaseExtension | None:
    return _registry.get(extension_id)

def all_extensions() -> Dict[str, BaseExtension]:
    return dict(_registry)
