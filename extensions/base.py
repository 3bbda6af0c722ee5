"""Abstract base extension — job property, list column and portlet descriptors."""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class BaseExtension(ABC):
    """Each extension turns submitted form data into a config struct."""

    id: str          # unique key, e.g. "custom-icon-property"
    label: str       # display name
    kind: str        # "job-property", "list-view-column", "dashboard-portlet"

    @abstractmethod
    def new_instance(self, form: Dict[str, Any]) -> Optional[Any]:
        """Bind form data to this extension's config struct.
        Returns None when the form does not enable the extension.
        Raises IconValidationError for malformed input."""
        ...
