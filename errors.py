"""Error kinds raised by the icon store and serving layer."""


class IconError(Exception):
    """Base class for icon errors."""


class IconValidationError(IconError):
    """Rejected user input: bad path, missing file, bad form value."""


class DuplicateError(IconError):
    def __init__(self, identifier: str):
        super().__init__(f"Icon {identifier} already exists")
        self.identifier = identifier


class DecodeError(IconError):
    """Input bytes are not a recognized raster image."""


class EncodeError(IconError):
    """Canvas could not be written as PNG."""


class NotFoundError(IconError):
    pass
