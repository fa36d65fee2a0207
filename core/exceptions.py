# core/exceptions.py

class ChunkEditError(Exception):
    """Base error for split/combine operations."""

    def __init__(self, message: str, filepath=None, details=None):
        super().__init__(message)
        self.filepath = filepath
        self.details = details or {}


class RangeParseError(ChunkEditError, ValueError):
    """A ``START-END`` token could not be parsed."""
    pass


class ManifestFormatError(ChunkEditError):
    """Manifest exists but does not decode into a valid manifest."""
    pass


class ShortReadError(ChunkEditError, OSError):
    """Fewer bytes were available than a range or chunk requires."""
    pass
