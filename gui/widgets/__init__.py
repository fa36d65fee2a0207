from .drop_area import FileDropArea

__all__ = [
    "FileDropArea",
]
