from .chunk_edit_service import ChunkEditService
from .operation_report import OperationReport

__all__ = [
    'ChunkEditService',
    'OperationReport',
]
