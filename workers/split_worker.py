from pathlib import Path
from typing import List, Optional
import logging

from PySide6.QtCore import QThread, Signal

from core.base import ByteRange, OperationResult, OperationStatus
from core.exceptions import ChunkEditError
from core.io_utils import manifest_path_for
from core.settings import SplitSettings
from services.chunk_edit_service import ChunkEditService

logger = logging.getLogger(__name__)


class SplitWorker(QThread):
    progress = Signal(int, str)
    finished = Signal(object)
    error = Signal(str)
    log_written = Signal(str)

    def __init__(self, filepath: Path, ranges: List[ByteRange], settings: Optional[SplitSettings] = None):
        super().__init__()
        self.filepath = filepath
        self.ranges = list(ranges)
        self.settings = settings or SplitSettings()
        self.service = ChunkEditService(split_settings=self.settings)

    def run(self):
        try:
            logger.info(f"Split worker started: {self.filepath.name}")
            self.log_written.emit(f"🚀 Начато разделение файла: {self.filepath.name}")
            self.progress.emit(0, "Запись частей...")

            part_paths = self.service.split(self.filepath, self.ranges, progress_callback=self._progress)
            manifest_path = Path(manifest_path_for(self.filepath))

            self.progress.emit(100, "Разделение завершено!")
            stats = {
                "operation": "split",
                "source_file": self.filepath.name,
                "source_size": self.filepath.stat().st_size,
                "parts_count": len(part_paths),
                "manifest": str(manifest_path),
                "bytes_extracted": sum(r.length for r in self.ranges),
            }
            result = OperationResult(
                success=True,
                output_files=[manifest_path] + part_paths,
                stats=stats,
                status=OperationStatus.COMPLETED,
            )

            self.log_written.emit(f"✅ Разделение завершено! Создано {len(part_paths)} частей")
            for path in part_paths:
                self.log_written.emit(f"   📄 {path.name}")

            self.finished.emit(result)
            logger.info(f"Split worker finished: {self.filepath.name}")

        except (ChunkEditError, OSError, ValueError) as e:
            self._handle_error(str(e))

    def _handle_error(self, error_msg: str):
        logger.error(error_msg)
        self.log_written.emit(f"❌ Ошибка: {error_msg}")
        result = OperationResult(
            success=False,
            output_files=[],
            stats={"error": error_msg},
            errors=[error_msg],
            status=OperationStatus.FAILED,
        )
        self.finished.emit(result)
        self.error.emit(error_msg)

    def _progress(self, value: int, msg: str):
        self.progress.emit(value, msg)
