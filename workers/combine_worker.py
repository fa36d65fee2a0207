from pathlib import Path
from typing import Optional
import logging

from PySide6.QtCore import QThread, Signal

from core.base import OperationResult, OperationStatus
from core.exceptions import ChunkEditError
from core.io_utils import describe_size_delta
from core.settings import CombineSettings
from services.chunk_edit_service import ChunkEditService
from services.operation_report import OperationReport

logger = logging.getLogger(__name__)


class CombineWorker(QThread):
    progress = Signal(int, str)
    finished = Signal(object)
    error = Signal(str)
    log_written = Signal(str)

    def __init__(
        self,
        manifest_path: Path,
        settings: Optional[CombineSettings] = None,
        report_path: Optional[Path] = None,
    ):
        super().__init__()
        self.manifest_path = manifest_path
        self.settings = settings or CombineSettings()
        self.report_path = report_path
        self.service = ChunkEditService(combine_settings=self.settings)

    def run(self):
        try:
            logger.info(f"Combine worker started: {self.manifest_path.name}")
            self.log_written.emit(f"🚀 Начато объединение по {self.manifest_path.name}")
            self.progress.emit(0, "Чтение манифеста...")

            output_path = self.service.combine(self.manifest_path, progress_callback=self._progress)
            stats = self.service.last_combine_stats

            if self.report_path and not OperationReport.write_combine_report(
                self.report_path, self.manifest_path, output_path, stats
            ):
                self.log_written.emit(f"⚠️ Не удалось записать отчет: {self.report_path}")
            OperationReport.log_combine_summary(stats)

            self.progress.emit(100, "Объединение завершено!")
            for index, (old_len, new_len) in sorted(stats["part_sizes"].items()):
                self.log_written.emit(f"   part.{index}: {new_len} bytes ({describe_size_delta(old_len, new_len)})")

            result = OperationResult(
                success=True,
                output_files=[output_path],
                stats={
                    "operation": "combine",
                    "source_file": stats["source"],
                    "source_size": stats["source_size"],
                    "output_size": stats["output_size"],
                    "parts_count": len(stats["deltas"]),
                    "deltas": dict(stats["deltas"]),
                },
                status=OperationStatus.COMPLETED,
            )
            self.log_written.emit(f"✅ Объединение завершено! Создан файл: {output_path.name}")
            self.finished.emit(result)
            logger.info(f"Combine worker finished: {self.manifest_path.name}")

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
