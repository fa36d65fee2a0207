# gui/windows/main_window.py

from pathlib import Path
import logging

from PySide6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QPushButton,
    QLabel,
    QLineEdit,
    QProgressBar,
    QTabWidget,
    QListWidget,
    QMessageBox,
    QTableWidget,
    QTableWidgetItem,
    QTextEdit,
    QCheckBox,
    QFrame,
)

from core.base import OperationResult
from core.exceptions import ChunkEditError
from core.settings import CombineSettings, SplitSettings
from gui.ui_constants import (
    HEADER_FRAME_STYLE,
    TITLE_LABEL_STYLE,
    DESC_LABEL_STYLE,
    ACTION_BUTTON_STYLE,
    PROGRESS_BAR_STYLE,
)
from gui.widgets.drop_area import FileDropArea

logger = logging.getLogger(__name__)


class ChunkEditWindow(QWidget):
    """Window with tabs for splitting ranges out and combining them back."""

    def __init__(self, parent=None):
        super().__init__(parent)
        from controller import ChunkEditController

        self.controller = ChunkEditController()
        self.worker = None
        self.manifest_path = None

        self.setWindowTitle("edit-chunks - Split & Combine")
        self.resize(640, 560)
        layout = QVBoxLayout(self)

        layout.addWidget(self._create_header())
        self.tabs = QTabWidget()
        layout.addWidget(self.tabs)

        self._create_split_tab()
        self._create_combine_tab()

        self.log_view = QTextEdit()
        self.log_view.setReadOnly(True)
        self.log_view.setMaximumHeight(140)
        layout.addWidget(self.log_view)

    def _create_header(self) -> QFrame:
        frame = QFrame()
        frame.setStyleSheet(HEADER_FRAME_STYLE)
        header_layout = QVBoxLayout(frame)
        title = QLabel("edit-chunks")
        title.setStyleSheet(TITLE_LABEL_STYLE)
        desc = QLabel("Вырежьте байтовые диапазоны, отредактируйте их и соберите файл обратно")
        desc.setStyleSheet(DESC_LABEL_STYLE)
        header_layout.addWidget(title)
        header_layout.addWidget(desc)
        return frame

    # ------------------------------------------------------------------
    # Split Tab
    # ------------------------------------------------------------------
    def _create_split_tab(self):
        widget = QWidget()
        tab_layout = QVBoxLayout(widget)

        self.source_drop = FileDropArea("Перетащите исходный файл")
        self.source_drop.file_dropped.connect(self.set_source)
        tab_layout.addWidget(self.source_drop)

        range_layout = QHBoxLayout()
        self.range_edit = QLineEdit()
        self.range_edit.setPlaceholderText("START-END, например 1024-4096")
        self.range_edit.returnPressed.connect(self.add_range)
        self.add_range_btn = QPushButton("Добавить")
        self.add_range_btn.clicked.connect(self.add_range)
        self.remove_range_btn = QPushButton("Удалить")
        self.remove_range_btn.clicked.connect(self.remove_range)
        range_layout.addWidget(self.range_edit)
        range_layout.addWidget(self.add_range_btn)
        range_layout.addWidget(self.remove_range_btn)
        tab_layout.addLayout(range_layout)

        self.range_list = QListWidget()
        tab_layout.addWidget(self.range_list)

        self.split_validate_check = QCheckBox("Проверять порядок диапазонов")
        self.split_validate_check.setChecked(True)
        tab_layout.addWidget(self.split_validate_check)

        self.split_btn = QPushButton("Разделить")
        self.split_btn.setStyleSheet(ACTION_BUTTON_STYLE)
        self.split_btn.clicked.connect(self.do_split)
        tab_layout.addWidget(self.split_btn)

        self.split_progress = QProgressBar()
        self.split_progress.setStyleSheet(PROGRESS_BAR_STYLE)
        tab_layout.addWidget(self.split_progress)

        self.tabs.addTab(widget, "Разделить")

    # ------------------------------------------------------------------
    # Combine Tab
    # ------------------------------------------------------------------
    def _create_combine_tab(self):
        widget = QWidget()
        tab_layout = QVBoxLayout(widget)

        self.manifest_drop = FileDropArea("Перетащите файл .spec", "Манифест (*.spec);;Все файлы (*)")
        self.manifest_drop.file_dropped.connect(self.set_manifest)
        tab_layout.addWidget(self.manifest_drop)

        self.parts_table = QTableWidget(0, 4)
        self.parts_table.setHorizontalHeaderLabels(["Часть", "Диапазон", "Размер", "Изменение"])
        self.parts_table.verticalHeader().setVisible(False)
        self.parts_table.setEditTriggers(QTableWidget.NoEditTriggers)
        tab_layout.addWidget(self.parts_table)

        self.summary_label = QLabel("")
        tab_layout.addWidget(self.summary_label)

        self.combine_validate_check = QCheckBox("Проверять манифест")
        self.combine_validate_check.setChecked(True)
        tab_layout.addWidget(self.combine_validate_check)

        self.combine_btn = QPushButton("Объединить")
        self.combine_btn.setStyleSheet(ACTION_BUTTON_STYLE)
        self.combine_btn.setEnabled(False)
        self.combine_btn.clicked.connect(self.do_combine)
        tab_layout.addWidget(self.combine_btn)

        self.combine_progress = QProgressBar()
        self.combine_progress.setStyleSheet(PROGRESS_BAR_STYLE)
        tab_layout.addWidget(self.combine_progress)

        self.tabs.addTab(widget, "Объединить")

    # ------------------------------------------------------------------
    def set_source(self, path: str):
        try:
            info = self.controller.set_source(Path(path))
        except OSError as e:
            QMessageBox.critical(self, "Ошибка", str(e))
            return
        self.source_drop.set_current_file(f"{info['name']} ({info['size']:,} байт)")
        self._refresh_ranges()
        if info["has_manifest"]:
            self.append_log(f"ℹ️ Для {info['name']} уже есть манифест")

    def add_range(self):
        token = self.range_edit.text()
        if not token.strip():
            return
        try:
            self.controller.add_range(token)
        except ChunkEditError as e:
            QMessageBox.warning(self, "Неверный диапазон", str(e))
            return
        self.range_edit.clear()
        self._refresh_ranges()

    def remove_range(self):
        row = self.range_list.currentRow()
        if self.controller.remove_range(row):
            self._refresh_ranges()

    def _refresh_ranges(self):
        self.range_list.clear()
        for i, r in enumerate(self.controller.ranges):
            self.range_list.addItem(f"part.{i}: {r} ({r.length:,} байт)")

    def do_split(self):
        ok, msg = self.controller.validate_split_request()
        if not ok:
            QMessageBox.warning(self, "Разделение", msg)
            return
        from workers.split_worker import SplitWorker

        settings = SplitSettings(validate_ranges=self.split_validate_check.isChecked())
        self.worker = SplitWorker(self.controller.source, self.controller.ranges, settings)
        self.worker.progress.connect(lambda v, _m: self.split_progress.setValue(v))
        self.worker.log_written.connect(self.append_log)
        self.worker.finished.connect(self._on_split_finished)
        self._set_busy(True)
        self.worker.start()

    def _on_split_finished(self, result: OperationResult):
        self._set_busy(False)
        if result.success:
            QMessageBox.information(self, "Готово", f"Создано частей: {result.stats['parts_count']}")
            self.set_manifest(result.stats["manifest"])
        else:
            QMessageBox.critical(self, "Ошибка", "\n".join(result.errors))

    def set_manifest(self, path: str):
        self.manifest_path = Path(path)
        try:
            info = self.controller.inspect_manifest(self.manifest_path)
        except (ChunkEditError, OSError) as e:
            self.combine_btn.setEnabled(False)
            QMessageBox.critical(self, "Ошибка", str(e))
            return
        self.manifest_drop.set_current_file(self.manifest_path.name)

        self.parts_table.setRowCount(len(info["parts"]))
        for row, part in enumerate(info["parts"]):
            current = "нет файла" if part["current_size"] is None else f"{part['current_size']:,}"
            self.parts_table.setItem(row, 0, QTableWidgetItem(f"part.{part['index']}"))
            self.parts_table.setItem(row, 1, QTableWidgetItem(str(part["range"])))
            self.parts_table.setItem(row, 2, QTableWidgetItem(current))
            self.parts_table.setItem(row, 3, QTableWidgetItem(part["delta"]))

        lines = [f"Источник: {info['source']}"]
        if not info["source_exists"]:
            lines.append("❌ Исходный файл не найден")
        lines.extend(f"⚠️ {p}" for p in info["problems"])
        lines.extend(f"⚠️ Лишний файл части: {p.name}" for p in info["stray_parts"])
        if info["expected_output_size"] is not None:
            lines.append(f"Итоговый размер: {info['expected_output_size']:,} байт")
        self.summary_label.setText("\n".join(lines))

        missing = any(not p["exists"] for p in info["parts"])
        self.combine_btn.setEnabled(info["source_exists"] and not missing)
        self.tabs.setCurrentIndex(1)

    def do_combine(self):
        if self.manifest_path is None:
            return
        from workers.combine_worker import CombineWorker

        settings = CombineSettings(validate_manifest=self.combine_validate_check.isChecked())
        self.worker = CombineWorker(self.manifest_path, settings)
        self.worker.progress.connect(lambda v, _m: self.combine_progress.setValue(v))
        self.worker.log_written.connect(self.append_log)
        self.worker.finished.connect(self._on_combine_finished)
        self._set_busy(True)
        self.worker.start()

    def _on_combine_finished(self, result: OperationResult):
        self._set_busy(False)
        if result.success:
            QMessageBox.information(self, "Готово", f"Файл создан: {result.output_files[0].name}")
        else:
            QMessageBox.critical(self, "Ошибка", "\n".join(result.errors))

    def _set_busy(self, busy: bool):
        self.split_btn.setEnabled(not busy)
        self.combine_btn.setEnabled(not busy and self.manifest_path is not None)
        self.tabs.setTabEnabled(0, not busy)
        self.tabs.setTabEnabled(1, not busy)

    def append_log(self, message: str):
        self.log_view.append(message)
