# gui/widgets/drop_area.py

from PySide6.QtWidgets import QWidget, QVBoxLayout, QLabel, QSizePolicy, QFileDialog
from PySide6.QtCore import Signal, Qt, QTimer, QSize
from PySide6.QtGui import QDragEnterEvent, QDropEvent

ICON_STYLE = """
    QLabel {
        font-size: 36px;
        color: %s;
        background: transparent;
        margin: 0px;
    }
"""

AREA_STYLE = """
    FileDropArea {
        border: 2px dashed %s;
        border-radius: 8px;
        background-color: %s;
        min-height: 80px;
    }
"""


class FileDropArea(QWidget):
    """Область для перетаскивания одного файла (источник или манифест)"""

    file_dropped = Signal(str)

    def __init__(self, title: str, dialog_filter: str = "Все файлы (*)"):
        super().__init__()
        self.dialog_filter = dialog_filter
        self.setAcceptDrops(True)
        self.is_dragging = False
        self.setup_ui(title)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Preferred)
        self.update_style_normal()

    def setup_ui(self, title: str):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(10, 10, 10, 10)
        layout.setSpacing(5)

        self.icon_label = QLabel("📁")
        self.icon_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.icon_label)

        self.main_label = QLabel(title)
        self.main_label.setAlignment(Qt.AlignCenter)
        self.main_label.setStyleSheet("font-size: 14px; font-weight: bold; color: #333; background: transparent;")
        layout.addWidget(self.main_label)

        # Текущий файл
        self.file_label = QLabel("или нажмите для выбора")
        self.file_label.setAlignment(Qt.AlignCenter)
        self.file_label.setStyleSheet("font-size: 11px; color: #666; background: transparent;")
        layout.addWidget(self.file_label)

    def update_style_normal(self):
        self.setStyleSheet(AREA_STYLE % ("#ccc", "#fafafa"))
        self.icon_label.setStyleSheet(ICON_STYLE % "#666")

    def update_style_hover(self):
        self.setStyleSheet(AREA_STYLE % ("#4CAF50", "#f0f8f0"))
        self.icon_label.setStyleSheet(ICON_STYLE % "#4CAF50")

    def set_current_file(self, name: str):
        self.file_label.setText(f"✅ {name}")

    def dragEnterEvent(self, event: QDragEnterEvent):
        urls = event.mimeData().urls() if event.mimeData().hasUrls() else []
        if len(urls) == 1 and urls[0].isLocalFile():
            self.is_dragging = True
            self.update_style_hover()
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragMoveEvent(self, event):
        if self.is_dragging:
            event.acceptProposedAction()

    def dragLeaveEvent(self, event):
        self.is_dragging = False
        self.update_style_normal()

    def dropEvent(self, event: QDropEvent):
        urls = event.mimeData().urls()
        if urls:
            self.file_dropped.emit(urls[0].toLocalFile())
            QTimer.singleShot(1000, self.update_style_normal)
        self.is_dragging = False
        event.acceptProposedAction()

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.open_file_dialog()

    def open_file_dialog(self):
        path, _ = QFileDialog.getOpenFileName(self, "Выберите файл", "", self.dialog_filter)
        if path:
            self.file_dropped.emit(path)

    def sizeHint(self):
        return QSize(200, 100)
