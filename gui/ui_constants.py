# gui/ui_constants.py
"""Shared GUI style constants."""

HEADER_FRAME_STYLE = """
QFrame {
    background: qlineargradient(x1:0, y1:0, x2:1, y2:0,
        stop:0 #4a90e2, stop:1 #357abd);
    border-radius: 8px;
    padding: 10px;
}
"""

TITLE_LABEL_STYLE = """
QLabel {
    color: white;
    font-size: 20px;
    font-weight: bold;
    background: transparent;
}
"""

DESC_LABEL_STYLE = """
QLabel {
    color: #e8f4fd;
    font-size: 13px;
    background: transparent;
}
"""

ACTION_BUTTON_STYLE = """
QPushButton {
    background: #4CAF50;
    color: white;
    border: none;
    border-radius: 6px;
    padding: 8px 16px;
    font-size: 14px;
    font-weight: bold;
}
QPushButton:hover {
    background: #45a049;
}
QPushButton:disabled {
    background: #cccccc;
    color: #666666;
}
"""

PROGRESS_BAR_STYLE = """
QProgressBar {
    border: 2px solid #e0e0e0;
    border-radius: 10px;
    background: #f8f9fa;
    text-align: center;
    font-weight: bold;
    color: #333;
}
QProgressBar::chunk {
    background: qlineargradient(x1:0, y1:0, x2:1, y2:0,
        stop:0 #4CAF50, stop:1 #45a049);
    border-radius: 8px;
}
"""
