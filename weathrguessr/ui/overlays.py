"""In-window overlays (welcome, share results) and the transient toast."""

from __future__ import annotations

from typing import Callable, List, Optional

from PySide6.QtCore import QEvent, Qt, QTimer, Signal
from PySide6.QtGui import QColor, QGuiApplication
from PySide6.QtWidgets import (
    QFrame,
    QGraphicsDropShadowEffect,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QPlainTextEdit,
    QPushButton,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from weathrguessr.ui.colors import LIGHT, Palette

WELCOME_TITLE = "🌍 Welcome to WeathrGuessr!"
WELCOME_TEXT = (
    "Each round shows you a city somewhere in the world. Guess today's "
    "forecast high and low temperature from the four options.\n\n"
    "Correct answers build your streak; a wrong answer resets it. "
    "Use °C / °F to switch units (this starts a new game) and 🌓 to "
    "switch between light and dark themes."
)


def card_style(object_name: str, palette: Palette, radius: int = 20) -> str:
    return f"""
        QFrame#{object_name} {{
            background: {palette.CARD_BG};
            border: 1px solid {palette.CARD_BORDER};
            border-radius: {radius}px;
        }}
        """


def primary_button_style(palette: Palette) -> str:
    return f"""
        QPushButton {{
            background: qlineargradient(x1:0, y1:0, x2:1, y2:1,
                stop:0 {palette.PRIMARY_LIGHT}, stop:1 {palette.PRIMARY});
            color: white;
            padding: 10px 16px;
            border: none;
            border-radius: 12px;
            font-weight: 600;
            font-size: 13px;
        }}
        QPushButton:hover {{ background: {palette.PRIMARY}; }}
        QPushButton:pressed {{ background: {palette.PRIMARY_DARK}; }}
        """


def close_button_style(palette: Palette) -> str:
    return f"""
        QPushButton {{
            background: transparent;
            color: {palette.TEXT_MUTED};
            border: none;
            font-size: 22px;
        }}
        QPushButton:hover {{ color: {palette.TEXT_PRIMARY}; }}
        """


def _card_container(object_name: str) -> QFrame:
    container = QFrame()
    container.setObjectName(object_name)
    container.setMinimumWidth(420)
    container.setMaximumWidth(520)
    shadow = QGraphicsDropShadowEffect(container)
    shadow.setBlurRadius(20)
    shadow.setOffset(0, 6)
    shadow.setColor(QColor(0, 40, 80, 30))
    container.setGraphicsEffect(shadow)
    return container


def _overlay_background(parent: QWidget, on_click: Callable[[], None]) -> QWidget:
    overlay_bg = QWidget(parent)
    overlay_bg.setStyleSheet("background: rgba(0, 0, 0, 0.25);")
    overlay_bg.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
    overlay_bg.setCursor(Qt.CursorShape.ArrowCursor)
    overlay_bg.setMinimumSize(1, 1)
    overlay_bg.mousePressEvent = lambda e: on_click()
    return overlay_bg


def _primary_button(text: str) -> QPushButton:
    btn = QPushButton(text)
    btn.setCursor(Qt.CursorShape.PointingHandCursor)
    btn.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
    return btn


def _close_button() -> QPushButton:
    btn = QPushButton("×")
    btn.setFixedSize(32, 32)
    btn.setCursor(Qt.CursorShape.PointingHandCursor)
    return btn


class _Overlay(QWidget):
    """Full-window overlay that tracks its parent's size while visible.

    Subclasses register their card, title, text labels and buttons so
    ``set_palette`` can restyle them when the theme changes.
    """

    closed = Signal()

    def __init__(self, object_name: str, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._layout = QGridLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._layout.setSpacing(0)
        self._layout.setRowStretch(0, 1)
        self._layout.setColumnStretch(0, 1)
        self._layout.addWidget(_overlay_background(self, self.dismiss), 0, 0)

        self._object_name = object_name
        self._container = _card_container(object_name)
        self._title: Optional[QLabel] = None
        self._title_size = 20
        self._labels: List[QLabel] = []
        self._buttons: List[QPushButton] = []
        self._close_btn = _close_button()
        self._close_btn.clicked.connect(self.dismiss)
        self._layout.addWidget(self._container, 0, 0, 1, 1, Qt.AlignCenter)
        self.hide()

    def set_palette(self, palette: Palette) -> None:
        self._container.setStyleSheet(card_style(self._object_name, palette))
        self._close_btn.setStyleSheet(close_button_style(palette))
        if self._title is not None:
            self._title.setStyleSheet(
                f"color: {palette.PRIMARY}; font-size: {self._title_size}px; font-weight: 800;"
            )
        for label in self._labels:
            label.setStyleSheet(f"color: {palette.TEXT_SECONDARY}; font-size: 14px;")
        for btn in self._buttons:
            btn.setStyleSheet(primary_button_style(palette))

    def dismiss(self) -> None:
        self.hide()
        self.closed.emit()

    def open(self) -> None:
        self._update_geometry()
        self.raise_()
        self.show()

    def _header(self, text: str, size: int) -> QHBoxLayout:
        header = QHBoxLayout()
        self._title = QLabel(text)
        self._title_size = size
        header.addWidget(self._title, 1)
        header.addWidget(self._close_btn, 0, Qt.AlignTop)
        return header

    def _update_geometry(self) -> None:
        parent = self.parentWidget()
        if parent is not None:
            self.setGeometry(parent.rect())

    def eventFilter(self, obj: QWidget, event: QEvent) -> bool:
        if obj is self.parentWidget() and event.type() == QEvent.Type.Resize:
            self._update_geometry()
        return super().eventFilter(obj, event)

    def showEvent(self, event) -> None:
        super().showEvent(event)
        self._update_geometry()
        parent = self.parentWidget()
        if parent is not None:
            parent.installEventFilter(self)

    def hideEvent(self, event) -> None:
        parent = self.parentWidget()
        if parent is not None:
            parent.removeEventFilter(self)
        super().hideEvent(event)


class WelcomeOverlay(_Overlay):
    """First-visit introduction. ``closed`` fires however it is dismissed."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__("welcomeContainer", parent)
        content = QVBoxLayout(self._container)
        content.setContentsMargins(28, 20, 28, 24)
        content.setSpacing(16)
        content.addLayout(self._header(WELCOME_TITLE, 20))

        msg = QLabel(WELCOME_TEXT)
        msg.setWordWrap(True)
        self._labels.append(msg)
        content.addWidget(msg)

        start_btn = _primary_button("Start playing")
        start_btn.clicked.connect(self.dismiss)
        self._buttons.append(start_btn)
        content.addWidget(start_btn)
        self.set_palette(LIGHT)


class ShareOverlay(_Overlay):
    """Manual-copy fallback for the results text."""

    copied = Signal(bool)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__("shareContainer", parent)
        content = QVBoxLayout(self._container)
        content.setContentsMargins(28, 20, 28, 24)
        content.setSpacing(14)
        content.addLayout(self._header("📊 Share Your Results", 18))

        hint = QLabel("Copy the text below to share your results:")
        self._labels.append(hint)
        content.addWidget(hint)

        self._text = QPlainTextEdit()
        self._text.setReadOnly(True)
        self._text.setMinimumHeight(180)
        content.addWidget(self._text)

        copy_btn = _primary_button("📋 Copy to Clipboard")
        copy_btn.clicked.connect(self._copy)
        self._buttons.append(copy_btn)
        content.addWidget(copy_btn)
        self.set_palette(LIGHT)

    def set_palette(self, palette: Palette) -> None:
        super().set_palette(palette)
        self._text.setStyleSheet(
            f"background: {palette.BG_TOP}; color: {palette.TEXT_PRIMARY}; "
            f"border: 1px solid {palette.CARD_BORDER}; border-radius: 8px;"
        )

    def open_with(self, text: str) -> None:
        self._text.setPlainText(text)
        self.open()
        self._text.selectAll()
        self._text.setFocus()

    def _copy(self) -> None:
        clipboard = QGuiApplication.clipboard()
        if clipboard is None:
            self.copied.emit(False)
            return
        clipboard.setText(self._text.toPlainText())
        self.copied.emit(True)
        self.dismiss()


class Toast(QLabel):
    """Short-lived message pinned to the bottom of its parent."""

    def __init__(self, parent: QWidget) -> None:
        super().__init__(parent)
        self.setAlignment(Qt.AlignCenter)
        self.setWordWrap(True)
        self.setStyleSheet(
            """
            QLabel {
                background: rgba(28, 43, 58, 0.92);
                color: white;
                padding: 12px 18px;
                border-radius: 12px;
                font-size: 13px;
            }
            """
        )
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self.hide)
        self.hide()

    def show_message(self, text: str, duration_ms: int = 3000) -> None:
        self.setText(text)
        self.adjustSize()
        parent = self.parentWidget()
        if parent is not None:
            width = min(max(self.sizeHint().width(), 260), parent.width() - 40)
            self.setFixedWidth(width)
            self.adjustSize()
            self.move((parent.width() - width) // 2, parent.height() - self.height() - 30)
        self.raise_()
        self.show()
        self._timer.start(duration_ms)
