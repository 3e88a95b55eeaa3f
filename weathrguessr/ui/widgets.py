"""Game screen widgets: background, cards, answer choices, stat tiles."""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QLinearGradient, QPainter, QPixmap
from PySide6.QtWidgets import (
    QFrame,
    QGraphicsDropShadowEffect,
    QLabel,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from weathrguessr.ui.colors import LIGHT, Palette, blend_hex
from weathrguessr.ui.models import ChoiceView


class SkyBackground(QWidget):
    """Vertical gradient behind the whole window."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._palette = LIGHT
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)

    def set_palette(self, palette: Palette) -> None:
        self._palette = palette
        self.update()

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        gradient = QLinearGradient(0, 0, 0, self.height())
        gradient.setColorAt(0.0, QColor(self._palette.BG_TOP))
        gradient.setColorAt(1.0, QColor(self._palette.BG_BOTTOM))
        painter.fillRect(self.rect(), gradient)


class Card(QFrame):
    """Rounded card with a soft shadow."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("card")
        shadow = QGraphicsDropShadowEffect(self)
        shadow.setBlurRadius(24)
        shadow.setOffset(0, 6)
        shadow.setColor(QColor(0, 40, 80, 40))
        self.setGraphicsEffect(shadow)
        self.set_palette(LIGHT)

    def set_palette(self, palette: Palette) -> None:
        self.setStyleSheet(
            f"""
            QFrame#card {{
                background: {palette.CARD_BG};
                border: 1px solid {palette.CARD_BORDER};
                border-radius: 18px;
            }}
            """
        )


class StatCard(QFrame):
    def __init__(self, icon: str, label: str, value: str = "0", parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("statCard")
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 10, 16, 10)
        layout.setSpacing(2)
        self._label = QLabel(f"{icon} {label}")
        self._label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self._label)
        self.value_label = QLabel(str(value))
        self.value_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.value_label)
        self.set_palette(LIGHT)

    def set_value(self, value: str) -> None:
        self.value_label.setText(str(value))

    def set_palette(self, palette: Palette) -> None:
        self.setStyleSheet(
            f"""
            QFrame#statCard {{
                background: {palette.CARD_BG};
                border: 1px solid {palette.CARD_BORDER};
                border-radius: 14px;
            }}
            """
        )
        self._label.setStyleSheet(f"color: {palette.TEXT_MUTED}; font-size: 11px; font-weight: 600;")
        self.value_label.setStyleSheet(f"color: {palette.PRIMARY}; font-size: 24px; font-weight: 800;")


class CityCard(Card):
    """City name plus its photo (or a text placeholder while loading)."""

    IMAGE_WIDTH = 400
    IMAGE_HEIGHT = 250

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 18, 20, 18)
        layout.setSpacing(12)

        self._name = QLabel("")
        self._name.setAlignment(Qt.AlignCenter)
        self._name.setWordWrap(True)
        layout.addWidget(self._name)

        self._image = QLabel("")
        self._image.setAlignment(Qt.AlignCenter)
        self._image.setFixedSize(self.IMAGE_WIDTH, self.IMAGE_HEIGHT)
        layout.addWidget(self._image, 0, Qt.AlignHCenter)
        self._apply_text_palette(LIGHT)

    def set_palette(self, palette: Palette) -> None:
        super().set_palette(palette)
        if hasattr(self, "_name"):
            self._apply_text_palette(palette)

    def _apply_text_palette(self, palette: Palette) -> None:
        self._name.setStyleSheet(f"color: {palette.TEXT_PRIMARY}; font-size: 26px; font-weight: 800;")
        self._image.setStyleSheet(
            f"background: {palette.PRIMARY}; color: white; border-radius: 12px; font-size: 18px;"
        )

    def set_city(self, label: str) -> None:
        self._name.setText(label)
        self._image.setPixmap(QPixmap())
        self._image.setText(label)
        self._image.setToolTip("")

    def set_image(self, data: Optional[bytes], alt: str) -> None:
        """Show downloaded image bytes; keep the text placeholder if they do not decode."""
        self._image.setToolTip(alt)
        if not data:
            return
        pixmap = QPixmap()
        if not pixmap.loadFromData(data):
            return
        self._image.setPixmap(
            pixmap.scaled(
                self.IMAGE_WIDTH,
                self.IMAGE_HEIGHT,
                Qt.AspectRatioMode.KeepAspectRatioByExpanding,
                Qt.TransformationMode.SmoothTransformation,
            )
        )


class ChoiceCard(QFrame):
    """One clickable high/low answer."""

    def __init__(self, on_click: Callable[[int], None], parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._on_click = on_click
        self._view: Optional[ChoiceView] = None
        self._palette = LIGHT
        self.setObjectName("choiceCard")
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self.setCursor(Qt.PointingHandCursor)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        self.setMinimumHeight(84)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 12, 16, 12)
        layout.setSpacing(4)
        self._high = QLabel("")
        self._high.setAlignment(Qt.AlignCenter)
        self._low = QLabel("")
        self._low.setAlignment(Qt.AlignCenter)
        layout.addWidget(self._high)
        layout.addWidget(self._low)
        self._apply_styles()

    def set_view(self, view: ChoiceView) -> None:
        self._view = view
        self._high.setText(view.high_text)
        self._low.setText(view.low_text)
        self.setCursor(Qt.PointingHandCursor if view.enabled else Qt.ArrowCursor)
        self._apply_styles()

    def set_palette(self, palette: Palette) -> None:
        self._palette = palette
        self._apply_styles()

    def mousePressEvent(self, event) -> None:
        if self._view is not None and self._view.enabled and event.button() == Qt.LeftButton:
            self._on_click(self._view.index)
        super().mousePressEvent(event)

    def _apply_styles(self) -> None:
        p = self._palette
        highlight = self._view.highlight if self._view is not None else None
        if highlight == "correct":
            bg, border, text = p.CORRECT_BG, p.CORRECT, p.CORRECT
        elif highlight == "incorrect":
            bg, border, text = p.INCORRECT_BG, p.INCORRECT, p.INCORRECT
        else:
            bg, border, text = p.CARD_BG, p.CARD_BORDER, p.TEXT_PRIMARY
        hover = blend_hex(bg, p.PRIMARY_LIGHT, 0.15)
        enabled = self._view is None or self._view.enabled
        self.setStyleSheet(
            f"""
            QFrame#choiceCard {{
                background: {bg};
                border: 2px solid {border};
                border-radius: 14px;
            }}
            QFrame#choiceCard:hover {{
                background: {hover if enabled else bg};
            }}
            """
        )
        self._high.setStyleSheet(f"color: {text}; font-size: 17px; font-weight: 700; background: transparent;")
        self._low.setStyleSheet(f"color: {text}; font-size: 15px; background: transparent;")
