from __future__ import annotations

import logging
from typing import List, Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent, QGuiApplication
from PySide6.QtWidgets import (
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
)

from weathrguessr.core.config import Settings
from weathrguessr.core.game import RoundController
from weathrguessr.core.images import CityImageClient
from weathrguessr.core.models import Round, RoundOutcome
from weathrguessr.core.preferences import PreferenceStore
from weathrguessr.core.share import build_share_text
from weathrguessr.core.status import ApiStatus
from weathrguessr.core.units import unit_toggle_label
from weathrguessr.ui.colors import Palette, palette_for, theme_toggle_icon
from weathrguessr.ui.models import (
    LOAD_ERROR_MESSAGE,
    build_choice_views,
    build_stats_view,
    feedback_message,
)
from weathrguessr.ui.overlays import ShareOverlay, Toast, WelcomeOverlay
from weathrguessr.ui.widgets import ChoiceCard, CityCard, SkyBackground, StatCard
from weathrguessr.ui.workers import RoundLoader, StatusChecker

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Single-screen game window bound to a ``RoundController``.

    The window never scores anything itself: clicks are forwarded to the
    controller and whatever it returns is rendered.
    """

    def __init__(
        self,
        controller: RoundController,
        images: CityImageClient,
        preferences: PreferenceStore,
        settings: Settings,
    ) -> None:
        super().__init__()
        self._controller = controller
        self._images = images
        self._preferences = preferences
        self._settings = settings
        self._loader: Optional[RoundLoader] = None
        self._status_checker: Optional[StatusChecker] = None
        self._outcome: Optional[RoundOutcome] = None
        self._choice_cards: List[ChoiceCard] = []

        self.setWindowTitle("WeathrGuessr")
        self._build_ui()
        self._apply_theme(self._preferences.theme)
        self._update_stats_display()
        self._unit_button.setText(unit_toggle_label(self._controller.use_metric))

        if not self._preferences.has_visited:
            self._welcome_overlay.open()
        self.start_new_round()

    def _build_ui(self) -> None:
        self._background = SkyBackground()
        self.setCentralWidget(self._background)
        root = QVBoxLayout(self._background)
        root.setContentsMargins(32, 20, 32, 20)
        root.setSpacing(16)

        # ---- Header: title + controls ----
        header = QHBoxLayout()
        self._title = QLabel("🌍 WeathrGuessr")
        header.addWidget(self._title, 1)
        self._theme_button = self._header_button("🌓", "Toggle theme")
        self._theme_button.clicked.connect(self.toggle_theme)
        self._unit_button = self._header_button("°C", "Switch temperature unit (starts a new game)")
        self._unit_button.clicked.connect(self.toggle_temperature_unit)
        self._status_button = self._header_button("📡", "Check API status")
        self._status_button.clicked.connect(self.check_api_status)
        for btn in (self._theme_button, self._unit_button, self._status_button):
            header.addWidget(btn, 0)
        root.addLayout(header)

        # ---- Stats row ----
        stats_row = QHBoxLayout()
        stats_row.setSpacing(12)
        self._round_card = StatCard("🔢", "Round", "1")
        self._correct_card = StatCard("✅", "Correct", "0")
        self._accuracy_card = StatCard("🎯", "Accuracy", "0%")
        self._streak_card = StatCard("🔥", "Streak", "0")
        for card in (self._round_card, self._correct_card, self._accuracy_card, self._streak_card):
            stats_row.addWidget(card, 1)
        self._share_button = QPushButton("📤 Share")
        self._share_button.setCursor(Qt.PointingHandCursor)
        self._share_button.clicked.connect(self.share_streak)
        stats_row.addWidget(self._share_button, 0)
        root.addLayout(stats_row)

        # ---- City ----
        self._city_card = CityCard()
        root.addWidget(self._city_card, 0, Qt.AlignHCenter)

        self._loading_label = QLabel("Loading weather data…")
        self._loading_label.setAlignment(Qt.AlignCenter)
        root.addWidget(self._loading_label)

        # ---- Choices (2x2) ----
        grid = QGridLayout()
        grid.setSpacing(12)
        for i in range(4):
            card = ChoiceCard(on_click=self.select_choice)
            self._choice_cards.append(card)
            grid.addWidget(card, i // 2, i % 2)
        root.addLayout(grid)

        self._feedback = QLabel("")
        self._feedback.setAlignment(Qt.AlignCenter)
        self._feedback.setWordWrap(True)
        self._feedback.setVisible(False)
        root.addWidget(self._feedback)

        actions = QHBoxLayout()
        actions.addStretch(1)
        self._next_button = QPushButton("Next Round ➡️")
        self._next_button.setCursor(Qt.PointingHandCursor)
        self._next_button.clicked.connect(self.start_new_round)
        self._next_button.setVisible(False)
        actions.addWidget(self._next_button)
        self._new_game_button = QPushButton("🔄 New Game")
        self._new_game_button.setCursor(Qt.PointingHandCursor)
        self._new_game_button.clicked.connect(self.reset_game)
        actions.addWidget(self._new_game_button)
        actions.addStretch(1)
        root.addLayout(actions)
        root.addStretch(1)

        self._welcome_overlay = WelcomeOverlay(self._background)
        self._welcome_overlay.closed.connect(self._preferences.mark_visited)
        self._share_overlay = ShareOverlay(self._background)
        self._share_overlay.copied.connect(self._on_share_copied)
        self._toast = Toast(self._background)

    def _header_button(self, text: str, tooltip: str) -> QPushButton:
        btn = QPushButton(text)
        btn.setToolTip(tooltip)
        btn.setFixedSize(44, 44)
        btn.setCursor(Qt.PointingHandCursor)
        return btn

    # ------------------------------------------------------------------
    # Rounds
    # ------------------------------------------------------------------

    def start_new_round(self) -> None:
        if self._loader is not None and self._loader.isRunning():
            return
        self._outcome = None
        self._show_loading(True)
        self._feedback.setVisible(False)
        self._next_button.setVisible(False)
        for card in self._choice_cards:
            card.setVisible(False)

        loader = RoundLoader(self._controller, self._images, self._settings.fetch_timeout, self)
        loader.loaded.connect(self._on_round_loaded)
        loader.failed.connect(self._on_round_failed)
        loader.finished.connect(self._on_loader_finished)
        self._loader = loader
        loader.start()

    def _on_loader_finished(self) -> None:
        if self._loader is not None:
            self._loader.deleteLater()
            self._loader = None

    def _on_round_loaded(self, current: Round, image: Optional[bytes]) -> None:
        self._show_loading(False)
        if current is not self._controller.current_round:
            return
        self._city_card.set_city(current.city.label)
        self._city_card.set_image(image, f"{current.city.name} cityscape")
        self._render_choices()

    def _on_round_failed(self, message: str) -> None:
        logger.error("Error starting new round: %s", message)
        self._show_loading(False)
        current = self._controller.current_round
        if current is not None:
            self._city_card.set_city(current.city.label)
        self._show_error(LOAD_ERROR_MESSAGE)

    def select_choice(self, index: int) -> None:
        outcome = self._controller.submit_selection(index)
        if outcome is None:
            return
        self._outcome = outcome
        self._render_choices()
        self._update_stats_display()
        self._show_feedback(outcome)
        self._next_button.setVisible(True)

    def reset_game(self) -> None:
        if self._loader is not None and self._loader.isRunning():
            return
        self._controller.reset_stats()
        self._update_stats_display()
        self.start_new_round()

    def _render_choices(self) -> None:
        views = build_choice_views(self._controller.choices, self._controller.use_metric, self._outcome)
        for card, view in zip(self._choice_cards, views):
            card.set_view(view)
            card.setVisible(True)

    def _update_stats_display(self) -> None:
        view = build_stats_view(self._controller.stats)
        self._round_card.set_value(view.round_text)
        self._correct_card.set_value(view.correct_text)
        self._accuracy_card.set_value(view.accuracy_text)
        self._streak_card.set_value(view.streak_text)

    def _show_feedback(self, outcome: RoundOutcome) -> None:
        palette = palette_for(self._preferences.theme)
        color = palette.CORRECT if outcome.is_correct else palette.INCORRECT
        self._feedback.setStyleSheet(f"color: {color}; font-size: 17px; font-weight: 700;")
        self._feedback.setText(feedback_message(outcome, self._controller.use_metric))
        self._feedback.setVisible(True)

    def _show_error(self, message: str) -> None:
        palette = palette_for(self._preferences.theme)
        self._feedback.setStyleSheet(f"color: {palette.INCORRECT}; font-size: 17px; font-weight: 700;")
        self._feedback.setText(message)
        self._feedback.setVisible(True)
        self._next_button.setVisible(True)

    def _show_loading(self, show: bool) -> None:
        self._loading_label.setVisible(show)
        self._city_card.setEnabled(not show)

    # ------------------------------------------------------------------
    # Preferences
    # ------------------------------------------------------------------

    def toggle_theme(self) -> None:
        self._apply_theme(self._preferences.toggle_theme())

    def toggle_temperature_unit(self) -> None:
        if self._loader is not None and self._loader.isRunning():
            return
        use_metric = self._controller.toggle_unit()
        self._unit_button.setText(unit_toggle_label(use_metric))
        self._update_stats_display()
        self.start_new_round()

    def _apply_theme(self, theme: str) -> None:
        palette = palette_for(theme)
        self._theme_button.setText(theme_toggle_icon(theme))
        self._background.set_palette(palette)
        self._city_card.set_palette(palette)
        for card in (self._round_card, self._correct_card, self._accuracy_card, self._streak_card):
            card.set_palette(palette)
        for card in self._choice_cards:
            card.set_palette(palette)
        self._welcome_overlay.set_palette(palette)
        self._share_overlay.set_palette(palette)
        self._title.setStyleSheet(f"color: {palette.TEXT_PRIMARY}; font-size: 24px; font-weight: 800;")
        self._loading_label.setStyleSheet(f"color: {palette.TEXT_SECONDARY}; font-size: 14px;")
        button_style = self._button_style(palette)
        for btn in (
            self._theme_button,
            self._unit_button,
            self._status_button,
            self._share_button,
            self._next_button,
            self._new_game_button,
        ):
            btn.setStyleSheet(button_style)

    @staticmethod
    def _button_style(palette: Palette) -> str:
        return f"""
            QPushButton {{
                background: {palette.CARD_BG};
                color: {palette.TEXT_PRIMARY};
                padding: 8px 14px;
                border: 1px solid {palette.CARD_BORDER};
                border-radius: 12px;
                font-weight: 600;
                font-size: 13px;
            }}
            QPushButton:hover {{
                border-color: {palette.PRIMARY};
                color: {palette.PRIMARY};
            }}
        """

    # ------------------------------------------------------------------
    # Share / status
    # ------------------------------------------------------------------

    def share_streak(self) -> None:
        text = build_share_text(self._controller.stats)
        clipboard = QGuiApplication.clipboard()
        if clipboard is not None:
            clipboard.setText(text)
            if clipboard.text() == text:
                self._toast.show_message("✅ Results copied to clipboard!")
                return
            logger.warning("Clipboard did not accept the share text")
        self._share_overlay.open_with(text)

    def _on_share_copied(self, ok: bool) -> None:
        self._toast.show_message("✅ Results copied to clipboard!" if ok else "❌ Please copy the text manually")

    def check_api_status(self) -> None:
        if self._status_checker is not None and self._status_checker.isRunning():
            return
        self._toast.show_message("Checking API Status...", duration_ms=10000)
        checker = StatusChecker(
            self._settings.weather_url,
            self._settings.commons_url,
            self._settings.fetch_timeout,
            self,
        )
        checker.finished_with.connect(self._on_status)
        checker.failed.connect(self._on_status_failed)
        checker.finished.connect(self._on_status_checker_finished)
        self._status_checker = checker
        checker.start()

    def _on_status_checker_finished(self) -> None:
        if self._status_checker is not None:
            self._status_checker.deleteLater()
            self._status_checker = None

    def _on_status(self, status: ApiStatus) -> None:
        weather = "✅" if status.weather_ok else "❌"
        images = "✅" if status.images_ok else "❌"
        self._toast.show_message(
            f"API Status\n{weather} Open-Meteo Weather API\n{images} Wikimedia Commons API",
            duration_ms=5000,
        )

    def _on_status_failed(self, message: str) -> None:
        logger.error("API status check failed: %s", message)
        self._toast.show_message("❌ Connection Error\nCould not check API status", duration_ms=5000)

    def closeEvent(self, event: QCloseEvent) -> None:
        # A round load is two sequential bounded steps: data fetch, then image download.
        grace_ms = int(self._settings.fetch_timeout * 2 * 1000) + 1000
        for worker in (self._loader, self._status_checker):
            if worker is not None and worker.isRunning():
                worker.wait(grace_ms)
        super().closeEvent(event)
