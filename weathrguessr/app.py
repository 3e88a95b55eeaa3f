"""Application entry point and setup for WeathrGuessr."""

import logging
import sys

from PySide6.QtGui import QFont, QGuiApplication
from PySide6.QtWidgets import QApplication

from weathrguessr.core.cities import CityRepository
from weathrguessr.core.config import Settings
from weathrguessr.core.game import RoundController
from weathrguessr.core.images import CityImageClient
from weathrguessr.core.preferences import PreferenceStore
from weathrguessr.core.weather import WeatherClient
from weathrguessr.ui.main_window import MainWindow


def configure_logging(level: str = "INFO") -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def configure_font(app: QApplication) -> None:
    """Prefer fonts with colour emoji so the stat icons render everywhere."""
    app_font = QFont(app.font())
    app_font.setFamilies(
        [
            app_font.family(),
            "Noto Color Emoji",  # Linux (common)
            "Segoe UI Emoji",  # Windows
            "Apple Color Emoji",  # macOS
        ]
    )
    app_font.setPointSize(11)
    app.setFont(app_font)


def build_controller(settings: Settings, preferences: PreferenceStore) -> tuple[RoundController, CityImageClient]:
    images = CityImageClient(base_url=settings.commons_url, timeout=settings.fetch_timeout)
    weather = WeatherClient(base_url=settings.weather_url, timeout=settings.fetch_timeout)
    controller = RoundController(
        cities=CityRepository(),
        weather=weather,
        images=images,
        preferences=preferences,
        fetch_timeout=settings.fetch_timeout,
    )
    return controller, images


def run() -> None:
    """Load settings and preferences, then start the main window."""
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    app = QApplication(sys.argv)
    app.setApplicationName("WeathrGuessr")
    app.setApplicationDisplayName("WeathrGuessr")
    configure_font(app)

    preferences = PreferenceStore(settings.preferences_path)
    controller, images = build_controller(settings, preferences)
    logging.info("Loaded preferences from %s", settings.preferences_path)

    window = MainWindow(controller=controller, images=images, preferences=preferences, settings=settings)
    screen = QGuiApplication.primaryScreen()
    if screen is not None:
        geometry = screen.availableGeometry()
        window.resize(min(900, geometry.width()), min(960, geometry.height()))
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
