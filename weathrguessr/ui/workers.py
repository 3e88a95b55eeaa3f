"""Background threads that run the controller's coroutines off the GUI thread."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from PySide6.QtCore import QObject, QThread, Signal

from weathrguessr.core.config import DEFAULT_FETCH_TIMEOUT
from weathrguessr.core.errors import DataFetchError
from weathrguessr.core.game import RoundController
from weathrguessr.core.images import CityImageClient
from weathrguessr.core.status import check_api_status

logger = logging.getLogger(__name__)


class RoundLoader(QThread):
    """Runs ``start_round`` (and the image download) on its own event loop.

    Emits ``loaded(round, image_bytes)`` or ``failed(message)``. The controller
    stays in LOADING until the round is applied, so clicks made meanwhile are
    ignored. The download gets its own ``timeout``; if it runs out the round
    is shown without a picture.
    """

    loaded = Signal(object, object)
    failed = Signal(str)

    def __init__(
        self,
        controller: RoundController,
        images: CityImageClient,
        timeout: float = DEFAULT_FETCH_TIMEOUT,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._images = images
        self._timeout = timeout

    def run(self) -> None:
        try:
            current, image = asyncio.run(self._load())
        except DataFetchError as e:
            self.failed.emit(str(e))
            return
        except Exception as e:
            logger.exception("Unexpected error while loading a round")
            self.failed.emit(str(e))
            return
        self.loaded.emit(current, image)

    async def _load(self):
        current = await self._controller.start_round()
        image = None
        if current.image_url:
            try:
                image = await asyncio.wait_for(self._images.download(current.image_url), timeout=self._timeout)
            except asyncio.TimeoutError:
                logger.warning("Image download for %s timed out", current.city.name)
        return current, image


class StatusChecker(QThread):
    """Probes both APIs. Emits ``finished_with(ApiStatus)`` or ``failed(message)``."""

    finished_with = Signal(object)
    failed = Signal(str)

    def __init__(self, weather_url: str, commons_url: str, timeout: float, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._weather_url = weather_url
        self._commons_url = commons_url
        self._timeout = timeout

    def run(self) -> None:
        try:
            status = asyncio.run(check_api_status(self._weather_url, self._commons_url, self._timeout))
        except Exception as e:
            logger.exception("API status check failed")
            self.failed.emit(str(e))
            return
        self.finished_with.emit(status)
