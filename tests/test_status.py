"""Tests for weathrguessr.core.status – API reachability probe."""

from __future__ import annotations

import asyncio

import httpx

from weathrguessr.core.status import ApiStatus, check_api_status

WEATHER = "https://weather.test/v1/forecast"
COMMONS = "https://commons.test/w/api.php"


def _run(handler) -> ApiStatus:
    return asyncio.run(check_api_status(WEATHER, COMMONS, transport=httpx.MockTransport(handler)))


class TestApiStatus:
    def test_all_ok(self):
        assert ApiStatus(True, True).all_ok
        assert not ApiStatus(True, False).all_ok


class TestCheckApiStatus:
    def test_both_up(self):
        status = _run(lambda request: httpx.Response(200, json={}))
        assert status == ApiStatus(weather_ok=True, images_ok=True)

    def test_images_down(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.host == "commons.test":
                return httpx.Response(503)
            return httpx.Response(200, json={})

        status = _run(handler)
        assert status.weather_ok is True
        assert status.images_ok is False

    def test_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("offline", request=request)

        assert _run(handler) == ApiStatus(weather_ok=False, images_ok=False)
