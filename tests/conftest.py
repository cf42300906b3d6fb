"""Shared fixtures for the weather service tests."""

from datetime import datetime, timedelta, timezone

import pytest

from app import create_app
from app.models import WeatherRecord
from app.services.weather_api import WeatherFetchError, WeatherSource
from app.utils.cache import WeatherCache


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self) -> None:
        self.now = datetime(2025, 3, 7, 16, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class StubWeatherSource(WeatherSource):
    """Counts fetches and can be told to fail."""

    name = "stub"

    def __init__(self) -> None:
        self.calls = []
        self.error = None

    def fetch(self, city: str) -> WeatherRecord:
        self.calls.append(city)
        if self.error is not None:
            raise WeatherFetchError(self.error)
        return WeatherRecord(
            city=city,
            temperature=21.5,
            description="Warm",
            observed_at=datetime(2025, 3, 7, 16, 0, tzinfo=timezone.utc),
        )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def source() -> StubWeatherSource:
    return StubWeatherSource()


@pytest.fixture
def weather_cache(clock: FakeClock) -> WeatherCache:
    return WeatherCache(max_size=3, ttl=timedelta(minutes=30), clock=clock)


@pytest.fixture
def app(weather_cache, source):
    app = create_app(
        test_config={
            "TESTING": True,
            "RATELIMIT_ENABLED": False,
        },
        cache=weather_cache,
        source=source,
    )
    return app


@pytest.fixture
def client(app):
    return app.test_client()
