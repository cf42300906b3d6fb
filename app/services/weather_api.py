import logging
import random
import threading
import time
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, Mapping, Optional

import requests

from app.models import WeatherRecord

logger = logging.getLogger(__name__)

WEATHERSTACK_URL = "http://api.weatherstack.com/current"
NO_DESCRIPTION = "No description available"


class WeatherFetchError(Exception):
    """Raised when a data source cannot produce a record for a city."""


class WeatherSource(ABC):
    """Where fresh weather records come from on a cache miss."""

    name = "abstract"

    @abstractmethod
    def fetch(self, city: str) -> WeatherRecord:
        """
        Fetch current weather for a city.

        Args:
            city: City name as requested by the client

        Returns:
            WeatherRecord with the observation time set by the source

        Raises:
            WeatherFetchError: On any failure to obtain the data
        """


def describe_temperature(temperature: float) -> str:
    """Coarse description for a simulated temperature in Celsius."""
    if 0 <= temperature < 10:
        return "Cold"
    if 10 <= temperature < 20:
        return "Cool"
    if 20 <= temperature < 30:
        return "Warm"
    if 30 <= temperature < 40:
        return "Hot"
    return "Unknown"


class SimulatedWeatherSource(WeatherSource):
    """Random weather, no network involved."""

    name = "simulated"

    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)
        # random.Random is not safe to share between request threads
        self._lock = threading.Lock()

    def fetch(self, city: str) -> WeatherRecord:
        with self._lock:
            temperature = self._random.random() * 40

        description = describe_temperature(temperature)
        # truncate, not round, to two decimals
        temperature = int(temperature * 100) / 100.0

        return WeatherRecord(
            city=city,
            temperature=temperature,
            description=description,
            observed_at=datetime.now(timezone.utc)
        )


class WeatherstackSource(WeatherSource):
    """Client for the Weatherstack current weather API"""

    name = "weatherstack"

    def __init__(self, api_key: Optional[str], base_url: str = WEATHERSTACK_URL, timeout: float = 5):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout

    def _log_interaction(self, params: Dict, status_code: int, duration: float):
        log_data = {
            'api_endpoint': self.base_url,
            'request_params': {**params, 'access_key': 'REDACTED'},
            'response_status': status_code,
            'processing_time_sec': duration
        }
        logger.info("Weatherstack API interaction", extra={'data': log_data})

    def fetch(self, city: str) -> WeatherRecord:
        if not self.api_key:
            raise WeatherFetchError("API key is missing")

        params = {
            'access_key': self.api_key,
            'query': city
        }

        api_start = time.time()
        try:
            response = requests.get(self.base_url, params=params, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            logger.error("Weatherstack API timeout")
            raise WeatherFetchError("Weatherstack API timeout") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Weatherstack API error: {str(e)}")
            raise WeatherFetchError(f"Weatherstack API error: {str(e)}") from e

        self._log_interaction(params, response.status_code, time.time() - api_start)

        if response.status_code != 200:
            raise WeatherFetchError(f"API error: {response.status_code} {response.reason}")

        try:
            payload = response.json()
        except ValueError as e:
            raise WeatherFetchError("Malformed response from Weatherstack") from e

        return self.parse_payload(city, payload)

    @staticmethod
    def parse_payload(city: str, payload) -> WeatherRecord:
        """
        Build a record from a Weatherstack response body.

        Weatherstack reports most failures with HTTP 200 and an error object:
        {"success": false, "error": {"code": 101, "info": "..."}}
        """
        if not isinstance(payload, dict):
            raise WeatherFetchError("Malformed response from Weatherstack")

        if payload.get('success') is False or 'error' in payload:
            error = payload.get('error') or {}
            info = error.get('info') or error.get('type') or 'Unknown error'
            raise WeatherFetchError(f"API error: {info}")

        current = payload.get('current')
        if not isinstance(current, dict) or current.get('temperature') is None:
            raise WeatherFetchError("Malformed response from Weatherstack")

        try:
            temperature = float(current['temperature'])
        except (TypeError, ValueError) as e:
            raise WeatherFetchError("Malformed temperature in Weatherstack response") from e

        descriptions = current.get('weather_descriptions') or []
        description = descriptions[0] if descriptions else NO_DESCRIPTION

        return WeatherRecord(
            city=city,
            temperature=temperature,
            description=description,
            observed_at=datetime.now(timezone.utc)
        )


def build_weather_source(config: Mapping) -> WeatherSource:
    """Create the data source named by WEATHER_SOURCE."""
    source_name = (config.get('WEATHER_SOURCE') or SimulatedWeatherSource.name).lower()

    if source_name == SimulatedWeatherSource.name:
        return SimulatedWeatherSource(seed=config.get('SIMULATED_SEED'))
    if source_name == WeatherstackSource.name:
        return WeatherstackSource(
            api_key=config.get('WEATHERSTACK_API_KEY'),
            base_url=config.get('WEATHERSTACK_URL') or WEATHERSTACK_URL,
            timeout=config.get('REQUEST_TIMEOUT', 5)
        )

    raise ValueError(f"Unknown weather source: {source_name}")
