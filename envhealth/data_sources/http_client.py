"""Helpers for fetching dashboard data from the environmental backend over HTTP."""
from __future__ import annotations

from typing import Any, Callable, Optional, TypeVar

import requests
import requests_cache

from envhealth import config
from envhealth.errors import NetworkFailure, ShapeMismatch
from envhealth.models import (
    AirQualitySnapshot,
    AqiForecast,
    HealthRecommendations,
    PollenForecast,
    parse_air_quality,
    parse_aqi_forecast,
    parse_health_recommendations,
    parse_pollen,
)
from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="http_client")

AIR_QUALITY_ENDPOINT = "/api/weather/air-quality"
AQI_FORECAST_ENDPOINT = "/api/weather/air-quality/forecast"
HEALTH_RECOMMENDATIONS_ENDPOINT = "/api/health/recommendations"
POLLEN_ENDPOINT = "/api/weather/pollen"

# Short-lived response cache; only successful responses are stored.
session = requests_cache.CachedSession(
    config.settings.http_cache_name,
    expire_after=config.settings.http_cache_ttl_seconds,
)

T = TypeVar("T")


def _url(endpoint: str, settings: Optional[config.Settings] = None) -> str:
    settings = settings or config.settings
    return f"{settings.api_base_url}{endpoint}"


def get_json(endpoint: str, *, settings: Optional[config.Settings] = None) -> Any:
    """GET an endpoint and decode its JSON body, raising NetworkFailure on any transport problem."""
    settings = settings or config.settings
    url = _url(endpoint, settings)
    try:
        resp = session.get(url, timeout=settings.request_timeout_seconds)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise NetworkFailure(endpoint, str(exc)) from exc

    try:
        data = resp.json()
    except ValueError as exc:
        raise NetworkFailure(endpoint, "response body is not JSON") from exc

    logger.debug(
        "Fetched endpoint",
        extra={"endpoint": endpoint, "from_cache": getattr(resp, "from_cache", False)},
    )
    return data


def _fetch(endpoint: str, parser: Callable[[Any], Optional[T]], settings: Optional[config.Settings]) -> T:
    parsed = parser(get_json(endpoint, settings=settings))
    if parsed is None:
        raise ShapeMismatch(endpoint)
    return parsed


def fetch_air_quality(*, settings: Optional[config.Settings] = None) -> AirQualitySnapshot:
    """Fetch the current air-quality snapshot."""
    return _fetch(AIR_QUALITY_ENDPOINT, parse_air_quality, settings)


def fetch_aqi_forecast(*, settings: Optional[config.Settings] = None) -> AqiForecast:
    """Fetch the hourly AQI forecast."""
    return _fetch(AQI_FORECAST_ENDPOINT, parse_aqi_forecast, settings)


def fetch_health_recommendations(*, settings: Optional[config.Settings] = None) -> HealthRecommendations:
    """Fetch temperature, UV and air-quality recommendations."""
    return _fetch(HEALTH_RECOMMENDATIONS_ENDPOINT, parse_health_recommendations, settings)


def fetch_pollen(*, settings: Optional[config.Settings] = None) -> PollenForecast:
    """Fetch the daily pollen forecast."""
    return _fetch(POLLEN_ENDPOINT, parse_pollen, settings)
