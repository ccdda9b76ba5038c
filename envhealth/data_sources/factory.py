"""Factory helpers for choosing a dashboard data source at startup."""

from __future__ import annotations

from functools import partial

from envhealth import config, fallback
from envhealth.data_sources import http_client
from envhealth.data_sources.base import CallableDashboardDataSource, DashboardDataSource
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="data_sources/factory")


DEFAULT_SOURCE_NAME = "http"


def build_data_source(settings: config.Settings | None = None) -> DashboardDataSource:
    """Instantiate the configured data source."""
    settings = settings or config.settings
    source = (settings.data_source or DEFAULT_SOURCE_NAME).lower()

    if source == "http":
        logger.info("Using HTTP data source", extra={"base_url": settings.api_base_url})
        return CallableDashboardDataSource(
            air_quality=partial(http_client.fetch_air_quality, settings=settings),
            aqi_forecast=partial(http_client.fetch_aqi_forecast, settings=settings),
            health_recommendations=partial(http_client.fetch_health_recommendations, settings=settings),
            pollen=partial(http_client.fetch_pollen, settings=settings),
        )

    if source == "static":
        logger.info("Using static data source; every domain serves placeholder data")
        return CallableDashboardDataSource(
            air_quality=fallback.fallback_air_quality,
            aqi_forecast=fallback.fallback_aqi_forecast,
            health_recommendations=fallback.fallback_health_recommendations,
            pollen=fallback.fallback_pollen,
        )

    raise ValueError(f"Unknown data source '{source}'")
