"""Data source factories for plugging different dashboard backends."""

from .base import CallableDashboardDataSource, DashboardDataSource
from .factory import build_data_source
from .http_client import (
    AIR_QUALITY_ENDPOINT,
    AQI_FORECAST_ENDPOINT,
    HEALTH_RECOMMENDATIONS_ENDPOINT,
    POLLEN_ENDPOINT,
    fetch_air_quality,
    fetch_aqi_forecast,
    fetch_health_recommendations,
    fetch_pollen,
)

__all__ = [
    "build_data_source",
    "DashboardDataSource",
    "CallableDashboardDataSource",
    "AIR_QUALITY_ENDPOINT",
    "AQI_FORECAST_ENDPOINT",
    "HEALTH_RECOMMENDATIONS_ENDPOINT",
    "POLLEN_ENDPOINT",
    "fetch_air_quality",
    "fetch_aqi_forecast",
    "fetch_health_recommendations",
    "fetch_pollen",
]
