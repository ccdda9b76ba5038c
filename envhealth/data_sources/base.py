"""Interfaces and helpers for dashboard data sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol

from envhealth.models import AirQualitySnapshot, AqiForecast, HealthRecommendations, PollenForecast


class DashboardDataSource(Protocol):
    """Interface for anything that can provide the four dashboard data domains."""

    def fetch_air_quality(self) -> AirQualitySnapshot:
        """Return the current air-quality snapshot."""
        ...

    def fetch_aqi_forecast(self) -> AqiForecast:
        """Return the hourly AQI forecast."""
        ...

    def fetch_health_recommendations(self) -> HealthRecommendations:
        """Return health recommendations for current conditions."""
        ...

    def fetch_pollen(self) -> PollenForecast:
        """Return the daily pollen forecast."""
        ...


@dataclass
class CallableDashboardDataSource(DashboardDataSource):
    """Wrap four callables so they can be swapped for different backends."""

    air_quality: Callable[[], AirQualitySnapshot]
    aqi_forecast: Callable[[], AqiForecast]
    health_recommendations: Callable[[], HealthRecommendations]
    pollen: Callable[[], PollenForecast]

    def fetch_air_quality(self) -> AirQualitySnapshot:
        return self.air_quality()

    def fetch_aqi_forecast(self) -> AqiForecast:
        return self.aqi_forecast()

    def fetch_health_recommendations(self) -> HealthRecommendations:
        return self.health_recommendations()

    def fetch_pollen(self) -> PollenForecast:
        return self.pollen()
