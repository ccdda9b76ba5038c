"""Tab-gated orchestration of the four dashboard queries."""
from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, Optional

from envhealth import config
from envhealth.data_sources import DashboardDataSource
from envhealth.fallback import (
    fallback_air_quality,
    fallback_aqi_forecast,
    fallback_health_recommendations,
    fallback_pollen,
)
from envhealth.models import AirQualitySnapshot, AqiForecast, HealthRecommendations, PollenForecast
from envhealth.profile import UserContext
from envhealth.query import Query, QueryState, QueryStatus
from envhealth.views import (
    HealthPageView,
    Tab,
    build_air_quality_tab,
    build_pollen_tab,
    build_recommendations_tab,
)
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="dashboard")

AIR_QUALITY = "air_quality"
AQI_FORECAST = "aqi_forecast"
HEALTH_RECOMMENDATIONS = "health_recommendations"
POLLEN = "pollen"

# Owning tab per query; None means always enabled.
QUERY_TABS: Dict[str, Optional[Tab]] = {
    AIR_QUALITY: None,
    AQI_FORECAST: Tab.AIR_QUALITY,
    HEALTH_RECOMMENDATIONS: Tab.RECOMMENDATIONS,
    POLLEN: Tab.POLLEN,
}


class HealthDashboard:
    """Per-user dashboard state: active tab, profile, and one query per data domain."""

    def __init__(
        self,
        data_source: DashboardDataSource,
        *,
        user: UserContext | None = None,
        settings: config.Settings | None = None,
        active_tab: Tab | str = Tab.AIR_QUALITY,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.settings = settings or config.settings
        self.user = user or UserContext()
        self.active_tab = Tab(active_tab)

        fetchers = {
            AIR_QUALITY: data_source.fetch_air_quality,
            AQI_FORECAST: data_source.fetch_aqi_forecast,
            HEALTH_RECOMMENDATIONS: data_source.fetch_health_recommendations,
            POLLEN: data_source.fetch_pollen,
        }
        self.queries: Dict[str, Query] = {
            key: Query(
                key,
                fetch,
                retry_count=self.settings.retry_count,
                retry_delay_seconds=self.settings.retry_delay_seconds,
                enabled=self._is_enabled(key),
                sleep=sleep,
            )
            for key, fetch in fetchers.items()
        }

    def _is_enabled(self, key: str) -> bool:
        owner = QUERY_TABS[key]
        return owner is None or owner is self.active_tab

    def select_tab(self, tab: Tab | str) -> None:
        """Switch tabs and re-gate queries; newly enabled ones fetch on the next load()."""
        self.active_tab = Tab(tab)
        for key, query in self.queries.items():
            query.set_enabled(self._is_enabled(key))
        logger.info("Selected tab", extra={"tab": self.active_tab.value})

    def update_user(self, user: UserContext) -> None:
        self.user = user

    def load(self, *, force: bool = False) -> Dict[str, QueryState]:
        """Run enabled queries concurrently. Without `force`, only idle ones run."""
        pending = [
            query for query in self.queries.values()
            if query.enabled and (force or query.state.status is QueryStatus.IDLE)
        ]
        if pending:
            logger.debug("Loading queries", extra={"queries": [q.key for q in pending], "force": force})
            with ThreadPoolExecutor(max_workers=len(pending), thread_name_prefix="envhealth-query") as pool:
                futures = {pool.submit(query.run): query for query in pending}
                for future, query in futures.items():
                    try:
                        future.result()
                    except Exception:
                        # the query has already settled as failed; view() falls back
                        logger.exception("Unexpected error while fetching", extra={"query": query.key})
        return self.states()

    def states(self) -> Dict[str, QueryState]:
        return {key: query.state for key, query in self.queries.items()}

    def effective_air_quality(self) -> AirQualitySnapshot:
        data = self.queries[AIR_QUALITY].state.data
        return data if data is not None else fallback_air_quality()

    def effective_aqi_forecast(self) -> AqiForecast:
        data = self.queries[AQI_FORECAST].state.data
        return data if data is not None else fallback_aqi_forecast()

    def effective_health_recommendations(self) -> HealthRecommendations:
        data = self.queries[HEALTH_RECOMMENDATIONS].state.data
        return data if data is not None else fallback_health_recommendations()

    def effective_pollen(self) -> PollenForecast:
        data = self.queries[POLLEN].state.data
        return data if data is not None else fallback_pollen()

    def view(self) -> HealthPageView:
        """Build the view model for the active tab from live or fallback data."""
        location = self.settings.location_name
        page = HealthPageView(active_tab=self.active_tab)

        if self.active_tab is Tab.AIR_QUALITY:
            page.air_quality = build_air_quality_tab(
                self.effective_air_quality(),
                self.effective_aqi_forecast(),
                self.user,
                location=location,
                loading=self.queries[AIR_QUALITY].state.is_loading,
                forecast_loading=self.queries[AQI_FORECAST].state.is_loading,
            )
        elif self.active_tab is Tab.RECOMMENDATIONS:
            page.recommendations = build_recommendations_tab(
                self.effective_health_recommendations(),
                self.effective_air_quality(),
                self.user,
                location=location,
                loading=self.queries[HEALTH_RECOMMENDATIONS].state.is_loading,
            )
        else:
            page.pollen = build_pollen_tab(
                self.effective_pollen(),
                self.user,
                location=location,
                loading=self.queries[POLLEN].state.is_loading,
            )
        return page
