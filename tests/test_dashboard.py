import unittest

from envhealth.config import Settings
from envhealth.dashboard import AIR_QUALITY, AQI_FORECAST, HEALTH_RECOMMENDATIONS, POLLEN, HealthDashboard
from envhealth.data_sources import CallableDashboardDataSource
from envhealth.errors import NetworkFailure
from envhealth.fallback import fallback_health_recommendations
from envhealth.models import parse_air_quality, parse_aqi_forecast, parse_pollen
from envhealth.profile import UserContext
from envhealth.query import QueryStatus
from envhealth.views import Tab


LIVE_AIR = parse_air_quality({
    "current": {"pm2_5": 8.0, "pm10": 14.0, "no2": 6.0, "o3": 44.0, "so2": 1.0, "co": 0.2, "aqi": 35},
})
LIVE_FORECAST = parse_aqi_forecast({
    "hourly": {"time": ["2024-01-01T00:00", "2024-01-01T01:00"], "european_aqi": [30, 32]},
})
LIVE_POLLEN = parse_pollen({
    "daily": {"time": ["2024-01-01"], "grass_pollen": [1], "tree_pollen": [2], "weed_pollen": [0]},
})


class _Counter:
    def __init__(self, result=None, fail=False):
        self.result = result
        self.fail = fail
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self.fail:
            raise NetworkFailure("/api/test", "unreachable")
        return self.result


def _source(air=None, forecast=None, recs=None, pollen=None):
    return CallableDashboardDataSource(
        air_quality=air or _Counter(LIVE_AIR),
        aqi_forecast=forecast or _Counter(LIVE_FORECAST),
        health_recommendations=recs or _Counter(fallback_health_recommendations()),
        pollen=pollen or _Counter(LIVE_POLLEN),
    )


def _dashboard(source, **kwargs):
    settings = Settings(retry_count=3, retry_delay_seconds=1.0, location_name="Hanoi")
    return HealthDashboard(source, settings=settings, sleep=lambda _s: None, **kwargs)


class TestGating(unittest.TestCase):
    def test_default_tab_enables_air_quality_queries(self):
        dashboard = _dashboard(_source())
        enabled = {key: q.enabled for key, q in dashboard.queries.items()}
        self.assertEqual(
            enabled,
            {AIR_QUALITY: True, AQI_FORECAST: True, HEALTH_RECOMMENDATIONS: False, POLLEN: False},
        )

    def test_load_fetches_only_enabled(self):
        recs = _Counter(fallback_health_recommendations())
        pollen = _Counter(LIVE_POLLEN)
        dashboard = _dashboard(_source(recs=recs, pollen=pollen))
        states = dashboard.load()
        self.assertEqual(states[AIR_QUALITY].status, QueryStatus.SUCCESS)
        self.assertEqual(states[AQI_FORECAST].status, QueryStatus.SUCCESS)
        self.assertEqual(states[POLLEN].status, QueryStatus.IDLE)
        self.assertEqual(recs.calls, 0)
        self.assertEqual(pollen.calls, 0)

    def test_load_skips_settled_queries_unless_forced(self):
        air = _Counter(LIVE_AIR)
        dashboard = _dashboard(_source(air=air))
        dashboard.load()
        dashboard.load()
        self.assertEqual(air.calls, 1)
        dashboard.load(force=True)
        self.assertEqual(air.calls, 2)

    def test_select_tab_switches_gating(self):
        pollen = _Counter(LIVE_POLLEN)
        forecast = _Counter(LIVE_FORECAST)
        dashboard = _dashboard(_source(pollen=pollen, forecast=forecast))
        dashboard.load()

        dashboard.select_tab("pollen")
        self.assertIs(dashboard.active_tab, Tab.POLLEN)
        self.assertFalse(dashboard.queries[AQI_FORECAST].enabled)
        self.assertIsNone(dashboard.queries[AQI_FORECAST].state.data)
        self.assertTrue(dashboard.queries[AIR_QUALITY].state.is_success)
        dashboard.load()
        self.assertEqual(pollen.calls, 1)

        dashboard.select_tab(Tab.AIR_QUALITY)
        dashboard.load()
        self.assertEqual(forecast.calls, 2)

    def test_invalid_tab_rejected(self):
        dashboard = _dashboard(_source())
        with self.assertRaises(ValueError):
            dashboard.select_tab("historical")


class TestFallbackSubstitution(unittest.TestCase):
    def test_failed_air_quality_uses_fallback(self):
        air = _Counter(fail=True)
        dashboard = _dashboard(_source(air=air))
        states = dashboard.load()
        self.assertEqual(states[AIR_QUALITY].status, QueryStatus.FAILED)
        self.assertEqual(air.calls, 4)
        snapshot = dashboard.effective_air_quality()
        self.assertEqual(snapshot.current.aqi, 85)
        self.assertEqual(snapshot.current.aqi_category.label, "Moderate")

    def test_unloaded_domains_use_fallback(self):
        dashboard = _dashboard(_source())
        self.assertEqual(len(dashboard.effective_aqi_forecast().hourly.time), 24)
        self.assertEqual(len(dashboard.effective_pollen().daily.time), 7)
        self.assertEqual(dashboard.effective_health_recommendations().uv.index, 7)

    def test_unexpected_fetch_error_falls_back(self):
        def broken():
            raise KeyError("current")

        dashboard = _dashboard(_source(air=broken))
        with self.assertLogs("envhealth.dashboard", level="ERROR"):
            states = dashboard.load()
        self.assertEqual(states[AIR_QUALITY].status, QueryStatus.FAILED)
        self.assertEqual(states[AQI_FORECAST].status, QueryStatus.SUCCESS)
        self.assertEqual(dashboard.view().air_quality.gauge.value, 85)

    def test_live_reading_above_scale_shown_as_hazardous(self):
        air = _Counter(parse_air_quality({
            "current": {"pm2_5": 310.0, "pm10": 420.0, "no2": 90.0, "o3": 20.0, "so2": 12.0, "co": 3.0, "aqi": 612},
        }))
        dashboard = _dashboard(_source(air=air))
        states = dashboard.load()
        self.assertEqual(states[AIR_QUALITY].status, QueryStatus.SUCCESS)
        gauge = dashboard.view().air_quality.gauge
        self.assertEqual(gauge.value, 612)
        self.assertEqual(gauge.category.label, "Hazardous")
        self.assertEqual(gauge.fraction, 1.0)

    def test_live_data_preferred(self):
        dashboard = _dashboard(_source())
        dashboard.load()
        self.assertEqual(dashboard.effective_air_quality().current.aqi, 35)
        self.assertIs(dashboard.effective_aqi_forecast(), LIVE_FORECAST)


class TestDashboardView(unittest.TestCase):
    def test_view_follows_active_tab(self):
        dashboard = _dashboard(_source())
        dashboard.load()
        page = dashboard.view()
        self.assertIs(page.active_tab, Tab.AIR_QUALITY)
        self.assertIsNotNone(page.air_quality)
        self.assertIsNone(page.pollen)
        self.assertEqual(page.air_quality.gauge.value, 35)
        self.assertEqual(len(page.air_quality.forecast.points), 2)

        dashboard.select_tab(Tab.RECOMMENDATIONS)
        dashboard.load()
        page = dashboard.view()
        self.assertIsNone(page.air_quality)
        self.assertEqual(page.recommendations.banner.description,
                         "Based on current environmental conditions in Hanoi and your health profile")

    def test_view_uses_explicit_profile(self):
        user = UserContext(healthProfile={"hasAllergies": True})
        dashboard = _dashboard(_source(), user=user, active_tab=Tab.POLLEN)
        dashboard.load()
        self.assertTrue(dashboard.view().pollen.impact.personalized)
        dashboard.update_user(UserContext())
        self.assertFalse(dashboard.view().pollen.impact.personalized)


if __name__ == "__main__":
    unittest.main()
