import unittest

from envhealth.data_sources import http_client
from envhealth.data_sources.base import CallableDashboardDataSource
from envhealth.data_sources.factory import DEFAULT_SOURCE_NAME, build_data_source


class DummySettings:
    def __init__(self, **kwargs):
        for k, v in kwargs.items():
            setattr(self, k, v)
        self.data_source = getattr(self, "data_source", DEFAULT_SOURCE_NAME)
        self.api_base_url = getattr(self, "api_base_url", "http://backend.test")
        self.request_timeout_seconds = getattr(self, "request_timeout_seconds", 1)


class _Resp:
    def __init__(self, payload):
        self._payload = payload

    def raise_for_status(self):
        pass

    def json(self):
        return self._payload


class TestDataSourceFactory(unittest.TestCase):
    def test_build_http_default(self):
        ds = build_data_source(DummySettings())
        self.assertIsInstance(ds, CallableDashboardDataSource)

    def test_http_source_uses_configured_base_url(self):
        urls = []
        orig = http_client.session
        http_client.session = type(
            "S", (), {"get": lambda _self, url, timeout=None: urls.append(url) or _Resp({})}
        )()
        try:
            forecast = build_data_source(DummySettings(api_base_url="http://other.test")).fetch_aqi_forecast()
        finally:
            http_client.session = orig
        self.assertIsNone(forecast.hourly)
        self.assertEqual(urls, ["http://other.test/api/weather/air-quality/forecast"])

    def test_static_source_serves_placeholders(self):
        ds = build_data_source(DummySettings(data_source="static"))
        self.assertEqual(ds.fetch_air_quality().current.aqi, 85)
        self.assertEqual(len(ds.fetch_aqi_forecast().hourly.time), 24)
        self.assertEqual(ds.fetch_health_recommendations().uv.category, "High")
        self.assertEqual(len(ds.fetch_pollen().daily.time), 7)

    def test_unknown_source_raises(self):
        with self.assertRaises(ValueError):
            build_data_source(DummySettings(data_source="unknown-source"))


if __name__ == "__main__":
    unittest.main()
